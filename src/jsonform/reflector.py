"""JSON Schema reflection of pydantic models with per-property interception."""

import collections.abc
import logging
import types
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Annotated, Any, Callable, Optional, Union, get_args, get_origin

from pydantic import BaseModel
from pydantic.fields import FieldInfo

from .consts import ARRAY_SEGMENT, DEFS_REF_PREFIX, ROOT_SEGMENT
from .tags import field_tags

logger = logging.getLogger(__name__)

SEQUENCE_ORIGINS = (
    list,
    tuple,
    set,
    frozenset,
    collections.abc.Sequence,
    collections.abc.MutableSequence,
    collections.abc.Set,
    collections.abc.MutableSet,
)


@dataclass(frozen=True)
class PropertyEvent:
    """A property emitted into the schema, reported after its descendants."""

    path: tuple[str, ...]
    name: str
    tags: Mapping[str, Any] = field(default_factory=dict)
    schema: Mapping[str, Any] = field(default_factory=dict)
    is_object: bool = False
    field_name: str = ""

    @property
    def key(self) -> str:
        return property_key(self.path, self.name)


Interceptor = Callable[[PropertyEvent], None]


def property_key(path, name: str) -> str:
    """Build a form key from a property path, e.g. ``neighbors[].bio``.

    The first path segment is the root marker and is not part of the key.
    """
    return ".".join([*path[1:], name]).replace("." + ARRAY_SEGMENT, ARRAY_SEGMENT)


def is_object_schema(schema: Mapping[str, Any]) -> bool:
    """Whether a property is an object the reflector descends into.

    Unions with more than one non-null branch are leaves.
    """
    unwrapped = _unwrap_schema(schema)
    if unwrapped is not schema:
        return is_object_schema(unwrapped)
    t = schema.get("type")
    return t == "object" or (isinstance(t, list) and "object" in t)


def reconcile_required(schema: dict[str, Any]) -> dict[str, Any]:
    """Move the top-level required list into per-property markers (draft 3)."""
    properties = schema.get("properties", {})
    for name in schema.pop("required", None) or []:
        prop = properties.get(name)
        if isinstance(prop, dict):
            # The marker takes the keyword over, an object's own list moves down first.
            if isinstance(prop.get("required"), list):
                reconcile_required(prop)
            prop["required"] = True
    return schema


def model_type(sample: Any) -> type[BaseModel]:
    t = sample if isinstance(sample, type) else type(sample)
    if not issubclass(t, BaseModel):
        raise TypeError(f"cannot reflect {t.__qualname__}: not a pydantic model")
    return t


class _RefInliner:
    def __init__(self, defs: Mapping[str, Any]):
        self.defs = defs
        self.recursive = False

    def inline(self, node: Any, stack: tuple[str, ...] = ()) -> Any:
        if isinstance(node, list):
            return [self.inline(n, stack) for n in node]
        if not isinstance(node, dict):
            return node

        ref = self._single_ref(node)
        if ref is not None:
            name = ref[len(DEFS_REF_PREFIX):]
            if name in stack or name not in self.defs:
                self.recursive = self.recursive or name in stack
                return {k: self.inline(v, stack) for k, v in node.items()}

            resolved = self.inline(self.defs[name], stack + (name,))
            siblings = {
                k: self.inline(v, stack) for k, v in node.items() if k not in ("$ref", "allOf")
            }
            return {**resolved, **siblings}

        return {k: self.inline(v, stack) for k, v in node.items()}

    @staticmethod
    def _single_ref(node: dict) -> Optional[str]:
        ref = node.get("$ref")
        if ref is None:
            all_of = node.get("allOf")
            if isinstance(all_of, list) and len(all_of) == 1 and isinstance(all_of[0], dict):
                if set(all_of[0]) == {"$ref"}:
                    ref = all_of[0]["$ref"]
        if isinstance(ref, str) and ref.startswith(DEFS_REF_PREFIX):
            return ref
        return None


def inline_refs(schema: dict[str, Any]) -> dict[str, Any]:
    """Replace local ``$defs`` references with the referenced definitions.

    Recursive references cannot be inlined; they stay as ``$ref`` and the
    original ``$defs`` is kept next to them.
    """
    defs = schema.get("$defs", {})
    body = {k: v for k, v in schema.items() if k != "$defs"}
    inliner = _RefInliner(defs)
    result = inliner.inline(body)
    if inliner.recursive:
        result["$defs"] = defs
    return result


def _unwrap_annotation(annotation: Any) -> Any:
    while True:
        origin = get_origin(annotation)
        if origin is Annotated:
            annotation = get_args(annotation)[0]
            continue
        if origin is Union or origin is types.UnionType:
            members = [a for a in get_args(annotation) if a is not type(None)]
            if len(members) == 1:
                annotation = members[0]
                continue
        return annotation


def _unwrap_schema(schema: Mapping[str, Any]) -> Mapping[str, Any]:
    for keyword in ("anyOf", "oneOf"):
        branches = [
            s for s in schema.get(keyword, ()) if isinstance(s, Mapping) and s.get("type") != "null"
        ]
        if len(branches) == 1:
            return branches[0]
    return schema


def _is_model(annotation: Any) -> bool:
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def property_names(field_name: str, field_info: FieldInfo, by_alias: bool = True) -> list[str]:
    """Candidate schema property names of a model field, most specific first."""
    if not by_alias:
        return [field_name]

    names = [field_info.alias]
    if isinstance(field_info.validation_alias, str):
        names.append(field_info.validation_alias)
    names.extend([field_info.serialization_alias, field_name])
    return [n for n in names if n]


class SchemaReflector:
    """Reflect pydantic models into inlined JSON Schema documents."""

    def __init__(self, by_alias: bool = True, mode: str = "validation"):
        self.by_alias = by_alias
        self.mode = mode

    def reflect(self, sample: Any, intercept: Optional[Interceptor] = None) -> dict[str, Any]:
        """Build the JSON Schema of a sample.

        Args:
            sample: Pydantic model class or instance
            intercept: Called once per property, descendants first

        Returns:
            JSON Schema with local references inlined
        """
        model = model_type(sample)
        schema = inline_refs(model.model_json_schema(by_alias=self.by_alias, mode=self.mode))
        logger.debug(f"Reflected schema of {model.__qualname__}")

        if intercept is not None:
            self._walk_model(model, schema, (ROOT_SEGMENT,), intercept)

        return schema

    def _walk_model(self, model, schema, path, intercept) -> None:
        properties = schema.get("properties", {})
        for attr, field_info in model.model_fields.items():
            names = property_names(attr, field_info, self.by_alias)
            name = next((n for n in names if n in properties), None)
            if name is None:
                continue
            prop = properties[name]

            self._descend(field_info.annotation, prop, path + (name,), intercept)

            intercept(
                PropertyEvent(
                    path=path,
                    name=name,
                    tags=field_tags(field_info),
                    schema=prop,
                    is_object=is_object_schema(prop),
                    field_name=f"{model.__qualname__}.{attr}",
                )
            )

    def _descend(self, annotation, schema, path, intercept) -> None:
        annotation = _unwrap_annotation(annotation)
        schema = _unwrap_schema(schema)

        if _is_model(annotation):
            self._walk_model(annotation, schema, path, intercept)
            return

        if get_origin(annotation) in SEQUENCE_ORIGINS:
            items = schema.get("items")
            args = get_args(annotation)
            if isinstance(items, Mapping) and args:
                self._descend(args[0], items, path + (ARRAY_SEGMENT,), intercept)
