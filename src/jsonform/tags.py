"""Form tags attached to model fields.

Tags are declared with ``typing.Annotated``::

    class User(BaseModel):
        bio: Annotated[str, form(formType="textarea", placeholder="About you")] = ""

and read back into :class:`~jsonform.models.FormItem` attributes.
"""

import json
from collections.abc import Mapping
from typing import Any

from pydantic.fields import FieldInfo

from .consts import FALSE_VALUES, TAG_ATTRIBUTES, TRUE_VALUES
from .errors import MetadataParseError
from .models import FormItem


class FormTags(Mapping):
    """Immutable string-keyed tag set, usable as ``Annotated`` metadata."""

    __slots__ = ("_tags",)

    def __init__(self, tags: Mapping[str, Any] | None = None, **kwargs: Any):
        self._tags = dict(tags or {}, **kwargs)

    def __getitem__(self, key: str) -> Any:
        return self._tags[key]

    def __iter__(self):
        return iter(self._tags)

    def __len__(self) -> int:
        return len(self._tags)

    def __hash__(self) -> int:
        return hash(tuple(sorted((k, repr(v)) for k, v in self._tags.items())))

    def __repr__(self) -> str:
        return f"FormTags({self._tags!r})"


def form(**tags: Any) -> FormTags:
    return FormTags(tags)


def field_tags(field_info: FieldInfo) -> dict[str, Any]:
    """Merge every FormTags found in a pydantic field's metadata."""
    tags: dict[str, Any] = {}
    for meta in field_info.metadata:
        if isinstance(meta, FormTags):
            tags.update(meta)
    return tags


def _parse_bool(field: str, key: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        if value in TRUE_VALUES:
            return True
        if value in FALSE_VALUES:
            return False
    raise MetadataParseError(field, key, value, "expected a boolean")


def _parse_str(field: str, key: str, value: Any) -> str:
    if isinstance(value, str):
        return value
    raise MetadataParseError(field, key, value, "expected a string")


def _parse_map(field: str, key: str, value: Any) -> dict[str, str]:
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except json.JSONDecodeError as e:
            raise MetadataParseError(field, key, value, f"invalid JSON: {e}") from e

    if not isinstance(value, Mapping):
        raise MetadataParseError(field, key, value, "expected a mapping")

    return {str(k): str(v) for k, v in value.items()}


def _parser_for(attribute: str):
    annotation = FormItem.model_fields[attribute].annotation
    if annotation is bool:
        return _parse_bool
    if annotation is str:
        return _parse_str
    return _parse_map


PARSERS = {key: _parser_for(attribute) for key, attribute in TAG_ATTRIBUTES.items()}


def read_tags(tags: Mapping[str, Any], field: str = "") -> dict[str, Any]:
    """Map form tags to FormItem attribute values.

    Args:
        tags: Tag key/value pairs, unknown keys are ignored
        field: Field name reported in errors

    Returns:
        Dict of FormItem attribute name to coerced value

    Raises:
        MetadataParseError: If a value does not fit its attribute type
    """
    attributes = {}
    for key, value in tags.items():
        attribute = TAG_ATTRIBUTES.get(key)
        if attribute is None:
            continue
        attributes[attribute] = PARSERS[key](field, key, value)
    return attributes
