"""Form schema registry."""

from __future__ import annotations

import logging
import threading
from typing import TYPE_CHECKING, Any, Optional

from .builder import FormBuilder
from .consts import SUBMIT_TITLE_DEFAULT
from .errors import DuplicateNameError, NotFoundError, SchemaBuildError
from .models import FormSchema
from .reflector import SchemaReflector
from .utils import default_name, underlying_type

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


class Repository:
    """Registry of form schemas keyed by name and by sample type.

    Registration is add-only. A single lock guards both registries and is held
    for the whole reflect-and-store sequence, so concurrent registrations of
    one name leave exactly one winner.

    Args:
        reflector: Schema reflector, a default SchemaReflector if omitted
        strict: Require schemas to be added before they are looked up by value
        submit_button: Append a submit directive to every form
        submit_title: Title of the submit directive
        lock: Lock guarding the registries
    """

    def __init__(
        self,
        reflector: Optional[SchemaReflector] = None,
        *,
        strict: bool = False,
        submit_button: bool = True,
        submit_title: str = SUBMIT_TITLE_DEFAULT,
        lock=None,
    ):
        self.reflector = reflector or SchemaReflector()
        self.strict = strict
        self.submit_button = submit_button
        self.submit_title = submit_title

        self._lock = lock or threading.Lock()
        self._schemas_by_name: dict[str, FormSchema] = {}
        self._names_by_type: dict[type, str] = {}

    @classmethod
    def from_config(cls, config: Config) -> Repository:
        return cls(
            strict=config.strict,
            submit_button=config.submit_button,
            submit_title=config.submit_title,
        )

    def name(self, sample: Any) -> str:
        """Return the schema name of a sample value or class.

        Unknown types get a name derived from their class name; outside of
        strict mode they are registered under it.
        """
        with self._lock:
            name = self._names_by_type.get(underlying_type(sample))
            if name is not None:
                return name

            name = default_name(sample)
            if not self.strict:
                self._register(sample, name)
            return name

    def add(self, sample: Any, name: Optional[str] = None) -> str:
        """Register the schema of a sample under a name.

        Args:
            sample: Pydantic model class or instance
            name: Schema name, derived from the class name if omitted

        Returns:
            The name the schema was registered under

        Raises:
            DuplicateNameError: If the name is already registered
            SchemaBuildError: If the sample cannot be reflected
        """
        with self._lock:
            if name is None:
                name = self._names_by_type.get(underlying_type(sample)) or default_name(sample)
            self._register(sample, name)
            return name

    def add_all(self, *samples: Any) -> list[str]:
        """Register samples under their default names, stopping at the first error."""
        return [self.add(sample) for sample in samples]

    def _register(self, sample: Any, name: str) -> None:
        # Callers hold the lock.
        if name in self._schemas_by_name:
            raise DuplicateNameError(name, underlying_type(sample))

        form_schema = self._reflect(sample, name)

        self._schemas_by_name[name] = form_schema
        self._names_by_type[underlying_type(sample)] = name
        logger.debug(f"Registered form schema {name} ({underlying_type(sample).__qualname__})")

    def _reflect(self, sample: Any, name: str) -> FormSchema:
        builder = FormBuilder(submit_button=self.submit_button, submit_title=self.submit_title)
        try:
            schema = self.reflector.reflect(sample, builder.intercept)
        except Exception as e:
            raise SchemaBuildError(name, e) from e

        return builder.build(schema)

    def schema_by_name(self, name: str) -> Optional[FormSchema]:
        """Return a copy of a registered schema, or None for unknown names."""
        with self._lock:
            form_schema = self._schemas_by_name.get(name)
            return form_schema.model_copy(deep=True) if form_schema is not None else None

    def get_schema_by_name(self, name: str) -> FormSchema:
        form_schema = self.schema_by_name(name)
        if form_schema is None:
            raise NotFoundError(name)
        return form_schema

    def schema(self, sample: Any) -> Optional[FormSchema]:
        """Return a copy of the schema registered for a sample's type.

        Outside of strict mode unknown types are registered first, in strict
        mode they yield None.
        """
        with self._lock:
            t = underlying_type(sample)
            name = self._names_by_type.get(t)
            if name is None:
                if self.strict:
                    return None
                name = default_name(sample)
                self._register(sample, name)

            return self._schemas_by_name[name].model_copy(deep=True)

    def resolve(self, sample: Any) -> FormSchema:
        """Like schema(), but raises NotFoundError for unregistered types in strict mode."""
        form_schema = self.schema(sample)
        if form_schema is None:
            raise NotFoundError(default_name(sample))
        return form_schema

    def names(self) -> set[str]:
        with self._lock:
            return set(self._schemas_by_name)
