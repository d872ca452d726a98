"""Derive JSON Schemas and JSON Form descriptors from pydantic models."""

from .builder import FormBuilder
from .errors import (
    DuplicateNameError,
    JsonFormException,
    MetadataParseError,
    NotFoundError,
    RegistrationError,
    SchemaBuildError,
)
from .models import FormItem, FormSchema
from .reflector import PropertyEvent, SchemaReflector
from .render import Form, FormRenderer, Page, PageRenderData
from .repository import Repository
from .tags import FormTags, form

__all__ = [
    "DuplicateNameError",
    "Form",
    "FormBuilder",
    "FormItem",
    "FormRenderer",
    "FormSchema",
    "FormTags",
    "JsonFormException",
    "MetadataParseError",
    "NotFoundError",
    "Page",
    "PageRenderData",
    "PropertyEvent",
    "Repository",
    "RegistrationError",
    "SchemaBuildError",
    "SchemaReflector",
    "form",
]
