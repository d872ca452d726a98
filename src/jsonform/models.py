from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_serializer

EMPTY_VALUES = (None, "", False, [], {})


def _is_empty(value: Any) -> bool:
    return any(value is e or (type(value) is type(e) and value == e) for e in EMPTY_VALUES)


class FormItem(BaseModel):
    """One leaf or grouping directive of the form tree."""

    model_config = ConfigDict(populate_by_name=True)

    key: str = ""
    form_type: str = Field(default="", alias="type")
    form_title: str = Field(default="", alias="title")
    items: list[FormItem] = []

    read_only: bool = Field(default=False, alias="readonly")

    prepend: str = ""
    append: str = ""
    no_title: bool = Field(default=False, alias="notitle")
    html_class: str = Field(default="", alias="htmlClass")
    html_meta_data: Optional[dict[str, str]] = Field(default=None, alias="htmlMetaData")
    field_html_class: str = Field(default="", alias="fieldHtmlClass")
    placeholder: str = ""
    inline_title: str = Field(default="", alias="inlinetitle")
    title_map: Optional[dict[str, str]] = Field(default=None, alias="titleMap")
    active_class: str = Field(default="", alias="activeClass")
    help_value: str = Field(default="", alias="helpvalue")

    @model_serializer(mode="wrap")
    def _omit_empty(self, handler):
        data = handler(self)
        return {k: v for k, v in data.items() if not _is_empty(v)}

    @property
    def is_group(self) -> bool:
        return bool(self.items)


class FormSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    form: list[FormItem] = []
    json_schema: dict[str, Any] = Field(default_factory=dict, alias="schema")

    def to_dict(self) -> dict[str, Any]:
        data = self.model_dump(by_alias=True)
        if not data["form"]:
            del data["form"]
        return data
