"""Form page rendering with Jinja2 templates."""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional, TextIO

from jinja2 import Environment, FileSystemLoader, select_autoescape
from pydantic import BaseModel, ConfigDict, Field
from pydantic_core import to_jsonable_python

from .consts import (
    BASE_URL_DEFAULT,
    CALLBACK_PARAMS,
    SUBMIT_METHOD_DEFAULT,
    SUCCESS_STATUS_DEFAULT,
    TEMPLATE_PAGE,
)
from .models import FormSchema
from .repository import Repository

logger = logging.getLogger(__name__)


@dataclass
class Page:
    """Page-level options shared by all forms of a page."""

    title: str = ""
    append_html_head: str = ""
    prepend_html: str = ""
    append_html: str = ""


@dataclass
class Form:
    """One form of a page.

    Either ``schema`` or ``value`` (or ``schema_name`` for client-side
    loading) identifies the form schema. Callbacks are JavaScript function
    sources handed to the client untouched.
    """

    title: str = ""
    description: str = ""
    name: str = ""
    schema_name: str = ""
    value_url: str = ""
    submit_url: str = ""
    submit_method: str = SUBMIT_METHOD_DEFAULT
    success_status: int = SUCCESS_STATUS_DEFAULT

    schema: Optional[FormSchema] = None
    value: Any = None

    on_success: str = ""
    on_fail: str = ""
    on_error: str = ""
    on_before_submit: str = ""
    on_request_finished: str = ""

    def callbacks(self) -> dict[str, str]:
        return {
            param: getattr(self, attr)
            for attr, param in CALLBACK_PARAMS.items()
            if getattr(self, attr)
        }


class FormParams(BaseModel):
    """Client-side form parameters, serialized into the page."""

    model_config = ConfigDict(populate_by_name=True)

    title: str = ""
    description: str = ""
    name: str = ""
    schema_name: str = Field(default="", alias="schemaName")
    value_url: str = Field(default="", alias="valueUrl")
    submit_url: str = Field(default="", alias="submitUrl")
    submit_method: str = Field(default="", alias="submitMethod")
    success_status: int = Field(default=0, alias="successStatus")
    form_schema: Optional[dict[str, Any]] = Field(default=None, alias="schema")
    value: Any = None

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_defaults=True)


@dataclass
class FormRenderData:
    id: str
    params: dict[str, Any]
    callbacks: dict[str, str] = field(default_factory=dict)

    @property
    def params_json(self) -> str:
        return script_json(self.params)


@dataclass
class PageRenderData:
    title: str = ""
    base_url: str = BASE_URL_DEFAULT
    append_html_head: str = ""
    prepend_html: str = ""
    append_html: str = ""
    forms: list[FormRenderData] = field(default_factory=list)


def script_json(data: Any) -> str:
    """Serialize data as JSON that is safe inside a <script> element."""
    return (
        json.dumps(data, ensure_ascii=False)
        .replace("<", "\\u003c")
        .replace(">", "\\u003e")
        .replace("&", "\\u0026")
    )


class FormRenderer:
    """Assemble forms into template data and render HTML pages."""

    def __init__(self, repository: Repository, base_url: str = BASE_URL_DEFAULT):
        self.repository = repository
        self.base_url = base_url

        template_dir = Path(__file__).parent / "templates"
        self.jinja_env = Environment(
            loader=FileSystemLoader(template_dir),
            autoescape=select_autoescape(["html"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def form_params(self, form: Form) -> FormParams:
        """Resolve the schema of a form and build its client parameters.

        Raises:
            NotFoundError: If only a value is given, its type is not
                registered and the repository is strict
        """
        form_schema = form.schema
        schema_name = form.schema_name

        if form_schema is None and form.value is not None:
            form_schema = self.repository.resolve(form.value)
            if not schema_name:
                schema_name = self.repository.name(form.value)

        value = None
        if form.value is not None and not isinstance(form.value, type):
            value = to_jsonable_python(form.value, by_alias=True)

        return FormParams(
            title=form.title,
            description=form.description,
            name=form.name,
            schema_name=schema_name,
            value_url=form.value_url,
            submit_url=form.submit_url,
            submit_method=form.submit_method,
            success_status=form.success_status,
            form_schema=form_schema.to_dict() if form_schema is not None else None,
            value=value,
        )

    def renderable_data(self, forms: list[Form], page: Page) -> PageRenderData:
        """Assemble page data for the template, one entry per form in order."""
        data = PageRenderData(
            title=page.title,
            base_url=self.base_url,
            append_html_head=page.append_html_head,
            prepend_html=page.prepend_html,
            append_html=page.append_html,
        )

        for i, form in enumerate(forms):
            params = self.form_params(form)
            data.forms.append(
                FormRenderData(
                    id=f"jsonform-{i}",
                    params=params.to_dict(),
                    callbacks=form.callbacks(),
                )
            )

        if not data.title and len(forms) == 1:
            data.title = forms[0].title

        return data

    def render(self, page: Page, *forms: Form) -> str:
        data = self.renderable_data(list(forms), page)
        template = self.jinja_env.get_template(TEMPLATE_PAGE)
        logger.debug(f"Rendering page {data.title!r} with {len(data.forms)} form(s)")
        return template.render(page=data)

    def render_to(self, out: TextIO, page: Page, *forms: Form) -> None:
        out.write(self.render(page, *forms))
