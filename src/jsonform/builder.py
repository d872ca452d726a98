"""Form tree assembly from the reflected property stream.

Properties arrive flat and post-ordered (children before the array that
holds them), so array and section nesting is rebuilt from keys alone:
``objects[].bars[].bar`` belongs to the section of ``objects[].bars``,
which in turn belongs to the section of ``objects``.
"""

import logging
from typing import Any, Optional

from .consts import (
    ARRAY_SEGMENT,
    FORM_TYPE_ARRAY,
    FORM_TYPE_SECTION,
    FORM_TYPE_SUBMIT,
    SUBMIT_TITLE_DEFAULT,
)
from .models import FormItem, FormSchema
from .reflector import PropertyEvent, property_key, reconcile_required
from .tags import read_tags

logger = logging.getLogger(__name__)


def parent_key(key: str) -> Optional[str]:
    """Return the key of the array holding ``key``, or None for top-level keys."""
    p = key.rfind(ARRAY_SEGMENT)
    if p == -1:
        return None
    return key[:p]


class FormBuilder:
    def __init__(self, submit_button: bool = True, submit_title: str = SUBMIT_TITLE_DEFAULT):
        self.submit_button = submit_button
        self.submit_title = submit_title
        self.form: list[FormItem] = []
        self._sections: dict[str, FormItem] = {}

    def intercept(self, event: PropertyEvent) -> None:
        # Objects are implicit groupings, their leaves carry the full key.
        if event.is_object:
            return

        attributes = read_tags(event.tags, event.field_name)
        self.add(FormItem(key=property_key(event.path, event.name), **attributes))

    def add(self, item: FormItem) -> None:
        section = self._take_section(item.key)
        if section is not None:
            item.form_type = FORM_TYPE_ARRAY
            item.items = [section]

        parent = parent_key(item.key)
        if parent is None:
            self.form.append(item)
            return

        if parent not in self._sections:
            self._sections[parent] = FormItem(form_type=FORM_TYPE_SECTION)
        self._sections[parent].items.append(item)

    def _take_section(self, key: str) -> Optional[FormItem]:
        section = self._sections.pop(key, None)
        if section is not None:
            return section

        # Arrays of arrays have no key of their own for the inner level.
        nested = key + ARRAY_SEGMENT
        if not any(k.startswith(nested) for k in self._sections):
            return None

        inner = self._take_section(nested)
        if inner is None:
            return None
        return FormItem(form_type=FORM_TYPE_ARRAY, items=[inner])

    def build(self, schema: dict[str, Any]) -> FormSchema:
        if self._sections:
            logger.debug(f"Dropping unclaimed form sections: {sorted(self._sections)}")

        form = list(self.form)
        if self.submit_button:
            form.append(FormItem(form_type=FORM_TYPE_SUBMIT, form_title=self.submit_title))

        return FormSchema(form=form, json_schema=reconcile_required(schema))
