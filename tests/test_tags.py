"""Form tag reader unit tests"""

from typing import Annotated

import pytest
from pydantic import BaseModel, Field

from jsonform.errors import MetadataParseError
from jsonform.tags import FormTags, field_tags, form, read_tags


def test_read_tags_maps_string_attributes():
    attributes = read_tags(
        {"formType": "textarea", "placeholder": "Tell us more", "htmlClass": "bio"}
    )

    assert attributes == {
        "form_type": "textarea",
        "placeholder": "Tell us more",
        "html_class": "bio",
    }


def test_read_tags_ignores_unknown_keys():
    assert read_tags({"minLength": "3", "title": "Bio"}) == {}


@pytest.mark.parametrize("value", ["true", "True", "1", "t", True])
def test_read_tags_parses_true_values(value):
    assert read_tags({"readOnly": value}) == {"read_only": True}


@pytest.mark.parametrize("value", ["false", "FALSE", "0", "f", False])
def test_read_tags_parses_false_values(value):
    assert read_tags({"noTitle": value}) == {"no_title": False}


def test_read_tags_rejects_invalid_bool():
    with pytest.raises(MetadataParseError) as exc_info:
        read_tags({"readOnly": "maybe"}, field="User.bio")

    assert exc_info.value.field == "User.bio"
    assert exc_info.value.key == "readOnly"
    assert "User.bio" in str(exc_info.value)
    assert "readOnly" in str(exc_info.value)


def test_read_tags_rejects_non_string_for_string_attribute():
    with pytest.raises(MetadataParseError):
        read_tags({"placeholder": 42})


def test_read_tags_parses_json_map():
    attributes = read_tags({"titleMap": '{"ru-RU": "Russian", "en-US": "English"}'})

    assert attributes == {"title_map": {"ru-RU": "Russian", "en-US": "English"}}


def test_read_tags_accepts_mapping_and_stringifies_values():
    attributes = read_tags({"htmlMetaData": {"data-size": 3}})

    assert attributes == {"html_meta_data": {"data-size": "3"}}


@pytest.mark.parametrize("value", ["{not json", "[1, 2]", 5])
def test_read_tags_rejects_invalid_map(value):
    with pytest.raises(MetadataParseError):
        read_tags({"titleMap": value})


def test_form_tags_is_hashable_mapping():
    tags = form(formType="textarea", readOnly="true")

    assert isinstance(tags, FormTags)
    assert dict(tags) == {"formType": "textarea", "readOnly": "true"}
    assert hash(tags) == hash(form(readOnly="true", formType="textarea"))
    assert tags == {"formType": "textarea", "readOnly": "true"}


def test_field_tags_merges_annotated_metadata():
    class Sample(BaseModel):
        bio: Annotated[str, form(formType="textarea"), form(placeholder="About")] = Field(
            "", min_length=1
        )
        name: str = ""

    assert field_tags(Sample.model_fields["bio"]) == {
        "formType": "textarea",
        "placeholder": "About",
    }
    assert field_tags(Sample.model_fields["name"]) == {}
