"""Form model unit tests"""

from jsonform.models import FormItem, FormSchema


def test_form_item_defaults():
    item = FormItem()

    assert item.key == ""
    assert item.form_type == ""
    assert item.items == []
    assert item.read_only is False
    assert item.html_meta_data is None
    assert item.is_group is False


def test_form_item_accepts_wire_names():
    item = FormItem(key="bio", type="textarea", title="Bio", readonly=True)

    assert item.form_type == "textarea"
    assert item.form_title == "Bio"
    assert item.read_only is True


def test_form_item_serialization_omits_empty_values():
    item = FormItem(key="age")

    assert item.model_dump(by_alias=True) == {"key": "age"}


def test_form_item_serialization_uses_wire_names():
    item = FormItem(
        key="locale",
        form_type="radios",
        read_only=True,
        no_title=True,
        html_class="locale",
        html_meta_data={"style": "border: 1px solid blue"},
        field_html_class="input-xxlarge",
        inline_title="Pick one",
        title_map={"ru-RU": "Russian"},
        active_class="btn-success",
        help_value="<strong>Click me!</strong>",
    )

    assert item.model_dump(by_alias=True) == {
        "key": "locale",
        "type": "radios",
        "readonly": True,
        "notitle": True,
        "htmlClass": "locale",
        "htmlMetaData": {"style": "border: 1px solid blue"},
        "fieldHtmlClass": "input-xxlarge",
        "inlinetitle": "Pick one",
        "titleMap": {"ru-RU": "Russian"},
        "activeClass": "btn-success",
        "helpvalue": "<strong>Click me!</strong>",
    }


def test_form_item_serialization_is_recursive():
    item = FormItem(
        key="neighbors",
        form_type="array",
        items=[FormItem(form_type="section", items=[FormItem(key="neighbors[].bio")])],
    )

    assert item.model_dump(by_alias=True) == {
        "key": "neighbors",
        "type": "array",
        "items": [{"type": "section", "items": [{"key": "neighbors[].bio"}]}],
    }
    assert item.is_group is True


def test_form_schema_to_dict():
    form_schema = FormSchema(
        form=[FormItem(key="name")],
        json_schema={"type": "object", "properties": {"name": {"type": "string"}}},
    )

    assert form_schema.to_dict() == {
        "form": [{"key": "name"}],
        "schema": {"type": "object", "properties": {"name": {"type": "string"}}},
    }


def test_form_schema_to_dict_omits_empty_form():
    assert FormSchema(json_schema={"type": "object"}).to_dict() == {"schema": {"type": "object"}}
