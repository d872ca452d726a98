"""Constants for jsonform"""

# ==================== Form Types ====================
FORM_TYPE_ARRAY = "array"
FORM_TYPE_SECTION = "section"
FORM_TYPE_SUBMIT = "submit"

# ==================== Defaults ====================
SUBMIT_TITLE_DEFAULT = "Submit"
BASE_URL_DEFAULT = "/json-form/"
SUBMIT_METHOD_DEFAULT = "POST"
SUCCESS_STATUS_DEFAULT = 200
WEB_HOST_DEFAULT = "127.0.0.1"
WEB_PORT_DEFAULT = 8011

# ==================== Paths ====================
ROOT_SEGMENT = "#"
ARRAY_SEGMENT = "[]"
DEFS_REF_PREFIX = "#/$defs/"

# ==================== Template Names ====================
TEMPLATE_PAGE = "page.html"

# ==================== Form Tags ====================
# Tag key -> FormItem attribute name.
TAG_ATTRIBUTES = {
    "formType": "form_type",
    "formTitle": "form_title",
    "readOnly": "read_only",
    "prepend": "prepend",
    "append": "append",
    "noTitle": "no_title",
    "htmlClass": "html_class",
    "htmlMetaData": "html_meta_data",
    "fieldHtmlClass": "field_html_class",
    "placeholder": "placeholder",
    "inlineTitle": "inline_title",
    "titleMap": "title_map",
    "activeClass": "active_class",
    "helpValue": "help_value",
}

TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}

# ==================== Client Callbacks ====================
# Form attribute -> client-side parameter name.
CALLBACK_PARAMS = {
    "on_success": "onSuccess",
    "on_fail": "onFail",
    "on_error": "onError",
    "on_before_submit": "onBeforeSubmit",
    "on_request_finished": "onRequestFinished",
}
