"""Exception definitions for jsonform"""


class JsonFormException(Exception):
    """Base exception for all jsonform errors.

    Use this as a catch-all for jsonform-specific errors when you don't need
    to handle specific exception types.
    """

    pass


class ConfigException(JsonFormException):
    """Raised when configuration validation or loading fails.

    Use this exception when:
    - The configuration file cannot be found
    - The TOML syntax is invalid
    - Configuration validation fails (invalid values, unknown types)
    """

    pass


class MetadataParseError(JsonFormException):
    """Raised when a form tag value cannot be coerced to its attribute type.

    Use this exception when:
    - A boolean tag (readOnly, noTitle) holds a non-boolean value
    - A map tag (htmlMetaData, titleMap) is not a mapping or JSON object
    - A string tag holds a non-string value
    """

    def __init__(self, field: str, key: str, value, reason: str = ""):
        self.field = field
        self.key = key
        self.value = value
        message = f"invalid form tag {key}={value!r} on field {field}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class RegistrationError(JsonFormException):
    pass


class SchemaBuildError(RegistrationError):
    """Raised when reflecting a sample into a form schema fails.

    The original exception is available as ``cause`` (and ``__cause__``).
    """

    def __init__(self, name: str, cause: Exception):
        self.name = name
        self.cause = cause
        super().__init__(f"reflecting {name} schema: {cause}")


class DuplicateNameError(RegistrationError):
    def __init__(self, name: str, sample_type: type | None = None):
        self.name = name
        self.sample_type = sample_type
        type_name = sample_type.__qualname__ if sample_type is not None else "unknown"
        super().__init__(f"schema for {name} ({type_name}) is already added")


class NotFoundError(JsonFormException):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"schema not found: {name}")
