"""Configuration file loading and validation."""

import logging
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    TomlConfigSettingsSource,
)

from .consts import BASE_URL_DEFAULT, SUBMIT_TITLE_DEFAULT, WEB_HOST_DEFAULT, WEB_PORT_DEFAULT
from .errors import ConfigException

logger = logging.getLogger(__name__)


class WebConfig(BaseModel):
    """Web service configuration."""

    host: str = Field(default=WEB_HOST_DEFAULT)
    port: int = Field(default=WEB_PORT_DEFAULT, ge=1, le=65535)


class Config(BaseSettings):
    """Application configuration."""

    strict: bool = False
    submit_button: bool = True
    submit_title: str = Field(default=SUBMIT_TITLE_DEFAULT)
    base_url: str = Field(default=BASE_URL_DEFAULT)
    log_file: Optional[str] = None

    web: WebConfig = Field(default_factory=WebConfig)

    model_config = SettingsConfigDict(
        env_prefix="JSONFORM_",
        env_nested_delimiter="__",
    )

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        if not v.startswith("/"):
            raise ValueError(f"base_url must start with '/': {v}")
        if not v.endswith("/"):
            v += "/"
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            TomlConfigSettingsSource(settings_cls),
        )

    @classmethod
    def load_from_file(cls, config_path: str) -> "Config":
        """Load configuration from specified path."""
        path = Path(config_path)
        if not path.exists():
            raise ConfigException(f"Configuration file not found: {config_path}")

        class _Config(cls):
            model_config = SettingsConfigDict(
                toml_file=str(path),
                env_prefix="JSONFORM_",
                env_nested_delimiter="__",
            )

        try:
            return _Config()
        except ValidationError as e:
            error_lines = ["Configuration validation failed:"]
            for error in e.errors():
                loc = " -> ".join(str(item) for item in error["loc"])
                error_lines.append(f"  - {loc}: {error['msg']}")
            raise ConfigException("\n".join(error_lines)) from e
