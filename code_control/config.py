"""
code-control Configuration

Centralized configuration management using pydantic-settings.
Environment variables use the CONTROL_ prefix and win over the persisted
config file, which wins over defaults.

Usage:
    from code_control.config import load_settings

    settings = load_settings()
    settings.log_path
"""

import json
import os
from pathlib import Path
from typing import Any, Literal

import typer
from pydantic import Field, ValidationError, field_validator
from pydantic_settings import (
    BaseSettings,
    JsonConfigSettingsSource,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    SettingsError,
)

from code_control.errors import ConfigError

APP_NAME = "control"
CONFIG_FILE_NAME = "config.json"
CONFIG_DIR_ENV = "CONTROL_CONFIG_DIR"


def config_dir() -> Path:
    """Directory holding the persisted configuration"""
    override = os.environ.get(CONFIG_DIR_ENV)
    if override:
        return Path(override)
    return Path(typer.get_app_dir(APP_NAME))


def config_file_path() -> Path:
    return config_dir() / CONFIG_FILE_NAME


class Settings(BaseSettings):
    """
    code-control settings

    Environment variables should use CONTROL_ prefix.
    Example: CONTROL_LOG_LEVEL=DEBUG, CONTROL_LOG_PATH=.audit/control-log
    """

    model_config = SettingsConfigDict(
        env_prefix="CONTROL_",
        extra="ignore",
        validate_assignment=True,
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Log level for diagnostics on stderr"
    )
    log_format: Literal["console", "json"] = Field(default="console", description="Diagnostic log format")
    log_path: str = Field(default=".control-log", description="Default snapshot file")
    compression_level: int = Field(default=6, ge=0, le=9, description="zlib level for snapshot files")

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_level(cls, value: Any) -> Any:
        return value.upper() if isinstance(value, str) else value

    @field_validator("log_format", mode="before")
    @classmethod
    def _lower_format(cls, value: Any) -> Any:
        return value.lower() if isinstance(value, str) else value

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
            JsonConfigSettingsSource(settings_cls, json_file=config_file_path()),
        )


def load_settings(**overrides: Any) -> Settings:
    """
    Resolve settings from overrides, environment, config file and defaults.

    Raises:
        ConfigError: If any source holds an invalid value
    """
    try:
        return Settings(**{k: v for k, v in overrides.items() if v is not None})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {_first_error(e)}") from e
    except (json.JSONDecodeError, SettingsError) as e:
        raise ConfigError(f"Could not load configuration from {config_file_path()}", reason=str(e)) from e


def read_config_file() -> dict[str, Any]:
    path = config_file_path()
    if not path.is_file():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ConfigError(f"Config file is not readable: {path}", reason=str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config file must hold a JSON object: {path}")
    return data


def store_setting(field: str, value: str) -> Any:
    """
    Validate and persist one setting.

    Args:
        field: Settings field name (e.g., "log_path")
        value: Raw string value as typed on the command line

    Returns:
        The normalized value that was written

    Raises:
        ConfigError: Unknown field or invalid value
    """
    if field not in Settings.model_fields:
        raise ConfigError(f"Invalid field: {field}", field=field)

    data = read_config_file()
    try:
        normalized = getattr(Settings(**{field: value}), field)
    except ValidationError as e:
        raise ConfigError(f"Invalid value for {field}: {_first_error(e)}", field=field) from e

    data[field] = normalized

    path = config_file_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(data, indent=2, sort_keys=True) + "\n", encoding="utf-8")
    return normalized


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first.get("loc", ()))
    return f"{location}: {first['msg']}" if location else first["msg"]
