"""Configuration loader and settings helpers for Assistant Gateway."""

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Annotated, Any

import yaml
from pydantic import AliasChoices, Field, field_validator
from pydantic import (
    ValidationError as PydanticValidationError,
)
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

from ..exceptions import ConfigurationError
from .retry import RetryConfig


logger = logging.getLogger(__name__)

DEFAULT_TRANSLATE_URL = "https://translation.googleapis.com/language/translate/v2"


def load_yaml_config(config_path: str | Path) -> dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to YAML configuration file

    Returns:
        Configuration dictionary

    Raises:
        ConfigurationError: If file not found or invalid YAML
    """
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f)
            return config if config else {}
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {config_path}")
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_path}: {e}")


def _split_string_list(value: Any, field_name: str) -> list[str]:
    """Accept JSON arrays, comma-separated strings, or iterables of strings."""

    if value is None:
        return []
    if isinstance(value, str):
        stripped = value.strip()
        if stripped.startswith("["):
            try:
                value = json.loads(stripped)
            except json.JSONDecodeError as exc:
                raise ValueError(f"{field_name} is not a valid JSON array: {exc}") from exc
        else:
            items = [item.strip() for item in stripped.split(",")]
            return [item for item in items if item]
    if isinstance(value, list | tuple | set):
        return [str(item).strip() for item in value if str(item).strip()]
    raise ValueError(f"{field_name} must be a comma-separated string or iterable of strings")


class GlobalSettings(BaseSettings):
    """Global application settings sourced from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ASSIST_",
        env_nested_delimiter="__",
        env_file=(".env", ".env.local"),
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    environment: str = "development"
    log_level: str = "INFO"

    openai_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ASSIST_OPENAI_API_KEY", "OPENAI_API_KEY"),
    )
    openai_model: str = "gpt-4-turbo-preview"
    openai_base_url: str | None = None
    openai_temperature: float = Field(default=0.7, ge=0, le=2)
    openai_max_tokens: int = Field(default=4000, ge=1)

    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("ASSIST_GOOGLE_API_KEY", "GOOGLE_API_KEY"),
    )
    translate_url: str = DEFAULT_TRANSLATE_URL
    translate_timeout_seconds: float = Field(default=30.0, gt=0)
    translation_retry: RetryConfig = Field(default_factory=RetryConfig)

    extraction_max_chars: int = Field(default=5000, ge=1)
    download_min_length: int = Field(default=600, ge=0)
    personas_file: Path | None = None
    pdf_thaana_font_file: Path | None = None

    api_keys: Annotated[list[str], NoDecode] = Field(default_factory=list)
    cors_origins: Annotated[list[str], NoDecode] = Field(default_factory=lambda: ["*"])

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        """Ensure log level values are uppercase for logging config."""

        return value.upper()

    @field_validator("environment")
    @classmethod
    def _normalize_environment(cls, value: str) -> str:
        return value.lower()

    @field_validator("api_keys", mode="before")
    @classmethod
    def _parse_api_keys(cls, value: Any) -> list[str]:
        """Support comma-separated strings or JSON arrays for API key configuration."""

        return _split_string_list(value, "api_keys")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def _parse_cors_origins(cls, value: Any) -> list[str]:
        origins = _split_string_list(value, "cors_origins")
        return origins or ["*"]

    @field_validator("openai_api_key", "google_api_key", "openai_base_url", mode="before")
    @classmethod
    def _blank_to_none(cls, value: Any) -> Any:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @field_validator("personas_file", "pdf_thaana_font_file", mode="before")
    @classmethod
    def _expand_paths(cls, value: Any) -> Any:
        """Allow string paths and expand user markers."""

        if value is None or isinstance(value, Path):
            return value
        if isinstance(value, str):
            if not value.strip():
                return None
            return Path(value).expanduser()
        return value


@lru_cache(maxsize=1)
def _get_settings_cached() -> GlobalSettings:
    try:
        return GlobalSettings()
    except PydanticValidationError as exc:
        raise ConfigurationError(f"Configuration validation failed: {exc}") from exc


def get_settings(*, reload: bool = False) -> GlobalSettings:
    """Return cached settings, optionally forcing a reload."""

    if reload:
        _get_settings_cached.cache_clear()
    return _get_settings_cached()


def ensure_runtime_configuration(settings: GlobalSettings | None = None) -> GlobalSettings:
    """Validate optional configuration files and report missing integrations.

    Missing API keys are not fatal: chat requests degrade to an apology message
    and translation is skipped, so startup only warns about them.
    """

    settings = settings or get_settings()

    if settings.personas_file is not None:
        # Imported lazily; personas depends on this module.
        from ..services.personas import load_persona_prompts

        load_persona_prompts(settings.personas_file)

    if not settings.openai_api_key:
        logger.warning("OpenAI API key is not configured; chat replies will report an error")
    if not settings.google_api_key:
        logger.warning("Google API key is not configured; messages will not be translated")

    return settings
