"""
Centralized settings for featurespine.

One validated, cached settings object drives which backend adapter is built
and how logging is configured. Values come from ``FEATURESPINE_*``
environment variables or a ``.env`` file.

Examples:
    >>> from featurespine.core.settings import get_settings
    >>> settings = get_settings()
    >>> settings.adapter
    'memory'

Tags:
    featurespine, configuration, settings, pydantic, validation
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from featurespine.core.errors import InvalidConfigError
from featurespine.core.logging import LOG_LEVELS


class FeatureSpineSettings(BaseSettings):
    """featurespine configuration.

    Fields
    ──────
    adapter       : Registered name of the backend adapter to build
    log_level     : Structlog log level
    log_format    : ``json``, ``console`` or ``auto`` (JSON when not a tty)
    service_name  : Value of the ``service.name`` log field
    """

    model_config = SettingsConfigDict(
        env_prefix="FEATURESPINE_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Backend ──────────────────────────────────────────────────
    adapter: str = Field(default="memory", description="Registered backend adapter name")

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console", "auto"] = Field(default="auto")
    service_name: str = Field(default="featurespine")

    @field_validator("adapter")
    @classmethod
    def _normalize_adapter(cls, value: str) -> str:
        value = value.strip().lower()
        if not value:
            raise ValueError("adapter name must not be empty")
        return value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.upper()
        if value not in LOG_LEVELS:
            raise ValueError(f"unknown log level: {value}")
        return value


_settings_cache: dict[str, FeatureSpineSettings] = {}


def get_settings(*, _force_reload: bool = False) -> FeatureSpineSettings:
    """Load, validate, and cache a :class:`FeatureSpineSettings` instance.

    Parameters
    ----------
    _force_reload:
        Bypass cache and re-read the environment.

    Raises
    ------
    InvalidConfigError
        If the environment holds an invalid value.
    """
    if not _force_reload and "default" in _settings_cache:
        return _settings_cache["default"]

    try:
        settings = FeatureSpineSettings()
    except ValidationError as e:
        fields = [".".join(str(part) for part in err["loc"]) for err in e.errors()]
        raise InvalidConfigError(
            f"Invalid featurespine settings: {', '.join(fields)}", cause=e
        ).with_context(fields=fields) from e
    _settings_cache["default"] = settings
    return settings


def clear_settings_cache() -> None:
    """Drop the cached settings (mainly for testing)."""
    _settings_cache.clear()


__all__ = [
    "FeatureSpineSettings",
    "get_settings",
    "clear_settings_cache",
]
