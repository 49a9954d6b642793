"""
Application settings.

Environment-driven infrastructure values live in `AppSettings`; behavioural
flags live in the YAML settings file handled by `core.settings.store`.
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.settings.store import (
    SettingsEntry,
    SettingsFile,
    get_active_settings_path,
    get_general_settings,
    get_setting_flag,
    load_settings,
    refresh_settings_cache,
)


class SettingsError(Exception):
    """Raised when application settings are invalid or unavailable."""


class AppSettings(BaseSettings):
    """
    Infrastructure settings loaded from environment variables.

    PAYLOADS_SETTINGS_PATH points at a settings.yaml file (seeded from the
    template when missing). LOGFIRE_TOKEN enables sending telemetry.
    """

    model_config = SettingsConfigDict(env_file=None, extra="ignore", case_sensitive=True)

    settings_path: Optional[Path] = Field(default=None, alias="PAYLOADS_SETTINGS_PATH")
    logfire_token: Optional[str] = Field(default=None, alias="LOGFIRE_TOKEN")

    @field_validator("settings_path", mode="before")
    @classmethod
    def _expand_settings_path(cls, value):
        """Expand user paths to absolute Path instances."""
        if value in (None, ""):
            return None
        if isinstance(value, Path):
            return value.expanduser()
        return Path(value).expanduser()


@lru_cache(maxsize=1)
def get_app_settings() -> AppSettings:
    """
    Load application settings from environment variables.
    """
    return AppSettings()


def refresh_app_settings_cache() -> None:
    """Clear cached settings so future calls reload from environment."""
    get_app_settings.cache_clear()  # type: ignore[attr-defined]


def refresh_all_settings() -> None:
    """Clear both environment and file settings caches."""
    refresh_app_settings_cache()
    refresh_settings_cache()


def is_debug_enabled() -> bool:
    """Return True when error responses should include tracebacks."""
    try:
        return get_setting_flag("debug")
    except (OSError, ValueError) as exc:
        raise SettingsError(f"Unable to read settings: {exc}") from exc


__all__ = [
    "AppSettings",
    "SettingsEntry",
    "SettingsError",
    "SettingsFile",
    "get_active_settings_path",
    "get_app_settings",
    "get_general_settings",
    "get_setting_flag",
    "is_debug_enabled",
    "load_settings",
    "refresh_all_settings",
    "refresh_app_settings_cache",
    "refresh_settings_cache",
]
