"""Centralized configuration via pydantic-settings.

All ``TEXTNUM_*`` environment variables are read, validated, and exposed here.
Logging env vars (``TEXTNUM_LOG_FORMAT``, ``TEXTNUM_LOG_LEVEL``) are
excluded; they are read by ``textnum.logging`` before settings load.

Usage::

    from textnum.config.settings import get_settings

    settings = get_settings()
    print(settings.filter.fallback_format)

``.env`` files in the working directory are loaded automatically.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from textnum._constants import DEFAULT_FALLBACK_FORMAT, THOUSAND_SEPARATORS


class FilterSettings(BaseSettings):
    """Text filter settings shared by every render."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    fallback_format: str = Field(
        default=DEFAULT_FALLBACK_FORMAT,
        min_length=1,
        validation_alias="TEXTNUM_FALLBACK_FORMAT",
    )


class RenderSettings(BaseSettings):
    """Defaults applied when a display does not set its own values."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    default_langcode: str = Field(default="", validation_alias="TEXTNUM_DEFAULT_LANGCODE")
    thousand_separator: str = Field(default="", validation_alias="TEXTNUM_THOUSAND_SEPARATOR")

    @field_validator("thousand_separator")
    @classmethod
    def _separator_supported(cls, v: str) -> str:
        if v not in THOUSAND_SEPARATORS:
            msg = f"thousand_separator must be one of {sorted(THOUSAND_SEPARATORS)}, got {v!r}"
            raise ValueError(msg)
        return v


class CLISettings(BaseSettings):
    """CLI settings."""

    model_config = SettingsConfigDict(extra="ignore", populate_by_name=True)

    formats_file: str | None = Field(default=None, validation_alias="TEXTNUM_FORMATS_FILE")

    @property
    def formats_path(self) -> Path | None:
        """Expanded formats file path, if one is configured."""
        if self.formats_file is None:
            return None
        return Path(self.formats_file).expanduser()


class TextNumSettings(BaseSettings):
    """Root settings aggregating all subsystem settings.

    Loads ``.env`` from the current directory when present.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    filter: FilterSettings = Field(default_factory=FilterSettings)
    render: RenderSettings = Field(default_factory=RenderSettings)
    cli: CLISettings = Field(default_factory=CLISettings)


@lru_cache(maxsize=1)
def get_settings() -> TextNumSettings:
    """Return the singleton ``TextNumSettings`` instance.

    The result is cached; subsequent calls return the same object.
    Call ``get_settings.cache_clear()`` in tests to reset.
    """
    return TextNumSettings()
