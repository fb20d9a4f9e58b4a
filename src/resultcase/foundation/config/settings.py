"""Environment-based configuration using pydantic-settings.

Settings only drive ambient behavior (logging). They never change what
``ok``/``err``/``tcf``/``result`` construct.

Example:
    >>> from resultcase.foundation.config import get_settings
    >>> get_settings().logging.level
    'WARNING'

    # Or with environment variables:
    # RESULTCASE_LOG_LEVEL=DEBUG
    # RESULTCASE_LOG_FORMAT=json
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class LoggingSettings(BaseSettings):
    """Logging configuration."""

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_LOG_",
        extra="ignore",
    )

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    format: Literal["console", "json", "none"] = "console"
    colors: bool | None = Field(default=None, description="Force console colors (None = auto-detect)")

    @field_validator("level", mode="before")
    @classmethod
    def _normalize_level(cls, v: str) -> str:
        """Accept lowercase level names."""
        return v.upper() if isinstance(v, str) else v

    @field_validator("format", mode="before")
    @classmethod
    def _normalize_format(cls, v: str) -> str:
        return v.lower() if isinstance(v, str) else v


class ResultcaseSettings(BaseSettings):
    """Root settings, loaded from ``RESULTCASE_`` environment variables and ``.env``.

    Example environment variables:
        RESULTCASE_DEBUG=true
        RESULTCASE_LOG_LEVEL=DEBUG
        RESULTCASE_LOG_FORMAT=json
    """

    model_config = SettingsConfigDict(
        env_prefix="RESULTCASE_",
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        extra="ignore",
        validate_default=True,
    )

    debug: bool = Field(default=False, description="Log at DEBUG regardless of logging.level")
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    @computed_field
    @property
    def effective_log_level(self) -> str:
        """Level loggers start at when logging was not configured explicitly."""
        return "DEBUG" if self.debug else self.logging.level


@lru_cache(maxsize=1)
def get_settings() -> ResultcaseSettings:
    """Get the global settings instance (cached)."""
    return ResultcaseSettings()


def clear_settings_cache() -> None:
    """Clear the settings cache so the next get_settings() re-reads the environment."""
    get_settings.cache_clear()
