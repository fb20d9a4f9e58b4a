"""Foundation - default tags, errors and configuration."""

from __future__ import annotations

from .config import LoggingSettings, ResultcaseSettings, clear_settings_cache, get_settings
from .constants import DEFAULT_TAG_ERR, DEFAULT_TAG_OK
from .errors import AmbiguousResultError, Fault, ResultcaseError

__all__ = [
    # Tags
    "DEFAULT_TAG_OK", "DEFAULT_TAG_ERR",
    # Errors
    "ResultcaseError", "AmbiguousResultError", "Fault",
    # Config
    "ResultcaseSettings", "LoggingSettings", "get_settings", "clear_settings_cache",
]
