"""Shared fixtures: isolate settings and logging configuration between tests."""

from __future__ import annotations

from collections.abc import Iterator

import pytest

from resultcase.foundation.config import clear_settings_cache
from resultcase.observability import reset_logging


@pytest.fixture(autouse=True)
def clean_config() -> Iterator[None]:
    """Reset cached settings and explicit logging configuration around each test."""
    clear_settings_cache()
    reset_logging()
    yield
    reset_logging()
    clear_settings_cache()
