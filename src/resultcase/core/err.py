"""Failure constructor."""

from __future__ import annotations

from typing import TypeVar

from .types import Err

E = TypeVar("E")


def err(error: E, tag: str | None = None) -> Err[E]:
    """Construct Err variant (failure).

    ``tag`` replaces the default ``"Err"`` tag and changes nothing else.

    Example:
        >>> r = err(ValueError("invalid"), "VALIDATION")
        >>> r.tag
        'VALIDATION'
        >>> r.match(lambda v: v, lambda e: str(e))
        'invalid'
    """
    return Err(error, tag)
