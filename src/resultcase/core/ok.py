"""Success constructor."""

from __future__ import annotations

from typing import TypeVar

from .types import Ok

T = TypeVar("T")


def ok(value: T, tag: str | None = None) -> Ok[T]:
    """Construct Ok variant (success).

    ``tag`` replaces the default ``"Ok"`` tag and changes nothing else: two
    results with equal values and different tags match, pair and unwrap the
    same way.

    Example:
        >>> r = ok("data", "ValidData")
        >>> r.tag, r.unwrap()
        ('ValidData', 'data')
    """
    return Ok(value, tag)
