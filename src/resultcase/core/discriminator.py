"""Classify a value-or-error into Ok or Err."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, TypeVar

from ..observability import get_logger
from .err import err
from .ok import ok

if TYPE_CHECKING:
    from collections.abc import Callable

    from .types import Err, Ok

T = TypeVar("T")

_log = get_logger("resultcase.discriminator")


def is_exception(value: object) -> bool:
    """Default error predicate: value is an ``Exception`` instance."""
    return isinstance(value, Exception)


def result(
    value: T,
    *,
    is_error: Callable[[Any], bool] | None = None,
    tag_ok: str | None = None,
    tag_error: str | None = None,
) -> Ok[T] | Err[T]:
    """Create a Result from a value that might be an error.

    ``is_error`` decides which variant the value becomes and is the sole
    source of truth; it defaults to "is an ``Exception`` instance". An
    exception raised by ``is_error`` propagates: ``result`` does not catch,
    ``tcf`` does.

    Args:
        value: The value to classify
        is_error: Predicate returning True for the error representation
        tag_ok: Tag when value is classified Ok
        tag_error: Tag when value is classified Err

    Example:
        >>> result(42)
        Ok(42)
        >>> result(ValueError("x"), tag_error="INVALID").tag
        'INVALID'
        >>> result(-1, is_error=lambda v: v < 0)
        Err(-1)
    """
    if (is_error or is_exception)(value):
        _log.debug("classified", variant="Err", kind=type(value).__name__)
        return err(value, tag_error)
    return ok(value, tag_ok)
