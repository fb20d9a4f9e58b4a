"""Library exceptions and the Fault model for describing caught exceptions."""

from __future__ import annotations

import traceback
from typing import Self

from pydantic import BaseModel


class ResultcaseError(Exception):
    """Base class for errors raised by resultcase itself."""


class AmbiguousResultError(ResultcaseError, TypeError):
    """Raised when a Result's error type is assignable to its success type.

    Such a Result could not be told apart by its payload alone, so
    ``Result[int, int]`` or ``Result[Exception, ValueError]`` is rejected
    the moment it is written.
    """

    def __init__(self, ok_type: object, err_type: object) -> None:
        self.ok_type = ok_type
        self.err_type = err_type
        super().__init__(
            f"Result[{_type_name(ok_type)}, {_type_name(err_type)}] is ambiguous: "
            f"{_type_name(err_type)} is assignable to {_type_name(ok_type)}"
        )


class Fault(BaseModel):
    """Serializable description of a caught exception.

    Works as a ready-made ``catch`` transformer:

        >>> from resultcase import tcf, Fault
        >>> r = tcf(try_=lambda: int("x"), catch=Fault.from_exception)
        >>> r.error.kind
        'ValueError'
    """

    model_config = {"frozen": True}

    message: str
    kind: str
    details: str | None = None

    @classmethod
    def from_exception(cls, exc: BaseException, *, include_trace: bool = False) -> Self:
        """Create from exception. ``include_trace`` captures the formatted traceback."""
        return cls(
            message=str(exc),
            kind=type(exc).__name__,
            details="".join(traceback.format_exception(exc)) if include_trace else None,
        )

    def render(self) -> str:
        """Format as ``Kind: message`` with details appended when present."""
        head = f"{self.kind}: {self.message}" if self.message else self.kind
        return f"{head}\n{self.details}" if self.details else head

    __str__ = render


def _type_name(tp: object) -> str:
    return tp.__name__ if isinstance(tp, type) else repr(tp)
