"""Errors raised by resultcase and the Fault model."""

from .errors import AmbiguousResultError, Fault, ResultcaseError

__all__ = ["AmbiguousResultError", "Fault", "ResultcaseError"]
