"""Result construction and consumption: ok/err, tcf, and the result() discriminator.

Example:
    >>> from resultcase.core import ok, err, tcf, result
    >>> tcf(try_=lambda: 1 / 0, catch=lambda e: str(e)).pair()
    (None, 'division by zero')
"""

from .discriminator import is_exception, result
from .err import err
from .ok import ok
from .pending import Deferred, is_pending
from .tcf import tcf, tcf_async
from .types import Err, Ok, Result

__all__ = [
    # Core types
    "Result", "Ok", "Err",
    # Constructors
    "ok", "err", "tcf", "tcf_async", "result",
    # Pending payloads
    "Deferred", "is_pending",
    # Predicates
    "is_exception",
]
