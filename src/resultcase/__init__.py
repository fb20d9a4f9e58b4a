"""resultcase - Result values instead of exceptions, with tags and awaitable payloads.

A Result is either ``Ok`` (success, holding ``value``) or ``Err`` (failure,
holding ``error``). Every Result carries a string ``tag`` and the same
surface: ``is_ok()``, ``is_err()``, ``match()``, ``pair()``, ``unwrap()``.

Quick Start:
    >>> from resultcase import ok, err, tcf, result
    >>>
    >>> def parse_port(raw: str):
    ...     return tcf(
    ...         try_=lambda: int(raw),
    ...         catch=lambda e: ValueError(f"invalid port {raw!r}"),
    ...         tag_error="CONFIG",
    ...     )
    >>>
    >>> parse_port("8080").match(lambda p: p, lambda e: 80)
    8080
    >>> value, error = parse_port("http").pair()
    >>> error.args[0], parse_port("http").tag
    ("invalid port 'http'", 'CONFIG')

Classifying values:
    >>> result(42)
    Ok(42)
    >>> result(KeyError("id")).is_err()
    True

Awaitable payloads:
    >>> async def fetch_user() -> dict: ...
    >>> r = ok(fetch_user())
    >>> # name = await r.match(lambda u: u["name"], lambda e: None)
    >>> # user, error = await r.pair()

Tags:
    >>> ok("data", "CACHED").tag
    'CACHED'
"""

from __future__ import annotations

__version__ = "0.1.0"

# Foundation
from .foundation import (
    DEFAULT_TAG_ERR,
    DEFAULT_TAG_OK,
    AmbiguousResultError,
    Fault,
    ResultcaseError,
    ResultcaseSettings,
    clear_settings_cache,
    get_settings,
)

# Logging
from .observability import configure_logging, get_logger

# Core
from .core import (
    Deferred,
    Err,
    Ok,
    Result,
    err,
    is_exception,
    is_pending,
    ok,
    result,
    tcf,
    tcf_async,
)

__all__ = [
    # Version
    "__version__",
    # Result
    "Result",
    "Ok",
    "Err",
    "ok",
    "err",
    "tcf",
    "tcf_async",
    "result",
    "is_exception",
    # Pending payloads
    "Deferred",
    "is_pending",
    # Tags
    "DEFAULT_TAG_OK",
    "DEFAULT_TAG_ERR",
    # Errors
    "ResultcaseError",
    "AmbiguousResultError",
    "Fault",
    # Config & logging
    "ResultcaseSettings",
    "get_settings",
    "clear_settings_cache",
    "configure_logging",
    "get_logger",
]
