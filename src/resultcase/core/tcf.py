"""try/catch/finally as data.

``tcf`` runs a fallible operation and returns its outcome as a Result
instead of letting the exception escape. ``catch`` must turn the caught
exception into the error value, so the raw exception type never leaks into
the Result unless ``catch`` chooses to return it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

from ..foundation.constants import DEFAULT_TAG_ERR
from ..observability import get_logger
from .err import err
from .ok import ok
from .pending import is_pending
from .types import check_tag

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from .types import Err, Ok

T = TypeVar("T")
E = TypeVar("E")

_log = get_logger("resultcase.tcf")


def tcf(
    *,
    try_: Callable[[], T],
    catch: Callable[[Exception], E],
    finally_: Callable[[], object] | None = None,
    tag_ok: str | None = None,
    tag_error: str | None = None,
) -> Ok[T] | Err[E]:
    """Run ``try_`` and wrap its outcome: Ok on return, Err of ``catch(fault)`` on raise.

    ``finally_`` runs exactly once after either branch, also when ``catch``
    itself raises (that exception then propagates to the caller). Tags apply
    to the branch taken.

    Only synchronous raises reach ``catch``. If ``try_`` returns an
    awaitable that later fails, the failure surfaces when the Ok's ``match``
    or ``pair`` coroutine is awaited; use ``tcf_async`` to have it converted.
    An awaitable returned by ``catch`` is wrapped as-is.

    Args:
        try_: Zero-argument operation to run
        catch: Converts the raised exception into the error value
        finally_: Cleanup step; its return value is ignored
        tag_ok: Tag for the Ok branch (default ``"Ok"``)
        tag_error: Tag for the Err branch (default ``"Err"``)

    Example:
        >>> import json
        >>> r = tcf(
        ...     try_=lambda: json.loads("{bad"),
        ...     catch=lambda e: ValueError(f"Parse failed: {e}"),
        ...     tag_error="PARSE",
        ... )
        >>> r.tag
        'PARSE'
    """
    _check_tags(tag_ok, tag_error)
    try:
        value = try_()
    except Exception as fault:
        _log.debug("fault converted", fault=type(fault).__name__, tag=tag_error or DEFAULT_TAG_ERR)
        return err(catch(fault), tag_error)
    else:
        return ok(value, tag_ok)
    finally:
        if finally_ is not None:
            finally_()


async def tcf_async(
    *,
    try_: Callable[[], T | Awaitable[T]],
    catch: Callable[[Exception], E | Awaitable[E]],
    finally_: Callable[[], object] | None = None,
    tag_ok: str | None = None,
    tag_error: str | None = None,
) -> Ok[T] | Err[E]:
    """Async version of tcf: awaits the operation, so asynchronous failures reach ``catch`` too.

    Awaitables returned by ``try_``, ``catch`` and ``finally_`` are awaited,
    so the returned Result is always settled. Cancellation
    (``asyncio.CancelledError``) is not caught.

    Example:
        >>> async def load() -> dict:
        ...     raise ConnectionError("refused")
        >>> # r = await tcf_async(try_=load, catch=lambda e: str(e))
        >>> # r.error == "refused"
    """
    _check_tags(tag_ok, tag_error)
    try:
        value = try_()
        while is_pending(value):
            value = await value
    except Exception as fault:
        _log.debug("fault converted", fault=type(fault).__name__, tag=tag_error or DEFAULT_TAG_ERR, mode="async")
        error = catch(fault)
        while is_pending(error):
            error = await error
        return err(error, tag_error)
    else:
        return ok(value, tag_ok)
    finally:
        if finally_ is not None:
            done = finally_()
            if is_pending(done):
                await done


def _check_tags(tag_ok: str | None, tag_error: str | None) -> None:
    # Validated before try_ runs so a bad tag is never routed through catch
    for tag in (tag_ok, tag_error):
        if tag is not None:
            check_tag(tag)
