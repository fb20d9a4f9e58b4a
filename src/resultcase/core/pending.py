"""Pending payloads: awaitable detection and the shared Deferred handle.

A coroutine can be awaited once. Results must let ``match``, ``pair`` and
``await unwrap()`` each observe the payload, so awaitable payloads are held
in a ``Deferred`` that schedules the awaitable on first await and hands the
same future to every later awaiter.
"""

from __future__ import annotations

import asyncio
import inspect
from typing import TYPE_CHECKING, Any, Generic, TypeGuard, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Generator

T = TypeVar("T")
T_co = TypeVar("T_co", covariant=True)


def is_pending(value: object) -> TypeGuard[Awaitable[Any]]:
    """True if value is awaitable (coroutine, Future, Task, Deferred or any ``__await__`` object)."""
    return inspect.isawaitable(value)


class Deferred(Generic[T_co]):
    """Memoizing awaitable around a pending payload.

    The wrapped awaitable is scheduled with ``asyncio.ensure_future`` on the
    first await, inside the awaiting event loop, and awaited until the value
    is no longer awaitable. Later awaits, concurrent or not, share that future
    and see the same value or exception. Awaiting from a different event loop
    than the first one is not supported.

    Example:
        >>> async def fetch() -> int:
        ...     return 42
        >>> d = Deferred(fetch())
        >>> # await d == 42, and again await d == 42
    """

    __slots__ = ("_source", "_future")

    def __init__(self, source: Awaitable[T_co]) -> None:
        self._source = source
        self._future: asyncio.Future[T_co] | None = None

    def __await__(self) -> Generator[Any, None, T_co]:
        if self._future is None:
            self._future = asyncio.ensure_future(_settle(self._source))
        return self._future.__await__()

    def started(self) -> bool:
        """Whether some consumer has awaited this handle yet."""
        return self._future is not None

    def done(self) -> bool:
        """Whether the payload has settled (with a value or an exception)."""
        return self._future is not None and self._future.done()

    def __repr__(self) -> str:
        state = "settled" if self.done() else "running" if self.started() else "pending"
        return f"Deferred({state})"


def defer(value: Awaitable[T]) -> Deferred[T]:
    """Wrap an awaitable in a Deferred; an existing Deferred is returned unchanged."""
    return value if isinstance(value, Deferred) else Deferred(value)


async def then(payload: Awaitable[T], fn: Callable[[T], Any]) -> Any:
    """Await payload, apply fn, and keep awaiting while the outcome is awaitable.

    Mirrors promise flattening: a Deferred payload already settles nested
    awaitables, and a handler that returns a coroutine is awaited too.
    """
    result = fn(await payload)
    while is_pending(result):
        result = await result
    return result


async def _settle(source: Awaitable[Any]) -> Any:
    # Nested awaitables resolve here so the shared future holds the final value
    value = await source
    while is_pending(value):
        value = await value
    return value
