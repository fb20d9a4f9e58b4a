"""Tests for Deferred and awaitable detection."""

from __future__ import annotations

import asyncio

import pytest

from resultcase import Deferred, is_pending, ok
from resultcase.core.pending import defer


async def _counted(counter: dict[str, int], value: object) -> object:
    counter["runs"] += 1
    await asyncio.sleep(0)
    return value


def test_is_pending() -> None:
    async def coro_fn() -> None: ...

    coro = coro_fn()
    try:
        assert is_pending(coro)
        assert not is_pending(coro_fn)
        assert not is_pending(1)
        assert not is_pending(None)
    finally:
        coro.close()


@pytest.mark.asyncio
async def test_deferred_runs_source_once() -> None:
    """Repeated and concurrent awaits share one run of the source."""
    counter = {"runs": 0}
    deferred = Deferred(_counted(counter, "v"))

    assert not deferred.started()
    assert await asyncio.gather(deferred, deferred, deferred) == ["v", "v", "v"]
    assert await deferred == "v"
    assert counter["runs"] == 1
    assert deferred.done()


@pytest.mark.asyncio
async def test_deferred_shares_failure() -> None:
    async def boom() -> None:
        raise ValueError("once")

    deferred = Deferred(boom())

    for _ in range(2):
        with pytest.raises(ValueError, match="once"):
            await deferred


@pytest.mark.asyncio
async def test_deferred_repr_tracks_state() -> None:
    deferred = Deferred(_counted({"runs": 0}, 1))

    assert repr(deferred) == "Deferred(pending)"
    await deferred
    assert repr(deferred) == "Deferred(settled)"


@pytest.mark.asyncio
async def test_defer_reuses_existing_handle() -> None:
    """Re-wrapping a result's payload keeps a single shared handle."""
    first = ok(_counted({"runs": 0}, 3))
    second = ok(first.unwrap(), "COPY")

    assert defer(first.value) is first.value
    assert second.value is first.value
    assert await second.match(lambda v: v) == await first.match(lambda v: v) == 3


@pytest.mark.asyncio
async def test_result_over_pending_does_not_start_it() -> None:
    """Construction never resolves the payload."""
    counter = {"runs": 0}
    result = ok(_counted(counter, 1))
    await asyncio.sleep(0)

    assert counter["runs"] == 0
    assert not result.unwrap().started()
    assert await result.match(lambda v: v) == 1
    assert counter["runs"] == 1


@pytest.mark.asyncio
async def test_nested_awaitable_settles_once() -> None:
    """A payload resolving to another coroutine is settled once, for every consumer."""
    counter = {"runs": 0}

    async def outer() -> object:
        return _counted(counter, 5)

    result = ok(outer())

    assert await result.match(lambda v: v) == 5
    assert await result.match(lambda v: v) == 5
    assert await result.pair() == (5, None)
    assert await result.unwrap() == 5
    assert counter["runs"] == 1
