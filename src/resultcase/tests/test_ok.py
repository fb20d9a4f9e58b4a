"""Tests for the Ok variant and the ok() constructor.

Validates:
- Variant checks and payload access
- match/pair/unwrap on resolved and awaitable values
- Tagging overlay
"""

from __future__ import annotations

import asyncio

import pytest

from resultcase import DEFAULT_TAG_OK, Deferred, Ok, Result, ok


def _never(_: object) -> object:
    raise AssertionError("handler must not be called")


# ═════════════════════════════════════════════════════════════════════════════
# Construction & Inspection
# ═════════════════════════════════════════════════════════════════════════════


def test_ok_construction() -> None:
    """Test Ok variant construction and accessors."""
    result = ok(1)

    assert isinstance(result, Ok)
    assert isinstance(result, Result)
    assert result.is_ok()
    assert not result.is_err()
    assert result.value == 1
    assert result.unwrap() == 1
    assert result.tag == DEFAULT_TAG_OK == "Ok"
    assert not result.pending


@pytest.mark.parametrize("value", [0, "", None, [], {"a": 1}, ValueError("not an error here")])
def test_ok_wraps_any_value(value: object) -> None:
    """Falsy values and even exceptions stay Ok when constructed with ok()."""
    result = ok(value)

    assert result.is_ok()
    assert result.unwrap() is value
    assert result.pair() == (value, None)


def test_ok_tagged() -> None:
    """Test custom tag replaces the default and nothing else."""
    plain = ok(1)
    tagged = ok(1, "number")

    assert tagged.tag == "number"
    assert tagged.is_ok()
    assert tagged.match(lambda v: v) == plain.match(lambda v: v) == 1
    assert tagged.pair() == plain.pair()
    assert tagged.unwrap() == plain.unwrap()
    assert tagged != plain


def test_ok_tag_must_be_str() -> None:
    """Non-string tags are construction misuse."""
    with pytest.raises(TypeError, match="tag must be a str"):
        ok(1, 42)  # type: ignore[arg-type]


# ═════════════════════════════════════════════════════════════════════════════
# match / pair
# ═════════════════════════════════════════════════════════════════════════════


def test_match_calls_only_ok_handler() -> None:
    """Test match invokes on_ok and never on_err."""
    assert ok(5).match(lambda v: v * 2, _never) == 10


def test_match_err_handler_optional() -> None:
    """Ok.match accepts a single handler."""
    assert ok("success").match(str.upper) == "SUCCESS"


def test_match_resolved_returns_plain_value() -> None:
    """No coroutine is introduced for resolved payloads."""
    out = ok(1).match(lambda v: v + 1)

    assert out == 2
    assert not asyncio.iscoroutine(out)


def test_pair() -> None:
    """Test conversion to (value, None)."""
    value, error = ok(1).pair()

    assert value == 1
    assert error is None


# ═════════════════════════════════════════════════════════════════════════════
# Awaitable Payloads
# ═════════════════════════════════════════════════════════════════════════════


async def _resolve(value: object) -> object:
    await asyncio.sleep(0)
    return value


@pytest.mark.asyncio
async def test_match_awaits_pending_value() -> None:
    """match on a pending payload returns a coroutine resolving to the handler output."""
    result = ok(_resolve(1))

    assert result.pending
    assert result.is_ok()
    matched = result.match(lambda v: v, _never)
    assert asyncio.iscoroutine(matched)
    assert await matched == 1


@pytest.mark.asyncio
async def test_match_repeatedly_on_pending_value() -> None:
    """Every match attaches independently and sees the same settled value."""
    result = ok(_resolve(1))

    assert await result.match(lambda v: v) == 1
    assert await result.match(lambda v: v + 1) == 2
    first, second = await asyncio.gather(result.match(lambda v: v), result.pair())
    assert first == 1
    assert second == (1, None)


@pytest.mark.asyncio
async def test_match_flattens_async_handler() -> None:
    """An async handler's coroutine is awaited as part of the pending match."""
    async def double(v: int) -> int:
        return v * 2

    assert await ok(_resolve(5)).match(double) == 10


@pytest.mark.asyncio
async def test_match_chains_pending_results() -> None:
    """A handler may return another pending Ok, matched afterwards."""
    chained = ok(_resolve(1))
    next_result = await chained.match(lambda v: ok(_resolve(v + 1)))

    assert isinstance(next_result, Ok)
    assert await next_result.match(lambda v: v) == 2


@pytest.mark.asyncio
async def test_pair_with_pending_value() -> None:
    """pair on a pending payload resolves to (value, None)."""
    result = ok(_resolve(1))

    assert await result.pair() == (1, None)
    value, error = await result.pair()
    assert error is None
    assert value == 1


@pytest.mark.asyncio
async def test_unwrap_returns_unresolved_handle() -> None:
    """unwrap never resolves; the caller awaits the returned handle."""
    result = ok(_resolve(1))
    handle = result.unwrap()

    assert isinstance(handle, Deferred)
    assert handle is result.value
    assert await handle == 1
    assert await result.unwrap() == 1


@pytest.mark.asyncio
async def test_pending_failure_surfaces_on_await() -> None:
    """A pending value that fails raises when the match coroutine is awaited."""
    async def boom() -> int:
        raise ConnectionError("refused")

    result = ok(boom())

    assert result.is_ok()
    with pytest.raises(ConnectionError, match="refused"):
        await result.match(lambda v: v)


@pytest.mark.asyncio
async def test_future_payload() -> None:
    """asyncio futures count as pending payloads."""
    future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
    result = ok(future)
    future.set_result("done")

    assert result.pending
    assert await result.match(str.upper) == "DONE"
