"""Result: a closed union of Ok (success) and Err (failure).

Both variants expose the same surface:

- ``is_ok()`` / ``is_err()``: variant checks
- ``match(on_ok, on_err)``: call exactly one handler with the payload
- ``pair()``: ``(value, None)`` or ``(None, error)``
- ``unwrap()``: the raw payload, success value or error alike
- ``tag``: string classifier, ``"Ok"``/``"Err"`` unless overridden

Payloads may be awaitable. ``match`` and ``pair`` then return a coroutine
that resolves once the payload does; for resolved payloads they return the
plain outcome, with no coroutine involved.

Examples:
    >>> ok(42).match(lambda v: v + 1, lambda e: 0)
    43
    >>> err("boom", "IO").pair()
    (None, 'boom')
    >>> match ok(42):
    ...     case Ok(v): print(v)
    ...     case Err(e): print(e)
    42

``Result[T, E]`` rejects error types assignable to the success type, since
such a result could not be told apart by its payload:

    >>> Result[int, str]      # fine
    >>> Result[int, bool]     # AmbiguousResultError: bool is an int
    >>> Result[float, int]    # AmbiguousResultError: int is accepted as a float
"""

from __future__ import annotations

import types
import typing
from typing import (
    TYPE_CHECKING,
    Annotated,
    Any,
    Generic,
    Literal,
    Never,
    NoReturn,
    ParamSpec,
    TypeVar,
    TypeVarTuple,
    Union,
    get_args,
    get_origin,
    overload,
)

from ..foundation.constants import DEFAULT_TAG_ERR, DEFAULT_TAG_OK
from ..foundation.errors import AmbiguousResultError
from .pending import defer, is_pending, then

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable, Coroutine

T_co = TypeVar("T_co", covariant=True)  # Success type
E_co = TypeVar("E_co", covariant=True)  # Error type
V = TypeVar("V")
R = TypeVar("R")

_UNIONS = (Union, types.UnionType)
_TYPE_PARAMS = (TypeVar, ParamSpec, TypeVarTuple)
_VARIANTS = ("Ok", "Err")
# Numeric tower: int is accepted where float is, int and float where complex is
_PROMOTIONS: dict[type, tuple[type, ...]] = {float: (int,), complex: (int, float)}


# ═════════════════════════════════════════════════════════════════════════════
# Disjointness Check
# ═════════════════════════════════════════════════════════════════════════════


def _assignable(src: Any, dst: Any) -> bool:
    """Whether every value of ``src`` is provably a value of ``dst``.

    Only answers True when it can prove it. Type parameters, forward
    references and unrecognized forms answer False.
    """
    if isinstance(src, _TYPE_PARAMS) or isinstance(dst, _TYPE_PARAMS):
        return False
    if dst is Any or dst is object:
        return True
    if src is Any or src is Never or src is NoReturn:
        return False
    src, dst = _normalize(src), _normalize(dst)
    if src == dst:
        return True

    src_origin, dst_origin = get_origin(src), get_origin(dst)
    if src_origin in _UNIONS:
        return all(_assignable(member, dst) for member in get_args(src))
    if dst_origin in _UNIONS:
        return any(_assignable(src, member) for member in get_args(dst))
    if src_origin is Literal:
        if dst_origin is Literal:
            return set(get_args(src)) <= set(get_args(dst))
        return isinstance(dst, type) and all(isinstance(v, dst) for v in get_args(src))

    src_cls, dst_cls = src_origin or src, dst_origin or dst
    if not (isinstance(src_cls, type) and isinstance(dst_cls, type)):
        return False
    # list[int] vs list[str]: only bare targets or identical arguments are provable
    if dst_origin is not None and get_args(src) != get_args(dst):
        return False
    if src_origin is None and issubclass(src_cls, _PROMOTIONS.get(dst_cls, ())):
        return True
    try:
        return issubclass(src_cls, dst_cls)
    except TypeError:
        return False


def _normalize(tp: Any) -> Any:
    if tp is None:
        return type(None)
    if get_origin(tp) is Annotated:
        return _normalize(get_args(tp)[0])
    return tp


# ═════════════════════════════════════════════════════════════════════════════
# Result
# ═════════════════════════════════════════════════════════════════════════════


class Result(Generic[T_co, E_co]):
    """Base of the two Result variants. Construct with ``ok()`` / ``err()``.

    The union is closed: only ``Ok`` and ``Err`` subclass it. Instances are
    immutable; equality compares variant, tag and payload.
    """

    __slots__ = ("_payload", "_pending", "tag")

    _default_tag: typing.ClassVar[str]

    def __class_getitem__(cls, params: Any) -> Any:
        if cls is Result and isinstance(params, tuple) and len(params) == 2:
            ok_type, err_type = params
            if _assignable(err_type, ok_type):
                raise AmbiguousResultError(ok_type, err_type)
        return super().__class_getitem__(params)  # type: ignore[misc]

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__module__ != __name__ or cls.__name__ not in _VARIANTS:
            raise TypeError(f"Result is closed to Ok and Err; cannot subclass it as {cls.__qualname__}")

    def __init__(self, payload: Any, tag: str | None = None) -> None:
        if type(self) is Result:
            raise TypeError("Result cannot be instantiated directly; use ok() or err()")
        object.__setattr__(self, "tag", self._default_tag if tag is None else check_tag(tag))
        pending = is_pending(payload)
        object.__setattr__(self, "_payload", defer(payload) if pending else payload)
        object.__setattr__(self, "_pending", pending)

    # ─── Shared Surface ──────────────────────────────────────────────

    def unwrap(self) -> Any:
        """Raw payload without branching. A pending payload comes back as its Deferred, unresolved."""
        return self._payload

    @property
    def pending(self) -> bool:
        """Whether the payload was awaitable at construction."""
        return self._pending

    # ─── Dunder Methods ──────────────────────────────────────────────

    def __setattr__(self, name: str, value: object) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __delattr__(self, name: str) -> None:
        raise AttributeError(f"{type(self).__name__} is immutable")

    def __repr__(self) -> str:
        tag = "" if self.tag == self._default_tag else f", tag={self.tag!r}"
        return f"{type(self).__name__}({self._payload!r}{tag})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Result):
            return NotImplemented
        return type(self) is type(other) and self.tag == other.tag and self._payload == other._payload

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.tag, self._payload))


class Ok(Result[T_co, Never]):
    """Success variant holding ``value``."""

    __slots__ = ()
    __match_args__ = ("value",)

    _default_tag = DEFAULT_TAG_OK

    def __init__(self, value: T_co, tag: str | None = None) -> None:
        super().__init__(value, tag)

    @property
    def value(self) -> T_co:
        """The success payload. A ``Deferred`` instead when it was awaitable; await it to resolve."""
        return self._payload

    def is_ok(self) -> Literal[True]:
        return True

    def is_err(self) -> Literal[False]:
        return False

    @overload
    def match(self: Ok[Awaitable[V]], on_ok: Callable[[V], R],
              on_err: Callable[[Never], object] | None = None) -> Coroutine[Any, Any, R]: ...
    @overload
    def match(self: Ok[V], on_ok: Callable[[V], R], on_err: Callable[[Never], object] | None = None) -> R: ...

    def match(self, on_ok: Callable[[Any], Any], on_err: Callable[[Never], object] | None = None) -> Any:
        """Call ``on_ok`` with the value; ``on_err`` is never called and may be omitted.

        Example:
            >>> ok(5).match(lambda v: v * 2)
            10
            >>> # await ok(fetch()).match(lambda v: v * 2)
        """
        if self._pending:
            return then(self._payload, on_ok)
        return on_ok(self._payload)

    @overload
    def pair(self: Ok[Awaitable[V]]) -> Coroutine[Any, Any, tuple[V, None]]: ...
    @overload
    def pair(self: Ok[V]) -> tuple[V, None]: ...

    def pair(self) -> Any:
        """``(value, None)``, or a coroutine resolving to it when the value is pending."""
        if self._pending:
            return then(self._payload, _ok_pair)
        return (self._payload, None)

    def unwrap(self) -> T_co:
        """The success value, as-is.

        Returns:
            The value, or its ``Deferred`` handle, unresolved, when the value
            was awaitable at construction (see ``pending``)
        """
        return self._payload


class Err(Result[Never, E_co]):
    """Failure variant holding ``error``."""

    __slots__ = ()
    __match_args__ = ("error",)

    _default_tag = DEFAULT_TAG_ERR

    def __init__(self, error: E_co, tag: str | None = None) -> None:
        super().__init__(error, tag)

    @property
    def error(self) -> E_co:
        """The failure payload. A ``Deferred`` instead when it was awaitable; await it to resolve."""
        return self._payload

    def is_ok(self) -> Literal[False]:
        return False

    def is_err(self) -> Literal[True]:
        return True

    @overload
    def match(self: Err[Awaitable[V]], on_ok: Callable[[Never], object],
              on_err: Callable[[V], R]) -> Coroutine[Any, Any, R]: ...
    @overload
    def match(self: Err[V], on_ok: Callable[[Never], object], on_err: Callable[[V], R]) -> R: ...

    def match(self, on_ok: Callable[[Never], object], on_err: Callable[[Any], Any]) -> Any:
        """Call ``on_err`` with the error; ``on_ok`` is never called."""
        if self._pending:
            return then(self._payload, on_err)
        return on_err(self._payload)

    @overload
    def pair(self: Err[Awaitable[V]]) -> Coroutine[Any, Any, tuple[None, V]]: ...
    @overload
    def pair(self: Err[V]) -> tuple[None, V]: ...

    def pair(self) -> Any:
        """``(None, error)``, or a coroutine resolving to it when the error is pending."""
        if self._pending:
            return then(self._payload, _err_pair)
        return (None, self._payload)

    def unwrap(self) -> E_co:
        """The error value, as-is.

        Returns:
            The error, or its ``Deferred`` handle, unresolved, when the error
            was awaitable at construction (see ``pending``)
        """
        return self._payload


def _ok_pair(value: V) -> tuple[V, None]:
    return (value, None)


def _err_pair(error: V) -> tuple[None, V]:
    return (None, error)


def check_tag(tag: object) -> str:
    """Return tag unchanged if it is a str, else raise TypeError."""
    if not isinstance(tag, str):
        raise TypeError(f"tag must be a str, got {type(tag).__name__}")
    return tag


__all__ = ["Err", "Ok", "Result", "check_tag"]
