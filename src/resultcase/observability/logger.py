"""Structured logging with bound context.

Loggers render ``timestamp [level] event key=value ...`` for humans or JSON
lines for machines. Until ``configure_logging`` is called, level and format
come from ``RESULTCASE_LOG_*`` settings; the default level is WARNING, so
the debug events emitted by ``tcf`` and ``result`` stay silent. Settings that
fail validation are ignored in favour of those defaults: a bad environment
must never keep ``tcf`` from converting a fault.

Quick Start:
    >>> from resultcase.observability import configure_logging, get_logger
    >>> configure_logging(format="console", level="DEBUG")
    >>> log = get_logger("checkout")
    >>> log.debug("fault converted", fault="KeyError")
"""

from __future__ import annotations

import logging
import sys
import time
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any, Protocol, TextIO, runtime_checkable

from pydantic import ValidationError

from ..foundation.config import LoggingSettings, get_settings

if TYPE_CHECKING:
    from types import TracebackType

JsonDict = dict[str, Any]

_DEFAULTS = LoggingSettings.model_construct()

# Scoped context from log_context (follows async tasks)
_log_context: ContextVar[JsonDict] = ContextVar("log_context", default={})
_renderer: ContextVar[LogRenderer | None] = ContextVar("log_renderer", default=None)
_configured_level: ContextVar[int | None] = ContextVar("log_level", default=None)


# ─────────────────────────────────────────────────────────────────────────────
# Logger
# ─────────────────────────────────────────────────────────────────────────────


@dataclass(slots=True)
class BoundLogger:
    """Logger carrying a context dict that is merged into every entry.

    ``renderer``/``level`` pin this logger; left as None they follow the
    global configuration at call time.

    Example:
        >>> log = get_logger("resultcase.tcf").bind(tag="PARSE")
        >>> log.debug("fault converted", fault="ValueError")
        # => 10:30:45.120 [debug] fault converted fault="ValueError" logger="resultcase.tcf" tag="PARSE"
    """

    context: JsonDict = field(default_factory=dict)
    renderer: LogRenderer | None = None
    level: int | None = None

    def bind(self, **kw: Any) -> BoundLogger:
        return BoundLogger({**self.context, **kw}, self.renderer, self.level)

    def unbind(self, *keys: str) -> BoundLogger:
        kept = {k: v for k, v in self.context.items() if k not in keys}
        return BoundLogger(kept, self.renderer, self.level)

    def is_enabled_for(self, level: int) -> bool:
        return level >= (_current_level() if self.level is None else self.level)

    def debug(self, event: str, **kw: Any) -> None:
        self._emit(logging.DEBUG, event, kw)

    def info(self, event: str, **kw: Any) -> None:
        self._emit(logging.INFO, event, kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._emit(logging.WARNING, event, kw)

    def _emit(self, level: int, event: str, kw: JsonDict) -> None:
        if self.is_enabled_for(level):
            entry = LogEntry(time.time(), logging.getLevelName(level).lower(), event,
                             {**_log_context.get(), **self.context, **kw})
            (self.renderer or _get_renderer()).render(entry)


@dataclass(slots=True)
class LogEntry:
    """One log record, handed to a renderer."""

    timestamp: float
    level: str
    event: str
    context: JsonDict

    @property
    def when(self) -> datetime:
        return datetime.fromtimestamp(self.timestamp, tz=UTC)


# ─────────────────────────────────────────────────────────────────────────────
# Renderers
# ─────────────────────────────────────────────────────────────────────────────


@runtime_checkable
class LogRenderer(Protocol):
    """Anything that can write a LogEntry somewhere."""

    def render(self, entry: LogEntry) -> None: ...


@dataclass(slots=True)
class ConsoleRenderer:
    """``HH:MM:SS.mmm [level] event key=value ...`` lines, keys sorted."""

    output: TextIO = field(default_factory=lambda: sys.stderr)
    colors: bool | None = None  # None = colors when output is a tty

    def __post_init__(self) -> None:
        if self.colors is None:
            isatty = getattr(self.output, "isatty", None)
            self.colors = bool(isatty and isatty())

    def render(self, entry: LogEntry) -> None:
        paint = _paint if self.colors else _plain
        head = [paint("dim", entry.when.strftime("%H:%M:%S.%f")[:-3]),
                paint(_LEVEL_STYLE.get(entry.level, "dim"), f"[{entry.level}]"),
                paint("bold", entry.event)]
        fields = [f"{paint('cyan', k)}={_format_value(v, paint)}" for k, v in sorted(entry.context.items())]
        print(" ".join(head + fields), file=self.output)


@dataclass(slots=True)
class JsonRenderer:
    """One JSON object per line (JSON Lines)."""

    output: TextIO = field(default_factory=lambda: sys.stdout)

    def render(self, entry: LogEntry) -> None:
        import orjson
        record = {"timestamp": entry.when.isoformat(), "level": entry.level, "event": entry.event, **entry.context}
        print(orjson.dumps(record, option=orjson.OPT_NON_STR_KEYS, default=repr).decode(), file=self.output)


@dataclass(slots=True)
class NoOpRenderer:
    """Discards everything."""

    def render(self, entry: LogEntry) -> None:
        pass


# ─────────────────────────────────────────────────────────────────────────────
# Configuration
# ─────────────────────────────────────────────────────────────────────────────


def configure_logging(
    format: str = "console",  # noqa: A002
    level: str = "INFO",
    *,
    output: TextIO | None = None,
    colors: bool | None = None,
) -> LogRenderer:
    """Set the renderer and level for all loggers without their own. Format: console, json or none."""
    renderer = _build_renderer(format, output=output, colors=colors)
    _configured_level.set(_parse_level(level))
    _renderer.set(renderer)
    return renderer


def reset_logging() -> None:
    """Forget ``configure_logging``; loggers go back to settings-driven defaults."""
    _renderer.set(None)
    _configured_level.set(None)


def get_logger(name: str | None = None, **initial_context: Any) -> BoundLogger:
    """Logger with ``initial_context``; ``name`` is bound as ``logger``."""
    if name:
        initial_context["logger"] = name
    return BoundLogger(context=initial_context)


class log_context:
    """Adds key-value pairs to every entry logged inside the ``with`` block."""

    __slots__ = ("_ctx", "_token")

    def __init__(self, **kw: Any) -> None:
        self._ctx: JsonDict = kw
        self._token: Any = None

    def __enter__(self) -> log_context:
        self._token = _log_context.set({**_log_context.get(), **self._ctx})
        return self

    def __exit__(self, exc_type: type[BaseException] | None, exc_val: BaseException | None,
                 exc_tb: TracebackType | None) -> None:
        _log_context.reset(self._token)


def _logging_settings() -> tuple[str, LoggingSettings]:
    """Effective level name and logging settings, or the defaults when settings do not validate."""
    try:
        settings = get_settings()
    except ValidationError:
        return _DEFAULTS.level, _DEFAULTS
    return settings.effective_log_level, settings.logging


def _current_level() -> int:
    if (level := _configured_level.get()) is not None:
        return level
    return _parse_level(_logging_settings()[0])


def _get_renderer() -> LogRenderer:
    if (renderer := _renderer.get()) is None:
        settings = _logging_settings()[1]
        renderer = _build_renderer(settings.format, colors=settings.colors)
        _renderer.set(renderer)
    return renderer


def _build_renderer(format: str, *, output: TextIO | None = None, colors: bool | None = None) -> LogRenderer:  # noqa: A002
    match format:
        case "console": return ConsoleRenderer(output=output or sys.stderr, colors=colors)
        case "json": return JsonRenderer(output=output or sys.stdout)
        case "none": return NoOpRenderer()
        case _: raise ValueError(f"Unknown format: {format}. Use 'console', 'json', or 'none'")


def _parse_level(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)


# ─────────────────────────────────────────────────────────────────────────────
# Console Formatting
# ─────────────────────────────────────────────────────────────────────────────


_ANSI = {"reset": "\033[0m", "bold": "\033[1m", "dim": "\033[2m", "red": "\033[31m", "green": "\033[32m",
         "yellow": "\033[33m", "blue": "\033[34m", "cyan": "\033[36m"}
_LEVEL_STYLE = {"debug": "dim", "info": "green", "warning": "yellow", "error": "red"}


def _paint(style: str, text: str) -> str:
    return f"{_ANSI[style]}{text}{_ANSI['reset']}"


def _plain(style: str, text: str) -> str:
    return text


def _format_value(v: object, paint: Any) -> str:
    match v:
        case str(): return paint("yellow", f'"{v}"')
        case bool(): return paint("blue", str(v).lower())
        case int() | float(): return paint("blue", str(v))
        case _: return repr(v)
