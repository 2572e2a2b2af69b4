"""Log event data model shared by the formatter and the stdlib bridge."""

from __future__ import annotations

import enum
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Optional, Tuple

from .values import invariant_text

Pair = Tuple[str, Any]


class ScopelogError(Exception):
    """Base class for errors raised by scopelog."""


class InvalidLogLevelError(ScopelogError, ValueError):
    """Raised when a log level outside the six known values is formatted."""


class TemplateError(ScopelogError, ValueError):
    """Raised when a message template is malformed or misapplied."""


class LogLevel(enum.IntEnum):
    """Severity of a log event, ordered from least to most severe."""

    Trace = 0
    Debug = 1
    Information = 2
    Warning = 3
    Error = 4
    Critical = 5


_LEVEL_NAMES = {
    LogLevel.Trace: "Trace",
    LogLevel.Debug: "Debug",
    LogLevel.Information: "Information",
    LogLevel.Warning: "Warning",
    LogLevel.Error: "Error",
    LogLevel.Critical: "Critical",
}


def level_name(level: Any) -> str:
    """Return the symbolic name of ``level``.

    Plain integers are accepted when they are one of the six level codes.
    Anything else raises :class:`InvalidLogLevelError`.
    """
    if isinstance(level, bool) or not isinstance(level, int):
        raise InvalidLogLevelError(f"Unknown log level: {level!r}")
    try:
        return _LEVEL_NAMES[LogLevel(level)]
    except ValueError:
        raise InvalidLogLevelError(f"Unknown log level: {level!r}") from None


@dataclass(frozen=True)
class EventId:
    """Identifier tagging a specific kind of log event."""

    id: int = 0
    name: Optional[str] = None


@dataclass(frozen=True)
class LogEvent:
    """A single log event handed to the formatter."""

    level: LogLevel
    category: str
    message: str
    event_id: EventId = field(default_factory=EventId)
    exception: Optional[BaseException] = None
    state: Any = None
    timestamp: Optional[datetime] = None


def _is_pair(item: Any) -> bool:
    return isinstance(item, tuple) and len(item) == 2 and isinstance(item[0], str)


def pair_items(value: Any) -> Optional[list[Pair]]:
    """Return ``value`` as a list of ``(key, value)`` pairs, or ``None``.

    Mappings, objects exposing ``__log_items__()`` and any other iterable
    made only of ``(str, value)`` tuples (lists, ``dict.items()`` views,
    generators) are pair-shaped. Strings and bytes never are. One-shot
    iterables are consumed exactly once.
    """
    if value is None or isinstance(value, (str, bytes, bytearray)):
        return None
    log_items = getattr(value, "__log_items__", None)
    if callable(log_items):
        return [(invariant_text(k), v) for k, v in log_items()]
    if isinstance(value, Mapping):
        return [(invariant_text(k), v) for k, v in value.items()]
    if not isinstance(value, Iterable) or isinstance(value, type):
        return None
    items = value if isinstance(value, (list, tuple)) else list(value)
    if all(_is_pair(i) for i in items):
        return list(items)
    return None
