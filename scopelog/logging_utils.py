"""Bridge between the standard :mod:`logging` module and the JSON formatter."""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from datetime import datetime, timezone
from typing import IO, Any, Callable, Optional, Union

from .core import EventId, LogEvent, LogLevel
from .formatter import JsonLogFormatter, safe_pair_items
from .options import FormatterOptions, OptionsMonitor
from .scopes import ScopeProvider, get_scope_provider
from .template import TemplateState, parse_template

TRACE = 5
logging.addLevelName(TRACE, "TRACE")

_STDLIB_LEVELS = {
    LogLevel.Trace: TRACE,
    LogLevel.Debug: logging.DEBUG,
    LogLevel.Information: logging.INFO,
    LogLevel.Warning: logging.WARNING,
    LogLevel.Error: logging.ERROR,
    LogLevel.Critical: logging.CRITICAL,
}

# Attributes every LogRecord carries; anything else came in through ``extra``.
_STANDARD_ATTRS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName", "event_id", "state"}


def to_log_level(levelno: int) -> LogLevel:
    """Map a stdlib ``levelno`` onto :class:`LogLevel`."""
    if levelno >= logging.CRITICAL:
        return LogLevel.Critical
    if levelno >= logging.ERROR:
        return LogLevel.Error
    if levelno >= logging.WARNING:
        return LogLevel.Warning
    if levelno >= logging.INFO:
        return LogLevel.Information
    if levelno >= logging.DEBUG:
        return LogLevel.Debug
    return LogLevel.Trace


def to_stdlib_level(level: LogLevel) -> int:
    return _STDLIB_LEVELS[LogLevel(level)]


def _event_id(raw: Any) -> EventId:
    if raw is None:
        return EventId()
    if isinstance(raw, EventId):
        return raw
    if isinstance(raw, tuple):
        return EventId(*raw)
    return EventId(int(raw))


class JsonFormatter(logging.Formatter):
    """Logging formatter that outputs one JSON object per record.

    ``event_id`` and ``state`` may be passed through ``extra``. Without an
    explicit state, the first of these becomes the state: mapping ``args``,
    a pair-shaped ``msg`` (such as a :class:`TemplateState`), the remaining
    ``extra`` fields.
    """

    def __init__(
        self,
        options: Union[FormatterOptions, OptionsMonitor, None] = None,
        provider: Optional[ScopeProvider] = None,
    ) -> None:
        super().__init__()
        self._formatter = JsonLogFormatter(options)
        self._provider = provider if provider is not None else get_scope_provider()

    @property
    def options(self) -> OptionsMonitor:
        return self._formatter.options

    def _state(self, record: logging.LogRecord) -> Any:
        state = getattr(record, "state", None)
        if state is not None:
            return state
        if isinstance(record.args, Mapping) and record.args:
            return record.args
        if not record.args:
            items = safe_pair_items(record.msg)
            if items is not None:
                return items
        extra = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_ATTRS and not key.startswith("_")
        }
        return extra or None

    def to_event(self, record: logging.LogRecord) -> LogEvent:
        """Build the :class:`LogEvent` for ``record``."""
        exception = None
        if record.exc_info and record.exc_info[1] is not None:
            exception = record.exc_info[1]
        return LogEvent(
            level=to_log_level(record.levelno),
            category=record.name,
            message=record.getMessage(),
            event_id=_event_id(getattr(record, "event_id", None)),
            exception=exception,
            state=self._state(record),
            timestamp=datetime.fromtimestamp(record.created, tz=timezone.utc),
        )

    def format(self, record: logging.LogRecord) -> str:
        return self._formatter.format(self.to_event(record), self._provider)


def configure_logging(
    options: Union[FormatterOptions, OptionsMonitor, None] = None,
    *,
    stream: Optional[IO[str]] = None,
    level: int = logging.INFO,
    provider: Optional[ScopeProvider] = None,
) -> JsonFormatter:
    """Send all records of the root logger through a :class:`JsonFormatter`."""
    root = logging.getLogger()
    root.setLevel(level)

    handler = logging.StreamHandler(stream if stream is not None else sys.stdout)
    formatter = JsonFormatter(options, provider)
    handler.setFormatter(formatter)

    # Remove existing handlers so reconfiguration is idempotent.
    for existing in list(root.handlers):
        root.removeHandler(existing)

    root.addHandler(handler)
    return formatter


def define(
    level: LogLevel, event_id: Union[EventId, int], template: str
) -> Callable[..., None]:
    """Return a function that logs ``template`` with its arguments.

    The template is parsed up front, so a malformed one fails here rather
    than at the first log call.
    """
    stdlib_level = to_stdlib_level(level)
    event = _event_id(event_id)
    parse_template(template)

    def log(logger: logging.Logger, *args: Any, exc_info: Any = None) -> None:
        logger.log(
            stdlib_level,
            TemplateState(template, *args),
            exc_info=exc_info,
            extra={"event_id": event},
        )

    return log
