"""JSON formatter turning one :class:`LogEvent` into one line of JSON."""

from __future__ import annotations

import traceback
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Optional, TextIO, Union

from .core import LogEvent, level_name, pair_items
from .options import FormatterOptions, OptionsMonitor
from .values import ValueKind, invariant_text, number_text, to_value
from .writer import JsonWriter

TIMESTAMP = "Timestamp"
EVENT_ID = "EventId"
EVENT_NAME = "EventName"
LOG_LEVEL = "LogLevel"
CATEGORY = "Category"
MESSAGE = "Message"
EXCEPTION = "Exception"
STATE = "State"
SCOPES = "Scopes"

Clock = Callable[[bool], datetime]


def system_clock(use_utc: bool) -> datetime:
    """Return the current time as an aware datetime, UTC or local."""
    now = datetime.now(timezone.utc)
    return now if use_utc else now.astimezone()


def format_exception(exc: BaseException) -> str:
    """Return the full traceback text of ``exc`` without a trailing newline."""
    lines = traceback.format_exception(type(exc), exc, exc.__traceback__)
    return "".join(lines).rstrip("\r\n")


def flatten_newlines(text: str) -> str:
    return text.replace("\r\n", " ").replace("\n", " ").replace("\r", " ")


def safe_pair_items(value: Any) -> Optional[list[tuple[str, Any]]]:
    """Like :func:`pair_items`, but a failing enumeration counts as not pair-shaped."""
    try:
        return pair_items(value)
    except Exception:
        return None


def write_items(writer: JsonWriter, items: Iterable[tuple[str, Any]]) -> None:
    """Write each ``(key, value)`` pair as a member of the open object."""
    for key, raw in items:
        value = to_value(raw)
        kind = value.kind
        if kind is ValueKind.BOOL:
            writer.write_bool(key, bool(value.payload))
        elif kind in (ValueKind.INT, ValueKind.UINT, ValueKind.FLOAT, ValueKind.DECIMAL):
            writer.write_number(key, number_text(value))
        elif kind in (ValueKind.CHAR, ValueKind.STRING, ValueKind.OPAQUE):
            writer.write_string(key, str(value.payload))
        elif kind is ValueKind.NULL:
            writer.write_null(key)
        else:  # pragma: no cover - ValueKind is closed
            raise AssertionError(f"Unhandled value kind: {kind}")


class JsonLogFormatter:
    """Render log events as single-line (or indented) JSON objects.

    Fields are always emitted in the same order: ``Timestamp``, ``EventId``,
    ``EventName``, ``LogLevel``, ``Category``, ``Message``, ``Exception``,
    ``State`` and ``Scopes``. Optional fields are left out entirely when they
    do not apply.

    The formatter keeps no per-call state, so one instance can be shared by
    any number of threads. Options are read from ``options`` once per call.
    """

    def __init__(
        self,
        options: Union[FormatterOptions, OptionsMonitor, None] = None,
        *,
        clock: Clock = system_clock,
    ) -> None:
        if isinstance(options, OptionsMonitor):
            self._monitor = options
        else:
            self._monitor = OptionsMonitor(options)
        self._clock = clock

    @property
    def options(self) -> OptionsMonitor:
        return self._monitor

    def _timestamp(self, event: LogEvent, options: FormatterOptions) -> str:
        stamp = event.timestamp
        if stamp is None:
            stamp = self._clock(options.use_utc_timestamp)
        if stamp.tzinfo is None and options.use_utc_timestamp:
            stamp = stamp.replace(tzinfo=timezone.utc)
        # astimezone(None) converts to local time; naive stamps are read as local
        stamp = stamp.astimezone(timezone.utc if options.use_utc_timestamp else None)
        return stamp.strftime(options.timestamp_format or "")

    def format_bytes(self, event: LogEvent, scopes: Optional[Iterable[Any]] = None) -> bytes:
        """Return ``event`` as a UTF-8 encoded JSON object (no line terminator)."""
        options = self._monitor.current
        level = level_name(event.level)
        writer = JsonWriter(indented=options.indented)

        writer.start_object()
        if options.include_timestamp:
            writer.write_string(TIMESTAMP, self._timestamp(event, options))
        writer.write_number(EVENT_ID, str(int(event.event_id.id)))
        name = event.event_id.name
        if name and name.strip():
            writer.write_string(EVENT_NAME, name)
        writer.write_string(LOG_LEVEL, level)
        writer.write_string(CATEGORY, event.category or "")
        writer.write_string(MESSAGE, event.message or "")

        if event.exception is not None:
            text = format_exception(event.exception)
            if not options.indented:
                text = flatten_newlines(text)
            writer.write_string(EXCEPTION, text)

        if event.state is not None:
            writer.start_object(STATE)
            items = safe_pair_items(event.state)
            if items is not None:
                write_items(writer, items)
            else:
                writer.write_string(MESSAGE, invariant_text(event.state))
            writer.end_object()

        if options.include_scopes and scopes is not None:
            writer.start_array(SCOPES)
            for scope in scopes:
                scope_items = safe_pair_items(scope)
                if scope_items is not None:
                    writer.start_object()
                    write_items(writer, scope_items)
                    writer.end_object()
                else:
                    writer.write_string(None, invariant_text(scope))
            writer.end_array()

        writer.end_object()
        return writer.getvalue()

    def format(self, event: LogEvent, scopes: Optional[Iterable[Any]] = None) -> str:
        """Return ``event`` as JSON text (no line terminator)."""
        return self.format_bytes(event, scopes).decode("utf-8")

    def write(
        self,
        event: LogEvent,
        scopes: Optional[Iterable[Any]],
        output: TextIO,
    ) -> None:
        """Write ``event`` to ``output`` as exactly one line of JSON.

        The whole object is built before anything reaches ``output``; errors
        from ``output.write`` propagate unchanged.
        """
        line = self.format(event, scopes)
        output.write(line + "\n")
