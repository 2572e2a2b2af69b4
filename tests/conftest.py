"""Shared test fixtures for scopelog tests."""

from __future__ import annotations

import io
import json
from datetime import datetime, timezone
from typing import Any, Callable

import pytest

from scopelog.core import EventId, LogEvent, LogLevel
from scopelog.formatter import JsonLogFormatter
from scopelog.options import FormatterOptions

FIXED_NOW = datetime(2024, 3, 9, 14, 5, 7, tzinfo=timezone.utc)


class FixedClock:
    """Clock that always returns the same instant and records each call."""

    def __init__(self, now: datetime = FIXED_NOW) -> None:
        self.now = now
        self.calls: list[bool] = []

    def __call__(self, use_utc: bool) -> datetime:
        self.calls.append(use_utc)
        return self.now if use_utc else self.now.astimezone()


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def make_formatter(clock: FixedClock) -> Callable[..., JsonLogFormatter]:
    """Return a factory building formatters wired to the fixed clock."""

    def factory(**options: Any) -> JsonLogFormatter:
        return JsonLogFormatter(FormatterOptions(**options), clock=clock)

    return factory


@pytest.fixture
def event() -> LogEvent:
    return LogEvent(
        level=LogLevel.Error,
        category="App",
        message="failed",
        event_id=EventId(12, "twelve"),
    )


def _render(formatter: JsonLogFormatter, event: LogEvent, scopes: Any = None) -> tuple[str, dict]:
    """Write ``event`` through ``formatter`` and return the raw line and parsed object."""
    out = io.StringIO()
    formatter.write(event, scopes, out)
    line = out.getvalue()
    return line, json.loads(line)


@pytest.fixture
def render() -> Callable[..., tuple[str, dict]]:
    return _render
