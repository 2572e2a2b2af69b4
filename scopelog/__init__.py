"""Structured JSON log formatting with ordered fields and logging scopes."""

from .core import (
    EventId,
    InvalidLogLevelError,
    LogEvent,
    LogLevel,
    ScopelogError,
    TemplateError,
    level_name,
    pair_items,
)
from .formatter import JsonLogFormatter
from .logging_utils import JsonFormatter, configure_logging, define
from .options import SORTABLE_TIMESTAMP_FORMAT, FormatterOptions, OptionsMonitor
from .scopes import ScopeProvider, begin_scope, get_scope_provider
from .template import TemplateState
from .values import Value, ValueKind, to_value

__all__ = [
    "SORTABLE_TIMESTAMP_FORMAT",
    "EventId",
    "FormatterOptions",
    "InvalidLogLevelError",
    "JsonFormatter",
    "JsonLogFormatter",
    "LogEvent",
    "LogLevel",
    "OptionsMonitor",
    "ScopeProvider",
    "ScopelogError",
    "TemplateError",
    "TemplateState",
    "Value",
    "ValueKind",
    "begin_scope",
    "configure_logging",
    "define",
    "get_scope_provider",
    "level_name",
    "pair_items",
    "to_value",
]
