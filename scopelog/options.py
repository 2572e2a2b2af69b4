"""Formatter options and the reloadable options cell."""

from __future__ import annotations

import dataclasses
import threading
from dataclasses import dataclass
from typing import Any, Optional

SORTABLE_TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"


@dataclass(frozen=True)
class FormatterOptions:
    """Immutable snapshot of the settings consumed by the JSON formatter."""

    timestamp_format: Optional[str] = None
    use_utc_timestamp: bool = False
    include_scopes: bool = False
    indented: bool = False

    @property
    def include_timestamp(self) -> bool:
        return bool(self.timestamp_format and self.timestamp_format.strip())


class OptionsMonitor:
    """Holds the current :class:`FormatterOptions` and swaps it atomically.

    Readers take :attr:`current` once and keep using that snapshot; writers
    replace the whole snapshot, so a reader never sees a mix of old and new
    fields.
    """

    def __init__(self, options: Optional[FormatterOptions] = None) -> None:
        self._current = options if options is not None else FormatterOptions()
        self._version = 0
        self._lock = threading.Lock()

    @property
    def current(self) -> FormatterOptions:
        return self._current

    @property
    def version(self) -> int:
        return self._version

    def set(self, options: FormatterOptions) -> FormatterOptions:
        """Replace the snapshot with ``options``."""
        with self._lock:
            self._current = options
            self._version += 1
        return options

    def update(self, **changes: Any) -> FormatterOptions:
        """Replace the snapshot with a copy of it carrying ``changes``."""
        with self._lock:
            options = dataclasses.replace(self._current, **changes)
            self._current = options
            self._version += 1
        return options
