"""Incremental JSON writer backed by a private byte buffer."""

from __future__ import annotations

import json
from typing import Optional

INDENT = "  "


def _quote(text: str) -> str:
    return json.dumps(text, ensure_ascii=False)


class JsonWriter:
    """Write one JSON document piece by piece.

    Containers are opened and closed explicitly, mirroring the structure of
    the document being produced. Output is compact unless ``indented`` is
    set, in which case every member goes on its own line with two spaces per
    nesting level.
    """

    def __init__(self, *, indented: bool = False) -> None:
        self._indented = indented
        self._buffer = bytearray()
        # One entry per open container: [closing char, members written]
        self._stack: list[list] = []
        self._done = False

    def getvalue(self) -> bytes:
        """Return the finished document."""
        if self._stack or not self._done:
            raise RuntimeError("JSON document is incomplete")
        return bytes(self._buffer)

    def _emit(self, text: str) -> None:
        # Lone surrogates only occur inside quoted strings, where \uXXXX is valid.
        self._buffer += text.encode("utf-8", errors="backslashreplace")

    def _begin_member(self, name: Optional[str]) -> None:
        if self._done:
            raise RuntimeError("JSON document already complete")
        if not self._stack:
            if name is not None:
                raise RuntimeError("Top-level value cannot have a name")
            return
        frame = self._stack[-1]
        if frame[0] == "}" and name is None:
            raise RuntimeError("Object members need a name")
        if frame[0] == "]" and name is not None:
            raise RuntimeError("Array elements cannot have a name")
        if frame[1]:
            self._emit(",")
        if self._indented:
            self._emit("\n" + INDENT * len(self._stack))
        frame[1] += 1
        if name is not None:
            self._emit(_quote(name) + (": " if self._indented else ":"))

    def _scalar(self, name: Optional[str], text: str) -> None:
        self._begin_member(name)
        self._emit(text)
        if not self._stack:
            self._done = True

    def _open(self, name: Optional[str], opening: str, closing: str) -> None:
        self._begin_member(name)
        self._emit(opening)
        self._stack.append([closing, 0])

    def _close(self, closing: str) -> None:
        if not self._stack or self._stack[-1][0] != closing:
            raise RuntimeError(f"Unbalanced {closing!r}")
        _, members = self._stack.pop()
        if members and self._indented:
            self._emit("\n" + INDENT * len(self._stack))
        self._emit(closing)
        if not self._stack:
            self._done = True

    def start_object(self, name: Optional[str] = None) -> None:
        self._open(name, "{", "}")

    def end_object(self) -> None:
        self._close("}")

    def start_array(self, name: Optional[str] = None) -> None:
        self._open(name, "[", "]")

    def end_array(self) -> None:
        self._close("]")

    def write_string(self, name: Optional[str], value: str) -> None:
        self._scalar(name, _quote(value))

    def write_number(self, name: Optional[str], text: str) -> None:
        """Write ``text`` verbatim as a JSON number."""
        self._scalar(name, text)

    def write_bool(self, name: Optional[str], value: bool) -> None:
        self._scalar(name, "true" if value else "false")

    def write_null(self, name: Optional[str]) -> None:
        self._scalar(name, "null")
