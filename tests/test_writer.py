"""Tests for scopelog.writer."""

from __future__ import annotations

import json

import pytest

from scopelog.writer import JsonWriter


def _sample(writer: JsonWriter) -> bytes:
    writer.start_object()
    writer.write_string("s", "a\"b\n")
    writer.write_number("n", "12")
    writer.start_object("o")
    writer.write_bool("t", True)
    writer.write_null("z")
    writer.end_object()
    writer.start_array("a")
    writer.write_string(None, "x")
    writer.start_object()
    writer.end_object()
    writer.end_array()
    writer.end_object()
    return writer.getvalue()


class TestCompact:
    def test_layout(self) -> None:
        data = _sample(JsonWriter())
        assert data == (
            b'{"s":"a\\"b\\n","n":12,"o":{"t":true,"z":null},"a":["x",{}]}'
        )

    def test_non_ascii_written_as_utf8(self) -> None:
        writer = JsonWriter()
        writer.start_object()
        writer.write_string("k", "café")
        writer.end_object()
        assert writer.getvalue() == '{"k":"café"}'.encode("utf-8")

    def test_lone_surrogate_stays_valid_json(self) -> None:
        writer = JsonWriter()
        writer.start_object()
        writer.write_string("k", "\ud800")
        writer.end_object()
        assert json.loads(writer.getvalue()) == {"k": "\ud800"}


class TestIndented:
    def test_layout(self) -> None:
        data = _sample(JsonWriter(indented=True)).decode("utf-8")
        assert data == (
            "{\n"
            '  "s": "a\\"b\\n",\n'
            '  "n": 12,\n'
            '  "o": {\n'
            '    "t": true,\n'
            '    "z": null\n'
            "  },\n"
            '  "a": [\n'
            '    "x",\n'
            "    {}\n"
            "  ]\n"
            "}"
        )

    def test_empty_object(self) -> None:
        writer = JsonWriter(indented=True)
        writer.start_object()
        writer.end_object()
        assert writer.getvalue() == b"{}"


class TestMisuse:
    def test_incomplete_document(self) -> None:
        writer = JsonWriter()
        writer.start_object()
        with pytest.raises(RuntimeError):
            writer.getvalue()

    def test_unbalanced_close(self) -> None:
        writer = JsonWriter()
        writer.start_object()
        with pytest.raises(RuntimeError):
            writer.end_array()

    def test_member_without_name(self) -> None:
        writer = JsonWriter()
        writer.start_object()
        with pytest.raises(RuntimeError):
            writer.write_string(None, "x")

    def test_array_element_with_name(self) -> None:
        writer = JsonWriter()
        writer.start_array()
        with pytest.raises(RuntimeError):
            writer.write_string("k", "x")

    def test_second_top_level_value(self) -> None:
        writer = JsonWriter()
        writer.start_object()
        writer.end_object()
        with pytest.raises(RuntimeError):
            writer.start_object()
