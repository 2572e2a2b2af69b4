"""Tests for scopelog.cli."""

from __future__ import annotations

import io
import json
import logging
from pathlib import Path

import pytest

from scopelog.cli import DEMO_OPTIONS, main, run_demo
from scopelog.options import FormatterOptions


@pytest.fixture
def no_user_config(monkeypatch, tmp_path: Path) -> None:
    monkeypatch.setattr("scopelog.config.DEFAULT_CONFIG_PATH", tmp_path / "missing.ini")


def _lines(text: str) -> list[dict]:
    return [json.loads(line) for line in text.splitlines()]


class TestRunDemo:
    def test_two_events(self) -> None:
        stream = io.StringIO()
        run_demo(DEMO_OPTIONS, stream)
        first, second = _lines(stream.getvalue())

        assert first["EventId"] == 11
        assert first["EventName"] == "eleven"
        assert first["LogLevel"] == "Error"
        assert first["Category"] == "ConsoleApplication"
        assert first["Message"] == (
            "This message came from LoggerMessage.Define; "
            "the formatted value is: my-formatted-value"
        )
        assert first["State"]["formatted_value"] == "my-formatted-value"
        assert first["Scopes"] == [{"scope-key-1": "scope-value-1", "scope-key-2": 9}]

        assert second["EventId"] == 12
        assert second["EventName"] == "twelve"
        assert second["State"] == {"state-key-1": "state-value-1", "state-key-2": 2}
        assert second["Scopes"] == [
            {"a": "a", "b": 19, "{OriginalFormat}": "a - {a}, b - {b}"}
        ]
        assert "Timestamp" in first and "Timestamp" in second

    def test_handler_detached_afterwards(self) -> None:
        run_demo(FormatterOptions(), io.StringIO())
        assert logging.getLogger("ConsoleApplication").handlers == []


class TestCLI:
    def test_demo_command(self, no_user_config, capsys) -> None:
        result = main(["demo"])
        assert result == 0
        lines = _lines(capsys.readouterr().out)
        assert len(lines) == 2
        assert list(lines[0])[0] == "Timestamp"

    def test_demo_flags(self, no_user_config, capsys) -> None:
        result = main(["demo", "--no-timestamp", "--no-scopes", "--indented"])
        assert result == 0
        out = capsys.readouterr().out
        assert out.startswith('{\n  "EventId": 11,')
        assert "Scopes" not in out
        assert "Timestamp" not in out

    def test_custom_timestamp_format(self, no_user_config, capsys) -> None:
        main(["demo", "--timestamp-format", "fixed"])
        lines = _lines(capsys.readouterr().out)
        assert lines[0]["Timestamp"] == "fixed"

    def test_config_file(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "scopelog.ini"
        cfg.write_text("[formatter]\ninclude_scopes = no\ntimestamp_format =\n", encoding="utf-8")
        result = main(["--config", str(cfg), "demo"])
        assert result == 0
        lines = _lines(capsys.readouterr().out)
        assert all("Scopes" not in line and "Timestamp" not in line for line in lines)

    def test_config_level_filters_events(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "scopelog.ini"
        cfg.write_text("[logging]\nlevel = CRITICAL\n", encoding="utf-8")
        result = main(["--config", str(cfg), "demo"])
        assert result == 0
        assert capsys.readouterr().out == ""

    def test_missing_command_exits(self) -> None:
        with pytest.raises(SystemExit):
            main([])

    def test_flags_override_config(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "scopelog.ini"
        cfg.write_text(
            "[formatter]\nindented = yes\ninclude_scopes = no\nuse_utc_timestamp = no\n",
            encoding="utf-8",
        )
        result = main(
            ["demo", "--config", str(cfg), "--compact", "--scopes", "--utc",
             "--timestamp-format", "%Y"]
        )
        assert result == 0
        out = capsys.readouterr().out
        lines = _lines(out)
        assert len(out.splitlines()) == 2
        assert all("Scopes" in line for line in lines)

    def test_config_before_subcommand_kept(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "scopelog.ini"
        cfg.write_text("[formatter]\nindented = yes\n", encoding="utf-8")
        main(["--config", str(cfg), "demo", "--compact"])
        assert len(capsys.readouterr().out.splitlines()) == 2

    def test_config_indented_applies_without_flag(self, tmp_path: Path, capsys) -> None:
        cfg = tmp_path / "scopelog.ini"
        cfg.write_text("[formatter]\nindented = yes\n", encoding="utf-8")
        main(["--config", str(cfg), "demo"])
        assert capsys.readouterr().out.startswith("{\n  ")

    def test_conflicting_switches_rejected(self, no_user_config) -> None:
        with pytest.raises(SystemExit):
            main(["demo", "--indented", "--compact"])
