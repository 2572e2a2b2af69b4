"""Command line interface for the scopelog JSON formatter."""

from __future__ import annotations

import argparse
import dataclasses
import logging
import sys
from pathlib import Path
from typing import IO, Iterable, Optional

from .config import get_level, load_config, options_from_config
from .core import EventId, LogLevel, ScopelogError
from .logging_utils import JsonFormatter, define
from .options import SORTABLE_TIMESTAMP_FORMAT, FormatterOptions
from .scopes import ScopeProvider

LOGGER = logging.getLogger(__name__)

DEMO_CATEGORY = "ConsoleApplication"

DEMO_OPTIONS = FormatterOptions(
    timestamp_format=SORTABLE_TIMESTAMP_FORMAT,
    use_utc_timestamp=True,
    include_scopes=True,
)

_log_defined_message = define(
    LogLevel.Error,
    EventId(11, "eleven"),
    "This message came from LoggerMessage.Define; the formatted value is: {formatted_value}",
)


def run_demo(
    options: FormatterOptions,
    stream: IO[str],
    level: int = logging.INFO,
) -> None:
    """Log the two demo events to ``stream``.

    The first event comes from a defined message template inside a key/value
    scope. The second carries explicit key/value state inside a templated
    scope.
    """
    provider = ScopeProvider("scopelog_demo_scopes")
    handler = logging.StreamHandler(stream)
    handler.setFormatter(JsonFormatter(options, provider))

    logger = logging.getLogger(DEMO_CATEGORY)
    logger.setLevel(level)
    logger.propagate = False
    logger.addHandler(handler)
    try:
        state = [
            ("state-key-1", "state-value-1"),
            ("state-key-2", 2),
        ]
        scope_properties = [
            ("scope-key-1", "scope-value-1"),
            ("scope-key-2", 9),
        ]

        with provider.begin_scope(scope_properties):
            _log_defined_message(logger, "my-formatted-value")

        with provider.begin_scope("a - {a}, b - {b}", "a", 19):
            logger.error(
                "This message came from _logger.Log(...); it has no formatted values.",
                extra={"event_id": EventId(12, "twelve"), "state": state},
            )
    finally:
        logger.removeHandler(handler)
        handler.flush()


def _build_options(args: argparse.Namespace, config: dict[str, dict[str, str]]) -> FormatterOptions:
    options = options_from_config(config, base=DEMO_OPTIONS)
    changes: dict[str, object] = {}
    if args.timestamp_format is not None:
        changes["timestamp_format"] = args.timestamp_format
    if args.no_timestamp:
        changes["timestamp_format"] = None
    for name in ("use_utc_timestamp", "include_scopes", "indented"):
        value = getattr(args, name)
        if value is not None:
            changes[name] = value
    return dataclasses.replace(options, **changes)


def _add_switch(
    parser: argparse.ArgumentParser, dest: str, on: str, off: str, on_help: str, off_help: str
) -> None:
    """Add a pair of flags setting ``dest`` to True/False; unset stays None."""
    group = parser.add_mutually_exclusive_group()
    group.add_argument(on, dest=dest, action="store_const", const=True, help=on_help)
    group.add_argument(off, dest=dest, action="store_const", const=False, help=off_help)
    parser.set_defaults(**{dest: None})


def main(argv: Optional[Iterable[str]] = None) -> int:
    """Run the scopelog command line interface."""

    config_help = "INI file with [formatter] and [logging] sections (default: ~/.scopelog.ini)"
    parser = argparse.ArgumentParser(prog="scopelog", description=__doc__)
    parser.add_argument("--config", type=Path, help=config_help)
    subparsers = parser.add_subparsers(dest="command", required=True)

    demo_parser = subparsers.add_parser("demo", help="Write two sample log events as JSON")
    # SUPPRESS keeps the subcommand from overwriting a --config given before it
    demo_parser.add_argument("--config", type=Path, default=argparse.SUPPRESS, help=config_help)
    demo_parser.add_argument(
        "--timestamp-format",
        help=f"strftime pattern for the Timestamp field (default: {SORTABLE_TIMESTAMP_FORMAT})",
    )
    demo_parser.add_argument(
        "--no-timestamp", action="store_true", help="Leave the Timestamp field out"
    )
    _add_switch(
        demo_parser, "use_utc_timestamp", "--utc", "--local",
        "Write timestamps in UTC", "Write timestamps in local time",
    )
    _add_switch(
        demo_parser, "include_scopes", "--scopes", "--no-scopes",
        "Include the Scopes field", "Leave the Scopes field out",
    )
    _add_switch(
        demo_parser, "indented", "--indented", "--compact",
        "Pretty-print each JSON object", "Write each JSON object on one line",
    )

    args = parser.parse_args(argv)
    config = load_config(args.config)
    level = get_level(config.get("logging", {}), "level", logging.INFO)

    try:
        if args.command == "demo":
            options = _build_options(args, config)
            LOGGER.debug("Running demo with %s", options)
            run_demo(options, sys.stdout, level)
        else:  # pragma: no cover - defensive programming
            raise AssertionError(f"Unknown command: {args.command}")
    except (ScopelogError, ValueError) as exc:
        parser.error(str(exc))
        return 2
    return 0
