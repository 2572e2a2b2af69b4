"""INI configuration for scopelog hosts.

Only two sections are understood: ``[formatter]`` maps onto
:class:`~scopelog.options.FormatterOptions` and ``[logging]`` carries the
threshold level of the host. Anything else is reported and ignored.
"""

from __future__ import annotations

import configparser
import dataclasses
import logging
from pathlib import Path
from typing import Any, Callable, Optional

from .options import FormatterOptions

LOGGER = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path.home() / ".scopelog.ini"

Config = dict[str, dict[str, str]]

_TRUE = frozenset({"1", "true", "yes", "on"})
_FALSE = frozenset({"0", "false", "no", "off"})


def _parse_bool(text: str) -> bool:
    word = text.strip().lower()
    if word in _TRUE:
        return True
    if word in _FALSE:
        return False
    raise ValueError(f"Invalid boolean {text!r}")


def _parse_level(text: str) -> int:
    text = text.strip()
    if text.isdigit():
        return int(text)
    level = logging.getLevelName(text.upper())
    if not isinstance(level, int):
        raise ValueError(f"Invalid log level {text!r}")
    return level


# Section -> key -> parser for the raw INI text.
KNOWN_SECTIONS: dict[str, dict[str, Callable[[str], Any]]] = {
    "formatter": {
        "timestamp_format": str,
        "use_utc_timestamp": _parse_bool,
        "include_scopes": _parse_bool,
        "indented": _parse_bool,
    },
    "logging": {"level": _parse_level},
}


def _read_value(section: dict[str, str], key: str, parse: Callable[[str], Any], default: Any) -> Any:
    raw = section.get(key)
    if raw is None:
        return default
    try:
        return parse(raw)
    except ValueError as exc:
        LOGGER.warning("%s for '%s', using default %s", exc, key, default)
        return default


def get_bool(section: dict[str, str], key: str, default: bool) -> bool:
    """Read a ``1/true/yes/on`` or ``0/false/no/off`` flag from ``section``."""
    return _read_value(section, key, _parse_bool, default)


def get_level(section: dict[str, str], key: str, default: int) -> int:
    """Read a stdlib logging level given by name (``INFO``) or number."""
    return _read_value(section, key, _parse_level, default)


def _report_unknown(config: Config) -> None:
    for name, section in config.items():
        known = KNOWN_SECTIONS.get(name)
        if known is None:
            LOGGER.warning("Unknown config section: [%s]", name)
            continue
        for key in section.keys() - known.keys():
            LOGGER.warning(
                "Unknown key '%s' in [%s]; valid keys: %s", key, name, ", ".join(sorted(known))
            )


def load_config(path: Optional[Path] = None) -> Config:
    """Return the sections of the INI file at ``path`` as nested dicts.

    A missing or unparsable file gives ``{}``. Interpolation is off so
    ``strftime`` directives such as ``%H`` can be written as-is.
    """
    path = DEFAULT_CONFIG_PATH if path is None else path
    if not path.exists():
        LOGGER.debug("Config file not found: %s", path)
        return {}

    parser = configparser.ConfigParser(interpolation=None)
    try:
        parser.read_string(path.read_text(encoding="utf-8"), source=str(path))
    except (OSError, configparser.Error) as exc:
        LOGGER.warning("Failed to parse config file %s: %s", path, exc)
        return {}

    config = {name: dict(parser[name]) for name in parser.sections()}
    LOGGER.debug("Loaded config from %s: sections=%s", path, list(config))
    _report_unknown(config)
    return config


def options_from_config(config: Config, base: Optional[FormatterOptions] = None) -> FormatterOptions:
    """Overlay the ``[formatter]`` section on ``base``.

    Absent keys and values that fail to parse keep their value from ``base``.
    """
    base = FormatterOptions() if base is None else base
    section = config.get("formatter", {})
    changes = {
        key: _read_value(section, key, parse, getattr(base, key))
        for key, parse in KNOWN_SECTIONS["formatter"].items()
    }
    return dataclasses.replace(base, **changes)
