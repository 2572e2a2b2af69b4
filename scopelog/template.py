"""Named-placeholder message templates.

A template such as ``"user {user} logged in from {ip}"`` binds its
placeholders to positional arguments. The resulting :class:`TemplateState`
renders the finished message through ``str()`` and exposes the bound values
as key/value pairs, followed by the template itself under
``{OriginalFormat}``.
"""

from __future__ import annotations

import string
from dataclasses import dataclass
from functools import lru_cache
from typing import Any, Iterator

from .core import Pair, TemplateError
from .values import invariant_text

ORIGINAL_FORMAT_KEY = "{OriginalFormat}"
NULL_TEXT = "(null)"

_FORMATTER = string.Formatter()


@dataclass(frozen=True)
class _Segment:
    literal: str
    name: str | None
    spec: str


@lru_cache(maxsize=256)
def parse_template(template: str) -> tuple[tuple[_Segment, ...], tuple[str, ...]]:
    """Split ``template`` into segments and the ordered placeholder names."""
    segments: list[_Segment] = []
    names: list[str] = []
    try:
        parsed = list(_FORMATTER.parse(template))
    except ValueError as exc:
        raise TemplateError(f"Malformed template {template!r}: {exc}") from None
    for literal, name, spec, conversion in parsed:
        if name is not None:
            if not name or conversion:
                raise TemplateError(
                    f"Malformed placeholder in template {template!r}; use {{name}} or {{name:spec}}"
                )
            names.append(name)
        segments.append(_Segment(literal, name, spec or ""))
    return tuple(segments), tuple(names)


def _render(value: Any, spec: str) -> str:
    if value is None:
        return NULL_TEXT
    if spec:
        try:
            return format(value, spec)
        except (TypeError, ValueError):
            pass
    return invariant_text(value)


class TemplateState:
    """Message template bound to its arguments."""

    __slots__ = ("template", "args", "_names", "_segments")

    def __init__(self, template: str, *args: Any) -> None:
        segments, names = parse_template(template)
        if len(names) != len(args):
            raise TemplateError(
                f"Template {template!r} expects {len(names)} argument(s), got {len(args)}"
            )
        self.template = template
        self.args = args
        self._names = names
        self._segments = segments

    @property
    def names(self) -> tuple[str, ...]:
        return self._names

    def __log_items__(self) -> Iterator[Pair]:
        yield from zip(self._names, self.args)
        yield ORIGINAL_FORMAT_KEY, self.template

    def __str__(self) -> str:
        parts: list[str] = []
        values = iter(self.args)
        for segment in self._segments:
            parts.append(segment.literal)
            if segment.name is not None:
                parts.append(_render(next(values), segment.spec))
        return "".join(parts)

    def __repr__(self) -> str:
        return f"TemplateState({', '.join(map(repr, (self.template,) + self.args))})"
