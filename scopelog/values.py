"""Tagged value type used for state and scope entries.

Arbitrary runtime objects are converted once, at the boundary, by
:func:`to_value`. The formatter then only ever sees one of the closed set of
:class:`ValueKind` members.
"""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1
UINT64_MAX = 2**64 - 1


class ValueKind(enum.Enum):
    BOOL = "bool"
    INT = "int"
    UINT = "uint"
    FLOAT = "float"
    DECIMAL = "decimal"
    CHAR = "char"
    STRING = "string"
    NULL = "null"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Value:
    """A state or scope value tagged with its :class:`ValueKind`.

    ``payload`` holds the Python value for scalar kinds and the already
    converted text for :attr:`ValueKind.OPAQUE`.
    """

    kind: ValueKind
    payload: Union[bool, int, float, Decimal, str, None]


NULL = Value(ValueKind.NULL, None)


def invariant_text(value: Any) -> str:
    """Return a locale-independent text for ``value``; never raises."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, enum.Enum):
        return value.name
    if isinstance(value, float):
        return _float_text(value)
    try:
        return str(value)
    except Exception:
        pass
    try:
        return repr(value)
    except Exception:
        return ""


def _float_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    return repr(value)


def to_value(value: Any) -> Value:
    """Classify ``value`` into a :class:`Value`."""
    if value is None:
        return NULL
    if isinstance(value, Value):
        return value
    if isinstance(value, bool):
        return Value(ValueKind.BOOL, value)
    if isinstance(value, enum.Enum):
        return Value(ValueKind.OPAQUE, value.name)
    if isinstance(value, int):
        number = int(value)
        if INT64_MIN <= number <= INT64_MAX:
            return Value(ValueKind.INT, number)
        if 0 <= number <= UINT64_MAX:
            return Value(ValueKind.UINT, number)
        return Value(ValueKind.OPAQUE, str(number))
    if isinstance(value, float):
        number = float(value)
        if math.isfinite(number):
            return Value(ValueKind.FLOAT, number)
        return Value(ValueKind.OPAQUE, _float_text(number))
    if isinstance(value, Decimal):
        if value.is_finite():
            return Value(ValueKind.DECIMAL, value)
        if value.is_nan():
            return Value(ValueKind.OPAQUE, "NaN")
        return Value(ValueKind.OPAQUE, "-Infinity" if value.is_signed() else "Infinity")
    if isinstance(value, str):
        if len(value) == 1:
            return Value(ValueKind.CHAR, str(value))
        return Value(ValueKind.STRING, str(value))
    return Value(ValueKind.OPAQUE, invariant_text(value))


def number_text(value: Value) -> str:
    """Return the JSON number text of a numeric :class:`Value`."""
    if value.kind in (ValueKind.INT, ValueKind.UINT):
        return str(value.payload)
    if value.kind is ValueKind.FLOAT:
        return repr(value.payload)
    if value.kind is ValueKind.DECIMAL:
        return str(value.payload)
    raise ValueError(f"{value.kind.value} is not a numeric kind")
