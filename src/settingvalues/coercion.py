"""
Generic primitive coercion, the last resort of the conversion engine.

Parsing is culture-invariant: numbers use Python's literal syntax, booleans a
fixed set of literals, dates ISO 8601.
"""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import Decimal
from fractions import Fraction
from pathlib import PurePath
from typing import Any, Callable, Dict

from .errors import GenericCoercionError

_TRUE_LITERALS = {"1", "true", "yes", "on", "y", "t"}
_FALSE_LITERALS = {"0", "false", "no", "off", "n", "f"}


def as_bool(value: Any) -> bool:
    """Convert config-like values to bool, rejecting unrecognised strings."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _TRUE_LITERALS:
            return True
        if normalized in _FALSE_LITERALS:
            return False
        raise ValueError(f"{value!r} is not a recognised boolean literal")
    raise TypeError(f"Cannot interpret {type(value).__name__} as bool")


def _as_int(value: str) -> int:
    return int(value.strip(), 10)


def _as_bytes(value: str) -> bytes:
    return value.encode("utf-8")


# Exact-type coercers. datetime precedes date since it subclasses it.
_COERCERS: Dict[type, Callable[[str], Any]] = {
    bool: as_bool,
    int: _as_int,
    float: lambda value: float(value.strip()),
    complex: lambda value: complex(value.strip()),
    Decimal: lambda value: Decimal(value.strip()),
    Fraction: lambda value: Fraction(value.strip()),
    bytes: _as_bytes,
    datetime: lambda value: datetime.fromisoformat(value.strip()),
    date: lambda value: date.fromisoformat(value.strip()),
    time: lambda value: time.fromisoformat(value.strip()),
}


def coerce(value: Any, target: Any) -> Any:
    """
    Convert a raw setting value to a primitive target type.

    Args:
        value: Raw value, normally a str; may be None.
        target: Target class.

    Returns:
        The converted value; None stays None for non-primitive targets.

    Raises:
        GenericCoercionError: If the target is not a supported primitive or
            the value cannot be parsed as one.
    """
    if value is None:
        # Only primitives need a value; any other class accepts None
        if target in _COERCERS:
            raise GenericCoercionError(value, target, "None is not a valid primitive value")
        return None

    if not isinstance(target, type):
        raise GenericCoercionError(value, target, "target is not a class")

    if type(value) is target:
        return value

    # Exact lookup, bool is an int subclass but parses differently
    coercer = _COERCERS.get(target)
    if coercer is None:
        if isinstance(value, target):
            return value
        if not issubclass(target, PurePath):
            raise GenericCoercionError(value, target, "no conversion available")
        coercer = target

    try:
        return coercer(value)
    except (ValueError, TypeError, ArithmeticError) as e:
        raise GenericCoercionError(value, target, str(e)) from e
