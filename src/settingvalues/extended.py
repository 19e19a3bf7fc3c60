"""
Extended (non-primitive) conversions consulted before generic coercion.

Each rule pairs a recognizer class with a ``str -> value`` function. The engine
picks the first rule, in declaration order, whose recognizer is the target
type or one of its base classes, so earlier rules shadow later ones.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import timedelta
from typing import Any, Callable, Optional, Tuple
from urllib.parse import ParseResult, SplitResult, urlparse, urlsplit

from .type_registry import TypeRegistry

# [ws][-]{ d | [d.]hh:mm[:ss[.fffffff]] }[ws]
_TIMEDELTA_RE = re.compile(
    r"""
    ^\s*(?P<sign>-)?
    (?:
        (?P<days_only>\d+)
      |
        (?:(?P<days>\d+)\.)?
        (?P<hours>\d{1,2}):(?P<minutes>\d{1,2})
        (?::(?P<seconds>\d{1,2})(?:\.(?P<fraction>\d{1,7}))?)?
    )
    \s*$
    """,
    re.VERBOSE,
)


@dataclass(frozen=True)
class ConversionRule:
    """A recognizer class and the function converting text to it."""

    recognizer: type
    convert: Callable[[str], Any]

    def applies_to(self, target: type) -> bool:
        try:
            return issubclass(target, self.recognizer)
        except TypeError:
            return False


def parse_timedelta(text: str) -> timedelta:
    """
    Parse a time interval such as "00:05:00", "1.12:00:00" or "3" (days).

    Raises:
        ValueError: If the text is not a valid interval or a component is
            out of range.
    """
    match = _TIMEDELTA_RE.match(text)
    if match is None:
        raise ValueError(f"String {text!r} was not recognized as a valid time interval")

    if match.group("days_only") is not None:
        interval = timedelta(days=int(match.group("days_only")))
    else:
        hours = int(match.group("hours"))
        minutes = int(match.group("minutes"))
        seconds = int(match.group("seconds") or 0)
        if hours > 23 or minutes > 59 or seconds > 59:
            raise ValueError(f"Time interval {text!r} has a component out of range")

        # Seven fraction digits are 100ns ticks; timedelta keeps microseconds
        fraction = (match.group("fraction") or "").ljust(7, "0")
        interval = timedelta(
            days=int(match.group("days") or 0),
            hours=hours,
            minutes=minutes,
            seconds=seconds,
            microseconds=int(fraction) // 10,
        )

    return -interval if match.group("sign") else interval


def _strip_uri_text(text: Optional[str]) -> str:
    if text is None:
        raise ValueError("Invalid URI: value is missing")
    return text.strip()


def _require_absolute(text: str, parsed: Any) -> None:
    if not parsed.scheme or not (parsed.netloc or parsed.path):
        raise ValueError(f"Invalid URI: {text!r} is not an absolute URI")


def parse_uri(text: str) -> ParseResult:
    """Parse an absolute URI into a `ParseResult`."""
    parsed = urlparse(_strip_uri_text(text))
    _require_absolute(text, parsed)
    return parsed


def parse_uri_split(text: str) -> SplitResult:
    """Parse an absolute URI into a `SplitResult`."""
    parsed = urlsplit(_strip_uri_text(text))
    _require_absolute(text, parsed)
    return parsed


def type_reference_rule(registry: TypeRegistry) -> ConversionRule:
    """Rule resolving the text as a type name, failing when it is unknown."""
    return ConversionRule(
        type, lambda text: registry.resolve_type(text, throw_on_error=True)
    )


def default_conversions(registry: Optional[TypeRegistry] = None) -> Tuple[ConversionRule, ...]:
    """
    Build the built-in rule table.

    Args:
        registry: Registry used by the type reference rule.

    Returns:
        Immutable ordered tuple of rules.
    """
    return (
        ConversionRule(ParseResult, parse_uri),
        ConversionRule(SplitResult, parse_uri_split),
        ConversionRule(timedelta, parse_timedelta),
        type_reference_rule(registry or DEFAULT_REGISTRY),
    )


# Shared by every conversion that doesn't bring its own registry.
DEFAULT_REGISTRY = TypeRegistry()

EXTENDED_CONVERSIONS: Tuple[ConversionRule, ...] = default_conversions(DEFAULT_REGISTRY)
