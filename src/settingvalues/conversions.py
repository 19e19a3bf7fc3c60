"""
Setting value conversion engine.

Converts the raw text of a setting into a value of the requested type. The
strategies are tried in a fixed order and the first applicable one decides
the result:

1. Optional[T]: empty or missing text is None, otherwise convert to T
2. Enum subclasses: member name (exact, then case-insensitive) or number
3. Extended conversions: URI, time interval, type reference, ...
4. Abstract targets: "Type::Member" accessor, or the name of a concrete
   class that can be built from default arguments
5. Generic primitive coercion (int, float, bool, ...)

Usage::

    from settingvalues import convert

    convert("00:05:00", timedelta)            # timedelta(minutes=5)
    convert("myapp.sinks.ConsoleSink", Sink)  # ConsoleSink()
    convert("myapp.themes.Themes::Dark", Theme)
"""

from __future__ import annotations

import enum
import typing
from types import UnionType
from typing import Any, Optional, Sequence, Tuple

from . import package_logger
from .accessor import parse_static_member_accessor
from .coercion import coerce
from .errors import (
    ConversionError,
    EnumParseError,
    IncompatibleImplementationError,
    MissingStaticMemberError,
    NoUsableConstructorError,
    describe_type,
)
from .extended import DEFAULT_REGISTRY, EXTENDED_CONVERSIONS, ConversionRule, default_conversions
from .type_registry import TypeRegistry

logger = package_logger(__name__)

_UNION_TYPES = (typing.Union, UnionType)

_NONE_TYPE = type(None)


def _unwrap_nullable(target: Any) -> Tuple[bool, Any]:
    """Return (is_nullable, inner_type) for Optional[T] style targets."""
    if typing.get_origin(target) not in _UNION_TYPES:
        return False, target

    members = [arg for arg in typing.get_args(target) if arg is not _NONE_TYPE]
    if len(members) != 1:
        raise ConversionError(f"Unsupported union target {target!r}")
    return True, members[0]


def _normalize_target(target: Any) -> Any:
    """Strip Annotated[...] and map Any / type[X] onto plain classes."""
    if typing.get_origin(target) is typing.Annotated:
        target = typing.get_args(target)[0]
    if target is typing.Any:
        return object
    if typing.get_origin(target) in (type, typing.Type):
        return type
    return target


def parse_enum(value: Optional[str], target: type) -> enum.Enum:
    """
    Parse an enum member from its name or its integer value.

    Names match exactly first, then case-insensitively. Flag enums accept a
    comma-separated list of names.

    Raises:
        EnumParseError: If the value names no member.
    """
    if value is None:
        raise EnumParseError(value, target)

    text = value.strip()
    members = target.__members__

    if issubclass(target, enum.Flag) and "," in text:
        result = target(0)
        for part in text.split(","):
            result |= parse_enum(part, target)
        return result

    if text in members:
        return members[text]

    folded = text.casefold()
    for name, member in members.items():
        if name.casefold() == folded:
            return member

    try:
        number = int(text, 10)
    except ValueError:
        raise EnumParseError(value, target) from None
    try:
        return target(number)
    except ValueError as e:
        raise EnumParseError(value, target) from e


class SettingValueConverter:
    """
    Converts setting text to typed values.

    Stateless between calls; one instance may be shared by any number of
    threads.
    """

    def __init__(
        self,
        registry: Optional[TypeRegistry] = None,
        conversions: Optional[Sequence[ConversionRule]] = None,
    ):
        """
        Args:
            registry: Type registry for name lookups (default: shared registry).
            conversions: Ordered extended conversion rules (default: the
                built-in URI, time interval and type reference rules).
        """
        self.registry = registry or DEFAULT_REGISTRY
        if conversions is not None:
            self.conversions = tuple(conversions)
        elif self.registry is DEFAULT_REGISTRY:
            self.conversions = EXTENDED_CONVERSIONS
        else:
            self.conversions = default_conversions(self.registry)

    def convert(self, value: Optional[str], target: Any) -> Any:
        """
        Convert a setting value to the target type.

        Args:
            value: Raw setting text, may be None.
            target: Class or typing annotation to convert to.

        Returns:
            The converted value.

        Raises:
            ConversionError: If no strategy can produce the value.
        """
        nullable, target = _unwrap_nullable(_normalize_target(target))
        if nullable:
            if not value:
                return None
            target = _normalize_target(target)

        if isinstance(target, type) and issubclass(target, enum.Enum):
            return parse_enum(value, target)

        rule = self.find_conversion(target)
        if rule is not None:
            logger.debug(f"Converting to {describe_type(target)} with {rule.convert!r}")
            return self._apply_rule(rule, value, target)

        if self.registry.is_abstract(target) and value is not None and value.strip():
            accessor = parse_static_member_accessor(value)
            if accessor is not None:
                return self._resolve_static_member(accessor.type_name, accessor.member_name)

            found, instance = self._construct_implementation(value.strip(), target)
            if found:
                return instance

        return coerce(value, target)

    def find_conversion(self, target: Any) -> Optional[ConversionRule]:
        """Return the first extended conversion rule applying to target."""
        if not isinstance(target, type):
            return None
        return next((rule for rule in self.conversions if rule.applies_to(target)), None)

    @staticmethod
    def _apply_rule(rule: ConversionRule, value: Optional[str], target: type) -> Any:
        try:
            return rule.convert(value)
        except ConversionError:
            raise
        except (ValueError, TypeError, ArithmeticError) as e:
            raise ConversionError(
                f"Cannot convert {value!r} to {describe_type(target)}: {e}"
            ) from e

    def _resolve_static_member(self, type_name: str, member_name: str) -> Any:
        owner = self.registry.resolve_type(type_name, throw_on_error=True)

        prop = self.registry.find_static_property(owner, member_name)
        if prop is not None:
            logger.debug(f"Reading static property {type_name}::{member_name}")
            return self.registry.get_static_property_value(owner, prop)

        found, field_value = self.registry.find_static_field(owner, member_name)
        if found:
            logger.debug(f"Reading static field {type_name}::{member_name}")
            return field_value

        raise MissingStaticMemberError(type_name, member_name)

    def _construct_implementation(self, type_name: str, target: type) -> Tuple[bool, Any]:
        """Build the named concrete class; (False, None) if the name is unknown."""
        implementation = self.registry.resolve_type(type_name)
        if implementation is None:
            return False, None

        full_name = describe_type(implementation)
        if not self.registry.is_assignable(implementation, target):
            raise IncompatibleImplementationError(full_name, target)

        signature = self.registry.find_default_constructor(implementation)
        if signature is None:
            raise NoUsableConstructorError(full_name)

        logger.debug(f"Constructing {full_name} for {describe_type(target)}")
        return True, self.registry.construct(implementation, signature)


_DEFAULT_CONVERTER = SettingValueConverter()


def convert(value: Optional[str], target: Any) -> Any:
    """Convert a setting value with the default registry and conversions."""
    return _DEFAULT_CONVERTER.convert(value, target)
