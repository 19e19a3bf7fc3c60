"""
Exception types raised by the setting value conversion engine.

Every failure derives from `ConversionError` so callers can block startup on a
mis-typed setting with a single ``except`` clause.
"""

from __future__ import annotations

from typing import Any


def describe_type(target: Any) -> str:
    """Return a readable dotted name for a class or typing annotation."""
    if isinstance(target, type):
        module = target.__module__
        if module == "builtins":
            return target.__qualname__
        return f"{module}.{target.__qualname__}"
    return repr(target)


class ConversionError(Exception):
    """Raised when a setting value cannot be converted to its target type."""
    pass


class UnresolvedTypeReferenceError(ConversionError):
    """Raised when a type name cannot be located."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Could not resolve type `{type_name}`")


class MissingStaticMemberError(ConversionError):
    """Raised when an accessor names a member its type does not expose."""

    def __init__(self, type_name: str, member_name: str):
        self.type_name = type_name
        self.member_name = member_name
        super().__init__(
            f"Could not find a public static property or field with name "
            f"`{member_name}` on type `{type_name}`"
        )


class NoUsableConstructorError(ConversionError):
    """Raised when a resolved type cannot be built from default arguments."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"A default constructor was not found on {type_name}.")


class IncompatibleImplementationError(ConversionError):
    """Raised when a resolved type is not a subclass of the requested target."""

    def __init__(self, type_name: str, target: Any):
        self.type_name = type_name
        self.target = target
        super().__init__(
            f"Type {type_name} is not assignable to {describe_type(target)}"
        )


class EnumParseError(ConversionError):
    """Raised when a value names no member of the target enumeration."""

    def __init__(self, value: Any, target: Any):
        self.value = value
        self.target = target
        super().__init__(
            f"Requested value {value!r} was not found in enum {describe_type(target)}"
        )


class GenericCoercionError(ConversionError):
    """Raised when the primitive fallback rejects a value for its target."""

    def __init__(self, value: Any, target: Any, reason: str = ""):
        self.value = value
        self.target = target
        message = f"Cannot convert {value!r} to {describe_type(target)}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)
