"""
Setting Values - Convert textual configuration values to typed runtime values.

The conversion engine lives in `SettingValueConverter`; `convert()` runs it
against the default type registry and the built-in extended conversions
(URI, time interval, type reference).
"""

import logging
import sys

from .version import __version__

__author__ = "Setting Values Contributors"
__license__ = "MIT"

# Central logger name for the package.  Hosts that route their own logging
# hierarchy can move every submodule logger under it with
# set_package_logger_name().  During tests the default "settingvalues"
# parent is used, which pytest's log capture picks up automatically.
_PACKAGE_LOGGER_NAME: str = "settingvalues"


def set_package_logger_name(name: str) -> None:
    """Override the package logger name."""
    global _PACKAGE_LOGGER_NAME
    _PACKAGE_LOGGER_NAME = name

    # Rebind module-level logger objects in already-imported submodules,
    # they were created at import time under the previous name.
    _submodule_names = ("conversions", "type_registry")
    for suffix in _submodule_names:
        module = sys.modules.get(f"settingvalues.{suffix}")
        if module is not None and hasattr(module, "logger"):
            module.logger = package_logger(module.__name__)


def package_logger(module: str) -> logging.Logger:
    """Return a child logger under the package hierarchy.

    Usage in submodules::

        from settingvalues import package_logger
        logger = package_logger(__name__)

    By default this yields e.g. ``settingvalues.conversions``; after
    ``set_package_logger_name("myapp.settings")`` it yields
    ``myapp.settings.conversions``.
    """
    base = _PACKAGE_LOGGER_NAME
    prefix = "settingvalues."
    if module.startswith(prefix):
        return logging.getLogger(f"{base}.{module[len(prefix):]}")
    # Caller is the root package itself or an unknown path
    return logging.getLogger(base)


from .errors import (
    ConversionError,
    EnumParseError,
    GenericCoercionError,
    IncompatibleImplementationError,
    MissingStaticMemberError,
    NoUsableConstructorError,
    UnresolvedTypeReferenceError,
)
from .accessor import StaticMemberAccessor, parse_static_member_accessor
from .type_registry import TypeRegistry
from .extended import EXTENDED_CONVERSIONS, ConversionRule, default_conversions
from .coercion import as_bool, coerce
from .conversions import SettingValueConverter, convert

__all__ = [
    "__version__",
    "package_logger",
    "set_package_logger_name",
    "ConversionError",
    "EnumParseError",
    "GenericCoercionError",
    "IncompatibleImplementationError",
    "MissingStaticMemberError",
    "NoUsableConstructorError",
    "UnresolvedTypeReferenceError",
    "StaticMemberAccessor",
    "parse_static_member_accessor",
    "TypeRegistry",
    "ConversionRule",
    "EXTENDED_CONVERSIONS",
    "default_conversions",
    "as_bool",
    "coerce",
    "SettingValueConverter",
    "convert",
]
