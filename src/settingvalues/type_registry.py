"""
Type lookup and introspection used by the conversion engine.

Resolves type names to classes and answers the questions the engine asks
about them: is it abstract, which class-level members does it expose, and can
it be built from default arguments alone.

Supported type names:
- an alias registered with `TypeRegistry.register`
- a builtin name: "int", "str", ...
- a dotted path: "package.module.Outer.Inner"
- a qualified name: "Outer.Inner, package.module[, Key=Value ...]"
  (trailing Key=Value qualifiers are accepted and ignored)
"""

from __future__ import annotations

import abc
import builtins
import importlib
import inspect
from types import ModuleType
from typing import Any, Dict, Iterable, Optional, Tuple

from . import package_logger
from .errors import UnresolvedTypeReferenceError

logger = package_logger(__name__)

# Class attributes of these kinds are methods or properties, not fields.
_NON_FIELD_DESCRIPTORS = (property, staticmethod, classmethod)

_VARIADIC_KINDS = (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)


def _all_identifiers(parts: Iterable[str]) -> bool:
    return all(part.isidentifier() for part in parts)


class TypeRegistry:
    """
    Resolves type names and inspects classes for the conversion engine.

    Lookups are read-only; a registry may be shared between threads once its
    aliases are registered.
    """

    def __init__(self, aliases: Optional[Dict[str, type]] = None):
        self._aliases: Dict[str, type] = dict(aliases or {})

    def register(self, name: str, cls: type) -> None:
        """
        Register an explicit name for a class.

        Args:
            name: Name accepted by resolve_type().
            cls: Class the name refers to.
        """
        if not inspect.isclass(cls):
            raise TypeError(f"Only classes can be registered, got {cls!r}")
        self._aliases[name.strip()] = cls

    # ------------------------------------------------------------------
    # Resolution
    # ------------------------------------------------------------------

    def resolve_type(self, name: Optional[str], throw_on_error: bool = False) -> Optional[type]:
        """
        Resolve a type name to a class.

        Args:
            name: Type name in one of the supported forms.
            throw_on_error: Raise instead of returning None when not found.

        Returns:
            The class, or None if it cannot be located.

        Raises:
            UnresolvedTypeReferenceError: If throw_on_error is set and the
                name does not resolve to a class.
        """
        resolved = self._lookup(name.strip()) if name is not None else None
        if resolved is None:
            logger.debug(f"Type '{name}' could not be resolved")
            if throw_on_error:
                raise UnresolvedTypeReferenceError(name)
        return resolved

    def _lookup(self, name: str) -> Optional[type]:
        if not name:
            return None

        alias = self._aliases.get(name)
        if alias is not None:
            return alias

        if "," in name:
            qualname, module_name, *qualifiers = [part.strip() for part in name.split(",")]
            if any("=" not in qualifier for qualifier in qualifiers):
                return None
            module = self._import(module_name)
            candidate = self._walk(module, qualname.split(".")) if module else None
        elif "." in name:
            candidate = self._lookup_dotted(name.split("."))
        else:
            candidate = getattr(builtins, name, None)

        return candidate if inspect.isclass(candidate) else None

    def _lookup_dotted(self, parts: list) -> Any:
        if not _all_identifiers(parts):
            return None
        # Longest importable module prefix wins, the rest are attributes
        for split in range(len(parts) - 1, 0, -1):
            module = self._import(".".join(parts[:split]))
            if module is not None:
                return self._walk(module, parts[split:])
        return None

    @staticmethod
    def _import(module_name: str) -> Optional[ModuleType]:
        if not module_name or not _all_identifiers(module_name.split(".")):
            return None
        try:
            return importlib.import_module(module_name)
        except ImportError as e:
            logger.debug(f"Module '{module_name}' not importable: {e}")
            return None

    @staticmethod
    def _walk(owner: Any, attributes: Iterable[str]) -> Any:
        for attribute in attributes:
            if not attribute.isidentifier():
                return None
            owner = getattr(owner, attribute, None)
            if owner is None:
                return None
        return owner

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    @staticmethod
    def is_abstract(cls: Any) -> bool:
        """Return True for abstract classes, direct ABC subclasses and protocols."""
        if not inspect.isclass(cls):
            return False
        return (
            inspect.isabstract(cls)
            or abc.ABC in cls.__bases__
            or bool(cls.__dict__.get("_is_protocol", False))
        )

    @staticmethod
    def is_assignable(cls: type, target: type) -> bool:
        """Return True when instances of cls may be used where target is expected."""
        if target in cls.__mro__:
            return True
        try:
            return issubclass(cls, target)
        except TypeError:
            # Non runtime-checkable protocols cannot be checked structurally
            logger.debug(f"Assignability of {cls!r} to {target!r} cannot be checked")
            return True

    @staticmethod
    def find_static_property(cls: type, name: str) -> Optional[property]:
        """
        Find a class-level property declared on the class's metaclass.

        Returns:
            The property when it is declared with a getter, otherwise None.
        """
        attr = vars(type(cls)).get(name)
        if isinstance(attr, property) and attr.fget is not None:
            return attr
        return None

    @staticmethod
    def get_static_property_value(cls: type, prop: property) -> Any:
        return prop.fget(cls)

    @staticmethod
    def find_static_field(cls: type, name: str) -> Tuple[bool, Any]:
        """
        Find a public class attribute declared on cls itself.

        Returns:
            (found, value) tuple.
        """
        namespace = vars(cls)
        if name.startswith("_") or name not in namespace:
            return False, None

        value = namespace[name]
        if (
            isinstance(value, _NON_FIELD_DESCRIPTORS)
            or inspect.isroutine(value)
            or inspect.isclass(value)
        ):
            return False, None
        return True, value

    @staticmethod
    def find_default_constructor(cls: type) -> Optional[inspect.Signature]:
        """
        Find a call signature that needs no explicit arguments.

        Returns:
            The signature when every parameter has a default (or is *args /
            **kwargs), otherwise None. Abstract classes never qualify.
        """
        if inspect.isabstract(cls):
            return None
        try:
            signature = inspect.signature(cls)
        except (TypeError, ValueError) as e:
            logger.debug(f"No introspectable signature for {cls!r}: {e}")
            return None

        for parameter in signature.parameters.values():
            if parameter.kind in _VARIADIC_KINDS:
                continue
            if parameter.default is inspect.Parameter.empty:
                return None
        return signature

    @staticmethod
    def construct(cls: type, signature: inspect.Signature) -> Any:
        """Instantiate cls passing each parameter's declared default."""
        args = []
        kwargs = {}
        for parameter in signature.parameters.values():
            if parameter.kind in _VARIADIC_KINDS:
                continue
            if parameter.kind is inspect.Parameter.POSITIONAL_ONLY:
                args.append(parameter.default)
            else:
                kwargs[parameter.name] = parameter.default
        return cls(*args, **kwargs)
