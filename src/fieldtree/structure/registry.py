"""
Registry of field types available to declarations.

Declarations name their type with a string. The registry maps
fully-qualified keys (`"<namespace>::<Type>"`) to `Field` subclasses;
built-in types live in the `fieldtree.fields` namespace. New types are added
with an explicit registration call, never looked up by importing symbols.
"""

import logging
from collections.abc import Callable

from attrs import frozen

from fieldtree.core.field import Field
from fieldtree.exceptions import FieldTypeError, UnresolvedFieldTypeError
from fieldtree.fields import BUILTIN_FIELD_TYPES

logger = logging.getLogger(__name__)

BUILTIN_NAMESPACE = "fieldtree.fields"
NAMESPACE_SEPARATOR = "::"
QUALIFIED_PREFIX = "+"


def qualify(name: str, namespace: str | None) -> str:
    """Build the registry key for a type name within a namespace."""
    return f"{namespace}{NAMESPACE_SEPARATOR}{name}" if namespace else name


@frozen
class RegisteredType:
    """A field class registered under a name and namespace."""

    name: str
    namespace: str | None
    field_class: type[Field]

    @property
    def key(self) -> str:
        return qualify(self.name, self.namespace)


class FieldTypeRegistry:
    """Maps declared type names to field classes.

    Resolution rules for `resolve(type_name, namespace)`:
      - a `Field` subclass is returned unchanged;
      - `+Type` tries `namespace::Type` (when a namespace is given), then
        `Type` as a fully-qualified key;
      - `Type` tries `namespace::Type` (when given), then the built-in
        namespace.
    """

    def __init__(self, include_builtins: bool = True):
        self._types: dict[str, RegisteredType] = {}
        if include_builtins:
            for name, field_class in BUILTIN_FIELD_TYPES.items():
                self.register(name, field_class, namespace=BUILTIN_NAMESPACE)

    def register(
        self, name: str, field_class: type[Field], namespace: str | None = None
    ) -> RegisteredType:
        """
        Register a field class under a name.

        Registering an existing key replaces the previous class.

        Params:
            name: Type name used in declarations (e.g., "Money")
            field_class: The `Field` subclass to instantiate
            namespace: Namespace qualifying the name; None registers the
                name as a fully-qualified key on its own

        Returns:
            The registry entry

        Raises:
            FieldTypeError: If the name is empty or the class is not a Field subclass
        """
        if not name or name.startswith(QUALIFIED_PREFIX):
            raise FieldTypeError(name, "must be a non-empty name without '+'")
        if not (isinstance(field_class, type) and issubclass(field_class, Field)):
            raise FieldTypeError(name)

        entry = RegisteredType(name=name, namespace=namespace, field_class=field_class)
        self._types[entry.key] = entry
        logger.debug("Registered field type %s -> %s", entry.key, field_class.__name__)
        return entry

    def candidates(self, type_name: str, namespace: str | None = None) -> list[str]:
        """Registry keys tried, in order, when resolving `type_name`."""
        if type_name.startswith(QUALIFIED_PREFIX):
            bare = type_name[len(QUALIFIED_PREFIX) :]
            keys = [qualify(bare, namespace)] if namespace else []
            keys.append(bare)
        else:
            keys = [qualify(type_name, namespace)] if namespace else []
            keys.append(qualify(type_name, BUILTIN_NAMESPACE))
        return list(dict.fromkeys(keys))

    def resolve(
        self,
        type_name: str | type[Field],
        namespace: str | None = None,
        field_name: str | None = None,
    ) -> type[Field]:
        """
        Resolve a declared type to a field class.

        Params:
            type_name: Declared type string, or a Field subclass
            namespace: Configured namespace searched first
            field_name: Declaring field, for error reporting

        Returns:
            The field class to instantiate

        Raises:
            UnresolvedFieldTypeError: When no candidate key is registered
        """
        if isinstance(type_name, type):
            if issubclass(type_name, Field):
                return type_name
            raise UnresolvedFieldTypeError(type_name.__name__, field_name, [])
        if not isinstance(type_name, str):
            raise UnresolvedFieldTypeError(repr(type_name), field_name, [])

        keys = self.candidates(type_name, namespace)
        for key in keys:
            entry = self._types.get(key)
            if entry is not None:
                return entry.field_class
        raise UnresolvedFieldTypeError(type_name, field_name, keys)

    def is_registered(self, type_name: str, namespace: str | None = None) -> bool:
        return any(key in self._types for key in self.candidates(type_name, namespace))

    def registered_types(self) -> list[RegisteredType]:
        return list(self._types.values())

    def copy(self) -> "FieldTypeRegistry":
        """Independent registry with the same entries."""
        registry = FieldTypeRegistry(include_builtins=False)
        registry._types = dict(self._types)
        return registry


default_registry = FieldTypeRegistry()


def register_field_type(
    name: str,
    namespace: str | None = None,
    registry: FieldTypeRegistry | None = None,
) -> Callable[[type[Field]], type[Field]]:
    """Class decorator registering a field type.

    Example:
        @register_field_type("Money", namespace="shop")
        class Money(Float):
            ...
    """

    def decorator(field_class: type[Field]) -> type[Field]:
        (registry or default_registry).register(name, field_class, namespace)
        return field_class

    return decorator
