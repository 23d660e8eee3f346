"""
Child management shared by the form and the container field types.

`FieldContainer` owns an insertion-ordered list of child fields with unique
names. It provides lookup by simple name or dotted path, sorting by order,
the recursive clear operations, and the validation cascade that processes
each child exactly once.
"""

import logging
from collections.abc import Iterator, Mapping
from typing import TYPE_CHECKING, Any

from fieldtree.core.path_utils import PATH_SEPARATOR, PathResolver
from fieldtree.core.types import UNSET
from fieldtree.exceptions import FieldNotFoundError

if TYPE_CHECKING:
    from fieldtree.core.field import Field

logger = logging.getLogger(__name__)


class FieldContainer:
    """Mixin for nodes that own child fields.

    Subclasses provide a `_fields` list, a `name`, a `form` and a `root`,
    and must list this mixin before `Field` so its container behavior wins.
    """

    def can_contain_children(self) -> bool:
        return True

    def _child_parent(self) -> "Field | None":
        """Parent assigned to attached children; the form root assigns none."""
        return self  # type: ignore[return-value]

    def _attach(self, field: "Field") -> "Field":
        field.set_parent(self._child_parent(), self.form)
        return field

    # -- child list ------------------------------------------------------

    @property
    def fields(self) -> list["Field"]:
        return list(self._fields)

    @property
    def num_fields(self) -> int:
        return len(self._fields)

    def has_fields(self) -> bool:
        return bool(self._fields)

    def add_field(self, field: "Field") -> "Field":
        self._fields.append(self._attach(field))
        return field

    def set_field_at(self, index: int, field: "Field") -> "Field":
        self._fields[index] = self._attach(field)
        return field

    def clear_fields(self) -> None:
        self._fields = []

    def field_index(self, name: str) -> int | None:
        """Position of the immediate child called `name`, or None."""
        for index, field in enumerate(self._fields):
            if field.name == name:
                return index
        return None

    def find_child(self, name: str) -> "Field | None":
        """Immediate child lookup by simple name; first match wins."""
        for field in self._fields:
            if field.name == name:
                return field
        return None

    def field(self, name: str, strict: bool = False) -> "Field | None":
        """
        Return the field with the given name or dotted path.

        A simple name is looked up among this container's immediate children.
        A dotted path is walked from the root of the tree, segment by segment.

        Params:
            name: Simple name or dotted path (e.g., "addresses.0.city")
            strict: Raise instead of returning None when nothing is found

        Returns:
            The matching field, or None when not found and not strict

        Raises:
            FieldNotFoundError: When strict and the path does not resolve
        """
        if PATH_SEPARATOR in name:
            found = PathResolver.resolve(self.root, name)
        else:
            found = self.find_child(name)
        if found is None and strict:
            raise FieldNotFoundError(name, self.container_identity)
        return found

    @property
    def container_identity(self) -> str:
        return f"{type(self).__name__} '{self.name}'"

    def sorted_fields(self) -> list["Field"]:
        """Children by ascending order; unordered children last, ties stable."""
        return sorted(
            self._fields,
            key=lambda f: (f.order is None, f.order if f.order is not None else 0),
        )

    # -- per-run state ---------------------------------------------------

    def clear_errors(self) -> None:
        for field in self._fields:
            field.clear_errors()

    def clear_values(self) -> None:
        for field in self._fields:
            field.clear_values()

    def clear_fifs(self) -> None:
        for field in self._fields:
            field.clear_fifs()

    def has_errors(self) -> bool:
        return any(field.has_errors() for field in self._fields)

    def iter_error_fields(self) -> Iterator["Field"]:
        for field in self._fields:
            yield from field.iter_error_fields()

    def load_children_input(self, data: Any) -> None:
        """Hand each child its entry of a nested input mapping."""
        source = data if isinstance(data, Mapping) else {}
        for field in self._fields:
            field.load_input(source.get(field.name, UNSET))

    def load_children_values(self, data: Any) -> None:
        source = data if isinstance(data, Mapping) else {}
        for field in self._fields:
            field.load_value(source.get(field.name, UNSET))

    # -- validation cascade ----------------------------------------------

    def validate_fields(self) -> None:
        """
        Process every child owned by this container.

        Children flagged with `clear` are skipped, as are children whose
        structural parent is some other node (that parent processes them).
        Each processed child validates its own children first; a child that
        ends up with a defined value then runs its cross-field rule. All
        children are visited even when some fail.
        """
        owner = self._child_parent()
        for field in self._fields:
            if field.clear:
                continue
            if field.parent is not None and field.parent is not owner:
                continue
            field.process()
            if not field.has_value() or field.value is None:
                continue
            field.run_validate_method()

    # -- inspection ------------------------------------------------------

    def dump_fields(self, indent: int = 0) -> list[str]:
        lines = []
        for field in self.sorted_fields():
            lines.extend(field.dump(indent))
        return lines

    def validated_lines(self) -> list[str]:
        lines = []
        for field in self._fields:
            if field.can_contain_children():
                lines.extend(field.validated_lines())
            status = " | ".join(field.errors) if field.has_errors() else "validated"
            lines.append(f"{field.full_path}: {status}")
        return lines

    def dump_validated(self) -> str:
        text = "\n".join(self.validated_lines())
        logger.info("fields validated:\n%s", text)
        return text
