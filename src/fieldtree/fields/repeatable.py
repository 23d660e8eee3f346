"""
Repeatable field: a list of homogeneous elements.

A repeatable owns one template field named `contains`. Declarations under
the repeatable either name `contains` directly (`tags.contains` as an
`Integer`) or declare element members (`addresses.street`), which go into an
implicit compound template. When input or values are loaded, the elements
are regenerated as clones of the template, named `0`, `1`, ... so that
`addresses.0.city` addresses the `city` of the first element.
"""

from collections.abc import Mapping
from typing import Any, ClassVar

from pydantic import PrivateAttr

from fieldtree.core.container import FieldContainer
from fieldtree.core.field import Field
from fieldtree.core.path_utils import is_index_segment
from fieldtree.core.types import UNSET, FieldKind
from fieldtree.exceptions import InvalidParentTypeError
from fieldtree.fields.compound import Compound
from fieldtree.fields.scalar import Text

TEMPLATE_NAME = "contains"


def _as_items(data: Any) -> list[Any]:
    """Coerce loaded data into a list of element entries."""
    if data is UNSET or data is None:
        return []
    if isinstance(data, (list, tuple)):
        return list(data)
    if isinstance(data, Mapping):
        if all(is_index_segment(str(key)) for key in data):
            return [data[key] for key in sorted(data, key=lambda k: int(k))]
        return [data]
    return [data]


class Repeatable(Compound):
    """Field holding a list of template clones; its value is a list."""

    kind: ClassVar[FieldKind] = FieldKind.REPEATABLE

    num_when_empty: int = 0

    _contains: Field | None = PrivateAttr(default=None)

    # -- template (declaration scope) ------------------------------------

    @property
    def contains(self) -> Field:
        """Element template; a plain `Text` unless something else was declared."""
        if self._contains is None:
            self._set_contains(Text(name=TEMPLATE_NAME))
        return self._contains

    def has_contains(self) -> bool:
        return self._contains is not None

    def _set_contains(self, field: Field) -> Field:
        field.set_parent(self, self.form)
        self._contains = field
        return field

    def declaration_container(self, name: str) -> FieldContainer:
        """
        Container that receives a child declared under this repeatable.

        `contains` is declared on the repeatable itself. Any other name is an
        element member and goes into the compound template, which is created
        on first use.

        Raises:
            InvalidParentTypeError: When the template exists but is not a container
        """
        if name == TEMPLATE_NAME:
            return self
        if self._contains is None:
            self._set_contains(Compound(name=TEMPLATE_NAME))
        if not self._contains.can_contain_children():
            raise InvalidParentTypeError(
                f"{self.full_path}.{name}", self._contains.full_path
            )
        return self._contains

    def field_index(self, name: str) -> int | None:
        if name == TEMPLATE_NAME and self._contains is not None:
            return 0
        return None

    def add_field(self, field: Field) -> Field:
        return self._set_contains(field)

    def set_field_at(self, index: int, field: Field) -> Field:
        return self._set_contains(field)

    def find_child(self, name: str) -> Field | None:
        if is_index_segment(name):
            return super().find_child(name)
        if name == TEMPLATE_NAME:
            return self._contains
        if self._contains is not None and self._contains.can_contain_children():
            return self._contains.find_child(name)
        return None

    def ordering_scopes(self) -> list[FieldContainer]:
        if self._contains is not None and self._contains.can_contain_children():
            return [self._contains]
        return []

    def clone(self, **overrides: Any) -> "Repeatable":
        new = Field.clone(self, **overrides)
        if self._contains is not None:
            new._set_contains(self._contains.clone())
        return new

    def set_parent(self, parent, form=None) -> None:
        super().set_parent(parent, form)
        if self._contains is not None:
            self._contains.set_parent(self, form)

    # -- elements --------------------------------------------------------

    def _make_element(self, index: int) -> Field:
        element = self.contains.clone(name=str(index))
        return self._attach(element)

    def rebuild_elements(self, count: int) -> None:
        """Replace the elements with `count` fresh clones of the template."""
        self._fields = [self._make_element(index) for index in range(count)]

    def load_input(self, data: Any) -> None:
        self._input = data
        if data is UNSET:
            # No input for this run: keep the elements built from loaded values.
            for element in self._fields:
                element.load_input(UNSET)
            return
        items = _as_items(data)
        self.rebuild_elements(len(items) if items else self.num_when_empty)
        for element, item in zip(self._fields, items):
            element.load_input(item)

    def load_value(self, data: Any) -> None:
        self._value = data
        items = _as_items(data)
        self.rebuild_elements(len(items) if items else self.num_when_empty)
        for element, item in zip(self._fields, items):
            element.load_value(item)

    def collect_value(self) -> Any:
        return [element.value for element in self._fields if element.has_value()]

    def dump(self, indent: int = 0) -> list[str]:
        lines = Field.dump(self, indent)
        if self._contains is not None:
            lines.extend(self._contains.dump(indent + 1))
        lines.extend(self.dump_fields(indent + 1))
        return lines
