"""
Compound field: a field whose children are distinct named fields.

A compound maps to a nested mapping in input and value data. Its children
can be declared from the outside with dotted names (`employer.name`) or from
its own `field_list`, which the builder processes with the compound as the
declaration context.
"""

from collections.abc import Iterator
from typing import Any, ClassVar

from pydantic import PrivateAttr

from fieldtree.core.container import FieldContainer
from fieldtree.core.field import Field
from fieldtree.core.types import FieldKind


class Compound(FieldContainer, Field):
    """Field holding named child fields; its value is a dict of child values."""

    kind: ClassVar[FieldKind] = FieldKind.COMPOUND

    field_list: Any = None

    _fields: list[Field] = PrivateAttr(default_factory=list)

    def ordering_scopes(self) -> list[FieldContainer]:
        return [self]

    def declaration_container(self, name: str) -> FieldContainer:
        """Container that receives a child declared under this field."""
        return self

    def clone(self, **overrides: Any) -> "Compound":
        new = super().clone(**overrides)
        for field in self._fields:
            new.add_field(field.clone())
        return new

    def set_parent(self, parent, form=None) -> None:
        super().set_parent(parent, form)
        # Children keep this node as parent but must follow the new form.
        for field in self._fields:
            field.set_parent(self, form)

    # -- per-run state ---------------------------------------------------

    def has_errors(self) -> bool:
        return bool(self._errors) or FieldContainer.has_errors(self)

    def iter_error_fields(self) -> Iterator[Field]:
        yield from Field.iter_error_fields(self)
        yield from FieldContainer.iter_error_fields(self)

    def clear_errors(self) -> None:
        Field.clear_errors(self)
        FieldContainer.clear_errors(self)

    def clear_values(self) -> None:
        FieldContainer.clear_values(self)
        self.clear_value()

    def clear_fifs(self) -> None:
        FieldContainer.clear_fifs(self)
        self.clear_fif()

    def load_input(self, data: Any) -> None:
        self._input = data
        self.load_children_input(data)

    def load_value(self, data: Any) -> None:
        self._value = data
        self.load_children_values(data)

    @property
    def fif(self) -> Any:
        from fieldtree.fif import flatten_fields

        return flatten_fields(self)

    def has_fif(self) -> bool:
        return any(field.has_fif() for field in self._fields)

    def collect_value(self) -> Any:
        """Value built from the children that hold one."""
        return {f.name: f.value for f in self._fields if f.has_value()}

    def has_child_values(self) -> bool:
        return any(field.has_value() for field in self._fields)

    def process(self) -> None:
        """
        Validate the children first, then derive this field's own value.

        The value is only set when no child reported an error and there was
        input or at least one child produced a value.
        """
        Field.clear_errors(self)
        self.validate_fields()
        if FieldContainer.has_errors(self):
            self.clear_value()
            return

        if self.has_child_values() or not self.input_is_empty():
            self._value = self.collect_value()
        elif self.has_input():
            self.clear_value()

        if self.required and not self.has_child_values():
            self.add_error(f"{self.display_label} field is required")
            self.clear_value()
            return
        if self.has_value():
            self.validate_value(self._value)
            if self._errors:
                self.clear_value()

    def dump(self, indent: int = 0) -> list[str]:
        lines = Field.dump(self, indent)
        lines.extend(self.dump_fields(indent + 1))
        return lines

