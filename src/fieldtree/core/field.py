"""
Core Field node for the fieldtree framework.

A `Field` is a single addressable unit of a field tree: it carries a simple
name, an order index, weak links to its structural parent and owning form,
and the per-run state (raw input, value, errors) that the validation cascade
works on. Scalar field types subclass it directly; container types combine
it with `FieldContainer`.
"""

import weakref
from collections.abc import Callable, Iterable, Mapping
from typing import TYPE_CHECKING, Any, ClassVar

from inflection import humanize
from pydantic import BaseModel, ConfigDict, PrivateAttr, ValidationError
from pydantic import Field as PydanticField

from fieldtree.core.path_utils import join_path
from fieldtree.core.types import UNSET, AttributeDict, FieldKind
from fieldtree.exceptions import FieldInstantiationError

if TYPE_CHECKING:
    from fieldtree.core.container import FieldContainer


class Field(BaseModel):
    """
    Base class for every field node.

    Settable attributes are the pydantic model fields; assignments are
    validated. Parent and form links are weak references, the tree owns its
    nodes top-down through the containers' child lists.
    """

    model_config = ConfigDict(
        extra="ignore", validate_assignment=True, arbitrary_types_allowed=True
    )

    kind: ClassVar[FieldKind] = FieldKind.SCALAR

    name: str = PydanticField(min_length=1)
    order: int | None = None
    required: bool = False
    label: str | None = None
    clear: bool = False
    validate_method: Callable[[Any], Any] | None = None

    _parent_ref: Any = PrivateAttr(default=None)
    _form_ref: Any = PrivateAttr(default=None)
    _input: Any = PrivateAttr(default=UNSET)
    _value: Any = PrivateAttr(default=UNSET)
    _errors: list[str] = PrivateAttr(default_factory=list)

    # Nodes have identity semantics; comparing attribute values would also
    # walk into parent and child links.
    def __eq__(self, other: object) -> bool:
        return self is other

    __hash__ = object.__hash__

    @classmethod
    def new(cls, attrs: AttributeDict) -> "Field":
        """
        Instantiate a field from a declaration's attributes.

        Keys that are not settable attributes of the class are ignored.

        Params:
            attrs: Attribute mapping, must contain `name`

        Returns:
            The new, unattached field

        Raises:
            FieldInstantiationError: When the attributes fail validation
        """
        try:
            return cls.model_validate(dict(attrs))
        except ValidationError as e:
            raise FieldInstantiationError(str(attrs.get("name")), str(e)) from e

    # -- structure -------------------------------------------------------

    @property
    def parent(self) -> "Field | None":
        """Enclosing field, or None for a root-level field."""
        return self._parent_ref() if self._parent_ref is not None else None

    @property
    def form(self) -> "FieldContainer | None":
        """The owning form, when the field belongs to one."""
        return self._form_ref() if self._form_ref is not None else None

    def set_parent(
        self, parent: "Field | None", form: "FieldContainer | None" = None
    ) -> None:
        """Attach this field to a parent (and form); descendants follow the form."""
        self._parent_ref = weakref.ref(parent) if parent is not None else None
        self._form_ref = weakref.ref(form) if form is not None else None

    @property
    def full_path(self) -> str:
        """Dot-joined names from the root-level ancestor down to this field."""
        names = []
        node: Field | None = self
        while node is not None:
            names.append(node.name)
            node = node.parent
        return join_path(*reversed(names))

    @property
    def root(self) -> "FieldContainer | Field":
        """Start point for dotted lookups: the form, else the topmost ancestor."""
        if self.form is not None:
            return self.form
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def can_contain_children(self) -> bool:
        return False

    def ordering_scopes(self) -> list["FieldContainer"]:
        """Sibling sets below this field that the ordering pass should visit."""
        return []

    @property
    def display_label(self) -> str:
        return self.label or humanize(self.name)

    # -- attributes ------------------------------------------------------

    def update_attributes(self, attrs: AttributeDict) -> list[str]:
        """
        Set declared attributes in place, keeping identity and run state.

        Keys without a corresponding settable attribute, and `name`, are
        ignored.

        Params:
            attrs: Attribute mapping from a `+name` declaration

        Returns:
            Names of the attributes that were set

        Raises:
            FieldInstantiationError: When a new attribute value fails validation
        """
        applied = []
        for key, value in attrs.items():
            if key == "name" or key not in type(self).model_fields:
                continue
            try:
                setattr(self, key, value)
            except ValidationError as e:
                raise FieldInstantiationError(self.name, str(e)) from e
            applied.append(key)
        return applied

    def clone(self, **overrides: Any) -> "Field":
        """Copy the declared attributes into a fresh, unattached field."""
        data = {key: getattr(self, key) for key in type(self).model_fields}
        data.update(overrides)
        return type(self).model_validate(data)

    # -- run state -------------------------------------------------------

    @property
    def input(self) -> Any:
        return None if self._input is UNSET else self._input

    def has_input(self) -> bool:
        return self._input is not UNSET

    @property
    def value(self) -> Any:
        return None if self._value is UNSET else self._value

    def has_value(self) -> bool:
        return self._value is not UNSET

    @property
    def errors(self) -> list[str]:
        return list(self._errors)

    def add_error(self, message: str) -> None:
        self._errors.append(message)

    def has_errors(self) -> bool:
        return bool(self._errors)

    def clear_errors(self) -> None:
        self._errors = []

    def clear_value(self) -> None:
        self._value = UNSET

    def clear_values(self) -> None:
        self.clear_value()

    def clear_fif(self) -> None:
        """Drop the raw input, the source of the fill-in-form value."""
        self._input = UNSET

    def clear_fifs(self) -> None:
        self.clear_fif()

    def load_input(self, data: Any) -> None:
        self._input = data

    def load_value(self, data: Any) -> None:
        self._value = data

    def has_fif(self) -> bool:
        return self.has_input() or self.has_value()

    @property
    def fif(self) -> Any:
        """Fill-in-form value: raw input when present, else the deflated value."""
        if self.has_input():
            return self._input
        if self.has_value():
            return self.deflate(self._value)
        return None

    # -- validation ------------------------------------------------------

    def inflate(self, data: Any) -> Any:
        """Convert raw input into a value; raise ValueError with a message on failure."""
        return data

    def deflate(self, value: Any) -> Any:
        """Convert a value back into its fill-in-form representation."""
        return value

    def validate_value(self, value: Any) -> None:
        """Type-specific checks on an inflated value; record failures with add_error."""
        pass

    def input_is_empty(self) -> bool:
        data = self._input
        if data is UNSET or data is None:
            return True
        if isinstance(data, str):
            return not data.strip()
        if isinstance(data, (Mapping, list, tuple)):
            return not data
        return False

    def process(self) -> None:
        """
        Validate the raw input and derive the value.

        A field without input keeps any value loaded through `load_value`.
        Empty input on a required field is an error; inflation failures are
        recorded as errors and leave the value unset.
        """
        self.clear_errors()
        if self.input_is_empty():
            if self.has_input():
                self.clear_value()
            if self.required and not self.has_value():
                self.add_error(f"{self.display_label} field is required")
            return

        try:
            value = self.inflate(self._input)
        except ValueError as e:
            self.clear_value()
            self.add_error(str(e))
            return

        self.validate_value(value)
        if self.has_errors():
            self.clear_value()
        else:
            self._value = value

    def run_validate_method(self) -> None:
        """Run the registered cross-field rule against this field."""
        if self.validate_method is not None:
            self.validate_method(self)

    # -- inspection ------------------------------------------------------

    def dump(self, indent: int = 0) -> list[str]:
        """Describe this field as text lines for developer inspection."""
        pad = "  " * indent
        lines = [
            f"{pad}{self.full_path}: {type(self).__name__} (order={self.order})",
        ]
        if self.has_input():
            lines.append(f"{pad}  input: {self._input!r}")
        if self.has_value():
            lines.append(f"{pad}  value: {self._value!r}")
        if self._errors:
            lines.append(f"{pad}  errors: {' | '.join(self._errors)}")
        return lines

    def iter_error_fields(self) -> Iterable["Field"]:
        if self._errors:
            yield self
