"""
The form: root of a field tree and entry point for processing.

A `Form` owns the root-level fields. Root-level fields have no parent; they
link back to the form instead. Declarations come from the `field_list`
class attributes along the class hierarchy (base classes first) and from the
`field_list` given to the constructor.
"""

import logging
from typing import Any

from fieldtree.core.container import FieldContainer
from fieldtree.core.field import Field
from fieldtree.core.types import FifDict, NestedData
from fieldtree.exceptions import FieldTreeError
from fieldtree.fif import flatten_fields, is_flat, unflatten
from fieldtree.structure import normalizer
from fieldtree.structure.builder import FieldTreeBuilder
from fieldtree.structure.config import BuilderConfig
from fieldtree.structure.normalizer import FieldDeclaration
from fieldtree.structure.registry import FieldTypeRegistry, default_registry

logger = logging.getLogger(__name__)


class Form(FieldContainer):
    """Root container of a field tree.

    Subclasses declare fields through a class-level `field_list`; a subclass
    may patch an inherited field with a `+name` declaration or replace it by
    declaring the same name again.

    Example:
        class PersonForm(Form):
            field_list = ["name", "Text", "age", "Integer"]

        class EmployeeForm(PersonForm):
            field_list = ["+name", {"required": True}, "employer", "Text"]
    """

    field_list: Any = None
    field_name_space: str | None = None

    def __init__(
        self,
        name: str = "form",
        field_list: Any = None,
        config: BuilderConfig | None = None,
        registry: FieldTypeRegistry | None = None,
        verbose: bool = False,
    ):
        self.name = name
        self.config = config or BuilderConfig(field_namespace=self.field_name_space)
        self.registry = registry or default_registry
        self.verbose = verbose
        self._fields: list[Field] = []
        self._processed = False
        self.build_fields(field_list)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, fields={self.num_fields})"

    # -- tree ------------------------------------------------------------

    @property
    def form(self) -> "Form":
        return self

    @property
    def root(self) -> "Form":
        return self

    @property
    def full_path(self) -> str:
        return ""

    def _child_parent(self) -> None:
        return None

    def _build_meta_field_list(self) -> list[FieldDeclaration]:
        """Declarations from every class's own `field_list`, base classes first."""
        records: list[FieldDeclaration] = []
        for cls in reversed(type(self).__mro__):
            declarations = cls.__dict__.get("field_list")
            if declarations:
                records.extend(
                    normalizer.normalize_field_list(
                        declarations,
                        guess_type=self.guess_field_type,
                        default_type=self.config.default_type,
                    )
                )
        return records

    def build_fields(self, field_list: Any = None) -> None:
        """
        Build the field tree from the class and instance declarations.

        The build is all or nothing: on any error the form is left without
        fields and the error propagates.

        Raises:
            FieldTreeError: On invalid declarations, unknown types or parents
        """
        builder = FieldTreeBuilder(
            registry=self.registry,
            config=self.config,
            guess_type=self.guess_field_type,
        )
        try:
            builder.build(self, self._build_meta_field_list(), field_list)
        except FieldTreeError:
            self.clear_fields()
            raise
        logger.debug("Built form '%s' with %d fields", self.name, self.num_fields)

    def guess_field_type(self, name: str) -> str:
        """Type for auto-declared fields; override for model-specific rules."""
        return normalizer.guess_field_type(name)

    # -- data ------------------------------------------------------------

    def fif(self) -> FifDict:
        """Current fill-in-form values as a flat path -> scalar mapping."""
        return flatten_fields(self)

    def load_fif(self, flat: FifDict) -> None:
        """Load a flat path -> scalar mapping as raw input."""
        self.load_input(unflatten(flat))

    def load_input(self, data: NestedData) -> None:
        self.load_children_input(data)

    def load_values(self, data: NestedData) -> None:
        """Load nested data as current values (e.g., from a stored object)."""
        self.load_children_values(data)

    def values(self) -> dict[str, Any]:
        return {field.name: field.value for field in self._fields if field.has_value()}

    # -- processing ------------------------------------------------------

    def process(self, params: Any = None, values: Any = None) -> bool:
        """
        Run one validation pass over new input.

        Per-run state is cleared first, so successive calls are independent.

        Params:
            params: Raw input, either nested or a flat path -> scalar mapping
            values: Initial values for fields that receive no input

        Returns:
            True when every processed field validated
        """
        self.clear()
        if values is not None:
            self.load_values(values)
        if params is not None:
            self.load_input(unflatten(params) if is_flat(params) else params)

        self.validate_fields()
        self._processed = True
        if self.verbose:
            self.dump()
            self.dump_validated()
        return self.validated

    @property
    def validated(self) -> bool:
        return self._processed and not self.has_errors()

    @property
    def errors(self) -> list[str]:
        return [error for field in self.iter_error_fields() for error in field.errors]

    @property
    def error_fields(self) -> list[Field]:
        return list(self.iter_error_fields())

    def clear(self) -> None:
        """Reset errors, values and raw input across the whole tree."""
        self.clear_errors()
        self.clear_values()
        self.clear_fifs()
        self._processed = False

    # -- inspection ------------------------------------------------------

    def dump(self) -> str:
        lines = [f"{type(self).__name__} '{self.name}'"]
        lines.extend(self.dump_fields(1))
        text = "\n".join(lines)
        logger.info("form structure:\n%s", text)
        return text


def build_form(
    declarations: Any,
    name: str = "form",
    config: BuilderConfig | None = None,
    registry: FieldTypeRegistry | None = None,
) -> Form:
    """
    Build a form tree from declarations.

    Params:
        declarations: Field declarations in any supported shape
        name: Name of the form
        config: Builder options
        registry: Type registry, the default registry when omitted

    Returns:
        The built form

    Raises:
        FieldTreeError: When the declarations cannot be built into a tree
    """
    return Form(name=name, field_list=declarations, config=config, registry=registry)
