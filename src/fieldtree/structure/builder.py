"""
Tree building from field declarations.

`FieldTreeBuilder` turns normalized declaration records into field nodes.
Records are processed by ascending depth so that every parent exists before
its children are placed, whatever order they were declared in. Each record
then goes through create-or-update against its parent's child list, and a
final ordering pass stamps an `order` on every unordered node.
"""

import logging
from typing import Any

from fieldtree.core.container import FieldContainer
from fieldtree.core.field import Field
from fieldtree.core.path_utils import PathResolver
from fieldtree.exceptions import InvalidParentTypeError, UnknownParentError
from fieldtree.structure.config import BuilderConfig
from fieldtree.structure.normalizer import (
    FieldDeclaration,
    TypeGuesser,
    guess_field_type,
    normalize_field_list,
)
from fieldtree.structure.registry import FieldTypeRegistry, default_registry

logger = logging.getLogger(__name__)


class FieldTreeBuilder:
    """Builds and orders a field tree inside a container.

    The build context is either the form (root-level declarations get no
    parent) or a container field processing its own `field_list` (undotted
    declarations become its children).
    """

    def __init__(
        self,
        registry: FieldTypeRegistry | None = None,
        config: BuilderConfig | None = None,
        guess_type: TypeGuesser = guess_field_type,
    ):
        self.registry = registry or default_registry
        self.config = config or BuilderConfig()
        self.guess_type = guess_type

    def build(self, context: FieldContainer, *declaration_sets: Any) -> FieldContainer:
        """
        Add every declaration set to the context, then order the result.

        Params:
            context: Form or container field receiving the declarations
            declaration_sets: Declarations in any shape `normalize_field_list`
                accepts; later sets may patch or replace earlier fields

        Returns:
            The populated context

        Raises:
            FieldTreeError: Any declaration, type or placement error; the
                context may be partially populated
        """
        for declarations in declaration_sets:
            self.add_fields(context, declarations)
        self.assign_order(context)
        return context

    def add_fields(self, context: FieldContainer, declarations: Any) -> None:
        """Normalize declarations and place them, shallowest names first."""
        records = normalize_field_list(
            declarations,
            guess_type=self.guess_type,
            default_type=self.config.default_type,
        )
        # sorted() is stable, so declaration order holds within a depth
        for record in sorted(records, key=lambda r: r.depth):
            self.make_field(context, record)

    def make_field(self, context: FieldContainer, record: FieldDeclaration) -> Field:
        """
        Place one declaration record in the tree.

        Params:
            context: The build context the record's name is relative to
            record: Normalized declaration

        Returns:
            The created, replaced or updated field

        Raises:
            UnresolvedFieldTypeError: When the declared type is not registered
            UnknownParentError: When a dotted name's parent does not exist
            InvalidParentTypeError: When that parent cannot hold children
            FieldInstantiationError: When the attributes are rejected
        """
        field_class = self.registry.resolve(
            record.type,
            namespace=self.config.field_namespace,
            field_name=record.field_name,
        )
        components = record.components
        container = self._find_container(context, record, components)
        return self._update_or_create(
            container, components.simple_name, field_class, record
        )

    def _find_container(self, context, record, components) -> FieldContainer:
        """Container for a record; dotted parent paths resolve from the build context."""
        simple_name = components.simple_name
        if components.has_parent:
            parent = PathResolver.resolve(context, components.parent_path)
            if parent is None:
                raise UnknownParentError(record.field_name, components.parent_path)
            if not parent.can_contain_children():
                raise InvalidParentTypeError(record.field_name, parent.full_path)
            return parent.declaration_container(simple_name)
        if isinstance(context, Field):
            return context.declaration_container(simple_name)
        return context

    def _update_or_create(
        self,
        container: FieldContainer,
        name: str,
        field_class: type[Field],
        record: FieldDeclaration,
    ) -> Field:
        attrs = record.attributes()
        index = container.field_index(name)

        if index is not None and record.is_update:
            existing = container.find_child(name)
            applied = existing.update_attributes(attrs)
            logger.debug("Updated field %s: %s", existing.full_path, applied)
            return existing

        field = field_class.new({**attrs, "name": name})
        if index is None:
            container.add_field(field)
            logger.debug("Created field %s (%s)", field.full_path, field_class.__name__)
        else:
            container.set_field_at(index, field)
            logger.debug("Replaced field %s (%s)", field.full_path, field_class.__name__)

        if field.can_contain_children() and getattr(field, "field_list", None):
            self.add_fields(field, field.field_list)
            if not self.config.order_recursively:
                self.assign_order(field)
        return field

    def assign_order(self, container: FieldContainer) -> None:
        """
        Give every unordered child an order after the highest explicit one.

        Unordered children are numbered `max_order + 1, + 2, ...` in list
        order, where `max_order` is the highest order already set (0 when
        none is). With `order_recursively` the pass continues into every
        nested sibling set.
        """
        fields = container.fields
        max_order = max(
            (field.order for field in fields if field.order is not None), default=0
        )
        for field in fields:
            if field.order is None:
                max_order += 1
                field.order = max_order

        if not self.config.order_recursively:
            return
        for field in fields:
            for scope in field.ordering_scopes():
                self.assign_order(scope)
