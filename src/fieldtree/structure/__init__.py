"""
fieldtree structure components.

This package provides declaration normalization, the type registry, the tree
builder and the form that roots a field tree.
"""

from fieldtree.structure.builder import FieldTreeBuilder
from fieldtree.structure.config import BuilderConfig
from fieldtree.structure.form import Form, build_form
from fieldtree.structure.normalizer import (
    FieldDeclaration,
    guess_field_type,
    normalize_auto_fields,
    normalize_field_list,
)
from fieldtree.structure.registry import (
    BUILTIN_NAMESPACE,
    FieldTypeRegistry,
    RegisteredType,
    default_registry,
    register_field_type,
)

__all__ = [
    "BUILTIN_NAMESPACE",
    "BuilderConfig",
    "FieldDeclaration",
    "FieldTreeBuilder",
    "FieldTypeRegistry",
    "Form",
    "RegisteredType",
    "build_form",
    "default_registry",
    "guess_field_type",
    "normalize_auto_fields",
    "normalize_field_list",
    "register_field_type",
]
