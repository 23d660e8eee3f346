"""
fieldtree exception classes.

This package provides all exception types raised while building, addressing
and registering field trees.
"""

from fieldtree.exceptions.core import (
    DeclarationError,
    FieldInstantiationError,
    FieldNotFoundError,
    FieldTreeError,
    FieldTypeError,
    InvalidParentTypeError,
    UnknownParentError,
    UnresolvedFieldTypeError,
)

__all__ = [
    "FieldTreeError",
    "DeclarationError",
    "FieldInstantiationError",
    "FieldNotFoundError",
    "FieldTypeError",
    "InvalidParentTypeError",
    "UnknownParentError",
    "UnresolvedFieldTypeError",
]
