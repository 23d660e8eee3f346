"""
Core fieldtree components.

This package provides the field node base class, the child-container mixin,
path utilities and shared type definitions.
"""

from fieldtree.core.container import FieldContainer
from fieldtree.core.field import Field
from fieldtree.core.path_utils import (
    PathComponents,
    PathResolver,
    is_index_segment,
    join_path,
    path_depth,
    split_segments,
)
from fieldtree.core.types import (
    UNSET,
    AttributeDict,
    FieldKind,
    FifDict,
    NestedData,
    ScalarValue,
)

__all__ = [
    "Field",
    "FieldContainer",
    "FieldKind",
    "PathComponents",
    "PathResolver",
    "UNSET",
    "AttributeDict",
    "FifDict",
    "NestedData",
    "ScalarValue",
    "is_index_segment",
    "join_path",
    "path_depth",
    "split_segments",
]
