"""
fieldtree - Build hierarchical form field trees from declarations

fieldtree turns flat, nested or inherited field declarations into a tree of
typed field nodes and converts between that tree, nested data and flat
"fill-in-form" mappings.
"""

from importlib.metadata import version

from fieldtree.core import Field, FieldContainer
from fieldtree.fif import flatten, unflatten
from fieldtree.structure import (
    BuilderConfig,
    Form,
    build_form,
    register_field_type,
)

__version__ = version("fieldtree")

__all__ = [
    "__version__",
    "BuilderConfig",
    "Field",
    "FieldContainer",
    "Form",
    "build_form",
    "flatten",
    "register_field_type",
    "unflatten",
]
