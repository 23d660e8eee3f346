"""
Built-in field types.

These classes are registered in the default type registry under the
`fieldtree.fields` namespace, so declarations can refer to them by bare name
(`"Integer"`, `"Repeatable"`).
"""

from fieldtree.fields.compound import Compound
from fieldtree.fields.repeatable import Repeatable
from fieldtree.fields.scalar import (
    Boolean,
    Date,
    Email,
    Float,
    Hidden,
    Integer,
    Password,
    Text,
    TextArea,
)

BUILTIN_FIELD_TYPES = {
    "Text": Text,
    "TextArea": TextArea,
    "Password": Password,
    "Hidden": Hidden,
    "Email": Email,
    "Integer": Integer,
    "Float": Float,
    "Boolean": Boolean,
    "Checkbox": Boolean,
    "Date": Date,
    "Compound": Compound,
    "Repeatable": Repeatable,
}

__all__ = [
    "BUILTIN_FIELD_TYPES",
    "Boolean",
    "Compound",
    "Date",
    "Email",
    "Float",
    "Hidden",
    "Integer",
    "Password",
    "Repeatable",
    "Text",
    "TextArea",
]
