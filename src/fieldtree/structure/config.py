"""
Builder configuration.

Settings that shape how declarations are turned into a field tree. A `Form`
builds its configuration from its `field_name_space` class attribute unless
one is passed explicitly.
"""

from pydantic import BaseModel, ConfigDict, Field


class BuilderConfig(BaseModel):
    """Options for `FieldTreeBuilder`.

    Params:
        field_namespace: Registry namespace searched before the built-in one
            for bare type names, and used to qualify `+Type` names.
        default_type: Type given to declarations that do not name one.
        order_recursively: Run the ordering pass over every nested sibling set
            after the build. When False only the build context's immediate
            children are ordered.
    """

    model_config = ConfigDict(frozen=True)

    field_namespace: str | None = None
    default_type: str = Field(default="Text", min_length=1)
    order_recursively: bool = True
