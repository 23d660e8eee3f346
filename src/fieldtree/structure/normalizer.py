"""
Normalization of field declarations.

Field lists arrive in several shapes: ordered name/attribute pairs, dicts
keyed by name, bare name lists with a required flag, and the legacy split
dict with `required` / `optional` / `fields` / `auto_required` /
`auto_optional` keys. This module turns all of them into one ordered list of
`FieldDeclaration` records. It never touches a field tree.
"""

import re
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from inflection import underscore
from pydantic import BaseModel, ConfigDict, ValidationError, model_validator
from pydantic import Field as PydanticField

from fieldtree.core.path_utils import PathComponents, path_depth
from fieldtree.core.types import AttributeDict
from fieldtree.exceptions import DeclarationError

UPDATE_PREFIX = "+"

LEGACY_KEYS = ("required", "optional", "fields", "auto_required", "auto_optional")

TypeGuesser = Callable[[str], str]


class FieldDeclaration(BaseModel):
    """
    One canonical field declaration.

    `name` may be dotted (`employer.name`) and may carry a leading `+`
    marking an in-place update of an existing field. Attributes other than
    `name`, `type` and `required` are kept as extras and handed to the field
    class.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    name: str = PydanticField(min_length=1)
    type: Any = None
    required: bool | None = None

    @model_validator(mode="after")
    def _check_name(self) -> "FieldDeclaration":
        if not self.field_name:
            raise ValueError("name must not be empty")
        return self

    @property
    def is_update(self) -> bool:
        return self.name.startswith(UPDATE_PREFIX)

    @property
    def field_name(self) -> str:
        """Name without the update marker."""
        return self.name[1:] if self.is_update else self.name

    @property
    def depth(self) -> int:
        return path_depth(self.field_name)

    @property
    def components(self) -> PathComponents:
        return PathComponents.split_path(self.field_name)

    @property
    def parent_path(self) -> str:
        return self.components.parent_path

    @property
    def simple_name(self) -> str:
        return self.components.simple_name

    def attributes(self) -> AttributeDict:
        """Attributes for the field class, excluding name and type."""
        attrs: AttributeDict = dict(self.model_extra or {})
        if self.required is not None:
            attrs["required"] = self.required
        return attrs


def _make_declaration(
    name: Any, attrs: Any, required: bool | None = None
) -> FieldDeclaration:
    if isinstance(attrs, Mapping):
        data = dict(attrs)
    elif attrs is None:
        data = {}
    else:
        data = {"type": attrs}
    if name is not None:
        data["name"] = name
    if required is not None:
        data["required"] = required
    try:
        return FieldDeclaration.model_validate(data)
    except ValidationError as e:
        raise DeclarationError(data.get("name", data), str(e)) from e


def guess_field_type(name: str) -> str:
    """
    Guess a built-in field type from a field name.

    CamelCase and dashed names are normalized with `inflection.underscore`
    before matching simple conventions.

    Params:
        name: Field name, possibly dotted (only the last segment is used)

    Returns:
        Built-in type name, "Text" when nothing matches
    """
    simple_name = PathComponents.split_path(name.lstrip(UPDATE_PREFIX)).simple_name
    simple = underscore(simple_name)
    words = set(re.split(r"[_\W]+", simple))

    if "email" in words:
        return "Email"
    if "password" in words or "passwd" in words:
        return "Password"
    if simple.startswith(("is_", "has_", "can_")) or words & {"active", "enabled"}:
        return "Boolean"
    if simple.endswith(("_date", "_on")) or simple in ("date", "birthday"):
        return "Date"
    if words & {"count", "age", "quantity", "qty", "year"} or simple.endswith("_num"):
        return "Integer"
    if words & {"price", "amount", "rate", "total", "weight"}:
        return "Float"
    if words & {"description", "comment", "comments", "notes", "body", "bio"}:
        return "TextArea"
    return "Text"


def normalize_auto_fields(
    names: Iterable[str],
    required: bool | None,
    guess_type: TypeGuesser = guess_field_type,
) -> list[FieldDeclaration]:
    """Declarations for bare field names, typed by `guess_type`."""
    return [
        _make_declaration(name, {"type": guess_type(name)}, required)
        for name in names
    ]


def normalize_mapping_fields(
    fields: Mapping[str, Any], required: bool | None = None
) -> list[FieldDeclaration]:
    """Declarations for a dict keyed by name (attribute dicts or type strings)."""
    return [_make_declaration(name, attrs, required) for name, attrs in fields.items()]


def normalize_array_fields(fields: Iterable[Any]) -> list[FieldDeclaration]:
    """
    Declarations for an ordered list.

    Items are either canonical records (`FieldDeclaration` or dicts carrying a
    `name`) or a name followed by its attribute dict or type string.

    Raises:
        DeclarationError: On a trailing name without attributes, or an item
            that is neither a record nor a name
    """
    declarations = []
    items = list(fields)
    index = 0
    while index < len(items):
        item = items[index]
        if isinstance(item, FieldDeclaration):
            declarations.append(item)
            index += 1
        elif isinstance(item, Mapping):
            if "name" not in item:
                raise DeclarationError(item, "a field record must carry a name")
            declarations.append(_make_declaration(None, item))
            index += 1
        elif isinstance(item, str):
            if index + 1 >= len(items):
                raise DeclarationError(item, "name is missing its attributes")
            declarations.append(_make_declaration(item, items[index + 1]))
            index += 2
        else:
            raise DeclarationError(item, "expected a field name or a field record")
    return declarations


def is_legacy_mapping(fields: Mapping[str, Any]) -> bool:
    """True for the split dict keyed by `required`, `optional`, `fields`, ..."""
    if not fields or any(key not in LEGACY_KEYS for key in fields):
        return False
    for key, value in fields.items():
        if key in ("required", "optional") and not isinstance(value, Mapping):
            return False
        if key.startswith("auto_") and not isinstance(value, (list, tuple)):
            return False
        if key == "fields" and not isinstance(value, (Mapping, list, tuple)):
            return False
    return True


def normalize_field_list(
    declarations: Any,
    guess_type: TypeGuesser = guess_field_type,
    default_type: str = "Text",
) -> list[FieldDeclaration]:
    """
    Convert any supported declaration shape into canonical records.

    Params:
        declarations: List, name-keyed dict, legacy split dict, or None
        guess_type: Type guesser used for auto fields
        default_type: Type given to records that do not name one

    Returns:
        Ordered list of FieldDeclaration records, each with a type

    Raises:
        DeclarationError: If the shape is not recognized or a record is invalid
    """
    records = _collect_records(declarations, guess_type)
    return [
        record
        if record.type is not None
        else record.model_copy(update={"type": default_type})
        for record in records
    ]


def _collect_records(
    declarations: Any, guess_type: TypeGuesser
) -> list[FieldDeclaration]:
    if declarations is None:
        return []
    if isinstance(declarations, FieldDeclaration):
        return [declarations]
    if isinstance(declarations, (list, tuple)):
        return normalize_array_fields(declarations)
    if not isinstance(declarations, Mapping):
        raise DeclarationError(declarations, "unsupported field list format")
    if not is_legacy_mapping(declarations):
        return normalize_mapping_fields(declarations)

    records: list[FieldDeclaration] = []
    if "required" in declarations:
        records.extend(normalize_mapping_fields(declarations["required"], True))
    if "optional" in declarations:
        records.extend(normalize_mapping_fields(declarations["optional"], False))
    fields = declarations.get("fields")
    if isinstance(fields, Mapping):
        records.extend(normalize_mapping_fields(fields))
    elif fields is not None:
        records.extend(normalize_array_fields(fields))
    if "auto_required" in declarations:
        records.extend(
            normalize_auto_fields(declarations["auto_required"], True, guess_type)
        )
    if "auto_optional" in declarations:
        records.extend(
            normalize_auto_fields(declarations["auto_optional"], False, guess_type)
        )
    return records
