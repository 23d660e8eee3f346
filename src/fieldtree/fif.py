"""Conversion between nested data, flat "fif" mappings and field trees.

A fif ("fill-in-form") mapping has one entry per leaf, keyed by the dotted
path of the leaf: `{"employer.name": "TechTronix", "tags.0": "Perl"}`.
Numeric segments stand for list positions.

Laws:
    - `flatten(unflatten(m)) == m` for a well-formed flat mapping (consistent
      paths, contiguous list indices starting at 0).
    - `unflatten(flatten(d)) == d` for nested data without empty containers.
"""

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from fieldtree.core.path_utils import (
    PATH_SEPARATOR,
    is_index_segment,
    join_path,
)
from fieldtree.core.types import FieldKind, FifDict, NestedData

if TYPE_CHECKING:
    from fieldtree.core.container import FieldContainer


def flatten(data: Any, prefix: str = "") -> FifDict:
    """Flatten nested mappings and lists into a path -> scalar mapping.

    Params:
        data: Nested structure of mappings, lists and scalars.
        prefix: Path prepended to every key.

    Returns:
        Flat mapping in depth-first, source order. Empty mappings and lists
        contribute no entries.
    """
    flat: FifDict = {}
    if isinstance(data, Mapping):
        items = ((str(key), value) for key, value in data.items())
    elif isinstance(data, (list, tuple)):
        items = ((str(index), value) for index, value in enumerate(data))
    else:
        flat[prefix] = data
        return flat

    for key, value in items:
        flat.update(flatten(value, join_path(prefix, key)))
    return flat


class _Group(dict):
    """Entries collected under one first segment while unflattening."""


def _build(entries: dict[str, Any]) -> NestedData:
    """Rebuild one level from `{first_segment: value_or_subtree}`."""
    if entries and all(is_index_segment(key) for key in entries):
        return [entries[key] for key in sorted(entries, key=int)]
    return entries


def unflatten(flat: Mapping[str, Any]) -> NestedData:
    """Rebuild nested data from a flat path -> scalar mapping.

    Keys are grouped by their first segment and each group is rebuilt
    recursively. A level whose keys are all numeric becomes a list ordered by
    index; gaps are dropped, never padded.

    Params:
        flat: Mapping of dotted paths to scalar values.

    Returns:
        Nested dict (or list, when every top-level key is numeric).
    """
    groups: dict[str, Any] = {}
    for path, value in flat.items():
        head, sep, rest = str(path).partition(PATH_SEPARATOR)
        if not sep:
            groups[head] = value
            continue
        group = groups.get(head)
        if not isinstance(group, _Group):
            group = groups[head] = _Group()
        group[rest] = value

    rebuilt = {
        key: unflatten(value) if isinstance(value, _Group) else value
        for key, value in groups.items()
    }
    return _build(rebuilt)


def is_flat(data: Mapping[str, Any]) -> bool:
    """True when no value is itself a mapping or list."""
    return not any(isinstance(v, (Mapping, list, tuple)) for v in data.values())


def flatten_fields(container: "FieldContainer", prefix: str = "") -> FifDict:
    """Flatten the current fill-in-form values of a field tree.

    Walks children depth-first in declaration order. Compound and repeatable
    fields contribute only through their children (repeatable elements are
    named by index); scalar fields contribute their fif when they hold input
    or a value.

    Params:
        container: Form or container field to flatten.
        prefix: Path prepended to every key.

    Returns:
        Flat path -> scalar mapping.
    """
    flat: FifDict = {}
    for field in container.fields:
        path = join_path(prefix, field.name)
        if field.kind is FieldKind.SCALAR:
            if field.has_fif():
                flat[path] = field.fif
        else:
            flat.update(flatten_fields(field, path))
    return flat
