"""
Core type definitions for fieldtree.

This module contains the field kind tag, the unset sentinel and the type
aliases shared by the builder, the containers and the fif bridge.
"""

from enum import Enum
from typing import Any


class FieldKind(Enum):
    """Structural variant of a field node."""

    SCALAR = "scalar"
    COMPOUND = "compound"
    REPEATABLE = "repeatable"


class _Unset:
    """Marker for per-run state that has not been set."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self):
        return self

    def __deepcopy__(self, memo):
        return self


UNSET: Any = _Unset()

ScalarValue = str | int | float | bool | None

FifDict = dict[str, Any]

NestedData = dict[str, Any] | list[Any]

AttributeDict = dict[str, Any]
