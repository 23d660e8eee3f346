"""
Path utilities for addressing fields in a field tree.

Paths are dot-joined sequences of simple field names. Numeric segments
address the positional elements of a repeatable field, so
`addresses.0.city` is the `city` field of the first `addresses` element.
"""

from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from fieldtree.core.container import FieldContainer
    from fieldtree.core.field import Field

PATH_SEPARATOR = "."


def split_segments(path: str) -> list[str]:
    """Split a path into its segments (`"a.0.b"` -> `["a", "0", "b"]`)."""
    if not path:
        return []
    return path.split(PATH_SEPARATOR)


def join_path(*segments: str | int) -> str:
    """Join segments into a path, skipping empty ones."""
    return PATH_SEPARATOR.join(str(s) for s in segments if s != "" and s is not None)


def path_depth(path: str) -> int:
    """Number of separators in a path; root-level names have depth 0."""
    return path.count(PATH_SEPARATOR)


def is_index_segment(segment: str) -> bool:
    """Check whether a segment addresses a repeatable element by position."""
    return segment.isascii() and segment.isdigit()


@dataclass
class PathComponents:
    """Result of splitting a path into its parent path and simple name."""

    parent_path: str
    simple_name: str
    has_parent: bool

    @classmethod
    def split_path(cls, path: str) -> "PathComponents":
        """
        Split a path at the last dot separator.

        Params:
            path: Path string to split (e.g., "employer.address.city")

        Returns:
            PathComponents with parent_path, simple_name, and has_parent flag

        Examples:
            "employer.address.city" -> PathComponents("employer.address", "city", True)
            "username" -> PathComponents("", "username", False)
        """
        if not path or PATH_SEPARATOR not in path:
            return cls(parent_path="", simple_name=path, has_parent=False)

        parent_path, simple_name = path.rsplit(PATH_SEPARATOR, 1)
        return cls(parent_path=parent_path, simple_name=simple_name, has_parent=True)


class PathResolver:
    """Walks a field tree segment by segment."""

    @staticmethod
    def resolve(start: "FieldContainer", path: str) -> "Field | None":
        """
        Resolve a dotted path relative to a container.

        Each segment is looked up among the immediate children of the result
        of the previous segment. Lookup stops with `None` as soon as a segment
        is missing or the current node cannot contain children.

        Params:
            start: Container the first segment is resolved against
            path: Dotted path, possibly with numeric element segments

        Returns:
            The field at the path, or None when it does not resolve
        """
        segments = split_segments(path)
        if not segments:
            return None

        node = start
        for segment in segments:
            if node is None or not node.can_contain_children():
                return None
            node = node.find_child(segment)
        return node
