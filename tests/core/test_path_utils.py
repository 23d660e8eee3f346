"""
Tests for path utilities and the segment-walking path resolver.
"""

import pytest

from fieldtree.core import (
    PathComponents,
    PathResolver,
    is_index_segment,
    join_path,
    path_depth,
    split_segments,
)
from fieldtree.structure import build_form


class TestPathHelpers:
    """Test the string-level path helpers."""

    def test_split_segments(self):
        """Test splitting a path into segments."""
        assert split_segments("addresses.0.city") == ["addresses", "0", "city"]
        assert split_segments("username") == ["username"]
        assert split_segments("") == []

    def test_join_path_skips_empty_segments(self):
        """Test joining segments, including integer indices."""
        assert join_path("addresses", 0, "city") == "addresses.0.city"
        assert join_path("", "username") == "username"
        assert join_path() == ""

    def test_path_depth(self):
        """Test that depth counts separators."""
        assert path_depth("username") == 0
        assert path_depth("employer.name") == 1
        assert path_depth("addresses.0.city") == 2

    def test_is_index_segment(self):
        """Test recognizing positional segments."""
        assert is_index_segment("0")
        assert is_index_segment("12")
        assert not is_index_segment("city")
        assert not is_index_segment("-1")
        assert not is_index_segment("\u00b2")
        assert not is_index_segment("\u0663")


class TestPathComponents:
    """Test splitting a path at its last separator."""

    @pytest.mark.parametrize(
        "path,parent_path,simple_name,has_parent",
        [
            ("employer.address.city", "employer.address", "city", True),
            ("employer.name", "employer", "name", True),
            ("username", "", "username", False),
        ],
    )
    def test_split_path(self, path, parent_path, simple_name, has_parent):
        """Test parent path, simple name and parent flag."""
        components = PathComponents.split_path(path)
        assert components.parent_path == parent_path
        assert components.simple_name == simple_name
        assert components.has_parent is has_parent


class TestPathResolver:
    """Test resolving dotted paths against a built tree."""

    @pytest.fixture
    def form(self, user_declarations, user_data):
        form = build_form(user_declarations)
        form.load_values(user_data)
        return form

    def test_resolve_nested_compound_member(self, form):
        """Test resolving a compound child."""
        field = PathResolver.resolve(form, "employer.country")
        assert field is not None
        assert field.value == "Utopia"

    def test_resolve_repeatable_element(self, form):
        """Test that numeric segments select repeatable elements."""
        field = PathResolver.resolve(form, "addresses.0.city")
        assert field.value == "Prime City"
        assert field.full_path == "addresses.0.city"

    def test_missing_segment_returns_none(self, form):
        """Test that an unknown segment stops resolution."""
        assert PathResolver.resolve(form, "employer.phone") is None
        assert PathResolver.resolve(form, "addresses.3.city") is None

    def test_walking_past_a_scalar_returns_none(self, form):
        """Test that scalars cannot be descended into."""
        assert PathResolver.resolve(form, "username.first") is None

    def test_empty_path_returns_none(self, form):
        """Test that an empty path resolves to nothing."""
        assert PathResolver.resolve(form, "") is None
