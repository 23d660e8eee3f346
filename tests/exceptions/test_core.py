"""
Tests for exception classes.

This module tests that every exception keeps its context attributes and
composes a readable message.
"""

import pytest

from fieldtree.exceptions import (
    DeclarationError,
    FieldInstantiationError,
    FieldNotFoundError,
    FieldTreeError,
    FieldTypeError,
    InvalidParentTypeError,
    UnknownParentError,
    UnresolvedFieldTypeError,
)


class TestExceptionHierarchy:
    """Tests for the common base class."""

    @pytest.mark.parametrize(
        "error",
        [
            DeclarationError("x", "bad"),
            FieldInstantiationError("x", "bad"),
            FieldNotFoundError("x", "Form 'form'"),
            FieldTypeError("X"),
            InvalidParentTypeError("a.b", "a"),
            UnknownParentError("a.b", "a"),
            UnresolvedFieldTypeError("X", "x", []),
        ],
    )
    def test_all_errors_share_the_base(self, error):
        """Test that callers can catch every error with FieldTreeError."""
        assert isinstance(error, FieldTreeError)


class TestExceptionMessages:
    """Tests for message composition."""

    def test_unresolved_field_type(self):
        """Test the unresolved type message lists tried keys."""
        error = UnresolvedFieldTypeError("Money", "price", ["shop::Money"])
        assert str(error) == (
            "Could not resolve field type 'Money' for field 'price' "
            "(tried: shop::Money)"
        )

    def test_invalid_parent_type(self):
        """Test the invalid parent message."""
        error = InvalidParentTypeError("username.first", "username")
        assert error.parent_path == "username"
        assert str(error).endswith("is not a compound field")

    def test_unknown_parent(self):
        """Test the unknown parent message."""
        error = UnknownParentError("employer.name", "employer")
        assert str(error) == "The parent 'employer' of field 'employer.name' does not exist"

    def test_field_not_found(self):
        """Test the strict lookup message."""
        error = FieldNotFoundError("addresses.3.city", "Form 'form'")
        assert str(error) == "Field 'addresses.3.city' not found in 'Form 'form''"

    def test_declaration_error(self):
        """Test the declaration error keeps the declaration."""
        error = DeclarationError(["age"], "name is missing its attributes")
        assert error.declaration == ["age"]
        assert "name is missing its attributes" in str(error)

    def test_field_type_error(self):
        """Test the default and custom messages."""
        assert str(FieldTypeError("Money")) == "Field type 'Money' is not a Field subclass"
        error = FieldTypeError("+Money", "must not start with '+'")
        assert error.type_name == "+Money"
        assert str(error) == "Field type '+Money' must not start with '+'"
