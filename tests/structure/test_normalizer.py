"""
Tests for declaration normalization.

This module tests every accepted declaration shape, the legacy split
mapping order, auto fields with guessed types, and the error cases.
"""

import pytest

from fieldtree.exceptions import DeclarationError
from fieldtree.fields import Integer
from fieldtree.structure import (
    FieldDeclaration,
    guess_field_type,
    normalize_auto_fields,
    normalize_field_list,
)


def names(records):
    return [record.name for record in records]


class TestFieldDeclaration:
    """Test the canonical declaration record."""

    def test_extras_become_attributes(self):
        """Test that unknown keys are kept as field attributes."""
        record = FieldDeclaration(name="code", type="Text", maxlength=3, required=True)
        assert record.attributes() == {"maxlength": 3, "required": True}

    def test_required_is_omitted_when_unset(self):
        """Test that an unset required flag is not forwarded."""
        assert FieldDeclaration(name="code").attributes() == {}

    def test_update_marker(self):
        """Test the `+` prefix handling."""
        record = FieldDeclaration(name="+employer.name")
        assert record.is_update
        assert record.field_name == "employer.name"
        assert record.depth == 1
        assert record.parent_path == "employer"
        assert record.simple_name == "name"

    def test_bare_update_marker_is_rejected(self):
        """Test that `+` alone is not a name."""
        with pytest.raises(ValueError):
            FieldDeclaration(name="+")


class TestNormalizeShapes:
    """Test the supported declaration shapes."""

    def test_none_is_empty(self):
        """Test that no declarations produce no records."""
        assert normalize_field_list(None) == []

    def test_ordered_pairs(self):
        """Test name/attribute pairs with dicts and bare type strings."""
        records = normalize_field_list(
            ["username", {"type": "Text", "required": True}, "age", "Integer"]
        )
        assert names(records) == ["username", "age"]
        assert records[0].required is True
        assert records[1].type == "Integer"

    def test_canonical_records_in_list(self):
        """Test dicts carrying a name mixed with pairs."""
        records = normalize_field_list(
            [{"name": "age", "type": "Integer"}, "city", {}, FieldDeclaration(name="zip")]
        )
        assert names(records) == ["age", "city", "zip"]
        assert [r.type for r in records] == ["Integer", "Text", "Text"]

    def test_mapping_by_name(self):
        """Test a dict keyed by field name."""
        records = normalize_field_list({"username": "Text", "age": {"type": Integer}})
        assert names(records) == ["username", "age"]
        assert records[1].type is Integer

    def test_default_type(self):
        """Test the configurable default type."""
        records = normalize_field_list(["notes", {}], default_type="TextArea")
        assert records[0].type == "TextArea"

    def test_legacy_split_mapping_order(self):
        """Test that legacy keys are processed in their fixed order."""
        records = normalize_field_list(
            {
                "auto_optional": ["nickname"],
                "fields": ["city", "Text"],
                "optional": {"age": "Integer"},
                "auto_required": ["email"],
                "required": {"username": "Text"},
            }
        )
        assert names(records) == ["username", "age", "city", "email", "nickname"]
        assert [r.required for r in records] == [True, False, None, True, False]
        assert records[3].type == "Email"

    def test_mapping_with_legacy_key_name_is_not_legacy(self):
        """Test a field named like a legacy key with a bare type string."""
        records = normalize_field_list({"required": "Boolean"})
        assert names(records) == ["required"]
        assert records[0].type == "Boolean"

    def test_auto_fields_use_the_guesser(self):
        """Test bare names typed by a custom guesser."""
        records = normalize_auto_fields(["a", "b"], True, guess_type=lambda n: "Integer")
        assert [r.type for r in records] == ["Integer", "Integer"]
        assert all(r.required for r in records)


class TestNormalizeErrors:
    """Test rejected declarations."""

    def test_trailing_name_without_attributes(self):
        """Test a dangling name at the end of a pair list."""
        with pytest.raises(DeclarationError, match="missing its attributes"):
            normalize_field_list(["username", "Text", "age"])

    def test_record_without_name(self):
        """Test that a record must carry a name."""
        with pytest.raises(DeclarationError):
            normalize_field_list([{"type": "Text"}])

    def test_empty_name(self):
        """Test that empty names are rejected."""
        with pytest.raises(DeclarationError):
            normalize_field_list({"": "Text"})

    def test_unsupported_shape(self):
        """Test a declaration set of the wrong type."""
        with pytest.raises(DeclarationError, match="unsupported"):
            normalize_field_list("username")

    def test_unsupported_list_item(self):
        """Test a list item that is neither a name nor a record."""
        with pytest.raises(DeclarationError):
            normalize_field_list([42, "Text"])


class TestGuessFieldType:
    """Test type guessing from field names."""

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("email", "Email"),
            ("workEmail", "Email"),
            ("password", "Password"),
            ("is_active", "Boolean"),
            ("hasPets", "Boolean"),
            ("start_date", "Date"),
            ("created_on", "Date"),
            ("age", "Integer"),
            ("item_count", "Integer"),
            ("unit_price", "Float"),
            ("description", "TextArea"),
            ("employer.name", "Text"),
            ("+username", "Text"),
        ],
    )
    def test_guess(self, name, expected):
        """Test conventions applied to the last name segment."""
        assert guess_field_type(name) == expected
