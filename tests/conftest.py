"""
Shared test fixtures and utilities for the fieldtree test suite.
"""

import pytest

from fieldtree.structure import FieldTypeRegistry


@pytest.fixture
def registry():
    """Registry holding only the built-in types.

    Tests that register custom types use this fixture so the module-level
    default registry stays untouched.
    """
    return FieldTypeRegistry()


@pytest.fixture
def user_declarations():
    """Declarations for a user record with nested and repeated members.

    Children are declared before their parents on purpose.
    """
    return [
        "addresses.street", "Text",
        "addresses.city", "Text",
        "addresses.country", "Text",
        "addresses.id", "Integer",
        "employer.name", "Text",
        "employer.country", "Text",
        "tags.contains", "Text",
        "username", "Text",
        "tags", "Repeatable",
        "employer", "Compound",
        "addresses", "Repeatable",
    ]  # fmt: skip


@pytest.fixture
def user_data():
    """Nested data matching `user_declarations`."""
    return {
        "username": "Joe Blow",
        "tags": ["Perl", "Moose"],
        "employer": {"name": "TechTronix", "country": "Utopia"},
        "addresses": [
            {"street": "First St", "city": "Prime City", "country": "Utopia", "id": 0}
        ],
    }


@pytest.fixture
def user_fif():
    """Flat fill-in-form mapping of `user_data`."""
    return {
        "username": "Joe Blow",
        "tags.0": "Perl",
        "tags.1": "Moose",
        "employer.name": "TechTronix",
        "employer.country": "Utopia",
        "addresses.0.street": "First St",
        "addresses.0.city": "Prime City",
        "addresses.0.country": "Utopia",
        "addresses.0.id": 0,
    }
