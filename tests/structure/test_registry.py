"""
Tests for the field type registry.

This module tests registration, namespace-aware resolution of bare and
`+`-qualified type names, and the registration decorator.
"""

import pytest

from fieldtree.exceptions import FieldTypeError, UnresolvedFieldTypeError
from fieldtree.fields import Compound, Float, Integer, Text
from fieldtree.structure import BUILTIN_NAMESPACE, register_field_type


class Money(Float):
    currency: str = "EUR"


class TestRegistration:
    """Test adding types to a registry."""

    def test_builtins_are_registered(self, registry):
        """Test that built-in types resolve by bare name."""
        assert registry.resolve("Text") is Text
        assert registry.resolve("Compound") is Compound
        keys = {entry.key for entry in registry.registered_types()}
        assert f"{BUILTIN_NAMESPACE}::Integer" in keys

    def test_register_returns_entry(self, registry):
        """Test the frozen registry entry."""
        entry = registry.register("Money", Money, namespace="shop")
        assert entry.key == "shop::Money"
        assert entry.field_class is Money
        with pytest.raises(AttributeError):
            entry.name = "Cash"

    def test_register_rejects_non_field_classes(self, registry):
        """Test that only Field subclasses can be registered."""
        with pytest.raises(FieldTypeError, match="is not a Field subclass"):
            registry.register("Money", dict)

    def test_register_rejects_qualified_names(self, registry):
        """Test that names cannot carry the `+` marker."""
        with pytest.raises(FieldTypeError):
            registry.register("+Money", Money)

    def test_copy_is_independent(self, registry):
        """Test that copies do not share registrations."""
        copy = registry.copy()
        copy.register("Money", Money, namespace="shop")
        assert copy.is_registered("Money", namespace="shop")
        assert not registry.is_registered("Money", namespace="shop")


class TestResolution:
    """Test namespace-aware type resolution."""

    def test_configured_namespace_is_searched_first(self, registry):
        """Test that a namespaced type shadows the built-in one."""
        class ShopText(Text):
            pass

        registry.register("Text", ShopText, namespace="shop")
        assert registry.resolve("Text", namespace="shop") is ShopText
        assert registry.resolve("Text") is Text

    def test_bare_name_falls_back_to_builtins(self, registry):
        """Test fallback to the built-in namespace."""
        assert registry.resolve("Integer", namespace="shop") is Integer

    def test_qualified_name_is_a_full_key(self, registry):
        """Test that `+Type` looks up the key as written."""
        registry.register("shop::Money", Money)
        assert registry.resolve("+shop::Money") is Money

    def test_qualified_name_within_namespace(self, registry):
        """Test that `+Type` tries the configured namespace first."""
        registry.register("Money", Money, namespace="shop")
        assert registry.resolve("+Money", namespace="shop") is Money

    def test_qualified_name_skips_builtins(self, registry):
        """Test that `+Text` does not fall back to the built-in namespace."""
        with pytest.raises(UnresolvedFieldTypeError):
            registry.resolve("+Text")

    def test_non_string_type_is_unresolved(self, registry):
        """Test that values other than names and classes are rejected."""
        with pytest.raises(UnresolvedFieldTypeError) as exc_info:
            registry.resolve(5, field_name="x")
        assert exc_info.value.type_name == "5"
        assert exc_info.value.candidates == []

    def test_field_class_resolves_to_itself(self, registry):
        """Test passing a class instead of a name."""
        assert registry.resolve(Money) is Money

    def test_unresolved_lists_candidates(self, registry):
        """Test the error context of an unresolved type."""
        with pytest.raises(UnresolvedFieldTypeError) as exc_info:
            registry.resolve("Money", namespace="shop", field_name="price")
        error = exc_info.value
        assert error.field_name == "price"
        assert error.candidates == ["shop::Money", f"{BUILTIN_NAMESPACE}::Money"]
        assert "price" in str(error)

    def test_candidates(self, registry):
        """Test the ordered candidate keys."""
        assert registry.candidates("Money") == [f"{BUILTIN_NAMESPACE}::Money"]
        assert registry.candidates("+Money", "shop") == ["shop::Money", "Money"]


class TestRegisterDecorator:
    """Test the class decorator."""

    def test_decorator_registers_in_given_registry(self, registry):
        """Test registering through the decorator."""

        @register_field_type("Money", namespace="shop", registry=registry)
        class DecoratedMoney(Float):
            pass

        assert registry.resolve("Money", namespace="shop") is DecoratedMoney
