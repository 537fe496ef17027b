"""
Tests for the predicate registry.
"""
from typing import Dict

import pytest

from predicate import PredicateCategory, PredicateDefinition, PredicateRegistry, PredicateUsageError
from predicate.predicate_operand import OperandKind


class DummyCategory(PredicateCategory):
    """Minimal category used for registration tests."""

    def __init__(self, name: str = "dummy") -> None:
        super().__init__()
        self._name = name

    def get_name(self) -> str:
        return self._name

    def get_description(self) -> str:
        return "Dummy category"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        return dict([
            self._define("always", lambda: True, [], "Always true"),
            self._define("same", lambda a, b: a == b, [("a", OperandKind.STRING), ("b", OperandKind.STRING)], "Equal"),
        ])


class TestPredicateRegistryDefaults:
    """Test the default registry contents."""

    def test_default_categories(self, registry):
        """Test that every built-in category is registered in order."""
        assert registry.get_category_names() == [
            "file", "string", "int", "float", "semver", "env", "net", "system"
        ]

    def test_default_registry_is_frozen(self, registry):
        """Test that no categories can be added after start-up."""
        assert registry.is_frozen()

        with pytest.raises(ValueError, match="frozen"):
            registry.register_category(DummyCategory())

    def test_predicate_names_unique_within_category(self, registry):
        """Test that definitions are keyed by their own names."""
        for category in registry.get_categories():
            for name, definition in category.get_predicate_definitions().items():
                assert name == definition.name

    def test_every_predicate_has_description(self, registry):
        """Test that every predicate can be documented."""
        for category in registry.get_categories():
            for definition in category.get_predicate_definitions().values():
                assert definition.description
                assert len(definition.operand_kinds) == len(definition.operand_names)


class TestPredicateRegistryRegistration:
    """Test registering categories."""

    def test_register_and_get(self):
        """Test that a registered category can be retrieved by name."""
        registry = PredicateRegistry()
        category = DummyCategory()
        registry.register_category(category)

        assert registry.get_category("dummy") is category
        assert registry.get_category("missing") is None

    def test_duplicate_registration(self):
        """Test that a category name can only be registered once."""
        registry = PredicateRegistry()
        registry.register_category(DummyCategory())

        with pytest.raises(ValueError, match="already registered"):
            registry.register_category(DummyCategory())


class TestPredicateRegistryLookup:
    """Test resolving (category, predicate) pairs."""

    def test_lookup_success(self, registry):
        """Test resolving a known pair."""
        category, definition = registry.lookup("string", "equal")

        assert category.get_name() == "string"
        assert definition.name == "equal"

    def test_lookup_uses_category_definition(self, registry):
        """Test that lookup returns the same definition the category evaluates with."""
        category, definition = registry.lookup("int", "in-range")

        assert definition is category.get_predicate_definition("in-range")

    def test_unknown_category(self, registry):
        """Test that an unknown category lists the available categories."""
        with pytest.raises(PredicateUsageError) as exc_info:
            registry.lookup("nope", "exists")

        message = exc_info.value.message
        assert "Unknown category 'nope'" in message
        assert "file" in message
        assert "system" in message

    def test_unknown_predicate(self, registry):
        """Test that an unknown predicate lists the category's predicates."""
        with pytest.raises(PredicateUsageError) as exc_info:
            registry.lookup("file", "nope")

        message = exc_info.value.message
        assert "Unknown predicate 'nope' for category 'file'" in message
        assert "exists" in message
        assert "newer-than" in message
