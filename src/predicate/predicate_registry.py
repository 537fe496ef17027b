"""Registry of predicate categories."""

import logging
from typing import Dict, List, Tuple

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_exceptions import PredicateUsageError
from predicate.predicate_settings import PredicateSettings
from predicate.env.env_predicate_category import EnvPredicateCategory
from predicate.file.file_predicate_category import FilePredicateCategory
from predicate.floating.float_predicate_category import FloatPredicateCategory
from predicate.integer.int_predicate_category import IntPredicateCategory
from predicate.net.net_predicate_category import NetPredicateCategory
from predicate.string.string_predicate_category import StringPredicateCategory
from predicate.system.system_predicate_category import SystemPredicateCategory
from predicate.version.semver_predicate_category import SemverPredicateCategory


class PredicateRegistry:
    """
    Registry mapping category names to their predicate categories.

    The registry is populated once at start-up.  After ``freeze()`` no further
    categories may be registered, which keeps the set of predicates closed for the
    lifetime of the process.
    """

    def __init__(self) -> None:
        self._categories: Dict[str, PredicateCategory] = {}
        self._frozen = False
        self._logger = logging.getLogger("PredicateRegistry")

    @classmethod
    def create_default(cls, settings: PredicateSettings | None = None) -> 'PredicateRegistry':
        """
        Create a frozen registry holding the built-in categories.

        Args:
            settings: Evaluation settings, defaults used if None

        Returns:
            Populated, frozen registry
        """
        if settings is None:
            settings = PredicateSettings.create_default()

        registry = cls()
        registry.register_category(FilePredicateCategory())
        registry.register_category(StringPredicateCategory())
        registry.register_category(IntPredicateCategory())
        registry.register_category(FloatPredicateCategory())
        registry.register_category(SemverPredicateCategory())
        registry.register_category(EnvPredicateCategory())
        registry.register_category(NetPredicateCategory(settings))
        registry.register_category(SystemPredicateCategory())
        registry.freeze()
        return registry

    def register_category(self, category: PredicateCategory) -> None:
        """
        Register a predicate category.

        Args:
            category: The category to register

        Raises:
            ValueError: If the registry is frozen or the category name is already registered
        """
        name = category.get_name()

        if self._frozen:
            raise ValueError(f"Cannot register category '{name}': registry is frozen")

        if name in self._categories:
            raise ValueError(f"Category '{name}' is already registered")

        self._categories[name] = category
        self._logger.debug("Registered category: %s (%d predicates)", name, len(category.get_predicate_names()))

    def freeze(self) -> None:
        """Prevent any further registrations."""
        self._frozen = True

    def is_frozen(self) -> bool:
        """Check whether the registry has been frozen."""
        return self._frozen

    def get_category(self, name: str) -> PredicateCategory | None:
        """
        Get a registered category by its name.

        Args:
            name: Name of the category to retrieve

        Returns:
            The registered category, or None if not found
        """
        return self._categories.get(name)

    def get_category_names(self) -> List[str]:
        """Get names of all registered categories."""
        return list(self._categories.keys())

    def get_categories(self) -> List[PredicateCategory]:
        """Get all registered categories, in registration order."""
        return list(self._categories.values())

    def lookup(self, category_name: str, predicate_name: str) -> Tuple[PredicateCategory, PredicateDefinition]:
        """
        Resolve a (category, predicate) pair.

        Args:
            category_name: Category name from the invocation
            predicate_name: Predicate name from the invocation

        Returns:
            Tuple of the category and the predicate definition

        Raises:
            PredicateUsageError: If either name is unknown
        """
        category = self.get_category(category_name)
        if category is None:
            available_categories = ", ".join(self.get_category_names())
            raise PredicateUsageError(
                f"Unknown category '{category_name}'. Available categories: {available_categories}"
            )

        return category, category.get_predicate_definition(predicate_name)
