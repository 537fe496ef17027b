import os
from typing import Dict

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_operand import OperandKind


STRING = OperandKind.STRING


class EnvPredicateCategory(PredicateCategory):
    """Environment variable predicates, read from this process's environment."""

    def get_name(self) -> str:
        return "env"

    def get_description(self) -> str:
        return "Environment variable checks"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        return dict([
            self._define(
                "set", self._is_set, [("name", STRING)],
                "Variable is present in the environment, even if its value is empty"
            ),
            self._define(
                "equal-to", self._equal_to, [("name", STRING), ("value", STRING)],
                "Variable is set and its value equals the given value exactly"
            ),
        ])

    def _is_set(self, name: str) -> bool:
        return name in os.environ

    def _equal_to(self, name: str, value: str) -> bool:
        actual = os.environ.get(name)
        return actual is not None and actual == value
