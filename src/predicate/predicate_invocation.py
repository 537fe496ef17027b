"""Predicate invocation representation."""

from dataclasses import dataclass
from typing import List, Tuple


@dataclass(frozen=True)
class PredicateInvocation:
    """A request to evaluate one predicate, split out of the raw argument vector."""
    category: str
    predicate: str
    operands: Tuple[str, ...]

    @classmethod
    def from_argv(cls, argv: List[str]) -> 'PredicateInvocation | None':
        """
        Split an argument vector into category, predicate and operands.

        Args:
            argv: Arguments following any global options

        Returns:
            The invocation, or None if the category or predicate is missing
        """
        if len(argv) < 2:
            return None

        return cls(category=argv[0], predicate=argv[1], operands=tuple(argv[2:]))
