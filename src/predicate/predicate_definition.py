"""Predicate definition."""

from dataclasses import dataclass
from typing import Callable, Tuple

from predicate.predicate_operand import OperandKind


@dataclass(frozen=True)
class PredicateDefinition:
    """Definition of a single predicate within a category."""
    name: str
    handler: Callable[..., bool]
    operand_kinds: Tuple[OperandKind, ...]
    operand_names: Tuple[str, ...]
    description: str
    optional_operands: int = 0

    @property
    def max_arity(self) -> int:
        """Largest number of operands the predicate accepts."""
        return len(self.operand_kinds)

    @property
    def min_arity(self) -> int:
        """Smallest number of operands the predicate accepts."""
        return len(self.operand_kinds) - self.optional_operands

    def signature(self) -> str:
        """
        Build a human-readable signature such as ``in-range <value> <low> <high>``.

        Returns:
            Signature string with optional operands shown in square brackets
        """
        parts = [self.name]
        for index, operand_name in enumerate(self.operand_names):
            if index >= self.min_arity:
                parts.append(f"[{operand_name}]")

            else:
                parts.append(f"<{operand_name}>")

        return " ".join(parts)
