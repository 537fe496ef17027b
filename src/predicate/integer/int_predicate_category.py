from typing import Dict

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_operand import OperandKind


INTEGER = OperandKind.INTEGER


class IntPredicateCategory(PredicateCategory):
    """Integer comparisons, equivalent to the numeric operators of test(1)."""

    def get_name(self) -> str:
        return "int"

    def get_description(self) -> str:
        return "Integer comparisons"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        two = [("num1", INTEGER), ("num2", INTEGER)]
        sign = [("n", OperandKind.FLOAT)]

        return dict([
            self._define("eq", lambda a, b: a == b, two, "num1 equals num2 (-eq)"),
            self._define("ne", lambda a, b: a != b, two, "num1 does not equal num2 (-ne)"),
            self._define("gt", lambda a, b: a > b, two, "num1 is greater than num2 (-gt)"),
            self._define("ge", lambda a, b: a >= b, two, "num1 is greater than or equal to num2 (-ge)"),
            self._define("lt", lambda a, b: a < b, two, "num1 is less than num2 (-lt)"),
            self._define("le", lambda a, b: a <= b, two, "num1 is less than or equal to num2 (-le)"),
            self._define(
                "in-range", self._in_range, [("value", INTEGER), ("low", INTEGER), ("high", INTEGER)],
                "low <= value <= high"
            ),
            self._define("positive", lambda n: n > 0, sign, "Number is greater than zero"),
            self._define("negative", lambda n: n < 0, sign, "Number is less than zero"),
        ])

    def _in_range(self, value: int, low: int, high: int) -> bool:
        return low <= value <= high
