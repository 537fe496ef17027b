from typing import Dict

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_operand import OperandKind


FLOAT = OperandKind.FLOAT


class FloatPredicateCategory(PredicateCategory):
    """
    Floating point comparisons.

    ``eq`` and ``ne`` compare values exactly, so ``0.1 + 0.2`` style results will not
    be equal to their decimal spelling.  Use ``approx-eq`` with an explicit tolerance
    when that matters.  Any comparison involving NaN is false, except ``ne``.
    """

    def get_name(self) -> str:
        return "float"

    def get_description(self) -> str:
        return "Floating point comparisons"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        two = [("num1", FLOAT), ("num2", FLOAT)]

        return dict([
            self._define("eq", lambda a, b: a == b, two, "num1 equals num2 exactly"),
            self._define("ne", lambda a, b: a != b, two, "num1 does not equal num2"),
            self._define("gt", lambda a, b: a > b, two, "num1 is greater than num2"),
            self._define("ge", lambda a, b: a >= b, two, "num1 is greater than or equal to num2"),
            self._define("lt", lambda a, b: a < b, two, "num1 is less than num2"),
            self._define("le", lambda a, b: a <= b, two, "num1 is less than or equal to num2"),
            self._define(
                "in-range", self._in_range, [("value", FLOAT), ("low", FLOAT), ("high", FLOAT)],
                "low <= value <= high"
            ),
            self._define(
                "approx-eq", self._approx_eq, [("a", FLOAT), ("b", FLOAT), ("tolerance", FLOAT)],
                "|a - b| <= tolerance"
            ),
        ])

    def _in_range(self, value: float, low: float, high: float) -> bool:
        return low <= value <= high

    def _approx_eq(self, a: float, b: float, tolerance: float) -> bool:
        return abs(a - b) <= tolerance
