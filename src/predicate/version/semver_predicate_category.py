from typing import Dict

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_operand import OperandKind


class SemverPredicateCategory(PredicateCategory):
    """
    Semantic version comparisons.

    Operands are parsed into ``semver.Version`` objects, so ordering follows SemVer
    2.0.0 precedence: major, minor and patch compare numerically in that order
    (``1.2.10`` is greater than ``1.2.9``), a pre-release sorts below its release,
    and build metadata is ignored.
    """

    def get_name(self) -> str:
        return "semver"

    def get_description(self) -> str:
        return "Semantic version comparisons"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        two = [("v1", OperandKind.SEMVER), ("v2", OperandKind.SEMVER)]

        return dict([
            self._define("eq", lambda a, b: a.compare(b) == 0, two, "v1 has the same precedence as v2"),
            self._define("ne", lambda a, b: a.compare(b) != 0, two, "v1 has different precedence from v2"),
            self._define("gt", lambda a, b: a.compare(b) > 0, two, "v1 is newer than v2"),
            self._define("ge", lambda a, b: a.compare(b) >= 0, two, "v1 is newer than or the same as v2"),
            self._define("lt", lambda a, b: a.compare(b) < 0, two, "v1 is older than v2"),
            self._define("le", lambda a, b: a.compare(b) <= 0, two, "v1 is older than or the same as v2"),
        ])
