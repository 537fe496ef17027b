import ipaddress
import re
import sys
from typing import Callable, Dict

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_exceptions import PredicateUsageError
from predicate.predicate_operand import OperandKind
from predicate.predicate_operand_parser import PredicateOperandParser


STRING = OperandKind.STRING


class StringPredicateCategory(PredicateCategory):
    """
    String predicates.

    Comparisons are exact unless the predicate name ends in ``-ci``, in which case both
    sides are case folded with ``str.casefold()`` so the result does not depend on the
    locale.  Regex predicates use ``re.search``: a match anywhere in the string counts,
    and anchoring is up to the caller.
    """

    UUID_PATTERN = re.compile(r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE)

    # Words that test(1) would read as operators if left unquoted
    SHELL_OPERATOR_WORDS = {"-a", "-o", "!", "(", ")"}

    def get_name(self) -> str:
        return "string"

    def get_description(self) -> str:
        return "String comparison, matching and classification"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        one = [("string", STRING)]
        two = [("string1", STRING), ("string2", STRING)]
        pattern = [("string", STRING), ("pattern", STRING)]
        needle = [("string", STRING), ("needle", STRING)]
        prefix = [("string", STRING), ("prefix", STRING)]
        suffix = [("string", STRING), ("suffix", STRING)]
        length = [("string", STRING), ("n", OperandKind.INTEGER)]

        return dict([
            self._define("equal", lambda a, b: a == b, two, "Strings are equal (=)"),
            self._define("not-equals", lambda a, b: a != b, two, "Strings are not equal (!=)"),
            self._define("empty", lambda s: s == "", one, "String is empty (-z)"),
            self._define("not-empty", lambda s: s != "", one, "String is not empty (-n)"),
            self._define("equal-ci", self._equal_ci, two, "Strings are equal ignoring case"),
            self._define(
                "matches-regex", self._regex_check(0), pattern,
                "Regular expression matches anywhere in the string; anchor with ^ and $"
            ),
            self._define(
                "matches-regex-ci", self._regex_check(re.IGNORECASE), pattern,
                "Regular expression matches anywhere in the string, ignoring case"
            ),
            self._define("contains", lambda s, n: n in s, needle, "String contains the substring"),
            self._define(
                "contains-ci", lambda s, n: n.casefold() in s.casefold(), needle,
                "String contains the substring, ignoring case"
            ),
            self._define("starts-with", lambda s, p: s.startswith(p), prefix, "String starts with the prefix"),
            self._define(
                "starts-with-ci", lambda s, p: s.casefold().startswith(p.casefold()), prefix,
                "String starts with the prefix, ignoring case"
            ),
            self._define("ends-with", lambda s, x: s.endswith(x), suffix, "String ends with the suffix"),
            self._define(
                "ends-with-ci", lambda s, x: s.casefold().endswith(x.casefold()), suffix,
                "String ends with the suffix, ignoring case"
            ),
            self._define("integer", PredicateOperandParser.is_integer, one, "String is a base-10 integer"),
            self._define("number", PredicateOperandParser.is_float, one, "String is an integer or decimal number"),
            self._define("uuid", self._is_uuid, one, "String is a UUID (8-4-4-4-12 hexadecimal)"),
            self._define("ipv4", self._is_ipv4, one, "String is a dotted-quad IPv4 address"),
            self._define("ascii", lambda s: s.isascii(), one, "String contains only ASCII characters"),
            self._define("len-gt", self._length_check(lambda size, n: size > n), length, "Length > n"),
            self._define("len-ge", self._length_check(lambda size, n: size >= n), length, "Length >= n"),
            self._define("len-lt", self._length_check(lambda size, n: size < n), length, "Length < n"),
            self._define("len-le", self._length_check(lambda size, n: size <= n), length, "Length <= n"),
            self._define("len-eq", self._length_check(lambda size, n: size == n), length, "Length == n"),
            self._define(
                "advise-quote", self._advise_quote, [("value", STRING)],
                "Value is safe to use unquoted; otherwise prints a quoting hint to stderr"
            ),
        ])

    def _equal_ci(self, string1: str, string2: str) -> bool:
        return string1.casefold() == string2.casefold()

    def _compile(self, pattern: str, flags: int) -> re.Pattern[str]:
        """
        Compile a caller-supplied regular expression.

        Raises:
            PredicateUsageError: If the pattern is not a valid regular expression
        """
        try:
            return re.compile(pattern, flags)

        except re.error as e:
            raise PredicateUsageError(f"Invalid regular expression '{pattern}': {str(e)}") from e

    def _regex_check(self, flags: int) -> Callable[[str, str], bool]:
        """Build a handler searching a string for a pattern."""
        def check(string: str, pattern: str) -> bool:
            return self._compile(pattern, flags).search(string) is not None

        return check

    def _is_uuid(self, string: str) -> bool:
        return self.UUID_PATTERN.fullmatch(string) is not None

    def _is_ipv4(self, string: str) -> bool:
        try:
            ipaddress.IPv4Address(string)

        except ValueError:
            return False

        return True

    def _length_check(self, compare: Callable[[int, int], bool]) -> Callable[[str, int], bool]:
        """Build a handler comparing a string's character count with n."""
        def check(string: str, n: int) -> bool:
            if n < 0:
                raise PredicateUsageError(f"'n' must not be negative, got {n}")

            return compare(len(string), n)

        return check

    def _advise_quote(self, value: str) -> bool:
        """
        Check whether a value could be misread by a shell if left unquoted.

        Empty values and values starting with ``-`` are suspicious, as are the words
        test(1) treats as operators.  A hint is written to stderr for suspicious values.
        """
        suspicious = value == "" or value.startswith("-") or value in self.SHELL_OPERATOR_WORDS
        if suspicious:
            print(
                f"Value '{value}' may need quoting. Consider using \"$VAR\" in your shell.",
                file=sys.stderr
            )

        return not suspicious
