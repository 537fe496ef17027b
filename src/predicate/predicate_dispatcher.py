"""Top-level dispatch from an argument vector to an exit code."""

import logging
import sys
from typing import Sequence, TextIO

from predicate.predicate_exceptions import PredicateError, PredicateUsageError
from predicate.predicate_invocation import PredicateInvocation
from predicate.predicate_registry import PredicateRegistry


class PredicateDispatcher:
    """
    Resolves an invocation against the registry and reduces the outcome to an exit code.

    True maps to 0 and false to 1.  Errors are always non-zero: usage errors map to 2
    and unexpected runtime faults to 3.  Callers that only test for zero cannot tell a
    false predicate from an error; the message written to the error stream is what
    distinguishes them.
    """

    EXIT_TRUE = 0
    EXIT_FALSE = 1
    EXIT_USAGE_ERROR = 2
    EXIT_RUNTIME_ERROR = 3

    def __init__(self, registry: PredicateRegistry, error_stream: TextIO | None = None) -> None:
        """
        Initialize the dispatcher.

        Args:
            registry: Registry holding the available categories
            error_stream: Stream for diagnostics, defaults to sys.stderr at write time
        """
        self._registry = registry
        self._error_stream = error_stream
        self._logger = logging.getLogger("PredicateDispatcher")

    def evaluate(self, invocation: PredicateInvocation) -> bool:
        """
        Evaluate a single invocation.

        Args:
            invocation: Category, predicate and raw operands

        Returns:
            Truth value of the predicate

        Raises:
            PredicateUsageError: If the invocation is malformed
            PredicateRuntimeError: If evaluation fails unexpectedly
        """
        category, definition = self._registry.lookup(invocation.category, invocation.predicate)
        return category.evaluate(definition.name, invocation.operands)

    def dispatch(self, argv: Sequence[str]) -> int:
        """
        Evaluate the predicate described by an argument vector.

        Args:
            argv: Arguments of the form <category> <predicate> <operand>...

        Returns:
            Process exit code
        """
        try:
            invocation = self._parse_invocation(argv)
            result = self.evaluate(invocation)

        except PredicateUsageError as e:
            self._logger.debug("Usage error: %s", e.message)
            self._report(f"is: {e.message}")
            return self.EXIT_USAGE_ERROR

        except PredicateError as e:
            self._report(f"is: error: {e.message}")
            return self.EXIT_RUNTIME_ERROR

        return self.EXIT_TRUE if result else self.EXIT_FALSE

    def _parse_invocation(self, argv: Sequence[str]) -> PredicateInvocation:
        """
        Split the argument vector, reporting what is missing as a usage error.

        Raises:
            PredicateUsageError: If the category or predicate is missing
        """
        invocation = PredicateInvocation.from_argv(list(argv))
        if invocation is not None:
            return invocation

        if not argv:
            available_categories = ", ".join(self._registry.get_category_names())
            raise PredicateUsageError(
                f"Missing category. Usage: is <category> <predicate> <operand>... "
                f"Available categories: {available_categories}"
            )

        # The predicate is missing; still report an unknown category first.
        category = self._registry.get_category(argv[0])
        if category is None:
            available_categories = ", ".join(self._registry.get_category_names())
            raise PredicateUsageError(
                f"Unknown category '{argv[0]}'. Available categories: {available_categories}"
            )

        available_predicates = ", ".join(category.get_predicate_names())
        raise PredicateUsageError(
            f"Missing predicate for category '{argv[0]}'. Available predicates: {available_predicates}"
        )

    def _report(self, message: str) -> None:
        """Write a diagnostic line to the error stream."""
        stream = self._error_stream if self._error_stream is not None else sys.stderr
        print(message, file=stream)
