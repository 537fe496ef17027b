"""
Tests for dispatching argument vectors to exit codes.
"""
import io
from typing import Dict

import pytest

from predicate import (
    PredicateCategory, PredicateDefinition, PredicateDispatcher, PredicateInvocation, PredicateRegistry
)


class FailingCategory(PredicateCategory):
    """Category whose only predicate fails unexpectedly."""

    def get_name(self) -> str:
        return "failing"

    def get_description(self) -> str:
        return "Always fails"

    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        return dict([self._define("boom", self._boom, [], "Raises")])

    def _boom(self) -> bool:
        raise OSError("device not ready")


class TestPredicateInvocation:
    """Test splitting argument vectors."""

    def test_from_argv(self):
        """Test that operands are kept verbatim."""
        invocation = PredicateInvocation.from_argv(["string", "equal", "-a", ""])

        assert invocation.category == "string"
        assert invocation.predicate == "equal"
        assert invocation.operands == ("-a", "")

    @pytest.mark.parametrize("argv", [[], ["file"]])
    def test_incomplete(self, argv):
        """Test that a missing category or predicate gives no invocation."""
        assert PredicateInvocation.from_argv(argv) is None


class TestPredicateDispatcherExitCodes:
    """Test the mapping from outcomes to exit codes."""

    def test_true(self, dispatcher, error_stream):
        """Test that a true predicate exits 0 silently."""
        assert dispatcher.dispatch(["string", "equal", "a", "a"]) == PredicateDispatcher.EXIT_TRUE
        assert error_stream.getvalue() == ""

    def test_false(self, dispatcher, error_stream):
        """Test that a false predicate exits 1 silently."""
        assert dispatcher.dispatch(["string", "equal", "a", "b"]) == PredicateDispatcher.EXIT_FALSE
        assert error_stream.getvalue() == ""

    def test_unknown_category(self, dispatcher, error_stream):
        """Test that an unknown category is a usage error."""
        assert dispatcher.dispatch(["bogus", "exists", "x"]) == PredicateDispatcher.EXIT_USAGE_ERROR
        assert "Unknown category 'bogus'" in error_stream.getvalue()

    def test_unknown_predicate(self, dispatcher, error_stream):
        """Test that an unknown predicate is a usage error."""
        assert dispatcher.dispatch(["file", "bogus", "x"]) == PredicateDispatcher.EXIT_USAGE_ERROR
        assert "Unknown predicate 'bogus'" in error_stream.getvalue()

    def test_missing_category(self, dispatcher, error_stream):
        """Test that an empty invocation lists categories."""
        assert dispatcher.dispatch([]) == PredicateDispatcher.EXIT_USAGE_ERROR

        output = error_stream.getvalue()
        assert "Missing category" in output
        assert "semver" in output

    def test_missing_predicate(self, dispatcher, error_stream):
        """Test that a category without predicate lists its predicates."""
        assert dispatcher.dispatch(["int"]) == PredicateDispatcher.EXIT_USAGE_ERROR

        output = error_stream.getvalue()
        assert "Missing predicate for category 'int'" in output
        assert "in-range" in output

    def test_missing_predicate_unknown_category(self, dispatcher, error_stream):
        """Test that an unknown lone category is reported as unknown."""
        assert dispatcher.dispatch(["bogus"]) == PredicateDispatcher.EXIT_USAGE_ERROR
        assert "Unknown category 'bogus'" in error_stream.getvalue()

    def test_wrong_arity(self, dispatcher, error_stream):
        """Test that a wrong operand count is a usage error."""
        assert dispatcher.dispatch(["int", "eq", "1"]) == PredicateDispatcher.EXIT_USAGE_ERROR
        assert "Usage: int eq <num1> <num2>" in error_stream.getvalue()

    def test_bad_operand(self, dispatcher, error_stream):
        """Test that a malformed operand is a usage error, never a false answer."""
        assert dispatcher.dispatch(["int", "gt", "abc", "1"]) == PredicateDispatcher.EXIT_USAGE_ERROR
        assert "operand 1 (num1)" in error_stream.getvalue()

    def test_runtime_error(self):
        """Test that unexpected failures exit with the runtime error code."""
        registry = PredicateRegistry()
        registry.register_category(FailingCategory())
        stream = io.StringIO()

        code = PredicateDispatcher(registry, error_stream=stream).dispatch(["failing", "boom"])

        assert code == PredicateDispatcher.EXIT_RUNTIME_ERROR
        assert stream.getvalue().startswith("is: error:")
        assert "device not ready" in stream.getvalue()

    def test_errors_never_exit_zero(self, dispatcher):
        """Test that every error outcome is non-zero."""
        for argv in [[], ["file"], ["x", "y"], ["int", "eq"], ["float", "lt", "1", "one"]]:
            assert dispatcher.dispatch(argv) != PredicateDispatcher.EXIT_TRUE


class TestPredicateDispatcherEvaluate:
    """Test direct evaluation of invocations."""

    def test_evaluate(self, dispatcher):
        """Test evaluating an invocation object."""
        invocation = PredicateInvocation("semver", "gt", ("1.2.10", "1.2.9"))

        assert dispatcher.evaluate(invocation) is True
