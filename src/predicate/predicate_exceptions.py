"""Exception classes for the predicate engine."""


class PredicateError(Exception):
    """Base exception for all predicate evaluation failures."""

    def __init__(self, message: str):
        """
        Initialize predicate error.

        Args:
            message: Error message
        """
        super().__init__(message)
        self.message = message


class PredicateUsageError(PredicateError):
    """
    Exception raised when an invocation is malformed.

    Covers unknown categories or predicates, wrong operand counts, operands that
    do not parse as the kind the predicate expects and invalid regex patterns.
    """


class PredicateRuntimeError(PredicateError):
    """Exception raised when a predicate fails for a reason other than its inputs."""

    def __init__(self, message: str, category: str, predicate: str):
        """
        Initialize predicate runtime error.

        Args:
            message: Error message
            category: Category being evaluated when the failure occurred
            predicate: Predicate being evaluated when the failure occurred
        """
        super().__init__(message)
        self.category = category
        self.predicate = predicate
