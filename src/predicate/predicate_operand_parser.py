"""Conversion of raw operand strings into typed values."""

import logging
import re
from typing import List, Sequence

import semver

from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_exceptions import PredicateUsageError
from predicate.predicate_operand import OperandKind, TypedOperand


class PredicateOperandParser:
    """
    Parses raw operand strings according to a predicate's operand kinds.

    Integers accept an optional sign followed by ASCII decimal digits only, so inputs
    that ``int()`` would tolerate (surrounding whitespace, ``_`` separators, non-ASCII
    digits) are rejected.  Integers longer than the interpreter's string conversion
    limit (4300 digits by default) are usage errors too.  Floats accept standard
    decimal notation with an optional exponent, plus ``inf``, ``infinity`` and
    ``nan``.  Semantic versions follow SemVer 2.0.0 and are parsed by the ``semver``
    library.
    """

    INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")
    FLOAT_PATTERN = re.compile(
        r"[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
        re.IGNORECASE
    )

    # Longest operand text repeated verbatim in error messages
    MAX_ECHO_LENGTH = 40

    EXPECTED_SHAPES = {
        OperandKind.INTEGER: "a base-10 integer such as 42 or -7",
        OperandKind.FLOAT: "a decimal number such as 3.14, -2 or 1e-3",
        OperandKind.SEMVER: "a semantic version MAJOR.MINOR.PATCH such as 1.2.3",
    }

    def __init__(self) -> None:
        """Initialize the operand parser."""
        self._logger = logging.getLogger("PredicateOperandParser")

    @classmethod
    def is_integer(cls, raw: str) -> bool:
        """
        Check whether a string is a valid integer operand.

        Args:
            raw: String to check

        Returns:
            True if the string would parse as an integer operand
        """
        return cls.INTEGER_PATTERN.fullmatch(raw) is not None

    @classmethod
    def is_float(cls, raw: str) -> bool:
        """
        Check whether a string is a valid float operand.

        Args:
            raw: String to check

        Returns:
            True if the string would parse as a float operand
        """
        return cls.FLOAT_PATTERN.fullmatch(raw) is not None

    def parse(self, kind: OperandKind, raw: str, name: str, position: int) -> TypedOperand:
        """
        Parse a single raw operand.

        Args:
            kind: Kind of value expected
            raw: Raw operand text
            name: Operand name, used in error messages
            position: 1-based operand position, used in error messages

        Returns:
            Typed operand

        Raises:
            PredicateUsageError: If the operand does not have the expected shape
        """
        if kind in (OperandKind.STRING, OperandKind.PATH):
            return TypedOperand(kind=kind, raw=raw, value=raw)

        if kind == OperandKind.INTEGER:
            if not self.is_integer(raw):
                raise self._shape_error(kind, raw, name, position)

            try:
                value = int(raw)

            except ValueError as e:
                # int() refuses strings longer than the interpreter's digit limit
                raise PredicateUsageError(
                    f"Integer for operand {position} ({name}) is too long: {len(raw.lstrip('+-'))} digits"
                ) from e

            return TypedOperand(kind=kind, raw=raw, value=value)

        if kind == OperandKind.FLOAT:
            if not self.is_float(raw):
                raise self._shape_error(kind, raw, name, position)

            return TypedOperand(kind=kind, raw=raw, value=float(raw))

        if kind == OperandKind.SEMVER:
            try:
                version = semver.Version.parse(raw)

            except ValueError as e:
                raise self._shape_error(kind, raw, name, position) from e

            return TypedOperand(kind=kind, raw=raw, value=version)

        raise PredicateUsageError(f"Unsupported operand kind: {kind.value}")

    def parse_all(self, definition: PredicateDefinition, raw_operands: Sequence[str]) -> List[TypedOperand]:
        """
        Parse every operand supplied for a predicate.

        Arity has already been checked by the caller; only the operands actually
        supplied are parsed, so trailing optional operands may be absent.

        Args:
            definition: Predicate whose signature drives parsing
            raw_operands: Raw operand strings

        Returns:
            List of typed operands in invocation order

        Raises:
            PredicateUsageError: If any operand does not have the expected shape
        """
        typed = []
        for index, raw in enumerate(raw_operands):
            kind = definition.operand_kinds[index]
            name = definition.operand_names[index]
            typed.append(self.parse(kind, raw, name, index + 1))

        self._logger.debug("Parsed operands for '%s': %s", definition.name, [op.value for op in typed])
        return typed

    def _shape_error(self, kind: OperandKind, raw: str, name: str, position: int) -> PredicateUsageError:
        """Build the usage error for an operand with the wrong shape."""
        return PredicateUsageError(
            f"Invalid {kind.value} for operand {position} ({name}): '{self._excerpt(raw)}'; "
            f"expected {self.EXPECTED_SHAPES[kind]}"
        )

    def _excerpt(self, raw: str) -> str:
        """Shorten a raw operand for use in an error message."""
        if len(raw) <= self.MAX_ECHO_LENGTH:
            return raw

        return raw[:self.MAX_ECHO_LENGTH] + "..."
