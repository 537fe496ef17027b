"""Abstract base class for predicate categories."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Sequence, Tuple

from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_exceptions import PredicateError, PredicateRuntimeError, PredicateUsageError
from predicate.predicate_operand import OperandKind
from predicate.predicate_operand_parser import PredicateOperandParser


class PredicateCategory(ABC):
    """
    Abstract base class for a category of predicates.

    A category owns a closed set of predicate definitions.  The base class handles
    routing a predicate name to its definition, arity checks, operand parsing and
    wrapping of unexpected faults, so subclasses only supply the definitions and the
    handlers that compute a boolean from already-typed operand values.
    """

    def __init__(self) -> None:
        """Initialize the category."""
        self._operand_parser = PredicateOperandParser()
        self._definitions: Dict[str, PredicateDefinition] | None = None

    @abstractmethod
    def get_name(self) -> str:
        """
        Get the category name used on the command line.

        Returns:
            Category name, e.g. "file"
        """

    @abstractmethod
    def get_description(self) -> str:
        """
        Get a one-line description of the category.

        Returns:
            Description string
        """

    @abstractmethod
    def _create_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Create the predicate definitions for this category.

        Returns:
            Dictionary mapping predicate names to their definitions
        """

    def get_predicate_definitions(self) -> Dict[str, PredicateDefinition]:
        """
        Get predicate definitions for this category.

        Definitions are created on first use and never change afterwards.

        Returns:
            Dictionary mapping predicate names to their definitions
        """
        if self._definitions is None:
            self._definitions = self._create_predicate_definitions()

        return self._definitions

    def get_predicate_names(self) -> list[str]:
        """Get the names of all predicates in this category, in definition order."""
        return list(self.get_predicate_definitions().keys())

    def get_predicate_definition(self, predicate: str) -> PredicateDefinition:
        """
        Get the definition of a predicate by name.

        Args:
            predicate: Name of the predicate within this category

        Returns:
            The predicate definition

        Raises:
            PredicateUsageError: If the category has no such predicate
        """
        definitions = self.get_predicate_definitions()
        if predicate not in definitions:
            available_predicates = ", ".join(definitions.keys())
            raise PredicateUsageError(
                f"Unknown predicate '{predicate}' for category '{self.get_name()}'. "
                f"Available predicates: {available_predicates}"
            )

        return definitions[predicate]

    def evaluate(self, predicate: str, raw_operands: Sequence[str]) -> bool:
        """
        Evaluate a predicate with raw operand strings.

        Args:
            predicate: Name of the predicate within this category
            raw_operands: Operand strings exactly as supplied by the caller

        Returns:
            Truth value of the predicate

        Raises:
            PredicateUsageError: If the predicate is unknown, the operand count is wrong
                or an operand has the wrong shape
            PredicateRuntimeError: If the handler fails unexpectedly
        """
        category = self.get_name()
        definition = self.get_predicate_definition(predicate)

        operand_count = len(raw_operands)
        if operand_count < definition.min_arity or operand_count > definition.max_arity:
            raise PredicateUsageError(
                f"'{category} {predicate}' expects {self._describe_arity(definition)}, "
                f"got {operand_count}. Usage: {category} {definition.signature()}"
            )

        operands = self._operand_parser.parse_all(definition, raw_operands)

        logger = self.get_logger()
        logger.debug("%s predicate requested: %s %s", category, predicate, list(raw_operands))

        try:
            result = definition.handler(*[operand.value for operand in operands])

        except PredicateError:
            raise

        except Exception as e:
            logger.error(
                "Unexpected error in %s predicate '%s': %s",
                category, predicate, str(e), exc_info=True
            )
            raise PredicateRuntimeError(
                f"{category} {predicate} failed: {str(e)}", category, predicate
            ) from e

        logger.debug("%s predicate '%s' evaluated to %s", category, predicate, result)
        return bool(result)

    def describe(self) -> str:
        """
        Build a help text listing every predicate signature in this category.

        Returns:
            Multi-line description
        """
        lines = [f"{self.get_name()}: {self.get_description()}", ""]
        for definition in self.get_predicate_definitions().values():
            lines.append(f"  {self.get_name()} {definition.signature()}")
            lines.append(f"      {definition.description}")

        return "\n".join(lines)

    def get_logger(self) -> logging.Logger:
        """
        Get logger for this category.

        Subclasses can override to provide custom logger.

        Returns:
            Logger instance for this category
        """
        return logging.getLogger(self.__class__.__name__)

    def _describe_arity(self, definition: PredicateDefinition) -> str:
        """Describe how many operands a predicate takes."""
        if definition.min_arity == definition.max_arity:
            count = definition.max_arity
            return f"{count} operand" if count == 1 else f"{count} operands"

        return f"{definition.min_arity} to {definition.max_arity} operands"

    def _define(
        self,
        name: str,
        handler: Any,
        operands: Sequence[Tuple[str, OperandKind]],
        description: str,
        optional_operands: int = 0
    ) -> Tuple[str, PredicateDefinition]:
        """
        Build a (name, definition) pair.

        Helper for subclasses to reduce boilerplate when building definition tables.

        Args:
            name: Predicate name
            handler: Callable taking the typed operand values and returning a bool
            operands: Sequence of (operand name, operand kind) pairs
            description: Human-readable description
            optional_operands: Number of trailing operands that may be omitted

        Returns:
            Tuple suitable for building a definitions dictionary
        """
        return name, PredicateDefinition(
            name=name,
            handler=handler,
            operand_kinds=tuple(kind for _, kind in operands),
            operand_names=tuple(operand_name for operand_name, _ in operands),
            description=description,
            optional_operands=optional_operands
        )
