"""Predicate evaluation engine: categories, typed operands, registry and dispatch."""

from predicate.predicate_category import PredicateCategory
from predicate.predicate_definition import PredicateDefinition
from predicate.predicate_dispatcher import PredicateDispatcher
from predicate.predicate_exceptions import PredicateError, PredicateRuntimeError, PredicateUsageError
from predicate.predicate_invocation import PredicateInvocation
from predicate.predicate_operand import OperandKind, TypedOperand
from predicate.predicate_operand_parser import PredicateOperandParser
from predicate.predicate_registry import PredicateRegistry
from predicate.predicate_settings import PredicateSettings


__all__ = [
    "OperandKind",
    "PredicateCategory",
    "PredicateDefinition",
    "PredicateDispatcher",
    "PredicateError",
    "PredicateInvocation",
    "PredicateOperandParser",
    "PredicateRegistry",
    "PredicateRuntimeError",
    "PredicateSettings",
    "PredicateUsageError",
    "TypedOperand",
]
