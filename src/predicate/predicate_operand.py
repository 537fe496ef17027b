"""Typed operand representation."""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class OperandKind(Enum):
    """Kinds of value an operand can be parsed into."""
    STRING = "string"
    PATH = "path"
    INTEGER = "integer"
    FLOAT = "float"
    SEMVER = "semver"


@dataclass(frozen=True)
class TypedOperand:
    """An operand after parsing, tagged with its kind."""
    kind: OperandKind
    raw: str
    value: Any
