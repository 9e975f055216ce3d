"""Expression tree produced by the parser and consumed by the interpreter."""

from dataclasses import dataclass
from enum import Enum
from typing import TypeAlias

from ..units import Unit
from .value import Val


class BinaryOp(Enum):
    """Infix arithmetic operators."""

    PLUS = "+"
    MINUS = "-"
    MUL = "*"
    DIV = "/"
    EXP = "^"


@dataclass(frozen=True)
class AddUnit:
    """Postfix operator attaching a unit to a dimensionless value."""

    unit: Unit


@dataclass(frozen=True)
class AddMultiUnit:
    """Postfix operator attaching a unit and rescaling by a power of ten.

    ``symbol`` is the unit as written (e.g. ``km``), kept for display.
    """

    power: int
    unit: Unit
    symbol: str


Op: TypeAlias = BinaryOp | AddUnit | AddMultiUnit


@dataclass(frozen=True)
class Atom:
    """A literal value."""

    value: Val


@dataclass(frozen=True)
class Ident:
    """A reference to a variable."""

    name: str


@dataclass(frozen=True)
class Cons:
    """An operator applied to its operands.

    Binary operators take exactly two operands, unit annotations exactly one.
    """

    op: Op
    operands: tuple["Expr", ...]

    def __post_init__(self) -> None:
        """Check the operand count matches the operator."""
        expected = 2 if isinstance(self.op, BinaryOp) else 1
        if len(self.operands) != expected:
            raise ValueError(
                f"Operator {self.op} needs {expected} operand(s), "
                f"got {len(self.operands)}"
            )


Expr: TypeAlias = Atom | Ident | Cons
