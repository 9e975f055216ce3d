"""Statements of a program: the top-level constructs wrapping an expression."""

from dataclasses import dataclass
from typing import TypeAlias

from .expression import Expr


@dataclass(frozen=True)
class VarDec:
    """``name = expression``: evaluate and bind to a variable."""

    name: str
    rhs: Expr
    lineno: int | None = None


@dataclass(frozen=True)
class PrintExpr:
    """``expression =``: evaluate and display the expression with its value."""

    source_text: str
    rhs: Expr
    lineno: int | None = None


@dataclass(frozen=True)
class ExprStmt:
    """A bare expression: evaluate and display its value."""

    source_text: str
    rhs: Expr
    lineno: int | None = None


Statement: TypeAlias = VarDec | PrintExpr | ExprStmt
