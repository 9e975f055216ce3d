"""Expression tree and value model."""

from .nodes import AddMultiUnit, AddUnit, Atom, BinaryOp, Cons, Expr, Ident, Op
from .value import UnitHint, Val

__all__ = [
    "AddMultiUnit",
    "AddUnit",
    "Atom",
    "BinaryOp",
    "Cons",
    "Expr",
    "Ident",
    "Op",
    "UnitHint",
    "Val",
]
