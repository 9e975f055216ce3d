"""Unit expressions: the tree built from unit literals such as ``kg*m/s^2``."""

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TypeAlias

from .units import Unit, UnitOp, compose, scale_exponent


@dataclass(frozen=True)
class UnitAtom:
    """A single unit raised to an integer exponent.

    ``prefix_power`` is the power of ten carried by the unit token (``km`` has
    3) before the exponent is applied. It does not take part in unit algebra.
    """

    unit: Unit
    exponent: int = 1
    prefix_power: int = 0


@dataclass(frozen=True)
class UnitCons:
    """Two unit expressions joined by ``*`` or ``/``."""

    op: UnitOp
    operands: tuple["UnitExpr", "UnitExpr"]

    def __post_init__(self) -> None:
        """Reject trees with a missing operand."""
        if len(self.operands) != 2:
            raise ValueError(
                f"Unit operator {self.op.value} needs 2 operands, "
                f"got {len(self.operands)}"
            )


UnitExpr: TypeAlias = UnitAtom | UnitCons


def terms(expr: UnitExpr) -> Iterator[tuple[UnitOp, UnitAtom]]:
    """Yield the atoms of a unit expression in textual order.

    Each atom is paired with the operator written before it; the first atom
    is paired with ``UnitOp.MUL``.
    """
    match expr:
        case UnitAtom():
            yield UnitOp.MUL, expr
        case UnitCons(op=op, operands=(left, right)):
            yield from terms(left)
            right_terms = terms(right)
            _, first = next(right_terms)
            yield op, first
            yield from right_terms


def evaluate(expr: UnitExpr) -> Unit:
    """Fold a unit expression into a single unit, strictly left to right.

    The operators are applied in the order they are written, regardless of
    how the tree is nested, so ``a/b/c`` is ``a/(b*c)`` and ``a/b*c`` is
    ``(a/b)*c``.
    """
    atoms = terms(expr)
    _, first = next(atoms)
    unit = scale_exponent(first.unit, first.exponent)
    for op, atom in atoms:
        unit = compose(unit, scale_exponent(atom.unit, atom.exponent), op)
    return unit


def prefix_power(expr: UnitExpr) -> int:
    """Fold the powers of ten of a unit expression the same way as ``evaluate``."""
    power = 0
    for op, atom in terms(expr):
        atom_power = atom.prefix_power * atom.exponent
        power = power + atom_power if op is UnitOp.MUL else power - atom_power
    return power
