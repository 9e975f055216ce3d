"""Rendering of expressions, values and units as LaTeX math text.

Every function here is pure: the same tree always renders to the same text.
Values can be displayed in a requested unit through a ``UnitHint``; the hint
has to describe the same unit as the value, only the power of ten may differ.
"""

import math
from fractions import Fraction

from ..errors import DisplayHintMismatch
from ..expression import (
    AddMultiUnit,
    AddUnit,
    Atom,
    BinaryOp,
    Cons,
    Expr,
    Ident,
    UnitHint,
    Val,
)
from ..expression.value import scale_by_power_of_ten
from ..interpreter import Evaluation
from ..statements import PrintExpr
from ..units import UNIT_PREFIXES_ABBR, BaseUnit, CustomUnit, Unit


def format_number(num: float) -> str:
    """Format a magnitude, without a decimal point when it is integral."""
    num = float(num)
    if math.isfinite(num) and num.is_integer() and abs(num) < 1e16:
        return str(int(num))
    return repr(num)


def _single_unit_to_latex(symbol: str, exp: Fraction) -> str:
    if abs(exp) == 1:
        return symbol
    return f"{symbol}^{{{abs(exp)}}}"


def _unit_to_latex(unit: Unit) -> str:
    match unit:
        case BaseUnit():
            exponents = [(dim.symbol, exp) for dim, exp in unit.vector]
        case CustomUnit():
            exponents = list(unit.unit_map.items())
    numerator = [_single_unit_to_latex(s, exp) for s, exp in exponents if exp > 0]
    denominator = [_single_unit_to_latex(s, exp) for s, exp in exponents if exp < 0]

    if not denominator:
        return " ".join(numerator)
    if not numerator:
        return f"\\frac{{1}}{{{' '.join(denominator)}}}"
    return f"\\frac{{{' '.join(numerator)}}}{{{' '.join(denominator)}}}"


def _val_to_latex(val: Val, hint: UnitHint | None) -> str:
    hint = hint or val.hint
    if hint is not None:
        if hint.unit != val.unit:
            raise DisplayHintMismatch(hint.text, val.unit)
        num = scale_by_power_of_ten(val.num, -hint.power)
        return f"{format_number(num)} \\ {hint.text}".strip()
    unit_str = _unit_to_latex(val.unit)
    if unit_str:
        return f"{format_number(val.num)} \\ {unit_str}"
    return format_number(val.num)


def _expr_to_latex(expr: Expr) -> str:
    match expr:
        case Atom(value=value):
            return _val_to_latex(value, None)
        case Ident(name=name):
            return name
        case Cons(op=BinaryOp() as op, operands=(left, right)):
            a, b = _expr_to_latex(left), _expr_to_latex(right)
            match op:
                case BinaryOp.PLUS:
                    return f"({a} + {b})"
                case BinaryOp.MINUS:
                    return f"({a} - {b})"
                case BinaryOp.MUL:
                    return f"{a} \\times {b}"
                case BinaryOp.DIV:
                    return f"\\frac{{{a}}}{{{b}}}"
                case BinaryOp.EXP:
                    return f"{a}^{{{b}}}"
        case Cons(op=AddUnit(unit=unit), operands=(operand,)):
            return f"{_expr_to_latex(operand)}\\ {_unit_to_latex(unit)}"
        case Cons(op=AddMultiUnit(symbol=symbol), operands=(operand,)):
            return f"{_expr_to_latex(operand)}\\ {symbol}"
    raise TypeError(f"Cannot render {expr!r}")


def to_latex(node: Expr | Val | Unit, hint: UnitHint | None = None) -> str:
    """Render an expression, value or unit as LaTeX math text.

    Args:
        node: What to render.
        hint: Unit to display a value in. Ignored for expressions and units.

    Raises:
        DisplayHintMismatch: if the hint's unit is not the value's unit.
    """
    match node:
        case Val():
            return _val_to_latex(node, hint)
        case BaseUnit() | CustomUnit():
            return _unit_to_latex(node)
        case _:
            return _expr_to_latex(node)


def prefixed_hint(power: int, unit: Unit) -> UnitHint:
    """Build a hint displaying values of ``unit`` with a metric prefix.

    ``prefixed_hint(3, metre)`` displays lengths in ``km``.

    Raises:
        ValueError: if no metric prefix has the given power of ten.
    """
    if power not in UNIT_PREFIXES_ABBR:
        raise ValueError(f"No metric prefix for 10^{power}")
    return UnitHint(f"{UNIT_PREFIXES_ABBR[power]}{_unit_to_latex(unit)}", unit, power)


def render_evaluation(evaluation: Evaluation) -> str:
    """Render the output line of an evaluated statement."""
    value = to_latex(evaluation.value)
    if isinstance(evaluation.statement, PrintExpr):
        return f"{to_latex(evaluation.statement.rhs)} = {value}"
    return value
