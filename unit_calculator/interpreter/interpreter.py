"""Interpreter evaluating parsed programs.

Statements run strictly in order against a variable environment. A program
either runs to completion or leaves the environment untouched: the statements
execute against a copy that only replaces the environment once every statement
has succeeded.
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from ..errors import UndefinedVariable, UnitCalculatorError
from ..expression import (
    AddMultiUnit,
    AddUnit,
    Atom,
    BinaryOp,
    Cons,
    Expr,
    Ident,
    Val,
)
from ..parser import parse_block
from ..statements import ExprStmt, PrintExpr, Statement, VarDec

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Evaluation:
    """A statement that produced a value to display."""

    statement: PrintExpr | ExprStmt
    value: Val


def _apply_binary(op: BinaryOp, left: Val, right: Val) -> Val:
    match op:
        case BinaryOp.PLUS:
            return left + right
        case BinaryOp.MINUS:
            return left - right
        case BinaryOp.MUL:
            return left * right
        case BinaryOp.DIV:
            return left / right
        case BinaryOp.EXP:
            return left**right


def evaluate(expr: Expr, variables: Mapping[str, Val]) -> Val:
    """Recursively compute the value of an expression.

    Args:
        expr: The expression tree to evaluate.
        variables: Values of the variables the expression may reference.

    Returns:
        The resulting value.

    Raises:
        UndefinedVariable: if the expression references an unknown variable.
        UnitCalculatorError: if the units of the operands are incompatible.
    """
    match expr:
        case Atom(value=value):
            return value
        case Ident(name=name):
            if name not in variables:
                raise UndefinedVariable(name)
            return variables[name]
        case Cons(op=AddUnit(unit=unit), operands=(operand,)):
            return evaluate(operand, variables).with_unit(unit)
        case Cons(
            op=AddMultiUnit(power=power, unit=unit, symbol=symbol), operands=(operand,)
        ):
            return evaluate(operand, variables).with_prefixed_unit(power, unit, symbol)
        case Cons(op=BinaryOp() as op, operands=(left, right)):
            return _apply_binary(
                op, evaluate(left, variables), evaluate(right, variables)
            )
    raise TypeError(f"Cannot evaluate {expr!r}")


class Interpreter:
    """Runs programs, keeping variables between runs."""

    def __init__(self) -> None:
        """Initialise a new interpreter with no variables."""
        self.variables: dict[str, Val] = {}

    def run(self, text: str) -> list[Evaluation]:
        """Parse and execute a program.

        Args:
            text: Program text, one statement per line.

        Returns:
            The evaluations of the print requests and bare expressions, in order.

        Raises:
            UnitCalculatorError: the first parse or evaluation problem. The
                variables are left as they were before the call.
        """
        return self.execute(parse_block(text))

    def execute(self, statements: Iterable[Statement]) -> list[Evaluation]:
        """Execute parsed statements in order, committing variables at the end."""
        variables = dict(self.variables)
        evaluations: list[Evaluation] = []
        for stmt in statements:
            try:
                evaluation = self._visit_stmt(stmt, variables)
            except UnitCalculatorError as exc:
                if exc.lineno is None:
                    exc.lineno = stmt.lineno
                logger.debug("Statement on line %s failed: %r", stmt.lineno, exc)
                raise
            if evaluation is not None:
                evaluations.append(evaluation)
        self.variables = variables
        return evaluations

    def _visit_stmt(
        self, stmt: Statement, variables: dict[str, Val]
    ) -> Evaluation | None:
        """Execute a single statement."""
        match stmt:
            case VarDec():
                return self._process_var_dec(stmt, variables)
            case PrintExpr() | ExprStmt():
                return self._process_expression_stmt(stmt, variables)

    @staticmethod
    def _process_var_dec(stmt: VarDec, variables: dict[str, Val]) -> None:
        """Evaluate the right hand side and bind it to the variable."""
        variables[stmt.name] = evaluate(stmt.rhs, variables)
        logger.debug("%s = %r", stmt.name, variables[stmt.name])

    @staticmethod
    def _process_expression_stmt(
        stmt: PrintExpr | ExprStmt, variables: dict[str, Val]
    ) -> Evaluation:
        """Evaluate an expression for display."""
        value = evaluate(stmt.rhs, variables)
        logger.debug("%s -> %r", stmt.source_text, value)
        return Evaluation(stmt, value)
