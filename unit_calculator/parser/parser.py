"""Parser turning the grammar's parse tree into expression and unit trees.

Expressions come out of the grammar as a flat sequence of operands, operators
and unit annotations. They are grouped here by precedence climbing: every
operator has a binding power, and unit annotations are postfix operators that
bind tighter than any infix operator.
"""

import logging
from collections.abc import Sequence

from lark import Token, Tree

from ..errors import ParseError, UnitCalculatorError
from ..expression import (
    AddMultiUnit,
    AddUnit,
    Atom,
    BinaryOp,
    Cons,
    Expr,
    Ident,
    Op,
    Val,
)
from ..expression.value import finite
from ..statements import ExprStmt, PrintExpr, Statement, VarDec
from ..units import UnitAtom, UnitCons, UnitExpr, UnitOp, evaluate, prefix_power
from ..units.symbols import resolve_unit
from .grammar import parse_tree, source_text

logger = logging.getLogger(__name__)

ParseNode = Tree | Token


class _NodeStream:
    """Peekable cursor over the children of a parse tree node."""

    def __init__(self, nodes: Sequence[ParseNode]):
        self._nodes = nodes
        self._index = 0

    def peek(self) -> ParseNode | None:
        if self._index < len(self._nodes):
            return self._nodes[self._index]
        return None

    def next(self) -> ParseNode | None:
        node = self.peek()
        if node is not None:
            self._index += 1
        return node


def _kind(node: ParseNode) -> str:
    return node.type if isinstance(node, Token) else str(node.data)


def _lineno(node: ParseNode) -> int | None:
    if isinstance(node, Token):
        return node.line
    return None if node.meta.empty else node.meta.line


def _expect(tree: Tree, kind: str) -> None:
    if tree.data != kind:
        raise ParseError(f"Expected {kind}, found {tree.data}", _lineno(tree))


def postfix_binding_power(op: Op) -> int | None:
    """Return the left binding power of a postfix operator, None for infix ones."""
    match op:
        case AddUnit() | AddMultiUnit():
            return 9
        case _:
            return None


def infix_binding_power(op: Op) -> tuple[int, int]:
    """Return the (left, right) binding powers of an infix operator."""
    match op:
        case BinaryOp.PLUS | BinaryOp.MINUS:
            return 1, 2
        case BinaryOp.MUL | BinaryOp.DIV:
            return 3, 4
        case BinaryOp.EXP:
            # right associative
            return 6, 5
        case _:
            raise ParseError(f"{op} is not an infix operator")


def unit_text(tree: Tree) -> str:
    """Rebuild the text of a unit expression node, e.g. ``km/(h*s)``."""
    parts = []
    for child in tree.children:
        match child:
            case Tree(data="unit_expr"):
                parts.append(f"({unit_text(child)})")
            case Tree():
                parts.extend(str(token).strip() for token in child.children)
    return "".join(parts)


def parse_unit_expr(tree: Tree) -> UnitExpr:
    """Convert a ``unit_expr`` node into a unit expression tree.

    Atoms are read one at a time and the rest of the sequence is parsed
    recursively as the right operand, so ``a/b/c`` builds ``a/(b/c)``. The
    tree is only a record of the written order; evaluation folds it left to
    right.
    """
    _expect(tree, "unit_expr")

    def unit_recurse(nodes: _NodeStream) -> UnitExpr:
        node = nodes.next()
        match node:
            case Tree(data="unit", children=[Token() as token]):
                resolved = resolve_unit(str(token))
                lhs: UnitExpr = UnitAtom(
                    resolved.unit, resolved.exponent, resolved.power
                )
            case Tree(data="unit_expr"):
                inner = parse_unit_expr(node)
                lhs = UnitAtom(evaluate(inner), 1, prefix_power(inner))
            case None:
                raise ParseError("Expected a unit, found end of unit expression")
            case _:
                raise ParseError(
                    f"Expected a unit, found {_kind(node)}", _lineno(node)
                )

        node = nodes.next()
        match node:
            case None:
                return lhs
            case Tree(data="unit_operation", children=[Token() as token]):
                op = UnitOp(str(token).strip())
            case _:
                raise ParseError(
                    f"Expected '*' or '/' in unit expression, found {_kind(node)}",
                    _lineno(node),
                )
        return UnitCons(op, (lhs, unit_recurse(nodes)))

    return unit_recurse(_NodeStream(tree.children))


def _parse_unit_annotation(tree: Tree) -> Op:
    """Build the postfix operator for a unit annotation."""
    unit_expr = parse_unit_expr(tree)
    unit = evaluate(unit_expr)
    power = prefix_power(unit_expr)
    if power:
        return AddMultiUnit(power, unit, unit_text(tree))
    return AddUnit(unit)


def _parse_operator(node: ParseNode) -> Op:
    match node:
        case Tree(data="operation", children=[Token() as token]):
            try:
                return BinaryOp(str(token).strip())
            except ValueError:
                raise ParseError(f"Bad operator {token}", _lineno(node)) from None
        case Tree(data="unit_expr"):
            return _parse_unit_annotation(node)
        case _:
            raise ParseError(
                f"Expected an operator, found {_kind(node)}", _lineno(node)
            )


def _parse_operand(node: ParseNode) -> Expr:
    match node:
        case Tree(data="number", children=[Token() as token]):
            return Atom(Val(finite(float(token), f"number literal {token}")))
        case Tree(data="ident", children=[Token() as token]):
            return Ident(str(token).strip())
        case Tree(data="expression"):
            return parse_expr(node)
        case _:
            raise ParseError(
                "Expected a number, identifier or parenthesised expression, "
                f"found {_kind(node)}",
                _lineno(node),
            )


def _expr_bp(nodes: _NodeStream, min_bp: int) -> Expr:
    node = nodes.next()
    if node is None:
        raise ParseError("Expected an operand, found end of expression")
    lhs = _parse_operand(node)

    while (node := nodes.peek()) is not None:
        op = _parse_operator(node)

        if (l_bp := postfix_binding_power(op)) is not None:
            if l_bp < min_bp:
                break
            nodes.next()
            lhs = Cons(op, (lhs,))
            continue

        l_bp, r_bp = infix_binding_power(op)
        if l_bp < min_bp:
            break
        nodes.next()
        rhs = _expr_bp(nodes, r_bp)
        lhs = Cons(op, (lhs, rhs))

    return lhs


def parse_expr(tree: Tree) -> Expr:
    """Convert an ``expression`` node into an expression tree.

    Args:
        tree: Parse tree node of kind ``expression``.

    Returns:
        The expression with operators grouped by precedence; operators of
        equal precedence group to the left, except ``^``.

    Raises:
        ParseError: on an unknown operator or a misplaced operand.
        UnresolvedUnitSymbol: on an unknown unit in a unit annotation.
    """
    _expect(tree, "expression")
    return _expr_bp(_NodeStream(tree.children), 0)


def parse_statement(tree: Tree, text: str) -> Statement:
    """Convert a top-level node of the program into a statement."""
    lineno = _lineno(tree)
    match tree:
        case Tree(data="expression"):
            return ExprStmt(source_text(tree, text), parse_expr(tree), lineno)
        case Tree(data="var_dec", children=[Tree(data="ident") as name, rhs]):
            return VarDec(str(name.children[0]).strip(), parse_expr(rhs), lineno)
        case Tree(data="print_expr", children=[rhs]):
            return PrintExpr(source_text(rhs, text), parse_expr(rhs), lineno)
        case _:
            raise ParseError(f"Unexpected statement {tree.data}", lineno)


def parse_block(text: str) -> list[Statement]:
    """Parse a whole program into its statements, in order.

    Raises:
        UnitCalculatorError: the first problem found; nothing is returned for
            a program that is only partly valid.
    """
    tree = parse_tree(text)
    statements = []
    for node in tree.children:
        try:
            statements.append(parse_statement(node, text))
        except UnitCalculatorError as exc:
            if exc.lineno is None:
                exc.lineno = _lineno(node)
            raise
    logger.debug("Parsed %d statement(s)", len(statements))
    return statements
