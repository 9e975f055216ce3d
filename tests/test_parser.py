import pytest
from lark import Token, Tree

from unit_calculator.errors import ParseError, UnresolvedUnitSymbol
from unit_calculator.expression import (
    AddMultiUnit,
    AddUnit,
    Atom,
    BinaryOp,
    Cons,
    Expr,
    Ident,
    Val,
)
from unit_calculator.parser import (
    infix_binding_power,
    parse_block,
    parse_expr,
    parse_tree,
    parse_unit_expr,
    postfix_binding_power,
)
from unit_calculator.statements import ExprStmt, PrintExpr, VarDec
from unit_calculator.units import BaseUnit, UnitAtom, UnitCons, UnitOp

kg = BaseUnit.from_mapping({"kg": 1})
m = BaseUnit.from_mapping({"m": 1})
s = BaseUnit.from_mapping({"s": 1})
newton = BaseUnit.from_mapping({"kg": 1, "m": 1, "s": -2})


def num(value: float) -> Atom:
    return Atom(Val(value))


def binary(op: BinaryOp, left: Expr, right: Expr) -> Cons:
    return Cons(op, (left, right))


def parse_single(code: str) -> Expr:
    """Parse a program made of one expression and return that expression."""
    [stmt] = parse_block(code)
    return stmt.rhs


def first_unit_expr(code: str) -> Tree:
    """Return the outermost unit expression node in the parse tree of ``code``."""
    tree = parse_tree(code)
    return next(t for t in tree.iter_subtrees_topdown() if t.data == "unit_expr")


def test_multiplication_binds_tighter_than_addition():
    assert parse_single("1 + 2 * 3") == binary(
        BinaryOp.PLUS, num(1), binary(BinaryOp.MUL, num(2), num(3))
    )


def test_subtraction_is_left_associative():
    assert parse_single("10 - 3 - 2") == binary(
        BinaryOp.MINUS, binary(BinaryOp.MINUS, num(10), num(3)), num(2)
    )


def test_division_is_left_associative():
    assert parse_single("8 / 4 / 2") == binary(
        BinaryOp.DIV, binary(BinaryOp.DIV, num(8), num(4)), num(2)
    )


def test_exponent_is_right_associative():
    assert parse_single("2 ^ 3 ^ 2") == binary(
        BinaryOp.EXP, num(2), binary(BinaryOp.EXP, num(3), num(2))
    )


def test_exponent_binds_tighter_than_multiplication():
    assert parse_single("2 * 3 ^ 2") == binary(
        BinaryOp.MUL, num(2), binary(BinaryOp.EXP, num(3), num(2))
    )


def test_parentheses():
    assert parse_single("(1 + 2) * 3") == binary(
        BinaryOp.MUL, binary(BinaryOp.PLUS, num(1), num(2)), num(3)
    )


def test_numbers():
    assert parse_single("1.5") == num(1.5)
    assert parse_single(".5") == num(0.5)
    assert parse_single("2e3") == num(2000)


def test_identifiers():
    assert parse_single("speed * 2") == binary(
        BinaryOp.MUL, Ident("speed"), num(2)
    )


def test_unit_annotation():
    assert parse_single("5 kg") == Cons(AddUnit(kg), (num(5),))


def test_unit_annotation_binds_tighter_than_infix_operators():
    assert parse_single("2 * 5 kg") == binary(
        BinaryOp.MUL, num(2), Cons(AddUnit(kg), (num(5),))
    )
    assert parse_single("1 s + 2 s") == binary(
        BinaryOp.PLUS, Cons(AddUnit(s), (num(1),)), Cons(AddUnit(s), (num(2),))
    )


def test_compound_unit_annotation():
    assert parse_single("5 kg*m/s^2") == Cons(AddUnit(newton), (num(5),))
    assert parse_single("5 (kg*m)/s^2") == Cons(AddUnit(newton), (num(5),))


def test_operator_after_unit_continues_the_unit():
    assert parse_single("5 kg * m") == Cons(
        AddUnit(BaseUnit.from_mapping({"kg": 1, "m": 1})), (num(5),)
    )
    assert parse_single("(5 kg) * m") == binary(
        BinaryOp.MUL, Cons(AddUnit(kg), (num(5),)), Ident("m")
    )


def test_annotation_of_parenthesised_expression():
    assert parse_single("(1 + 2) m") == Cons(
        AddUnit(m), (binary(BinaryOp.PLUS, num(1), num(2)),)
    )


def test_prefixed_unit_annotation():
    assert parse_single("3 km") == Cons(AddMultiUnit(3, m, "km"), (num(3),))
    assert parse_single("5 g") == Cons(AddMultiUnit(-3, kg, "g"), (num(5),))
    assert parse_single("2 mm^2") == Cons(
        AddMultiUnit(-6, BaseUnit.from_mapping({"m": 2}), "mm^2"), (num(2),)
    )


def test_prefixed_compound_unit_annotation():
    expr = parse_single("2 km/ms")
    assert expr == Cons(AddMultiUnit(6, m / s, "km/ms"), (num(2),))


def test_second_unit_annotation_is_a_separate_operator():
    assert parse_single("5 kg m") == Cons(AddUnit(m), (Cons(AddUnit(kg), (num(5),)),))


def test_parse_unit_expr():
    tree = first_unit_expr("1 kg*m/s^2")
    assert parse_unit_expr(tree) == UnitCons(
        UnitOp.MUL,
        (UnitAtom(kg), UnitCons(UnitOp.DIV, (UnitAtom(m), UnitAtom(s, 2)))),
    )


def test_parse_unit_expr_groups():
    tree = first_unit_expr("1 (km*s)/s")
    assert parse_unit_expr(tree) == UnitCons(
        UnitOp.DIV, (UnitAtom(m * s, 1, 3), UnitAtom(s))
    )


def test_parse_unit_expr_rejects_other_nodes():
    with pytest.raises(ParseError):
        parse_unit_expr(Tree("unit", [Token("UNIT", "kg")]))


def test_binding_powers():
    assert infix_binding_power(BinaryOp.PLUS) == (1, 2)
    assert infix_binding_power(BinaryOp.MINUS) == (1, 2)
    assert infix_binding_power(BinaryOp.MUL) == (3, 4)
    assert infix_binding_power(BinaryOp.DIV) == (3, 4)
    assert postfix_binding_power(AddUnit(kg)) == 9
    assert postfix_binding_power(AddMultiUnit(3, m, "km")) == 9
    assert postfix_binding_power(BinaryOp.PLUS) is None
    with pytest.raises(ParseError):
        infix_binding_power(AddUnit(kg))


def test_parse_expr_rejects_other_nodes():
    with pytest.raises(ParseError):
        parse_expr(Tree("number", [Token("NUMBER", "1")]))


def test_parse_expr_rejects_unknown_operator():
    tree = Tree(
        "expression",
        [
            Tree("number", [Token("NUMBER", "1")]),
            Tree("operation", [Token("PERCENT", "%")]),
            Tree("number", [Token("NUMBER", "2")]),
        ],
    )
    with pytest.raises(ParseError):
        parse_expr(tree)


def test_parse_expr_rejects_operator_in_operand_position():
    tree = Tree(
        "expression",
        [
            Tree("operation", [Token("PLUS", "+")]),
            Tree("number", [Token("NUMBER", "2")]),
        ],
    )
    with pytest.raises(ParseError):
        parse_expr(tree)


def test_parse_expr_rejects_missing_operand():
    tree = Tree(
        "expression",
        [Tree("number", [Token("NUMBER", "1")]), Tree("operation", [Token("PLUS", "+")])],
    )
    with pytest.raises(ParseError):
        parse_expr(tree)


def test_statements():
    statements = parse_block("x = 5\nx + 1 =\nx * 2")
    assert len(statements) == 3

    var_dec, print_expr, expr_stmt = statements
    assert isinstance(var_dec, VarDec)
    assert var_dec.name == "x"
    assert var_dec.rhs == num(5)
    assert var_dec.lineno == 1

    assert isinstance(print_expr, PrintExpr)
    assert print_expr.source_text == "x + 1"
    assert print_expr.rhs == binary(BinaryOp.PLUS, Ident("x"), num(1))
    assert print_expr.lineno == 2

    assert isinstance(expr_stmt, ExprStmt)
    assert expr_stmt.source_text == "x * 2"
    assert expr_stmt.lineno == 3


def test_blank_lines_and_comments():
    code = """
    # a comment
    x = 3  # three

    x
    """
    statements = parse_block(code)
    assert [type(stmt) for stmt in statements] == [VarDec, ExprStmt]
    assert statements[1].lineno == 5


def test_trailing_equals_is_a_print_request():
    [stmt] = parse_block("x =")
    assert isinstance(stmt, PrintExpr)
    assert stmt.rhs == Ident("x")
    assert stmt.source_text == "x"


def test_empty_program():
    assert parse_block("") == []
    assert parse_block("\n\n") == []


@pytest.mark.parametrize("code", ["1 +", "1 + * 2", "x = =", "= 5", "(1 + 2", "5 $"])
def test_syntax_errors(code):
    with pytest.raises(ParseError) as excinfo:
        parse_block(code)
    assert excinfo.value.code == "P001"


def test_syntax_error_line_number():
    with pytest.raises(ParseError) as excinfo:
        parse_block("x = 1\ny = 2 $ 3\n")
    assert excinfo.value.lineno == 2


def test_unknown_unit_symbol():
    with pytest.raises(UnresolvedUnitSymbol) as excinfo:
        parse_block("x = 1\n5 furlong")
    assert excinfo.value.code == "U003"
    assert excinfo.value.lineno == 2
    assert excinfo.value.message == "Unknown unit symbol 'furlong'"
