"""Grammar of the calculator language, built with lark.

The grammar only tokenises and groups the program text. It produces a parse
tree whose node kinds are ``program``, ``expression``, ``number``, ``ident``,
``operation``, ``unit_expr``, ``unit_operation``, ``unit``, ``var_dec`` and
``print_expr``. Operator precedence is deliberately left out: an expression is
a flat sequence of operands, operators and unit annotations that the parser
groups with binding powers.

Unit rules carry a higher priority so that in ``5 kg * m`` the ``* m`` is read
as part of the unit rather than as a multiplication by a variable ``m``.
"""

from functools import cache

from lark import Lark, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput

from ..errors import ParseError

GRAMMAR = r"""
program: _NL* (_statement (_NL+ _statement)* _NL*)?

_statement: var_dec
          | print_expr
          | expression

var_dec: ident "=" expression
print_expr: expression "="

expression: _operand (operation _operand | unit_expr)*

_operand: number
        | ident
        | "(" expression ")"

!operation: "+" | "-" | "*" | "/" | "^"

unit_expr: _unit_atom (unit_operation _unit_atom)*

_unit_atom: unit
          | "(" unit_expr ")"

!unit_operation: "*" | "/"

unit.2: UNIT

number: NUMBER
ident: NAME

NUMBER: /(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?/
NAME: /[^\W\d]\w*/
UNIT: /[^\W\d_]+(\^-?\d+)?/

COMMENT: /#[^\n]*/
_NL: /\r?\n/

%import common.WS_INLINE
%ignore WS_INLINE
%ignore COMMENT
"""


@cache
def grammar_parser() -> Lark:
    """Return the (shared) lark parser for the calculator grammar."""
    return Lark(GRAMMAR, start="program", parser="earley", propagate_positions=True)


def parse_tree(text: str) -> Tree:
    """Parse program text into a lark parse tree.

    Raises:
        ParseError: if the text does not match the grammar.
    """
    try:
        return grammar_parser().parse(text)
    except UnexpectedInput as exc:
        match exc:
            case UnexpectedEOF():
                message = "Unexpected end of input"
            case UnexpectedCharacters():
                message = f"Unexpected character {exc.char!r} at column {exc.column}"
            case _:
                message = f"Unexpected input at column {exc.column}"
        lineno = exc.line if exc.line > 0 else None
        raise ParseError(message, lineno=lineno) from exc


def source_text(tree: Tree, text: str) -> str:
    """Return the part of ``text`` a parse tree node was matched from."""
    if tree.meta.empty:
        return ""
    return text[tree.meta.start_pos : tree.meta.end_pos]
