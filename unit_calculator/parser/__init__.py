"""Parsing of program text into statements, expressions and unit expressions."""

from .grammar import parse_tree
from .parser import (
    infix_binding_power,
    parse_block,
    parse_expr,
    parse_statement,
    parse_unit_expr,
    postfix_binding_power,
)

__all__ = [
    "infix_binding_power",
    "parse_block",
    "parse_expr",
    "parse_statement",
    "parse_tree",
    "parse_unit_expr",
    "postfix_binding_power",
]
