"""Units module."""

from .dimensions import BASE_DIMENSIONS, DimensionVector
from .symbols import UNIT_PREFIXES, UNIT_PREFIXES_ABBR, UNIT_SYMBOLS, resolve_unit
from .unit_expr import UnitAtom, UnitCons, UnitExpr, evaluate, prefix_power
from .units import (
    DIMENSIONLESS,
    BaseUnit,
    CustomUnit,
    Unit,
    UnitOp,
    compose,
    scale_exponent,
)

__all__ = [
    "BASE_DIMENSIONS",
    "DIMENSIONLESS",
    "UNIT_PREFIXES",
    "UNIT_PREFIXES_ABBR",
    "UNIT_SYMBOLS",
    "BaseUnit",
    "CustomUnit",
    "DimensionVector",
    "Unit",
    "UnitAtom",
    "UnitCons",
    "UnitExpr",
    "UnitOp",
    "compose",
    "evaluate",
    "prefix_power",
    "resolve_unit",
    "scale_exponent",
]
