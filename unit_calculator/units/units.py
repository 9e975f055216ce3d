"""Unit system: the Unit sum type and the operations composing units.

This module provides:
- BaseUnit, a unit expressed over the fixed base dimensions.
- CustomUnit, a named composite unit that is not resolved to base dimensions.
- compose and scale_exponent, the unit algebra used by values and unit expressions.

Example:
    from .units import BaseUnit, UnitOp, compose

    newton = compose(kg_m, s_squared, UnitOp.DIV)
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import TypeAlias

from ..errors import UnsupportedUnitOperation
from .dimensions import DimensionVector, Exponent


class UnitOp(Enum):
    """Operators allowed between units."""

    MUL = "*"
    DIV = "/"


@dataclass(frozen=True)
class BaseUnit:
    """Represents a physical unit as a vector of exponents over the base dimensions."""

    vector: DimensionVector = field(default_factory=DimensionVector)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Exponent]) -> "BaseUnit":
        """Build a unit from base dimension names or symbols to exponents."""
        return cls(DimensionVector.from_mapping(mapping))

    def __mul__(self, other: "Unit") -> "Unit":
        """Multiply two units."""
        return compose(self, other, UnitOp.MUL)

    def __truediv__(self, other: "Unit") -> "Unit":
        """Divide two units."""
        return compose(self, other, UnitOp.DIV)

    def __pow__(self, power: Exponent) -> "Unit":
        """Raise the unit to a power."""
        return scale_exponent(self, power)

    @property
    def is_dimensionless(self) -> bool:
        """Whether the unit has no dimension at all."""
        return self.vector.is_dimensionless

    def __bool__(self) -> bool:
        """A unit is falsy when it is dimensionless."""
        return not self.is_dimensionless

    def __str__(self) -> str:
        """Return a string representation of the unit."""
        return str(self.vector)


@dataclass(frozen=True)
class CustomUnit:
    """A composite unit of named, user-defined symbols.

    Custom units are never resolved to base dimensions; they can only be
    combined with other custom units.
    """

    unit_map: Mapping[str, Fraction]

    def __post_init__(self) -> None:
        """Drop zero exponents and freeze the mapping."""
        object.__setattr__(
            self,
            "unit_map",
            {k: Fraction(v) for k, v in sorted(self.unit_map.items()) if v != 0},
        )

    def __hash__(self) -> int:
        """Hash on the (sorted) mapping items."""
        return hash(tuple(self.unit_map.items()))

    def __mul__(self, other: "Unit") -> "Unit":
        """Multiply two units."""
        return compose(self, other, UnitOp.MUL)

    def __truediv__(self, other: "Unit") -> "Unit":
        """Divide two units."""
        return compose(self, other, UnitOp.DIV)

    def __pow__(self, power: Exponent) -> "Unit":
        """Raise the unit to a power."""
        return scale_exponent(self, power)

    @property
    def is_dimensionless(self) -> bool:
        """Whether no symbol is left in the unit."""
        return not self.unit_map

    def __bool__(self) -> bool:
        """A unit is falsy when it is dimensionless."""
        return not self.is_dimensionless

    def __str__(self) -> str:
        """Return a string representation like ``apple*pear/crate^2``."""
        num, den = [], []
        for symbol, exp in self.unit_map.items():
            if exp > 0:
                num.append(symbol + (f"^{exp}" if exp != 1 else ""))
            elif exp < 0:
                den.append(symbol + (f"^{abs(exp)}" if exp != -1 else ""))
        num_str = "*".join(num) if num else "1"
        den_str = "*".join(den)
        return f"{num_str}/{den_str}" if den else num_str


Unit: TypeAlias = BaseUnit | CustomUnit

DIMENSIONLESS = BaseUnit()


def _combine_unit_maps(
    left: Mapping[str, Fraction], right: Mapping[str, Fraction], add: bool = True
) -> dict[str, Fraction]:
    """Combine two unit maps for multiplication or division."""
    result = dict(left)
    for k, v in right.items():
        result[k] = result.get(k, Fraction(0)) + (v if add else -v)
    return result


def compose(left: Unit, right: Unit, op: UnitOp) -> Unit:
    """Combine two units with a multiplication or a division.

    Args:
        left: Unit on the left of the operator.
        right: Unit on the right of the operator.
        op: ``UnitOp.MUL`` adds exponents, ``UnitOp.DIV`` subtracts them.

    Raises:
        UnsupportedUnitOperation: when a base unit is combined with a custom unit.
    """
    match left, right:
        case BaseUnit(), BaseUnit():
            if op is UnitOp.MUL:
                return BaseUnit(left.vector * right.vector)
            return BaseUnit(left.vector / right.vector)
        case CustomUnit(), CustomUnit():
            return CustomUnit(
                _combine_unit_maps(left.unit_map, right.unit_map, op is UnitOp.MUL)
            )
        case _:
            raise UnsupportedUnitOperation(
                f"Cannot combine units {left} and {right}: "
                "custom units only combine with custom units"
            )


def scale_exponent(unit: Unit, power: Exponent) -> Unit:
    """Multiply every exponent of the unit by a rational power."""
    match unit:
        case BaseUnit():
            return BaseUnit(unit.vector**power)
        case CustomUnit():
            return CustomUnit(
                {k: v * Fraction(power) for k, v in unit.unit_map.items()}
            )
