"""Values: floating point magnitudes paired with a unit.

Arithmetic on values enforces unit compatibility:

- a + b and a - b need equal units; the result keeps that unit.
- a * b and a / b compose the units.
- a ** b needs a dimensionless b; the unit is raised to b.
- with_unit attaches a unit to a dimensionless value.

Every magnitude produced is finite; overflow raises ArithmeticFault.
"""

import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import NamedTuple

from ..errors import (
    ArithmeticFault,
    DoubleUnitAnnotation,
    IncompatibleUnits,
    NonDimensionlessExponent,
)
from ..units import DIMENSIONLESS, Unit, UnitOp, compose, scale_exponent

# exponents of units stay small rationals, e.g. m^(1/2)
MAX_EXPONENT_DENOMINATOR = 100


def scale_by_power_of_ten(num: float, power: int) -> float:
    """Return ``num * 10**power``, dividing for negative powers to stay exact."""
    if power >= 0:
        return num * 10.0**power
    return num / 10.0**-power


def finite(num: float, operation: str) -> float:
    """Return ``num`` as a float, raising if it is infinite or NaN.

    Args:
        num: Magnitude to check.
        operation: Description of what produced the magnitude, for the message.

    Raises:
        ArithmeticFault: if the magnitude is not finite.
    """
    num = float(num)
    if not math.isfinite(num):
        raise ArithmeticFault(f"Result of {operation} is not finite: {num}")
    return num


class UnitHint(NamedTuple):
    """A unit to display a value in, such as ``km`` for a length in metres.

    ``power`` is the power of ten between the displayed unit and ``unit``.
    """

    text: str
    unit: Unit
    power: int = 0


@dataclass(frozen=True)
class Val:
    """A physical quantity."""

    num: float
    unit: Unit = DIMENSIONLESS
    hint: UnitHint | None = field(default=None, compare=False)

    def __post_init__(self) -> None:
        """Store the magnitude as a float."""
        object.__setattr__(self, "num", float(self.num))

    def __add__(self, other: "Val") -> "Val":
        """Add two values with the same unit."""
        if self.unit != other.unit:
            raise IncompatibleUnits(self.unit, other.unit, "+")
        return Val(finite(self.num + other.num, "addition"), self.unit)

    def __sub__(self, other: "Val") -> "Val":
        """Subtract two values with the same unit."""
        if self.unit != other.unit:
            raise IncompatibleUnits(self.unit, other.unit, "-")
        return Val(finite(self.num - other.num, "subtraction"), self.unit)

    def __mul__(self, other: "Val") -> "Val":
        """Multiply two values, composing their units."""
        num = finite(self.num * other.num, "multiplication")
        return Val(num, compose(self.unit, other.unit, UnitOp.MUL))

    def __truediv__(self, other: "Val") -> "Val":
        """Divide two values, composing their units."""
        if other.num == 0:
            raise ArithmeticFault(f"Division by zero: {self.num} / {other.num}")
        num = finite(self.num / other.num, "division")
        return Val(num, compose(self.unit, other.unit, UnitOp.DIV))

    def __pow__(self, other: "Val") -> "Val":
        """Raise a value to a dimensionless power."""
        if not other.unit.is_dimensionless:
            raise NonDimensionlessExponent(other.unit)
        try:
            num = finite(math.pow(self.num, other.num), "exponentiation")
        except (OverflowError, ValueError) as exc:
            raise ArithmeticFault(
                f"Cannot raise {self.num} to the power {other.num}: {exc}"
            ) from exc
        if self.unit.is_dimensionless:
            return Val(num, self.unit)
        exponent = Fraction(other.num).limit_denominator(MAX_EXPONENT_DENOMINATOR)
        return Val(num, scale_exponent(self.unit, exponent))

    def with_unit(self, unit: Unit) -> "Val":
        """Reinterpret a dimensionless value as having ``unit``."""
        if not self.unit.is_dimensionless:
            raise DoubleUnitAnnotation(self.unit, unit)
        return Val(self.num, unit)

    def with_prefixed_unit(self, power: int, unit: Unit, symbol: str) -> "Val":
        """Attach ``unit`` after rescaling by ``10**power``.

        The written unit is remembered as the value's display hint.
        """
        if not self.unit.is_dimensionless:
            raise DoubleUnitAnnotation(self.unit, unit)
        try:
            num = finite(
                scale_by_power_of_ten(self.num, power), f"annotating with {symbol}"
            )
        except OverflowError as exc:
            raise ArithmeticFault(
                f"Cannot rescale {self.num} by 10^{power}: {exc}"
            ) from exc
        return Val(num, unit, UnitHint(symbol, unit, power))
