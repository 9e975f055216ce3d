"""Base dimensions and the dimension vector used to represent physical units.

A dimension vector holds one rational exponent per base dimension, in the fixed
order of ``BASE_DIMENSIONS``. Multiplication adds exponents, division subtracts
them and raising to a power scales them. Exponents are kept as
``fractions.Fraction`` so repeated composition never accumulates rounding error.

Example:
    from .dimensions import DimensionVector

    speed = DimensionVector.from_mapping({"m": 1, "s": -1})
    accel = speed / DimensionVector.from_mapping({"s": 1})
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from fractions import Fraction
from typing import NamedTuple, Self


class BaseDimension(NamedTuple):
    """A fundamental physical quantity and the symbol of its SI base unit."""

    name: str
    symbol: str


BASE_DIMENSIONS: tuple[BaseDimension, ...] = (
    BaseDimension("mass", "kg"),
    BaseDimension("length", "m"),
    BaseDimension("time", "s"),
    BaseDimension("current", "A"),
    BaseDimension("temperature", "K"),
    BaseDimension("amount", "mol"),
    BaseDimension("luminosity", "cd"),
)

_INDEX = {
    key: index
    for index, dimension in enumerate(BASE_DIMENSIONS)
    for key in (dimension.name, dimension.symbol)
}

Exponent = int | Fraction


@dataclass(frozen=True)
class DimensionVector:
    """Immutable vector of rational exponents over ``BASE_DIMENSIONS``."""

    exponents: tuple[Fraction, ...] = (Fraction(0),) * len(BASE_DIMENSIONS)

    def __post_init__(self) -> None:
        """Normalise exponents to fractions and check the vector length."""
        if len(self.exponents) != len(BASE_DIMENSIONS):
            raise ValueError(
                f"Dimension vector needs {len(BASE_DIMENSIONS)} exponents, "
                f"got {len(self.exponents)}"
            )
        object.__setattr__(
            self, "exponents", tuple(Fraction(exp) for exp in self.exponents)
        )

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Exponent]) -> Self:
        """Build a vector from base dimension names or symbols to exponents.

        Args:
            mapping: e.g. ``{"kg": 1, "m": 1, "s": -2}`` or ``{"mass": 1}``.
                Dimensions not mentioned get a zero exponent.
        """
        exponents = [Fraction(0)] * len(BASE_DIMENSIONS)
        for key, exp in mapping.items():
            if key not in _INDEX:
                raise ValueError(f"Unknown base dimension: {key}")
            exponents[_INDEX[key]] += Fraction(exp)
        return cls(tuple(exponents))

    @classmethod
    def _combine(cls, values: Iterable[Fraction]) -> Self:
        return cls(tuple(values))

    def __mul__(self, other: "DimensionVector") -> Self:
        """Multiply two units by adding their exponents."""
        return self._combine(a + b for a, b in zip(self.exponents, other.exponents))

    def __truediv__(self, other: "DimensionVector") -> Self:
        """Divide two units by subtracting their exponents."""
        return self._combine(a - b for a, b in zip(self.exponents, other.exponents))

    def __pow__(self, power: Exponent) -> Self:
        """Raise the unit to a rational power by scaling every exponent."""
        power = Fraction(power)
        return self._combine(exp * power for exp in self.exponents)

    def __getitem__(self, key: str) -> Fraction:
        """Return the exponent of a base dimension, looked up by name or symbol."""
        return self.exponents[_INDEX[key]]

    def __iter__(self) -> Iterator[tuple[BaseDimension, Fraction]]:
        """Iterate over (base dimension, exponent) pairs in the fixed order."""
        return iter(zip(BASE_DIMENSIONS, self.exponents))

    @property
    def is_dimensionless(self) -> bool:
        """Whether every exponent is zero."""
        return not any(self.exponents)

    def __str__(self) -> str:
        """Return a string representation like ``kg.m.s^-2``."""
        parts = []
        for dimension, exp in self:
            if exp == 0:
                continue
            if exp == 1:
                parts.append(dimension.symbol)
            else:
                parts.append(f"{dimension.symbol}^{exp}")
        return ".".join(parts)

    def __repr__(self) -> str:
        """Return a detailed string representation listing non-zero exponents."""
        nonzero = {dim.symbol: str(exp) for dim, exp in self if exp != 0}
        return f"DimensionVector({nonzero})"
