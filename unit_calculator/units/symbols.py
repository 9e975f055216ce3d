"""Unit symbol and metric prefix tables used when parsing unit literals.

Each known symbol maps to a unit over the base dimensions plus a power-of-ten
scale relative to the coherent SI unit (``g`` is ``kg`` scaled by 10^-3). Metric
prefixes add their own power of ten. The dimensional part is what unit algebra
works with; the power of ten travels separately and ends up rescaling the
magnitude of a value.
"""

import re
from types import MappingProxyType
from typing import NamedTuple

from ..errors import UnresolvedUnitSymbol
from .dimensions import BASE_DIMENSIONS
from .units import BaseUnit, Unit


class UnitSymbol(NamedTuple):
    """A unit known by symbol, with its power-of-ten scale."""

    unit: Unit
    power: int = 0
    prefixable: bool = True


class ResolvedUnit(NamedTuple):
    """Result of resolving a unit token such as ``km`` or ``s^-2``."""

    symbol: str
    unit: Unit
    power: int
    exponent: int


_base_symbols = {
    dimension.symbol: UnitSymbol(BaseUnit.from_mapping({dimension.symbol: 1}))
    for dimension in BASE_DIMENSIONS
}
# prefixes apply to the gram, not the kilogram
_base_symbols["kg"] = _base_symbols["kg"]._replace(prefixable=False)

UNIT_SYMBOLS = MappingProxyType(
    {
        **_base_symbols,
        "g": UnitSymbol(BaseUnit.from_mapping({"kg": 1}), power=-3),
        "N": UnitSymbol(BaseUnit.from_mapping({"kg": 1, "m": 1, "s": -2})),
        "J": UnitSymbol(BaseUnit.from_mapping({"kg": 1, "m": 2, "s": -2})),
        "W": UnitSymbol(BaseUnit.from_mapping({"kg": 1, "m": 2, "s": -3})),
        "Pa": UnitSymbol(BaseUnit.from_mapping({"kg": 1, "m": -1, "s": -2})),
        "Hz": UnitSymbol(BaseUnit.from_mapping({"s": -1})),
        "C": UnitSymbol(BaseUnit.from_mapping({"A": 1, "s": 1})),
        "V": UnitSymbol(BaseUnit.from_mapping({"kg": 1, "m": 2, "s": -3, "A": -1})),
    }
)

UNIT_PREFIXES = MappingProxyType(
    {
        "T": 12,
        "G": 9,
        "M": 6,
        "k": 3,
        "h": 2,
        "da": 1,
        "d": -1,
        "c": -2,
        "m": -3,
        "µ": -6,
        "μ": -6,
        "u": -6,
        "n": -9,
        "p": -12,
    }
)

# reverse lookup, first abbreviation listed wins
UNIT_PREFIXES_ABBR = MappingProxyType(
    {power: abbr for abbr, power in reversed(UNIT_PREFIXES.items())}
)

_PREFIXES_LONGEST_FIRST = sorted(UNIT_PREFIXES, key=len, reverse=True)

_UNIT_TOKEN = re.compile(r"(?P<symbol>[^\W\d_]+)(?:\^(?P<exp>-?\d+))?")


def _lookup(symbol: str) -> tuple[Unit, int]:
    """Return the unit and power of ten for a symbol, trying prefixes if needed."""
    if symbol in UNIT_SYMBOLS:
        known = UNIT_SYMBOLS[symbol]
        return known.unit, known.power
    for prefix in _PREFIXES_LONGEST_FIRST:
        rest = symbol.removeprefix(prefix)
        if rest == symbol or rest not in UNIT_SYMBOLS:
            continue
        known = UNIT_SYMBOLS[rest]
        if known.prefixable:
            return known.unit, known.power + UNIT_PREFIXES[prefix]
    raise UnresolvedUnitSymbol(symbol)


def resolve_unit(token: str) -> ResolvedUnit:
    """Resolve a unit token like ``kg``, ``km`` or ``s^-2``.

    Args:
        token: Unit symbol, optionally prefixed and optionally raised to an
            integer power with ``^``.

    Returns:
        The unit and power of ten (prefix plus symbol scale) of a single
        occurrence of the symbol, together with the exponent to raise it to.

    Raises:
        UnresolvedUnitSymbol: if the symbol is not known with or without prefix.
    """
    match = _UNIT_TOKEN.fullmatch(token.strip())
    if not match:
        raise UnresolvedUnitSymbol(token)
    symbol = match.group("symbol")
    exponent = int(match.group("exp")) if match.group("exp") else 1
    unit, power = _lookup(symbol)
    return ResolvedUnit(
        symbol=symbol,
        unit=unit,
        power=power,
        exponent=exponent,
    )
