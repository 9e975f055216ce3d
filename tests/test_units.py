from fractions import Fraction

import pytest

from unit_calculator.errors import UnresolvedUnitSymbol, UnsupportedUnitOperation
from unit_calculator.units import (
    DIMENSIONLESS,
    UNIT_PREFIXES_ABBR,
    UNIT_SYMBOLS,
    BaseUnit,
    CustomUnit,
    DimensionVector,
    UnitOp,
    compose,
    resolve_unit,
    scale_exponent,
)

kg = BaseUnit.from_mapping({"kg": 1})
m = BaseUnit.from_mapping({"m": 1})
s = BaseUnit.from_mapping({"s": 1})
newton = BaseUnit.from_mapping({"kg": 1, "m": 1, "s": -2})


def test_dimension_vector_from_mapping():
    v = DimensionVector.from_mapping({"kg": 1, "length": 1, "s": -2})
    assert v["mass"] == 1
    assert v["m"] == 1
    assert v["time"] == -2
    assert v["A"] == 0
    assert str(v) == "kg.m.s^-2"


def test_dimension_vector_exponents_are_fractions():
    v = DimensionVector.from_mapping({"m": 1})
    assert all(isinstance(exp, Fraction) for exp in v.exponents)


def test_dimension_vector_unknown_dimension():
    with pytest.raises(ValueError):
        DimensionVector.from_mapping({"furlong": 1})


def test_dimension_vector_wrong_length():
    with pytest.raises(ValueError):
        DimensionVector((1, 2, 3))


def test_dimension_vector_arithmetic():
    v = DimensionVector.from_mapping({"m": 1, "s": -1})
    w = DimensionVector.from_mapping({"s": 1})
    assert v * w == DimensionVector.from_mapping({"m": 1})
    assert v / w == DimensionVector.from_mapping({"m": 1, "s": -2})
    assert v**2 == DimensionVector.from_mapping({"m": 2, "s": -2})


def test_dimensionless():
    assert DIMENSIONLESS.is_dimensionless
    assert not DIMENSIONLESS
    assert str(DIMENSIONLESS) == ""
    assert m
    assert (m / m) == DIMENSIONLESS


def test_unit_equality():
    assert BaseUnit.from_mapping({"kg": 1, "m": 1, "s": -2}) == newton
    assert newton != kg
    assert hash(newton) == hash(BaseUnit.from_mapping({"s": -2, "m": 1, "kg": 1}))


def test_compose():
    assert compose(kg, m, UnitOp.MUL) == BaseUnit.from_mapping({"kg": 1, "m": 1})
    assert compose(m, s, UnitOp.DIV) == BaseUnit.from_mapping({"m": 1, "s": -1})
    assert kg * m / s**2 == newton


@pytest.mark.parametrize("a", [kg, m, newton, DIMENSIONLESS])
@pytest.mark.parametrize("b", [s, newton, BaseUnit.from_mapping({"m": Fraction(1, 2)})])
def test_compose_multiply_then_divide_round_trip(a, b):
    assert compose(compose(a, b, UnitOp.MUL), b, UnitOp.DIV) == a


def test_scale_exponent():
    assert scale_exponent(newton, 2) == BaseUnit.from_mapping(
        {"kg": 2, "m": 2, "s": -4}
    )
    assert scale_exponent(m, Fraction(1, 2)) == BaseUnit.from_mapping(
        {"m": Fraction(1, 2)}
    )


def test_repeated_fractional_exponents_are_exact():
    root = scale_exponent(m, Fraction(1, 3))
    assert root * root * root == m


def test_custom_units():
    apple = CustomUnit({"apple": 1})
    crate = CustomUnit({"crate": 1})
    per_crate = apple / crate**2
    assert per_crate == CustomUnit({"apple": 1, "crate": -2})
    assert str(per_crate) == "apple/crate^2"
    assert (per_crate * crate**2) == apple
    assert CustomUnit({"apple": 1, "pear": 0}).unit_map == {"apple": 1}


def test_custom_unit_cannot_combine_with_base_unit():
    with pytest.raises(UnsupportedUnitOperation):
        compose(CustomUnit({"apple": 1}), m, UnitOp.MUL)
    with pytest.raises(UnsupportedUnitOperation):
        m / CustomUnit({"apple": 1})


@pytest.mark.parametrize(
    "token, unit, power, exponent",
    [
        ("kg", kg, 0, 1),
        ("m", m, 0, 1),
        ("km", m, 3, 1),
        ("mm", m, -3, 1),
        ("dam", m, 1, 1),
        ("s^-2", s, 0, -2),
        ("ms^2", s, -3, 2),
        ("µs", s, -6, 1),
        ("g", kg, -3, 1),
        ("mg", kg, -6, 1),
        ("cd", BaseUnit.from_mapping({"cd": 1}), 0, 1),
        ("kPa", BaseUnit.from_mapping({"kg": 1, "m": -1, "s": -2}), 3, 1),
        ("N", newton, 0, 1),
    ],
)
def test_resolve_unit(token, unit, power, exponent):
    resolved = resolve_unit(token)
    assert resolved.unit == unit
    assert resolved.power == power
    assert resolved.exponent == exponent


@pytest.mark.parametrize("token", ["min", "foo", "mkg", "k", "m^x"])
def test_resolve_unknown_unit(token):
    with pytest.raises(UnresolvedUnitSymbol):
        resolve_unit(token)


def test_prefix_abbreviations():
    assert UNIT_PREFIXES_ABBR[3] == "k"
    assert UNIT_PREFIXES_ABBR[-3] == "m"
    assert UNIT_PREFIXES_ABBR[-6] == "µ"


def test_tables_are_immutable():
    with pytest.raises(TypeError):
        UNIT_SYMBOLS["furlong"] = UNIT_SYMBOLS["m"]  # type: ignore[index]
