"""Module for creating errors representing invalid programs and unit operations."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .units.units import Unit


class UnitCalculatorError(Exception):
    """Base class for all errors raised while parsing, evaluating or rendering."""

    code = "X000"

    def __init__(self, message: str, lineno: int | None = None):
        """Initialise a new error.

        Args:
            message: Human readable description of the problem.
            lineno: Line of the program the error refers to, if known.
        """
        super().__init__(message)
        self.message = message
        self.lineno = lineno

    def __str__(self) -> str:
        """Return the message, prefixed by the line number when known."""
        if self.lineno is None:
            return f"{self.code}: {self.message}"
        return f"line {self.lineno}: {self.code}: {self.message}"

    def __repr__(self) -> str:
        """Return a string representation of the error."""
        return (
            f"{type(self).__name__}"
            f"(code={self.code!r}, lineno={self.lineno!r}, message={self.message!r})"
        )


class ParseError(UnitCalculatorError):
    """P001: The program text or its parse tree is malformed."""

    code = "P001"


class IncompatibleUnits(UnitCalculatorError):
    """U001: Cannot add or subtract operands with different units."""

    code = "U001"

    def __init__(self, left_unit: "Unit", right_unit: "Unit", operator: str = "+"):
        """Initialise from the two mismatching units."""
        verb = "add" if operator == "+" else "subtract"
        super().__init__(
            f"Cannot {verb} operands with different units: "
            f"{left_unit or 'dimensionless'} and {right_unit or 'dimensionless'}"
        )
        self.left_unit = left_unit
        self.right_unit = right_unit


class DoubleUnitAnnotation(UnitCalculatorError):
    """U002: A unit annotation was applied to a value that already has a unit."""

    code = "U002"

    def __init__(self, existing_unit: "Unit", new_unit: "Unit"):
        """Initialise from the unit already present and the one being attached."""
        super().__init__(
            f"Value already has unit {existing_unit}, cannot annotate it with {new_unit}"
        )


class UnresolvedUnitSymbol(UnitCalculatorError):
    """U003: A unit symbol is not in the unit table."""

    code = "U003"

    def __init__(self, symbol: str):
        """Initialise from the unknown symbol."""
        super().__init__(f"Unknown unit symbol '{symbol}'")
        self.symbol = symbol


class DisplayHintMismatch(UnitCalculatorError):
    """U004: A display hint does not match the unit of the displayed value."""

    code = "U004"

    def __init__(self, hint_text: str, unit: "Unit"):
        """Initialise from the hint text and the value's actual unit."""
        super().__init__(
            f"Unit hint {hint_text} does not match value with unit "
            f"{unit or 'dimensionless'}"
        )


class NonDimensionlessExponent(UnitCalculatorError):
    """U005: Exponent must be a dimensionless value."""

    code = "U005"

    def __init__(self, unit: "Unit"):
        """Initialise from the unit carried by the exponent."""
        super().__init__(f"Exponent must be dimensionless, received unit {unit}")


class UnsupportedUnitOperation(UnitCalculatorError):
    """U006: Custom units cannot be combined with base units."""

    code = "U006"


class UndefinedVariable(UnitCalculatorError):
    """E001: A variable was referenced before being declared."""

    code = "E001"

    def __init__(self, name: str):
        """Initialise from the variable name."""
        super().__init__(f"Variable '{name}' is not defined")
        self.name = name


class ArithmeticFault(UnitCalculatorError):
    """E002: The magnitude of a result cannot be computed."""

    code = "E002"
