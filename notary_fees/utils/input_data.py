"""
Reading typed values out of caller-supplied input data.

Input data comes from document-group forms, so numbers may arrive as JSON
numbers or as strings. Values are converted to exact rationals; floats are
read through their shortest repr so 0.1 means one tenth.
"""

from __future__ import annotations

from decimal import Decimal
from fractions import Fraction
from typing import Any, Mapping, Optional

from notary_fees.core.exceptions import MissingVariableError
from notary_fees.core.money import OutOfRangeError, to_fraction

__all__ = [
    "read_number",
    "read_optional_quantity",
]


def read_number(input_data: Mapping[str, Any], name: str) -> Fraction:
    """Return the numeric value of a required input field."""
    if name not in input_data or input_data[name] is None:
        raise MissingVariableError(name, "not supplied")

    value = input_data[name]
    if isinstance(value, bool):
        raise MissingVariableError(name, "expected a number, got a boolean")
    if not isinstance(value, (int, float, Decimal, str)):
        raise MissingVariableError(name, f"expected a number, got {type(value).__name__}")
    if isinstance(value, str) and not value.strip():
        raise MissingVariableError(name, "empty value")

    try:
        return to_fraction(value)
    except OutOfRangeError:
        raise MissingVariableError(name, "out of range") from None
    except (TypeError, ValueError):
        raise MissingVariableError(name, f"not a number: {value!r}") from None


def read_optional_quantity(input_data: Mapping[str, Any], name: str) -> Optional[int]:
    """Return a non-negative integer quantity, or None when the field is absent."""
    if name not in input_data or input_data[name] is None:
        return None

    number = read_number(input_data, name)
    if number.denominator != 1 or number < 0:
        raise MissingVariableError(name, "quantity must be a non-negative whole number")
    return int(number)
