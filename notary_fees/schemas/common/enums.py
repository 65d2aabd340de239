"""
Enumeration types used across the fee engine.
"""

from enum import Enum

__all__ = [
    "CalculationMethod",
]


class CalculationMethod(str, Enum):
    """How a fee type turns input data into a base amount."""

    FIXED = "FIXED"
    PERCENT = "PERCENT"
    VALUE_BASED = "VALUE_BASED"
    TIERED = "TIERED"
    FORMULA = "FORMULA"
