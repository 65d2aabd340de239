"""
Fixed-point money arithmetic.

Rules:
- Amounts are stored as an integer count of minor units plus a scale
  (decimal places). VND uses scale 0.
- Rates are converted to exact rationals; binary floats never take part
  in arithmetic that reaches a total.
- Rounding is ROUND_HALF_UP (ties away from zero) to the minor unit,
  applied once per computed amount.

Usage:
    from notary_fees.core.money import Money

    fee = Money.from_decimal("1000000000").multiply_by_rate(Decimal("0.015"))
    fee.to_decimal()   # Decimal('15000000')
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, localcontext
from fractions import Fraction
from functools import total_ordering
from typing import Iterable, Optional, Union

from notary_fees.config.settings import settings

Rational = Union[int, str, Decimal, Fraction, float]


class OutOfRangeError(ValueError):
    """A number with more integer or fraction digits than the engine accepts."""


def _check_range(value: Decimal) -> None:
    if value.adjusted() >= settings.NUMBER_MAX_INTEGER_DIGITS:
        raise OutOfRangeError(
            f"More than {settings.NUMBER_MAX_INTEGER_DIGITS} integer digits: {value:.6e}"
        )
    _, digits, exponent = value.as_tuple()
    trailing_zeros = len(digits) - len("".join(map(str, digits)).rstrip("0"))
    if -(exponent + trailing_zeros) > settings.NUMBER_MAX_FRACTION_DIGITS:
        raise OutOfRangeError(
            f"More than {settings.NUMBER_MAX_FRACTION_DIGITS} fraction digits: {value:.6e}"
        )


def to_fraction(value: Rational) -> Fraction:
    """
    Convert a numeric value to an exact Fraction (floats go through str).

    Ints, floats, strings and Decimals are bounded by the configured digit
    limits and raise OutOfRangeError outside them. Fractions pass through.
    """
    if isinstance(value, bool):
        raise TypeError("Booleans are not numeric amounts")
    if isinstance(value, Fraction):
        return value
    if isinstance(value, int):
        if abs(value) >= 10 ** settings.NUMBER_MAX_INTEGER_DIGITS:
            raise OutOfRangeError(f"More than {settings.NUMBER_MAX_INTEGER_DIGITS} integer digits")
        return Fraction(value)
    if isinstance(value, float):
        value = repr(value)
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except InvalidOperation:
            raise ValueError(f"Not a decimal number: {value!r}") from None
    if isinstance(value, Decimal):
        if not value.is_finite():
            raise ValueError(f"Not a finite number: {value}")
        if value.is_zero():
            return Fraction(0)
        _check_range(value)
        return Fraction(value)
    raise TypeError(f"Unsupported numeric type: {type(value).__name__}")


def round_half_up(value: Fraction) -> int:
    """Round a rational to the nearest integer, ties away from zero."""
    numerator, denominator = value.numerator, value.denominator
    quotient, remainder = divmod(abs(numerator), denominator)
    if 2 * remainder >= denominator:
        quotient += 1
    return -quotient if numerator < 0 else quotient


def fraction_to_decimal(value: Fraction, places: int = 28) -> Decimal:
    """Render a rational as a Decimal, rounding half up past `places` digits."""
    if value.denominator == 1:
        return Decimal(value.numerator)
    scaled = round_half_up(value * 10 ** places)
    with localcontext() as ctx:
        ctx.prec = len(str(abs(scaled))) + 1
        return Decimal(f"{scaled}E-{places}").normalize(ctx)


@total_ordering
@dataclass(frozen=True)
class Money:
    """An amount of currency as integer minor units at a fixed scale."""

    minor_units: int
    scale: int = 0

    def __post_init__(self) -> None:
        if isinstance(self.minor_units, bool) or not isinstance(self.minor_units, int):
            raise TypeError("minor_units must be an int")
        if isinstance(self.scale, bool) or not isinstance(self.scale, int) or self.scale < 0:
            raise ValueError("scale must be a non-negative int")

    # ------------------------------------------------------------------ #
    # Construction
    # ------------------------------------------------------------------ #
    @classmethod
    def zero(cls, scale: int = 0) -> "Money":
        return cls(0, scale)

    @classmethod
    def from_rational(cls, value: Rational, scale: int = 0) -> "Money":
        """Build from a major-unit amount, rounding once to the minor unit."""
        return cls(round_half_up(to_fraction(value) * 10 ** scale), scale)

    @classmethod
    def from_decimal(cls, value: Rational, scale: int = 0) -> "Money":
        return cls.from_rational(value, scale)

    @classmethod
    def sum(cls, amounts: Iterable["Money"], scale: int = 0) -> "Money":
        total = cls.zero(scale)
        for amount in amounts:
            total = total.add(amount)
        return total

    # ------------------------------------------------------------------ #
    # Arithmetic
    # ------------------------------------------------------------------ #
    def _check_scale(self, other: "Money") -> None:
        if not isinstance(other, Money):
            raise TypeError(f"Expected Money, got {type(other).__name__}")
        if other.scale != self.scale:
            raise ValueError(f"Scale mismatch: {self.scale} != {other.scale}")

    def add(self, other: "Money") -> "Money":
        self._check_scale(other)
        return Money(self.minor_units + other.minor_units, self.scale)

    def subtract(self, other: "Money") -> "Money":
        self._check_scale(other)
        return Money(self.minor_units - other.minor_units, self.scale)

    def multiply_by_rate(self, rate: Rational) -> "Money":
        """Multiply by an exact rate and round once (half up)."""
        return Money(round_half_up(self.minor_units * to_fraction(rate)), self.scale)

    def multiply_by_quantity(self, quantity: int) -> "Money":
        if isinstance(quantity, bool) or not isinstance(quantity, int):
            raise TypeError("quantity must be an int")
        return Money(self.minor_units * quantity, self.scale)

    def divide(self, divisor: Rational) -> "Money":
        """Divide exactly, then round the remainder half up."""
        divisor_fraction = to_fraction(divisor)
        if divisor_fraction == 0:
            raise ZeroDivisionError("Money division by zero")
        return Money(round_half_up(self.minor_units / divisor_fraction), self.scale)

    def clamp_to(
        self,
        minimum: Optional["Money"] = None,
        maximum: Optional["Money"] = None,
    ) -> "Money":
        """Bound the amount to [minimum, maximum]; either bound may be None."""
        if minimum is not None and maximum is not None and minimum > maximum:
            raise ValueError(f"Lower bound {minimum} exceeds upper bound {maximum}")
        result = self
        if minimum is not None and result < minimum:
            result = minimum
        if maximum is not None and result > maximum:
            result = maximum
        return result

    def compare(self, other: "Money") -> int:
        self._check_scale(other)
        return (self.minor_units > other.minor_units) - (self.minor_units < other.minor_units)

    def __add__(self, other: "Money") -> "Money":
        return self.add(other)

    def __sub__(self, other: "Money") -> "Money":
        return self.subtract(other)

    def __lt__(self, other: "Money") -> bool:
        return self.compare(other) < 0

    # ------------------------------------------------------------------ #
    # Conversion
    # ------------------------------------------------------------------ #
    def to_fraction(self) -> Fraction:
        return Fraction(self.minor_units, 10 ** self.scale)

    def to_decimal(self) -> Decimal:
        """Exact major-unit Decimal, independent of the decimal context."""
        if self.scale == 0:
            return Decimal(self.minor_units)
        return Decimal(f"{self.minor_units}E-{self.scale}")

    @property
    def is_zero(self) -> bool:
        return self.minor_units == 0

    def __str__(self) -> str:
        return str(self.to_decimal())
