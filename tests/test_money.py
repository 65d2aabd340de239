"""Tests for fixed-point money arithmetic."""

from decimal import Decimal
from fractions import Fraction

import pytest

from notary_fees.core.money import (
    Money,
    OutOfRangeError,
    fraction_to_decimal,
    round_half_up,
    to_fraction,
)


class TestRounding:
    @pytest.mark.parametrize(
        "value, expected",
        [
            ("0.5", 1),
            ("1.5", 2),
            ("2.5", 3),
            ("2.4999", 2),
            ("-2.5", -3),
            ("-0.4", 0),
        ],
    )
    def test_half_up_away_from_zero(self, value, expected):
        assert round_half_up(to_fraction(value)) == expected

    def test_floats_are_read_through_repr(self):
        assert to_fraction(0.1) == Fraction(1, 10)
        assert to_fraction(0.1) + to_fraction(0.2) == Fraction(3, 10)

    def test_booleans_are_not_amounts(self):
        with pytest.raises(TypeError):
            to_fraction(True)

    @pytest.mark.parametrize("value", ["abc", "NaN", "Infinity"])
    def test_non_numeric_strings_rejected(self, value):
        with pytest.raises(ValueError):
            to_fraction(value)

    @pytest.mark.parametrize("value", ["1e3000000", "1e30", 10 ** 30, -(10 ** 30), "1e-31", 1e-300])
    def test_out_of_range_values_rejected(self, value):
        with pytest.raises(OutOfRangeError):
            to_fraction(value)

    def test_range_limits_are_inclusive(self):
        assert to_fraction("9" * 30) == 10 ** 30 - 1
        assert to_fraction("1e-30") == Fraction(1, 10 ** 30)
        assert to_fraction("0e-3000000") == 0
        assert to_fraction("5.00000000000000000000000000000000000") == 5

    def test_fraction_to_decimal(self):
        assert fraction_to_decimal(Fraction(5, 2)) == Decimal("2.5")
        assert fraction_to_decimal(Fraction(7)) == Decimal(7)
        assert fraction_to_decimal(Fraction(1, 3), places=4) == Decimal("0.3333")
        assert fraction_to_decimal(Fraction(2, 3), places=4) == Decimal("0.6667")


class TestConstruction:
    def test_from_decimal_rounds_once(self):
        assert Money.from_decimal(Decimal("12.345"), scale=2) == Money(1235, 2)
        assert Money.from_decimal("1000000") == Money(1_000_000)

    def test_rejects_non_integer_minor_units(self):
        with pytest.raises(TypeError):
            Money(1.5)
        with pytest.raises(TypeError):
            Money(True)

    def test_rejects_negative_scale(self):
        with pytest.raises(ValueError):
            Money(1, -1)

    def test_to_decimal(self):
        assert Money(1235, 2).to_decimal() == Decimal("12.35")
        assert str(Money(1235, 2)) == "12.35"
        assert Money(500000).to_decimal() == Decimal("500000")

    def test_sum(self):
        assert Money.sum([Money(1), Money(4), Money(8)]) == Money(13)
        assert Money.sum([]) == Money.zero()


class TestArithmetic:
    def test_add_and_subtract(self):
        assert Money(300).add(Money(200)) == Money(500)
        assert Money(300) - Money(500) == Money(-200)

    def test_scale_mismatch(self):
        with pytest.raises(ValueError, match="Scale mismatch"):
            Money(1, 0).add(Money(1, 2))

    def test_multiply_by_rate(self):
        value = Money(1_000_000_000)
        assert value.multiply_by_rate(Decimal("0.015")) == Money(15_000_000)
        assert value.multiply_by_rate(0.015) == Money(15_000_000)
        assert Money(333).multiply_by_rate("0.5") == Money(167)

    @pytest.mark.parametrize(
        "first, second",
        [
            ("0.015", "0.005"),
            ("0.333", "0.333"),
            ("0.125", "0.375"),
            ("0.0001", "0.9999"),
            ("0.00015", "0.02"),
        ],
    )
    def test_split_rate_within_one_minor_unit(self, first, second):
        combined = Decimal(first) + Decimal(second)
        for minor_units in range(1, 300):
            amount = Money(minor_units)
            split = amount.multiply_by_rate(first) + amount.multiply_by_rate(second)
            whole = amount.multiply_by_rate(combined)
            assert abs(split.minor_units - whole.minor_units) <= 1

    def test_multiply_by_quantity(self):
        assert Money(20000).multiply_by_quantity(3) == Money(60000)
        with pytest.raises(TypeError):
            Money(20000).multiply_by_quantity(1.5)

    def test_divide(self):
        assert Money(100).divide(3) == Money(33)
        assert Money(100).divide(8) == Money(13)
        with pytest.raises(ZeroDivisionError):
            Money(100).divide(0)

    def test_compare(self):
        assert Money(1).compare(Money(2)) == -1
        assert Money(2).compare(Money(2)) == 0
        assert Money(3) > Money(2)


class TestClamp:
    def test_within_bounds_unchanged(self):
        assert Money(15).clamp_to(Money(10), Money(20)) == Money(15)

    def test_raised_to_minimum(self):
        assert Money(5).clamp_to(Money(10), Money(20)) == Money(10)

    def test_lowered_to_maximum(self):
        assert Money(15_000_000).clamp_to(None, Money(10_000_000)) == Money(10_000_000)

    def test_open_bounds(self):
        assert Money(7).clamp_to() == Money(7)

    def test_inverted_bounds_rejected(self):
        with pytest.raises(ValueError):
            Money(5).clamp_to(Money(20), Money(10))

    @pytest.mark.parametrize("amount", [-50, 0, 9, 10, 11, 500, 999, 1000, 1001, 10**9])
    def test_result_always_inside_bounds(self, amount):
        low, high = Money(10), Money(1000)
        result = Money(amount).clamp_to(low, high)
        assert low <= result <= high
