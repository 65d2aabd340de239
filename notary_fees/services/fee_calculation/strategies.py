"""
Strategy calculators, one per calculation method.

Each strategy takes the resolved formula, the fee type, the input data and
the currency scale, and returns the method-specific part of the result.
Amounts are rounded once each (half up to the minor unit).
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Callable, Dict, FrozenSet, List, Mapping, Optional

from notary_fees.core.exceptions import (
    InvalidConfigurationError,
    MissingVariableError,
    NoTierMatchedError,
)
from notary_fees.core.money import Money, fraction_to_decimal, to_fraction
from notary_fees.schemas.common.enums import CalculationMethod
from notary_fees.schemas.fee_calculation.calculation import TieredFeeItem
from notary_fees.schemas.fee_type.fee_type import FeeTypeBase
from notary_fees.schemas.fee_type.formula import Tier
from notary_fees.services.formula import compile_formula
from notary_fees.utils.input_data import read_number

__all__ = [
    "StrategyOutcome",
    "Strategy",
    "fixed_strategy",
    "percent_strategy",
    "tiered_strategy",
    "value_based_strategy",
    "formula_strategy",
    "get_strategy",
    "required_variables",
]


@dataclass(frozen=True)
class StrategyOutcome:
    """Method result before surcharges and bounding."""

    subtotal: Money
    base_fee: Optional[Money] = None
    percentage_fee: Optional[Money] = None
    formula_fee: Optional[Money] = None
    tiered_fees: Optional[List[TieredFeeItem]] = None


Strategy = Callable[[Any, FeeTypeBase, Mapping[str, Any], int], StrategyOutcome]


def _read_non_negative(input_data: Mapping[str, Any], name: str) -> Fraction:
    value = read_number(input_data, name)
    if value < 0:
        raise MissingVariableError(name, "must not be negative")
    return value


def _tier_item(index: int, tier: Tier, amount: Money) -> TieredFeeItem:
    return TieredFeeItem(
        tier=index + 1,
        from_=tier.from_,
        to=tier.to,
        rate=tier.rate,
        amount=amount.to_decimal(),
        description=tier.description or f"Tier {index + 1}",
    )


def fixed_strategy(formula, fee_type: FeeTypeBase, input_data: Mapping[str, Any], scale: int) -> StrategyOutcome:
    base_fee = Money.from_decimal(fee_type.base_fee, scale)
    return StrategyOutcome(subtotal=base_fee, base_fee=base_fee)


def percent_strategy(formula, fee_type: FeeTypeBase, input_data: Mapping[str, Any], scale: int) -> StrategyOutcome:
    value = _read_non_negative(input_data, formula.reference_field)
    fee = Money.from_rational(value * to_fraction(fee_type.percentage), scale)
    return StrategyOutcome(subtotal=fee, percentage_fee=fee)


def tiered_strategy(formula, fee_type: FeeTypeBase, input_data: Mapping[str, Any], scale: int) -> StrategyOutcome:
    """
    Progressive brackets: a value spanning several tiers pays each tier's
    rate only on the slice of the value inside that tier.
    """
    value = _read_non_negative(input_data, formula.value_field)
    items: List[TieredFeeItem] = []
    amounts: List[Money] = []

    for index, tier in enumerate(formula.tiers):
        lower = to_fraction(tier.from_)
        if value <= lower:
            continue
        upper = value if tier.to is None else min(value, to_fraction(tier.to))
        amount = Money.from_rational((upper - lower) * to_fraction(tier.rate), scale)
        if amount.is_zero:
            continue
        items.append(_tier_item(index, tier, amount))
        amounts.append(amount)

    return StrategyOutcome(subtotal=Money.sum(amounts, scale), tiered_fees=items)


def value_based_strategy(formula, fee_type: FeeTypeBase, input_data: Mapping[str, Any], scale: int) -> StrategyOutcome:
    """Single bracket: the covering tier's rate applies to the whole value."""
    value = _read_non_negative(input_data, formula.value_field)

    for index, tier in enumerate(formula.tiers):
        lower = to_fraction(tier.from_)
        if value < lower:
            continue
        if tier.to is not None and value >= to_fraction(tier.to):
            continue
        amount = Money.from_rational(value * to_fraction(tier.rate), scale)
        return StrategyOutcome(subtotal=amount, tiered_fees=[_tier_item(index, tier, amount)])

    raise NoTierMatchedError(fraction_to_decimal(value))


def formula_strategy(formula, fee_type: FeeTypeBase, input_data: Mapping[str, Any], scale: int) -> StrategyOutcome:
    result = compile_formula(formula.custom_formula).evaluate_exact(input_data)
    fee = Money.from_rational(result, scale)
    return StrategyOutcome(subtotal=fee, formula_fee=fee)


_STRATEGIES: Dict[CalculationMethod, Strategy] = {
    CalculationMethod.FIXED: fixed_strategy,
    CalculationMethod.PERCENT: percent_strategy,
    CalculationMethod.TIERED: tiered_strategy,
    CalculationMethod.VALUE_BASED: value_based_strategy,
    CalculationMethod.FORMULA: formula_strategy,
}


def get_strategy(method: CalculationMethod) -> Strategy:
    try:
        return _STRATEGIES[method]
    except KeyError:
        raise InvalidConfigurationError(
            f"Unsupported calculation method: {method}",
            field="calculation_method",
        ) from None


def required_variables(formula) -> FrozenSet[str]:
    """Input fields the active method reads, known before evaluation."""
    if formula.method == CalculationMethod.PERCENT:
        return frozenset({formula.reference_field})
    if formula.method in (CalculationMethod.TIERED, CalculationMethod.VALUE_BASED):
        return frozenset({formula.value_field})
    if formula.method == CalculationMethod.FORMULA:
        return compile_formula(formula.custom_formula).variables
    return frozenset()
