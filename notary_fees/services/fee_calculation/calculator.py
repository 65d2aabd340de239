"""
Fee calculation orchestrator.

Pure and synchronous: the calculator reads a fee type and input data,
performs no I/O and keeps no state between calls, so one instance can be
shared across threads.

Steps:
1. Validate the fee type configuration.
2. Check the input supplies every variable the active method reads.
3. Run the method's strategy.
4. Price the additional fees (surcharges).
5. Clamp the method subtotal to [minFee, maxFee].
6. Total = bounded subtotal + surcharges.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any, List, Mapping, Optional, Tuple

from notary_fees.config.settings import settings
from notary_fees.core.exceptions import MissingVariableError
from notary_fees.core.money import Money
from notary_fees.schemas.fee_calculation.calculation import AdditionalFeeItem, CalculationResult
from notary_fees.schemas.fee_type.fee_type import FeeTypeBase
from notary_fees.schemas.fee_type.formula import AdditionalFee
from notary_fees.services.fee_calculation.config_validator import validate_fee_type
from notary_fees.services.fee_calculation.strategies import get_strategy, required_variables
from notary_fees.utils.input_data import read_optional_quantity

__all__ = ["FeeCalculator", "calculate_fee"]


class FeeCalculator:
    """Computes an itemized CalculationResult for a fee type and input data."""

    def __init__(self, scale: Optional[int] = None):
        self.scale = settings.CURRENCY_SCALE if scale is None else scale

    def calculate(self, fee_type: FeeTypeBase, input_data: Mapping[str, Any]) -> CalculationResult:
        """
        Calculate the fee owed.

        Raises:
            FeeCalculationError: the first configuration or input error met;
                no partial result is ever returned.
        """
        formula = validate_fee_type(fee_type, self.scale)
        self._check_required_inputs(required_variables(formula), input_data)

        outcome = get_strategy(fee_type.calculation_method)(formula, fee_type, input_data, self.scale)
        additional_items, additional_total = self._price_additional_fees(
            formula.additional_fees, input_data
        )

        bounded = outcome.subtotal.clamp_to(
            self._money(fee_type.min_fee),
            self._money(fee_type.max_fee),
        )
        total = bounded.add(additional_total)

        return CalculationResult(
            base_fee=self._decimal(outcome.base_fee),
            percentage_fee=self._decimal(outcome.percentage_fee),
            formula_fee=self._decimal(outcome.formula_fee),
            tiered_fees=outcome.tiered_fees,
            additional_fees=additional_items or None,
            subtotal=outcome.subtotal.to_decimal(),
            bounded_subtotal=bounded.to_decimal(),
            total_fee=total.to_decimal(),
        )

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def _check_required_inputs(names, input_data: Mapping[str, Any]) -> None:
        for name in sorted(names):
            if input_data.get(name) is None:
                raise MissingVariableError(name, "not supplied")

    def _price_additional_fees(
        self,
        fees: List[AdditionalFee],
        input_data: Mapping[str, Any],
    ) -> Tuple[List[AdditionalFeeItem], Money]:
        items: List[AdditionalFeeItem] = []
        total = Money.zero(self.scale)

        for fee in fees:
            amount = Money.from_decimal(fee.amount, self.scale)
            quantity = self._quantity(fee, input_data) if fee.per_unit else None
            line_total = amount.multiply_by_quantity(quantity) if quantity is not None else amount

            items.append(
                AdditionalFeeItem(
                    name=fee.name,
                    quantity=quantity,
                    amount=amount.to_decimal(),
                    total=line_total.to_decimal(),
                    description=fee.description or fee.name,
                )
            )
            total = total.add(line_total)

        return items, total

    @staticmethod
    def _quantity(fee: AdditionalFee, input_data: Mapping[str, Any]) -> int:
        """
        An explicit quantity field must hold a valid quantity when present.
        Guessed fields are skipped unless they hold a non-negative whole number.
        """
        candidates = fee.quantity_candidates
        for field in candidates:
            try:
                quantity = read_optional_quantity(input_data, field)
            except MissingVariableError:
                if fee.quantity_field:
                    raise
                continue
            if quantity is not None:
                return quantity
        if fee.quantity_required:
            raise MissingVariableError(candidates[0], f"quantity for '{fee.name}' not supplied")
        return 1

    def _money(self, value: Optional[Decimal]) -> Optional[Money]:
        return None if value is None else Money.from_decimal(value, self.scale)

    @staticmethod
    def _decimal(value: Optional[Money]) -> Optional[Decimal]:
        return None if value is None else value.to_decimal()


def calculate_fee(fee_type: FeeTypeBase, input_data: Mapping[str, Any]) -> CalculationResult:
    """Calculate with the configured currency scale."""
    return FeeCalculator().calculate(fee_type, input_data)
