"""
Fee type configuration checks.

A fee type that passes ``validate_fee_type`` can be calculated for any input
without running into configuration problems; what remains are input errors
(missing variables, division by zero, uncovered values).
"""

from __future__ import annotations

from decimal import Decimal
from typing import Optional, Sequence, Union

from notary_fees.core.exceptions import InvalidConfigurationError
from notary_fees.core.money import Money, OutOfRangeError, to_fraction
from notary_fees.schemas.common.enums import CalculationMethod
from notary_fees.schemas.fee_type.fee_type import FeeTypeBase
from notary_fees.schemas.fee_type.formula import (
    CustomFormula,
    FixedFormula,
    PercentFormula,
    Tier,
    TieredFormula,
    ValueBasedFormula,
)
from notary_fees.services.formula import compile_formula

__all__ = [
    "ResolvedFormula",
    "resolve_formula",
    "validate_tiers",
    "validate_fee_type",
]

ResolvedFormula = Union[FixedFormula, PercentFormula, TieredFormula, ValueBasedFormula, CustomFormula]


def _require_number(value: Optional[Decimal], field: str) -> None:
    if value is None:
        return
    try:
        to_fraction(value)
    except OutOfRangeError as exc:
        raise InvalidConfigurationError(f"{field} is out of range: {exc}", field=field) from None


def _require_exact(value: Optional[Decimal], scale: int, field: str) -> None:
    """Configured amounts must be whole minor units."""
    if value is None:
        return
    _require_number(value, field)
    if Money.from_decimal(value, scale).to_fraction() != to_fraction(value):
        raise InvalidConfigurationError(
            f"{field} ({value}) has more than {scale} decimal place(s)",
            field=field,
        )


def resolve_formula(fee_type: FeeTypeBase) -> ResolvedFormula:
    """Return the formula for the active method, filling in FIXED/PERCENT defaults."""
    method = fee_type.calculation_method
    formula = fee_type.formula

    if formula is None:
        if method is CalculationMethod.FIXED:
            return FixedFormula()
        if method is CalculationMethod.PERCENT:
            return PercentFormula()
        raise InvalidConfigurationError(
            f"{method.value} method requires a formula configuration",
            field="formula",
        )

    if CalculationMethod(formula.method) != method:
        raise InvalidConfigurationError(
            f"Formula method {CalculationMethod(formula.method).value} does not match "
            f"calculation method {method.value}",
            field="formula.method",
        )
    return formula


def validate_tiers(tiers: Sequence[Tier], scale: int = 0) -> None:
    """Tiers are non-empty, ascending, contiguous, and only the last is open-ended."""
    if not tiers:
        raise InvalidConfigurationError("Tier list must not be empty", field="formula.tiers")

    last = len(tiers) - 1
    for index, tier in enumerate(tiers):
        field = f"formula.tiers[{index}]"
        _require_exact(tier.from_, scale, f"{field}.from")
        _require_exact(tier.to, scale, f"{field}.to")
        _require_number(tier.rate, f"{field}.rate")

        if tier.to is None and index != last:
            raise InvalidConfigurationError(
                "Only the final tier may be open-ended",
                field=f"{field}.to",
            )
        if tier.to is not None and tier.to <= tier.from_:
            raise InvalidConfigurationError(
                f"Tier upper bound {tier.to} must exceed lower bound {tier.from_}",
                field=field,
            )
        if index > 0 and tier.from_ != tiers[index - 1].to:
            raise InvalidConfigurationError(
                f"Tier starts at {tier.from_} but the previous tier ends at "
                f"{tiers[index - 1].to}",
                field=f"{field}.from",
            )


def validate_fee_type(fee_type: FeeTypeBase, scale: int = 0) -> ResolvedFormula:
    """
    Check a fee type's configuration and return its resolved formula.

    Raises:
        InvalidConfigurationError: inconsistent method configuration
        FormulaSyntaxError: the custom formula does not parse
    """
    formula = resolve_formula(fee_type)

    if formula.method == CalculationMethod.FIXED and fee_type.base_fee is None:
        raise InvalidConfigurationError("FIXED method requires baseFee", field="base_fee")

    if formula.method == CalculationMethod.PERCENT and fee_type.percentage is None:
        raise InvalidConfigurationError("PERCENT method requires percentage", field="percentage")
    _require_number(fee_type.percentage, "percentage")

    if isinstance(formula, (TieredFormula, ValueBasedFormula)):
        validate_tiers(formula.tiers, scale)

    if isinstance(formula, CustomFormula):
        compile_formula(formula.custom_formula)

    for field in ("base_fee", "min_fee", "max_fee"):
        _require_exact(getattr(fee_type, field), scale, field)

    if (
        fee_type.min_fee is not None
        and fee_type.max_fee is not None
        and fee_type.min_fee > fee_type.max_fee
    ):
        raise InvalidConfigurationError(
            f"minFee ({fee_type.min_fee}) exceeds maxFee ({fee_type.max_fee})",
            field="min_fee",
        )

    for index, additional in enumerate(formula.additional_fees):
        _require_exact(additional.amount, scale, f"formula.additional_fees[{index}].amount")

    return formula
