"""
Fee calculation: configuration checks, per-method strategies, the
orchestrating calculator and the service that records results.
"""

from notary_fees.services.fee_calculation.calculator import FeeCalculator, calculate_fee
from notary_fees.services.fee_calculation.config_validator import (
    resolve_formula,
    validate_fee_type,
    validate_tiers,
)
from notary_fees.services.fee_calculation.fee_calculation_service import FeeCalculationService
from notary_fees.services.fee_calculation.strategies import (
    StrategyOutcome,
    get_strategy,
    required_variables,
)

__all__ = [
    "FeeCalculator",
    "calculate_fee",
    "resolve_formula",
    "validate_fee_type",
    "validate_tiers",
    "FeeCalculationService",
    "StrategyOutcome",
    "get_strategy",
    "required_variables",
]
