from notary_fees.schemas.fee_calculation.calculation import (
    AdditionalFeeItem,
    CalculationResult,
    FeeCalculationFilter,
    FeeCalculationRecord,
    FeeCalculationRequest,
    TieredFeeItem,
)

__all__ = [
    "AdditionalFeeItem",
    "CalculationResult",
    "FeeCalculationFilter",
    "FeeCalculationRecord",
    "FeeCalculationRequest",
    "TieredFeeItem",
]
