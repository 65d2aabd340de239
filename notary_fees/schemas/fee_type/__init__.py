from notary_fees.schemas.fee_type.fee_type import (
    FeeType,
    FeeTypeBase,
    FeeTypeCreate,
    FeeTypeStatusUpdate,
    FeeTypeValidation,
)
from notary_fees.schemas.fee_type.formula import (
    AdditionalFee,
    CustomFormula,
    FixedFormula,
    FormulaSchema,
    PercentFormula,
    Tier,
    TieredFormula,
    ValueBasedFormula,
)

__all__ = [
    "FeeType",
    "FeeTypeBase",
    "FeeTypeCreate",
    "FeeTypeStatusUpdate",
    "FeeTypeValidation",
    "AdditionalFee",
    "CustomFormula",
    "FixedFormula",
    "FormulaSchema",
    "PercentFormula",
    "Tier",
    "TieredFormula",
    "ValueBasedFormula",
]
