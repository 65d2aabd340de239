from notary_fees.models.base import Base, BaseModel
from notary_fees.models.fee_calculation import FeeCalculation
from notary_fees.models.fee_type import FeeType

__all__ = [
    "Base",
    "BaseModel",
    "FeeCalculation",
    "FeeType",
]
