from notary_fees.repositories.base_repository import BaseRepository
from notary_fees.repositories.fee_calculation_repository import FeeCalculationRepository
from notary_fees.repositories.fee_type_repository import FeeTypeRepository

__all__ = [
    "BaseRepository",
    "FeeCalculationRepository",
    "FeeTypeRepository",
]
