from notary_fees.schemas.common.base import (
    Amount,
    BaseCreateSchema,
    BaseFilterSchema,
    BaseSchema,
    FrozenSchema,
)
from notary_fees.schemas.common.enums import CalculationMethod
from notary_fees.schemas.common.pagination import PaginatedResponse, PaginationParams

__all__ = [
    "Amount",
    "BaseCreateSchema",
    "BaseFilterSchema",
    "BaseSchema",
    "FrozenSchema",
    "CalculationMethod",
    "PaginatedResponse",
    "PaginationParams",
]
