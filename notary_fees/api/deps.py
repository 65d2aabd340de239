"""
FastAPI dependencies: database session and service factories.

Example usage in a router:
    @router.get("/{calculation_id}")
    def read(service: FeeCalculationService = Depends(deps.get_fee_calculation_service)):
        ...
"""

from typing import Optional
from uuid import UUID

from fastapi import Depends, Header
from sqlalchemy.orm import Session

from notary_fees.db.session import get_db
from notary_fees.repositories import FeeCalculationRepository, FeeTypeRepository
from notary_fees.services.fee_calculation import FeeCalculationService, FeeCalculator
from notary_fees.services.fee_type import FeeTypeService

# Pure and stateless; shared by every request
_calculator = FeeCalculator()


def get_calculator() -> FeeCalculator:
    return _calculator


def get_fee_calculation_service(
    db: Session = Depends(get_db),
    calculator: FeeCalculator = Depends(get_calculator),
) -> FeeCalculationService:
    return FeeCalculationService(
        FeeCalculationRepository(db),
        FeeTypeRepository(db),
        db,
        calculator=calculator,
    )


def get_fee_type_service(db: Session = Depends(get_db)) -> FeeTypeService:
    return FeeTypeService(FeeTypeRepository(db), db)


def get_current_user_id(
    x_user_id: Optional[UUID] = Header(default=None, alias="X-User-ID"),
) -> Optional[UUID]:
    """Caller identity set by the upstream gateway; absent for guests."""
    return x_user_id


__all__ = [
    "get_db",
    "get_calculator",
    "get_fee_calculation_service",
    "get_fee_type_service",
    "get_current_user_id",
]
