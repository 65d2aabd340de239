"""
Fee calculation endpoints.

POST /fee-calculations         calculate and record
POST /fee-calculations/quote   calculate only
GET  /fee-calculations         calculation history, filtered and sorted
GET  /fee-calculations/{id}    one recorded calculation
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from notary_fees.api import deps
from notary_fees.api.responses import unwrap_or_raise
from notary_fees.config.settings import settings
from notary_fees.schemas.common.pagination import PaginatedResponse, PaginationParams
from notary_fees.schemas.fee_calculation import (
    CalculationResult,
    FeeCalculationFilter,
    FeeCalculationRecord,
    FeeCalculationRequest,
)
from notary_fees.services.fee_calculation import FeeCalculationService

router = APIRouter(prefix="/fee-calculations", tags=["Fee Calculations"])


@router.post(
    "",
    response_model=FeeCalculationRecord,
    status_code=status.HTTP_201_CREATED,
    summary="Calculate a fee and record it",
)
def create_calculation(
    request: FeeCalculationRequest,
    user_id: Optional[UUID] = Depends(deps.get_current_user_id),
    service: FeeCalculationService = Depends(deps.get_fee_calculation_service),
) -> FeeCalculationRecord:
    return unwrap_or_raise(service.calculate_and_save(request, user_id=user_id))


@router.post(
    "/quote",
    response_model=CalculationResult,
    summary="Calculate a fee without recording it",
)
def quote_calculation(
    request: FeeCalculationRequest,
    service: FeeCalculationService = Depends(deps.get_fee_calculation_service),
) -> CalculationResult:
    return unwrap_or_raise(service.calculate_quote(request))


@router.get(
    "",
    response_model=PaginatedResponse[FeeCalculationRecord],
    summary="List recorded calculations",
)
def list_calculations(
    document_group_id: Optional[UUID] = Query(default=None, alias="documentGroupId"),
    fee_type_id: Optional[UUID] = Query(default=None, alias="feeTypeId"),
    user_id: Optional[UUID] = Query(default=None, alias="userId"),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=settings.DEFAULT_PAGE_SIZE, ge=1, le=settings.MAX_PAGE_SIZE),
    sort_by: str = Query(default="createdAt", alias="sortBy", pattern=r"^(createdAt|totalFee)$"),
    sort_order: str = Query(default="DESC", alias="sortOrder", pattern=r"^(ASC|DESC|asc|desc)$"),
    service: FeeCalculationService = Depends(deps.get_fee_calculation_service),
) -> PaginatedResponse[FeeCalculationRecord]:
    filters = FeeCalculationFilter(
        document_group_id=document_group_id,
        fee_type_id=fee_type_id,
        user_id=user_id,
        sort_by=sort_by,
        sort_order=sort_order,
    )
    return unwrap_or_raise(
        service.list_calculations(filters, PaginationParams(page=page, limit=limit))
    )


@router.get(
    "/{calculation_id}",
    response_model=FeeCalculationRecord,
    summary="Get a recorded calculation",
)
def get_calculation(
    calculation_id: UUID,
    service: FeeCalculationService = Depends(deps.get_fee_calculation_service),
) -> FeeCalculationRecord:
    return unwrap_or_raise(service.get_calculation(calculation_id))
