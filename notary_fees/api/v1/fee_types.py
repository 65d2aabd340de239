"""
Fee type endpoints used by the admin surface.

POST  /fee-types/validate                  check a configuration
POST  /fee-types                           create
GET   /fee-types/by-document-group/{id}    active fee types of a group
GET   /fee-types/{id}                      one fee type
PATCH /fee-types/{id}/status               activate or deactivate
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status

from notary_fees.api import deps
from notary_fees.api.responses import unwrap_or_raise
from notary_fees.schemas.fee_type import FeeType, FeeTypeCreate, FeeTypeStatusUpdate, FeeTypeValidation
from notary_fees.services.fee_type import FeeTypeService

router = APIRouter(prefix="/fee-types", tags=["Fee Types"])


@router.post(
    "/validate",
    response_model=FeeTypeValidation,
    summary="Check a fee type configuration without saving it",
)
def validate_fee_type(
    payload: FeeTypeCreate,
    service: FeeTypeService = Depends(deps.get_fee_type_service),
) -> FeeTypeValidation:
    return unwrap_or_raise(service.validate_configuration(payload))


@router.post(
    "",
    response_model=FeeType,
    status_code=status.HTTP_201_CREATED,
    summary="Create a fee type",
)
def create_fee_type(
    payload: FeeTypeCreate,
    service: FeeTypeService = Depends(deps.get_fee_type_service),
) -> FeeType:
    return unwrap_or_raise(service.create_fee_type(payload))


@router.get(
    "/by-document-group/{document_group_id}",
    response_model=List[FeeType],
    summary="List active fee types of a document group",
)
def list_fee_types_for_group(
    document_group_id: UUID,
    service: FeeTypeService = Depends(deps.get_fee_type_service),
) -> List[FeeType]:
    return unwrap_or_raise(service.list_active_for_group(document_group_id))


@router.get("/{fee_type_id}", response_model=FeeType, summary="Get a fee type")
def get_fee_type(
    fee_type_id: UUID,
    service: FeeTypeService = Depends(deps.get_fee_type_service),
) -> FeeType:
    return unwrap_or_raise(service.get_fee_type(fee_type_id))


@router.patch(
    "/{fee_type_id}/status",
    response_model=FeeType,
    summary="Activate or deactivate a fee type",
)
def update_fee_type_status(
    fee_type_id: UUID,
    payload: FeeTypeStatusUpdate,
    service: FeeTypeService = Depends(deps.get_fee_type_service),
) -> FeeType:
    return unwrap_or_raise(service.update_status(fee_type_id, payload.status))
