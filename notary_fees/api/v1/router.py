"""
API v1 Router

Aggregates the v1 endpoints of the fee engine.
"""

from fastapi import APIRouter

from notary_fees.api.v1 import fee_calculations, fee_types

router = APIRouter(
    responses={
        404: {"description": "Not Found"},
        409: {"description": "Conflict"},
        422: {"description": "Validation Error"},
        500: {"description": "Internal Server Error"},
    }
)

router.include_router(fee_calculations.router)
router.include_router(fee_types.router)
