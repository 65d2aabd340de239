"""
Translate service results into HTTP responses.
"""

from typing import TypeVar

from fastapi import HTTPException

from notary_fees.services.base.service_result import ServiceResult

T = TypeVar("T")


def unwrap_or_raise(result: ServiceResult[T]) -> T:
    """Return the result data, or raise an HTTPException carrying the service error."""
    if result.is_success:
        return result.data

    error = result.error
    raise HTTPException(status_code=error.status_code, detail=error.to_dict())
