"""
Base service layer components: result types and the shared service base.
"""

from notary_fees.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)

from notary_fees.services.base.base_service import BaseService


__all__ = [
    "ServiceResult",
    "ServiceError",
    "ErrorCode",
    "ErrorSeverity",
    "BaseService",
]
