"""
Base service class providing common functionality for all services.
"""

from typing import TypeVar, Generic, Optional, Dict, Any
from abc import ABC
from contextlib import contextmanager

from sqlalchemy.orm import Session

from notary_fees.core.exceptions import BaseAppException
from notary_fees.core.logging import get_logger
from notary_fees.services.base.service_result import (
    ServiceResult,
    ServiceError,
    ErrorCode,
    ErrorSeverity,
)


TRepo = TypeVar("TRepo")


class BaseService(ABC, Generic[TRepo]):
    """
    Base service with common behaviors:
    - Shared logger and db session
    - Consistent error handling via ServiceResult
    - Transaction management utilities
    """

    def __init__(self, repository: TRepo, db_session: Session):
        """
        Initialize base service.

        Args:
            repository: Repository instance for data access
            db_session: SQLAlchemy database session
        """
        self.repository: TRepo = repository
        self.db: Session = db_session
        self._logger = get_logger(
            f"{self.__class__.__module__}.{self.__class__.__name__}"
        ).add_context(service=self.__class__.__name__)

    # -------------------------------------------------------------------------
    # Exception & Error Handling
    # -------------------------------------------------------------------------

    def _handle_app_exception(
        self,
        exception: BaseAppException,
        operation: str,
        entity_ref: Optional[Any] = None,
    ) -> ServiceResult:
        """Convert an expected, typed failure into a ServiceResult."""
        self._logger.warning(
            f"{operation} failed: {exception.message}",
            extra={
                "operation": operation,
                "entity_ref": str(entity_ref) if entity_ref is not None else None,
                "error_code": exception.error_code.value,
            },
        )
        severity = ErrorSeverity.WARNING if exception.status_code < 500 else ErrorSeverity.ERROR
        return ServiceResult.from_exception(exception, severity)

    def _handle_exception(
        self,
        exception: Exception,
        operation: str,
        entity_ref: Optional[Any] = None,
        additional_context: Optional[Dict[str, Any]] = None,
    ) -> ServiceResult:
        """
        Convert an unexpected exception to a ServiceResult failure with logging.

        Args:
            exception: The caught exception
            operation: Description of the operation that failed
            entity_ref: Reference to the entity involved (ID, name, etc.)
            additional_context: Extra context for logging/debugging

        Returns:
            ServiceResult with failure status and error details
        """
        context = {
            "operation": operation,
            "entity_ref": str(entity_ref) if entity_ref is not None else None,
            "exception_type": type(exception).__name__,
        }
        if additional_context:
            context.update(additional_context)

        self._logger.error(
            f"Error during {operation}: {exception}",
            exc_info=True,
            extra=context,
        )

        return ServiceResult.failure(
            ServiceError(
                code=ErrorCode.INTERNAL_ERROR,
                message=f"Failed to {operation}",
                details={
                    "error": str(exception),
                    "entity_ref": context["entity_ref"],
                },
                severity=ErrorSeverity.CRITICAL,
            )
        )

    # -------------------------------------------------------------------------
    # Transaction Management
    # -------------------------------------------------------------------------

    @contextmanager
    def transaction(self, auto_commit: bool = True):
        """
        Context manager for database transactions with automatic rollback.

        Example:
            with self.transaction():
                self.repository.add(record)
        """
        try:
            yield self.db
            if auto_commit:
                self.db.commit()
        except Exception as e:
            self.db.rollback()
            self._logger.error(f"Transaction failed: {e}", exc_info=True)
            raise
