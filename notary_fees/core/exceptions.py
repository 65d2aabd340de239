"""
Custom Exceptions for the Notary Fee Calculation Engine

Every failure the engine can report is a configuration or input error with a
stable error code, so the HTTP layer can map it to a client-facing message.
"""

from typing import Any, Dict, Optional
from enum import Enum


class ErrorCode(str, Enum):
    """Standard error codes for the application"""
    # General errors
    INTERNAL_ERROR = "INTERNAL_ERROR"
    RESOURCE_NOT_FOUND = "RESOURCE_NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"

    # Fee configuration
    INVALID_CONFIGURATION = "INVALID_CONFIGURATION"
    FORMULA_SYNTAX_ERROR = "FORMULA_SYNTAX_ERROR"
    FEE_TYPE_NOT_FOUND = "FEE_TYPE_NOT_FOUND"
    FEE_TYPE_INACTIVE = "FEE_TYPE_INACTIVE"

    # Calculation input
    MISSING_VARIABLE = "MISSING_VARIABLE"
    DIVISION_BY_ZERO = "DIVISION_BY_ZERO"
    NO_TIER_MATCHED = "NO_TIER_MATCHED"

    # Calculation records
    CALCULATION_NOT_FOUND = "CALCULATION_NOT_FOUND"


class BaseAppException(Exception):
    """
    Base exception class for all application exceptions.

    Provides consistent error handling across the application with
    structured error information.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 500
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.status_code = status_code
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary format"""
        return {
            "error": {
                "message": self.message,
                "code": self.error_code.value,
                "details": self.details,
                "type": self.__class__.__name__
            }
        }

    def __str__(self) -> str:
        return f"{self.error_code.value}: {self.message}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(message='{self.message}', error_code='{self.error_code.value}')"


# ========================================
# Fee Calculation Exceptions
# ========================================

class FeeCalculationError(BaseAppException):
    """Base class for deterministic calculation failures"""

    def __init__(
        self,
        message: str = "Fee calculation failed",
        error_code: ErrorCode = ErrorCode.VALIDATION_ERROR,
        details: Optional[Dict[str, Any]] = None,
        status_code: int = 422
    ):
        super().__init__(message, error_code, details, status_code)


class FormulaSyntaxError(FeeCalculationError):
    """Raised when a custom formula cannot be parsed"""

    def __init__(
        self,
        message: str,
        token: Optional[str] = None,
        position: Optional[int] = None
    ):
        self.token = token
        self.position = position
        details = {"token": token, "position": position}
        super().__init__(
            f"{message} at position {position}" if position is not None else message,
            ErrorCode.FORMULA_SYNTAX_ERROR,
            details,
        )


class MissingVariableError(FeeCalculationError):
    """Raised when an input field is absent or has the wrong type"""

    def __init__(self, name: str, reason: Optional[str] = None):
        self.name = name
        message = f"Missing or invalid input variable '{name}'"
        if reason:
            message += f": {reason}"
        super().__init__(
            message,
            ErrorCode.MISSING_VARIABLE,
            {"variable": name, "reason": reason},
        )


class DivisionByZeroError(FeeCalculationError):
    """Raised when a formula divides by zero"""

    def __init__(self, expression: Optional[str] = None):
        super().__init__(
            "Division by zero in formula",
            ErrorCode.DIVISION_BY_ZERO,
            {"expression": expression} if expression else {},
        )


class NoTierMatchedError(FeeCalculationError):
    """Raised when no value bracket covers the input value"""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(
            f"No fee tier covers the value {value}",
            ErrorCode.NO_TIER_MATCHED,
            {"value": str(value)},
        )


class InvalidConfigurationError(FeeCalculationError):
    """Raised when a fee type's formula schema is internally inconsistent"""

    def __init__(self, message: str, field: Optional[str] = None):
        self.field = field
        super().__init__(
            message,
            ErrorCode.INVALID_CONFIGURATION,
            {"field": field} if field else {},
        )


# ========================================
# Resource Exceptions
# ========================================

class ResourceNotFoundError(BaseAppException):
    """Exception raised when a requested resource is not found"""

    def __init__(
        self,
        resource_type: str = "Resource",
        resource_id: Optional[str] = None,
        message: Optional[str] = None,
        error_code: ErrorCode = ErrorCode.RESOURCE_NOT_FOUND
    ):
        if not message:
            message = f"{resource_type} not found"
            if resource_id:
                message += f" (ID: {resource_id})"

        details = {
            "resource_type": resource_type,
            "resource_id": resource_id
        }
        super().__init__(message, error_code, details, 404)


class FeeTypeNotFoundError(ResourceNotFoundError):
    """Exception raised when a fee type is not found"""

    def __init__(self, fee_type_id: Optional[str] = None):
        super().__init__("Fee type", fee_type_id, error_code=ErrorCode.FEE_TYPE_NOT_FOUND)


class CalculationNotFoundError(ResourceNotFoundError):
    """Exception raised when a fee calculation record is not found"""

    def __init__(self, calculation_id: Optional[str] = None):
        super().__init__("Fee calculation", calculation_id, error_code=ErrorCode.CALCULATION_NOT_FOUND)


class FeeTypeInactiveError(BaseAppException):
    """Exception raised when calculating with a disabled fee type"""

    def __init__(self, fee_type_id: Optional[str] = None):
        super().__init__(
            "Fee type is not active",
            ErrorCode.FEE_TYPE_INACTIVE,
            {"fee_type_id": fee_type_id},
            409,
        )
