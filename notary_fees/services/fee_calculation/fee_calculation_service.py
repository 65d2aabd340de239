"""
Fee Calculation Service

Loads the fee type for a request, runs the calculator and records the
result. Engine failures arrive as typed exceptions and leave the service as
failed ServiceResults; nothing is persisted for a failed calculation.
"""

from typing import Optional, Union
from uuid import UUID

from pydantic import ValidationError
from sqlalchemy.orm import Session

from notary_fees.core.exceptions import (
    BaseAppException,
    CalculationNotFoundError,
    FeeTypeInactiveError,
    FeeTypeNotFoundError,
    InvalidConfigurationError,
)
from notary_fees.models.fee_calculation import FeeCalculation as FeeCalculationModel
from notary_fees.repositories.fee_calculation_repository import FeeCalculationRepository
from notary_fees.repositories.fee_type_repository import FeeTypeRepository
from notary_fees.schemas.common.pagination import PaginatedResponse, PaginationParams
from notary_fees.schemas.fee_calculation.calculation import (
    CalculationResult,
    FeeCalculationFilter,
    FeeCalculationRecord,
    FeeCalculationRequest,
)
from notary_fees.schemas.fee_type.fee_type import FeeType
from notary_fees.services.base.base_service import BaseService
from notary_fees.services.base.service_result import ServiceResult
from notary_fees.services.fee_calculation.calculator import FeeCalculator


class FeeCalculationService(BaseService[FeeCalculationRepository]):
    """
    Quotes and records notary fee calculations.

    - calculate_quote: compute without saving
    - calculate_and_save: compute and append a calculation record
    - get_calculation / list_calculations: read the history
    """

    def __init__(
        self,
        repository: FeeCalculationRepository,
        fee_type_repository: FeeTypeRepository,
        db_session: Session,
        calculator: Optional[FeeCalculator] = None,
    ):
        super().__init__(repository, db_session)
        self.fee_type_repository = fee_type_repository
        self.calculator = calculator or FeeCalculator()

    # -------------------------------------------------------------------------
    # Calculation
    # -------------------------------------------------------------------------

    def calculate_quote(self, request: FeeCalculationRequest) -> ServiceResult[CalculationResult]:
        """Calculate a fee without recording it."""
        try:
            result = self._calculate(request)
            return ServiceResult.success(result, message="Fee calculated")
        except BaseAppException as e:
            return self._handle_app_exception(e, "calculate fee quote", request.fee_type_id)
        except Exception as e:
            return self._handle_exception(e, "calculate fee quote", request.fee_type_id)

    def calculate_and_save(
        self,
        request: FeeCalculationRequest,
        user_id: Optional[Union[str, UUID]] = None,
    ) -> ServiceResult[FeeCalculationRecord]:
        """Calculate a fee and store the inputs, breakdown and total."""
        try:
            result = self._calculate(request)

            with self.transaction():
                record = self.repository.add(
                    FeeCalculationModel(
                        user_id=str(user_id) if user_id else None,
                        document_group_id=str(request.document_group_id),
                        fee_type_id=str(request.fee_type_id),
                        input_data=request.model_dump(mode="json")["input_data"],
                        calculation_result=result.model_dump(mode="json", by_alias=True),
                        total_fee=result.total_fee,
                    )
                )
                saved = FeeCalculationRecord.model_validate(record)

            self._logger.info(
                "Fee calculation recorded",
                extra={
                    "calculation_id": str(saved.id),
                    "fee_type_id": str(request.fee_type_id),
                    "total_fee": str(saved.total_fee),
                },
            )
            return ServiceResult.success(saved, message="Fee calculation recorded")

        except BaseAppException as e:
            return self._handle_app_exception(e, "calculate and save fee", request.fee_type_id)
        except Exception as e:
            return self._handle_exception(e, "calculate and save fee", request.fee_type_id)

    # -------------------------------------------------------------------------
    # History
    # -------------------------------------------------------------------------

    def get_calculation(self, calculation_id: Union[str, UUID]) -> ServiceResult[FeeCalculationRecord]:
        try:
            record = self.repository.get_by_id(calculation_id)
            if record is None:
                raise CalculationNotFoundError(str(calculation_id))
            return ServiceResult.success(FeeCalculationRecord.model_validate(record))
        except BaseAppException as e:
            return self._handle_app_exception(e, "get fee calculation", calculation_id)
        except Exception as e:
            return self._handle_exception(e, "get fee calculation", calculation_id)

    def list_calculations(
        self,
        filters: Optional[FeeCalculationFilter] = None,
        pagination: Optional[PaginationParams] = None,
    ) -> ServiceResult[PaginatedResponse[FeeCalculationRecord]]:
        """One page of calculation history, newest first unless the filter sorts otherwise."""
        pagination = pagination or PaginationParams()
        try:
            items, total = self.repository.search(
                filters,
                offset=pagination.offset,
                limit=pagination.limit,
            )
            page = PaginatedResponse[FeeCalculationRecord](
                items=[FeeCalculationRecord.model_validate(item) for item in items],
                total=total,
                page=pagination.page,
                limit=pagination.limit,
            )
            return ServiceResult.success(page, metadata={"count": len(items)})
        except Exception as e:
            return self._handle_exception(e, "list fee calculations")

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _load_fee_type(self, request: FeeCalculationRequest) -> FeeType:
        model = self.fee_type_repository.get_by_id(request.fee_type_id)
        if model is None or model.document_group_id != str(request.document_group_id):
            raise FeeTypeNotFoundError(str(request.fee_type_id))
        if not model.status:
            raise FeeTypeInactiveError(str(request.fee_type_id))

        try:
            return FeeType.model_validate(model)
        except ValidationError as e:
            raise InvalidConfigurationError(
                f"Stored fee type configuration is invalid: {e.error_count()} error(s)",
                field="formula",
            ) from e

    def _calculate(self, request: FeeCalculationRequest) -> CalculationResult:
        fee_type = self._load_fee_type(request)
        result = self.calculator.calculate(fee_type, request.input_data)

        self._logger.info(
            "Fee calculated",
            extra={
                "fee_type_id": str(fee_type.id),
                "calculation_method": fee_type.calculation_method.value,
                "total_fee": str(result.total_fee),
            },
        )
        return result
