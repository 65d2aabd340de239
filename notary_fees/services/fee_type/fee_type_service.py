"""
Fee Type Service

Checks fee type configurations before they are saved, so a stored fee type
can only fail at calculation time because of its inputs.
"""

from typing import List, Union
from uuid import UUID

from sqlalchemy.orm import Session

from notary_fees.config.settings import settings
from notary_fees.core.exceptions import BaseAppException, FeeTypeNotFoundError
from notary_fees.models.fee_type import FeeType as FeeTypeModel
from notary_fees.repositories.fee_type_repository import FeeTypeRepository
from notary_fees.schemas.fee_type.fee_type import FeeType, FeeTypeCreate, FeeTypeValidation
from notary_fees.services.base.base_service import BaseService
from notary_fees.services.base.service_result import ServiceResult
from notary_fees.services.fee_calculation.config_validator import validate_fee_type
from notary_fees.services.fee_calculation.strategies import required_variables


class FeeTypeService(BaseService[FeeTypeRepository]):
    """Validation and lookup of fee types."""

    def __init__(self, repository: FeeTypeRepository, db_session: Session):
        super().__init__(repository, db_session)

    def validate_configuration(self, payload: FeeTypeCreate) -> ServiceResult[FeeTypeValidation]:
        """
        Check a fee type and report the inputs a calculation will need.

        Returns the first configuration problem as a failed result.
        """
        try:
            return ServiceResult.success(self._validate(payload), message="Fee type configuration is valid")
        except BaseAppException as e:
            return self._handle_app_exception(e, "validate fee type", payload.name)
        except Exception as e:
            return self._handle_exception(e, "validate fee type", payload.name)

    def create_fee_type(self, payload: FeeTypeCreate) -> ServiceResult[FeeType]:
        """Validate and store a fee type."""
        try:
            self._validate(payload)
            data = payload.model_dump(mode="json", by_alias=True)

            with self.transaction():
                model = self.repository.add(
                    FeeTypeModel(
                        document_group_id=str(payload.document_group_id),
                        name=payload.name,
                        calculation_method=payload.calculation_method.value,
                        formula=data["formula"],
                        base_fee=payload.base_fee,
                        percentage=payload.percentage,
                        min_fee=payload.min_fee,
                        max_fee=payload.max_fee,
                        status=payload.status,
                    )
                )

            self.db.refresh(model)
            created = FeeType.model_validate(model)

            self._logger.info(
                "Fee type created",
                extra={
                    "fee_type_id": str(created.id),
                    "calculation_method": created.calculation_method.value,
                },
            )
            return ServiceResult.success(created, message="Fee type created")

        except BaseAppException as e:
            return self._handle_app_exception(e, "create fee type", payload.name)
        except Exception as e:
            return self._handle_exception(e, "create fee type", payload.name)

    def get_fee_type(self, fee_type_id: Union[str, UUID]) -> ServiceResult[FeeType]:
        try:
            model = self.repository.get_by_id(fee_type_id)
            if model is None:
                raise FeeTypeNotFoundError(str(fee_type_id))
            return ServiceResult.success(FeeType.model_validate(model))
        except BaseAppException as e:
            return self._handle_app_exception(e, "get fee type", fee_type_id)
        except Exception as e:
            return self._handle_exception(e, "get fee type", fee_type_id)

    def update_status(self, fee_type_id: Union[str, UUID], status: bool) -> ServiceResult[FeeType]:
        """Activate or deactivate a fee type. Inactive fee types cannot be calculated."""
        try:
            model = self.repository.get_by_id(fee_type_id)
            if model is None:
                raise FeeTypeNotFoundError(str(fee_type_id))

            with self.transaction():
                model.status = status

            self.db.refresh(model)
            updated = FeeType.model_validate(model)

            self._logger.info(
                "Fee type status updated",
                extra={"fee_type_id": str(updated.id), "status": updated.status},
            )
            return ServiceResult.success(updated, message="Fee type status updated")

        except BaseAppException as e:
            return self._handle_app_exception(e, "update fee type status", fee_type_id)
        except Exception as e:
            return self._handle_exception(e, "update fee type status", fee_type_id)

    def list_active_for_group(self, document_group_id: Union[str, UUID]) -> ServiceResult[List[FeeType]]:
        try:
            models = self.repository.find_active_by_document_group(document_group_id)
            return ServiceResult.success(
                [FeeType.model_validate(model) for model in models],
                metadata={"count": len(models)},
            )
        except Exception as e:
            return self._handle_exception(e, "list fee types", document_group_id)

    @staticmethod
    def _validate(payload: FeeTypeCreate) -> FeeTypeValidation:
        formula = validate_fee_type(payload, settings.CURRENCY_SCALE)

        quantity_fields: List[str] = []
        for fee in formula.additional_fees:
            if fee.per_unit:
                quantity_fields.extend(
                    name for name in fee.quantity_candidates if name not in quantity_fields
                )

        return FeeTypeValidation(
            calculation_method=payload.calculation_method,
            required_fields=sorted(required_variables(formula)),
            quantity_fields=quantity_fields,
        )
