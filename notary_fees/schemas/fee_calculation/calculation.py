"""
Fee calculation schemas: the request, the itemized result, and the
persisted calculation record.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import Field, field_validator

from notary_fees.schemas.common.base import Amount, BaseFilterSchema, BaseSchema, FrozenSchema

__all__ = [
    "FeeCalculationRequest",
    "TieredFeeItem",
    "AdditionalFeeItem",
    "CalculationResult",
    "FeeCalculationRecord",
    "FeeCalculationFilter",
]


class FeeCalculationRequest(BaseSchema):
    """What the caller submits to calculate a fee."""

    document_group_id: UUID = Field(..., description="Document group of the notarized document")
    fee_type_id: UUID = Field(..., description="Fee type to apply")
    input_data: Dict[str, Any] = Field(
        default_factory=dict,
        description="Form values, e.g. {'property_value': 150000000, 'num_copies': 2}",
    )

    @field_validator("input_data")
    @classmethod
    def validate_scalar_values(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Input values are numbers, strings or booleans."""
        for key, value in v.items():
            if not isinstance(value, (bool, int, float, Decimal, str)):
                raise ValueError(
                    f"Input field '{key}' must be a number, string or boolean"
                )
        return v


class TieredFeeItem(FrozenSchema):
    """One tier's contribution to a TIERED or VALUE_BASED fee."""

    tier: int = Field(..., ge=1, description="1-based tier index in the schema")
    from_: Amount = Field(..., alias="from")
    to: Optional[Amount] = None
    rate: Decimal
    amount: Amount
    description: str


class AdditionalFeeItem(FrozenSchema):
    """A surcharge line."""

    name: str
    quantity: Optional[int] = None
    amount: Amount
    total: Amount
    description: str


class CalculationResult(FrozenSchema):
    """
    Itemized fee breakdown.

    ``subtotal`` is the method result before bounding, ``bounded_subtotal``
    is that value clamped to the fee type's min/max, and ``total_fee`` adds
    the surcharges on top.
    """

    base_fee: Optional[Amount] = None
    percentage_fee: Optional[Amount] = None
    formula_fee: Optional[Amount] = None
    tiered_fees: Optional[List[TieredFeeItem]] = None
    additional_fees: Optional[List[AdditionalFeeItem]] = None
    subtotal: Amount
    bounded_subtotal: Amount
    total_fee: Amount

    @property
    def additional_total(self) -> Decimal:
        return sum((item.total for item in self.additional_fees or []), Decimal("0"))


class FeeCalculationRecord(FrozenSchema):
    """A persisted, write-once calculation."""

    id: UUID
    user_id: Optional[UUID] = None
    document_group_id: UUID
    fee_type_id: UUID
    input_data: Dict[str, Any]
    calculation_result: CalculationResult
    total_fee: Amount
    created_at: datetime


class FeeCalculationFilter(BaseFilterSchema):
    """History filters."""

    document_group_id: Optional[UUID] = None
    fee_type_id: Optional[UUID] = None
    user_id: Optional[UUID] = None

    sort_by: str = Field(
        "createdAt",
        pattern=r"^(createdAt|totalFee)$",
        description="Field to sort by",
    )
    sort_order: str = Field(
        "desc",
        pattern=r"^(asc|desc)$",
        description="Sort order: ascending or descending",
    )

    @field_validator("sort_order", mode="before")
    @classmethod
    def normalize_sort_order(cls, v: Any) -> Any:
        """Accept ASC/DESC as well as asc/desc."""
        return v.lower() if isinstance(v, str) else v
