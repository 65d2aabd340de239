"""
Fee type schemas.

A fee type belongs to a document group and pairs a formula schema with the
amounts used regardless of method (base fee, percentage, min/max bounds).
"""

from __future__ import annotations

from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import Field

from notary_fees.schemas.common.base import BaseCreateSchema, BaseUpdateSchema, FrozenSchema
from notary_fees.schemas.common.enums import CalculationMethod
from notary_fees.schemas.fee_type.formula import FormulaSchema

__all__ = [
    "FeeTypeBase",
    "FeeTypeCreate",
    "FeeType",
    "FeeTypeValidation",
]


class FeeTypeBase(FrozenSchema):
    """Fields shared by fee type payloads and stored fee types."""

    document_group_id: UUID = Field(
        ...,
        description="Document group this fee type applies to",
    )
    name: str = Field(..., min_length=1, max_length=255)
    calculation_method: CalculationMethod = Field(
        default=CalculationMethod.FIXED,
        description="FIXED, PERCENT, VALUE_BASED, TIERED or FORMULA",
    )
    formula: Optional[FormulaSchema] = Field(
        default=None,
        description="Method configuration; optional for FIXED and PERCENT",
    )
    base_fee: Optional[Decimal] = Field(
        default=None,
        ge=Decimal("0"),
        description="Fixed fee (major units), used by FIXED",
    )
    percentage: Optional[Decimal] = Field(
        default=None,
        ge=Decimal("0"),
        description="Decimal rate, 0.015 = 1.5%, used by PERCENT",
    )
    min_fee: Optional[Decimal] = Field(default=None, ge=Decimal("0"))
    max_fee: Optional[Decimal] = Field(default=None, ge=Decimal("0"))
    status: bool = Field(
        default=True,
        description="Whether the fee type can be used for new calculations",
    )


class FeeTypeCreate(FeeTypeBase, BaseCreateSchema):
    """Payload for creating or validating a fee type."""
    pass


class FeeType(FeeTypeBase):
    """A stored fee type."""

    id: UUID


class FeeTypeStatusUpdate(BaseUpdateSchema):
    """Activate or deactivate a fee type."""

    status: bool


class FeeTypeValidation(FrozenSchema):
    """Outcome of checking a fee type before it is saved."""

    calculation_method: CalculationMethod
    required_fields: List[str] = Field(
        default_factory=list,
        description="Input fields a calculation with this fee type must supply",
    )
    quantity_fields: List[str] = Field(
        default_factory=list,
        description="Input fields consulted for per-unit surcharge quantities",
    )
