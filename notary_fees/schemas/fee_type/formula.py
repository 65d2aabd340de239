"""
Formula schemas: the declarative description of how a fee type computes
its base amount.

``FormulaSchema`` is a tagged union keyed by ``method``; each variant only
carries the fields its method needs, so a TIERED schema always has tiers and
a FORMULA schema always has an expression.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, List, Literal, Optional, Union

from pydantic import Field, field_validator

from notary_fees.config.settings import settings
from notary_fees.schemas.common.base import FrozenSchema
from notary_fees.schemas.common.enums import CalculationMethod

__all__ = [
    "Tier",
    "AdditionalFee",
    "FixedFormula",
    "PercentFormula",
    "TieredFormula",
    "ValueBasedFormula",
    "CustomFormula",
    "FormulaSchema",
]


class Tier(FrozenSchema):
    """A value range [from, to) with the rate applied inside it."""

    from_: Decimal = Field(
        ...,
        alias="from",
        ge=Decimal("0"),
        description="Inclusive lower bound of the range (major units)",
    )
    to: Optional[Decimal] = Field(
        default=None,
        description="Exclusive upper bound; null marks the open-ended final tier",
    )
    rate: Decimal = Field(
        ...,
        ge=Decimal("0"),
        description="Multiplier applied to the value inside the range (0.01 = 1%)",
    )
    description: Optional[str] = None


class AdditionalFee(FrozenSchema):
    """A surcharge added after the base computation (copy fees etc.)."""

    name: str = Field(..., min_length=1)
    amount: Decimal = Field(..., ge=Decimal("0"))
    per_unit: bool = Field(
        default=False,
        description="Multiply the amount by a quantity read from the input data",
    )
    description: Optional[str] = None
    quantity_field: Optional[str] = Field(
        default=None,
        description="Input field holding the quantity for per-unit fees",
    )
    quantity_required: bool = Field(
        default=False,
        description="Fail instead of defaulting the quantity to 1 when absent",
    )

    @property
    def quantity_candidates(self) -> List[str]:
        """Input fields consulted for the quantity, in order."""
        if self.quantity_field:
            return [self.quantity_field]
        candidates = []
        if self.name.endswith("_fee") and len(self.name) > 4:
            candidates.append(self.name[: -len("_fee")])
        candidates.append(settings.DEFAULT_QUANTITY_FIELD)
        return candidates


class _FormulaBase(FrozenSchema):
    additional_fees: List[AdditionalFee] = Field(default_factory=list)


class FixedFormula(_FormulaBase):
    method: Literal[CalculationMethod.FIXED] = CalculationMethod.FIXED


class PercentFormula(_FormulaBase):
    method: Literal[CalculationMethod.PERCENT] = CalculationMethod.PERCENT
    reference_field: str = Field(
        default_factory=lambda: settings.DEFAULT_REFERENCE_FIELD,
        min_length=1,
        description="Input field the percentage is applied to",
    )


class _BracketFormula(_FormulaBase):
    tiers: List[Tier] = Field(..., min_length=1)
    value_field: str = Field(
        default_factory=lambda: settings.DEFAULT_REFERENCE_FIELD,
        min_length=1,
        description="Input field whose value is placed into the tiers",
    )


class TieredFormula(_BracketFormula):
    """Progressive brackets: each tier's rate applies to its own slice."""

    method: Literal[CalculationMethod.TIERED] = CalculationMethod.TIERED


class ValueBasedFormula(_BracketFormula):
    """Single bracket lookup: the covering tier's rate applies to the whole value."""

    method: Literal[CalculationMethod.VALUE_BASED] = CalculationMethod.VALUE_BASED


class CustomFormula(_FormulaBase):
    method: Literal[CalculationMethod.FORMULA] = CalculationMethod.FORMULA
    custom_formula: str = Field(
        ...,
        min_length=1,
        description="Arithmetic expression over input fields, e.g. 'base * qty + 20000'",
    )

    @field_validator("custom_formula")
    @classmethod
    def validate_length(cls, v: str) -> str:
        if len(v) > settings.FORMULA_MAX_LENGTH:
            raise ValueError(
                f"Formula exceeds {settings.FORMULA_MAX_LENGTH} characters"
            )
        return v


FormulaSchema = Annotated[
    Union[FixedFormula, PercentFormula, TieredFormula, ValueBasedFormula, CustomFormula],
    Field(discriminator="method"),
]
