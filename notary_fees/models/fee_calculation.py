"""
Fee Calculation Model

Append-only record of a calculation: the inputs, the itemized breakdown and
the total. Rows are never updated; a recalculation produces a new row.
"""

from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import ForeignKey, Index, JSON, String, event
from sqlalchemy.orm import Mapped, mapped_column

from notary_fees.models.base import BaseModel
from notary_fees.models.types import DecimalString


class FeeCalculation(BaseModel):
    """A persisted, write-once fee calculation."""

    __tablename__ = "fee_calculations"

    # Nullable for guest users
    user_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        nullable=True,
        index=True,
    )

    document_group_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
    )

    fee_type_id: Mapped[str] = mapped_column(
        ForeignKey("fee_types.id", ondelete="RESTRICT"),
        nullable=False,
        index=True,
    )

    input_data: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)

    calculation_result: Mapped[Dict[str, Any]] = mapped_column(JSON, nullable=False)

    total_fee: Mapped[Decimal] = mapped_column(
        DecimalString,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_fee_calculations_created", "created_at"),
    )


@event.listens_for(FeeCalculation, "before_update")
def _reject_update(mapper, connection, target):
    raise ValueError("Fee calculation records are write-once")
