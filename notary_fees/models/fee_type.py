"""
Fee Type Model

Stores fee types with their formula configuration as JSON. Fee types are
edited through the admin surface; the calculation engine only reads them.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, DateTime, Index, JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from notary_fees.models.base import BaseModel, utcnow
from notary_fees.models.types import DecimalString
from notary_fees.schemas.common.enums import CalculationMethod


class FeeType(BaseModel):
    """Fee type owned by a document group."""

    __tablename__ = "fee_types"

    document_group_id: Mapped[str] = mapped_column(
        String(36),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    calculation_method: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=CalculationMethod.FIXED.value,
    )

    formula: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)

    base_fee: Mapped[Optional[Decimal]] = mapped_column(
        DecimalString,
        nullable=True,
    )

    # e.g. 0.015 for 1.5%
    percentage: Mapped[Optional[Decimal]] = mapped_column(
        DecimalString,
        nullable=True,
    )

    min_fee: Mapped[Optional[Decimal]] = mapped_column(
        DecimalString,
        nullable=True,
    )

    max_fee: Mapped[Optional[Decimal]] = mapped_column(
        DecimalString,
        nullable=True,
    )

    status: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        nullable=False,
    )

    __table_args__ = (
        Index("ix_fee_types_group_status", "document_group_id", "status"),
    )
