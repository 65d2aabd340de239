"""
Fee Calculation Repository

Append-only storage for calculation records: insert and read, no update or
delete.
"""

from typing import List, Optional, Tuple

from sqlalchemy import Numeric, cast
from sqlalchemy.orm import Session

from notary_fees.models.fee_calculation import FeeCalculation
from notary_fees.repositories.base_repository import BaseRepository
from notary_fees.schemas.fee_calculation.calculation import FeeCalculationFilter

SORT_COLUMNS = {
    "createdAt": FeeCalculation.created_at,
    "totalFee": cast(FeeCalculation.total_fee, Numeric),
}


class FeeCalculationRepository(BaseRepository[FeeCalculation]):
    """History of fee calculations."""

    def __init__(self, session: Session):
        super().__init__(FeeCalculation, session)

    def search(
        self,
        filters: Optional[FeeCalculationFilter] = None,
        offset: int = 0,
        limit: int = 20,
    ) -> Tuple[List[FeeCalculation], int]:
        """Newest first unless the filter asks for another order."""
        filters = filters or FeeCalculationFilter()
        criteria = {
            "document_group_id": str(filters.document_group_id) if filters.document_group_id else None,
            "fee_type_id": str(filters.fee_type_id) if filters.fee_type_id else None,
            "user_id": str(filters.user_id) if filters.user_id else None,
        }

        column = SORT_COLUMNS[filters.sort_by]
        direction = column.asc() if filters.sort_order == "asc" else column.desc()
        # equal keys fall back to id
        tiebreak = FeeCalculation.id.asc() if filters.sort_order == "asc" else FeeCalculation.id.desc()

        return self.find(
            criteria,
            offset=offset,
            limit=limit,
            order_by=(direction, tiebreak),
        )
