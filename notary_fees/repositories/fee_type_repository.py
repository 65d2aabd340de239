"""
Fee Type Repository
"""

from typing import List, Union
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from notary_fees.models.fee_type import FeeType
from notary_fees.repositories.base_repository import BaseRepository


class FeeTypeRepository(BaseRepository[FeeType]):
    """Read access to fee types, plus inserts for seeding and tests."""

    def __init__(self, session: Session):
        super().__init__(FeeType, session)

    def find_active_by_document_group(self, document_group_id: Union[str, UUID]) -> List[FeeType]:
        stmt = (
            select(FeeType)
            .where(
                FeeType.document_group_id == str(document_group_id),
                FeeType.status.is_(True),
            )
            .order_by(FeeType.name)
        )
        return list(self.db.execute(stmt).scalars().all())
