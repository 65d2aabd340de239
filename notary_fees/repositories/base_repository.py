"""
Base repository with the read and insert operations shared by all
repositories.
"""

from typing import Any, Dict, Generic, List, Optional, Sequence, Tuple, Type, TypeVar, Union
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from notary_fees.core.logging import get_logger
from notary_fees.models.base import BaseModel

logger = get_logger(__name__)

# Type variable for model classes
ModelType = TypeVar("ModelType", bound=BaseModel)


class BaseRepository(Generic[ModelType]):
    """Generic data access for one model."""

    def __init__(self, model: Type[ModelType], db: Session):
        """
        Initialize repository.

        Args:
            model: SQLAlchemy model class
            db: Database session
        """
        self.model = model
        self.db = db

    def get_by_id(self, entity_id: Union[str, UUID]) -> Optional[ModelType]:
        return self.db.get(self.model, str(entity_id))

    def add(self, entity: ModelType) -> ModelType:
        """Stage a new entity and flush it so defaults are populated."""
        self.db.add(entity)
        self.db.flush()
        logger.debug(
            "Entity added",
            extra={"model": self.model.__name__, "entity_id": entity.id},
        )
        return entity

    def find(
        self,
        filters: Optional[Dict[str, Any]] = None,
        offset: int = 0,
        limit: int = 20,
        order_by: Sequence[Any] = (),
    ) -> Tuple[List[ModelType], int]:
        """Return one page of entities matching equality filters, plus the total."""
        conditions = [
            getattr(self.model, column) == value
            for column, value in (filters or {}).items()
            if value is not None
        ]

        count_stmt = select(func.count()).select_from(self.model).where(*conditions)
        total = self.db.execute(count_stmt).scalar_one()

        stmt = select(self.model).where(*conditions)
        if order_by:
            stmt = stmt.order_by(*order_by)
        stmt = stmt.offset(offset).limit(limit)
        items = list(self.db.execute(stmt).scalars().all())

        return items, total
