"""Create tables for development databases."""
from typing import Optional

from sqlalchemy.engine import Engine

from notary_fees.core.logging import get_logger
from notary_fees.db.session import engine as default_engine
from notary_fees.models import Base

logger = get_logger(__name__)


def init_db(engine: Optional[Engine] = None) -> None:
    target = engine or default_engine
    Base.metadata.create_all(bind=target)
    logger.info("Database schema ensured", extra={"db_url": str(target.url)})
