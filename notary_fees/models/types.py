"""
Custom SQLAlchemy column types.
"""

from decimal import Decimal
from typing import Optional

from sqlalchemy import String, TypeDecorator


class DecimalString(TypeDecorator):
    """
    Exact decimal stored as its string form, so no digit is lost on any
    backend. Numeric ordering needs ``cast(column, Numeric)``.
    """

    impl = String(72)
    cache_ok = True

    def process_bind_param(self, value, dialect) -> Optional[str]:
        if value is None:
            return value

        if not isinstance(value, Decimal):
            value = Decimal(str(value))

        if not value.is_finite():
            raise ValueError(f"Cannot store non-finite decimal {value}")
        return str(value)

    def process_result_value(self, value, dialect) -> Optional[Decimal]:
        if value is None:
            return value
        return Decimal(value)
