"""
Pagination schemas for page-based list responses.
"""

from __future__ import annotations

import math
from typing import Generic, List, TypeVar

from pydantic import Field, computed_field

from notary_fees.schemas.common.base import BaseSchema

T = TypeVar("T")

__all__ = [
    "PaginationParams",
    "PaginatedResponse",
]


class PaginationParams(BaseSchema):
    """Pagination query parameters."""

    page: int = Field(
        default=1,
        ge=1,
        description="Page number (1-indexed)",
    )
    limit: int = Field(
        default=20,
        ge=1,
        le=100,
        description="Items per page",
    )

    @computed_field  # type: ignore[misc]
    @property
    def offset(self) -> int:
        """Calculate offset for database queries."""
        return (self.page - 1) * self.limit


class PaginatedResponse(BaseSchema, Generic[T]):
    """A page of items plus totals."""

    items: List[T]
    total: int = Field(..., ge=0)
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)

    @computed_field  # type: ignore[misc]
    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.total else 0
