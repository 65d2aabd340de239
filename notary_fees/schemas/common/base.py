"""
Base schema classes with common fields and configurations.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Annotated, Union

from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel

__all__ = [
    "BaseSchema",
    "FrozenSchema",
    "BaseCreateSchema",
    "BaseUpdateSchema",
    "BaseFilterSchema",
    "Amount",
]


def _serialize_amount(value: Decimal) -> Union[int, str]:
    # whole amounts as JSON numbers, fractional ones as exact decimal strings
    if value == value.to_integral_value():
        return int(value)
    return format(value, "f")


Amount = Annotated[Decimal, PlainSerializer(_serialize_amount, when_used="json")]


class BaseSchema(BaseModel):
    """
    Base schema with common Pydantic configuration.

    Field names are snake_case in Python and camelCase on the wire
    (``baseFee``, ``customFormula``); either spelling is accepted on input.
    """

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
        alias_generator=to_camel,
        use_enum_values=False,
        str_strip_whitespace=True,
        validate_assignment=True,
    )


class FrozenSchema(BaseSchema):
    """Immutable schema for values that must not change after creation."""

    model_config = ConfigDict(frozen=True)


class BaseCreateSchema(BaseSchema):
    """Base schema for create operations."""
    pass


class BaseUpdateSchema(BaseSchema):
    """Base schema for update operations."""
    pass


class BaseFilterSchema(BaseSchema):
    """Base schema for filter parameters."""
    pass
