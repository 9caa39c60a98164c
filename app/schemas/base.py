"""
Base Schema Classes for Pydantic Models

Wire format is camelCase (`referrerCode`, `buyerEmail`, `orderId`); input
accepts snake_case field names too.

RULE: All response schemas MUST inherit from BaseResponseSchema so money
values leave the API as JSON numbers.
"""

from decimal import Decimal
from pydantic import BaseModel, ConfigDict, PlainSerializer
from pydantic.alias_generators import to_camel
from typing import Annotated


# Decimal amounts are kept exact internally and rendered as JSON numbers
Money = Annotated[Decimal, PlainSerializer(lambda v: float(v), return_type=float, when_used="json")]


class BaseResponseSchema(BaseModel):
    """
    Base class for all response schemas.

    Features:
    - camelCase aliases on output
    - Enables from_attributes so dataclass records validate directly

    Usage:
        class OrderResponse(BaseResponseSchema):
            order_id: int
            amount: Money
    """
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        # Allow population by field name or alias
        populate_by_name=True,
    )


class BaseCreateSchema(BaseModel):
    """
    Base class for create/input schemas.

    Accepts camelCase or snake_case keys and ignores unknown fields.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        # Allow extra fields to be ignored (forward compatibility)
        extra='ignore',
    )
