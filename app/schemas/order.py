from decimal import Decimal
from typing import List, Optional

from pydantic import EmailStr, Field

from app.schemas.base import BaseCreateSchema, BaseResponseSchema, Money


class OrderCreate(BaseCreateSchema):
    """Order attributed to a referral code."""
    amount: Decimal = Field(..., ge=0, description="Order amount")
    code: str = Field(..., min_length=1, description="Referral code the order is attributed to")
    buyer_email: Optional[EmailStr] = None


class PayoutEntry(BaseResponseSchema):
    """One commission paid out on an order."""
    user_id: int
    level: int
    percent: Money
    amount: Money


class OrderResponse(BaseResponseSchema):
    """Order creation result with its payout summary."""
    order_id: int
    amount: Money
    code: str
    buyer_email: Optional[str] = None
    payouts: List[PayoutEntry]
    total_commission: Money
