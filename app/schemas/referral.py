"""
Pydantic schemas for referral tracking.

This module defines request/response schemas for:
- Click logging
- Aggregate stats by code
- Direct referrals
- Commission history
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.schemas.base import BaseCreateSchema, BaseResponseSchema, Money


# ============================================================================
# Clicks
# ============================================================================

class ClickCreate(BaseCreateSchema):
    """Referral link click."""
    code: str = Field(..., min_length=1)


class ClickResponse(BaseResponseSchema):
    ok: bool = True
    code: str
    clicks: int


# ============================================================================
# Stats
# ============================================================================

class ReferralStats(BaseResponseSchema):
    """Aggregated totals for one referral code."""
    code: str
    clicks: int = 0
    orders: int = 0
    revenue: Money = Decimal("0")
    commissions: Money = Decimal("0")


# ============================================================================
# Profile, referrals & commissions
# ============================================================================

class UserProfile(BaseResponseSchema):
    id: int
    name: Optional[str] = None
    email: str
    code: str
    referrer_code: Optional[str] = None
    created_at: datetime


class ReferralResponse(BaseResponseSchema):
    """User directly referred by the current user."""
    id: int
    name: Optional[str] = None
    code: str
    created_at: datetime


class CommissionResponse(BaseResponseSchema):
    order_id: int
    user_id: int
    level: int
    percent: Money
    amount: Money
    created_at: datetime
