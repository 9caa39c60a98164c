"""Commission records produced by the upline allocator.

One record per (order, earner). Level 1 is the owner of the order's
referral code, level 2 is whoever referred the owner, and so on.
"""
from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal


@dataclass
class Commission:
    """Commission earned by one user on one order."""
    order_id: int
    user_id: int
    level: int
    percent: Decimal
    amount: Decimal
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return (
            f"<Commission(order_id={self.order_id}, user_id={self.user_id}, "
            f"level={self.level}, amount={self.amount})>"
        )
