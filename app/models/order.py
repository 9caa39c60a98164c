from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional


@dataclass
class Order:
    """Order attributed to a referral code."""
    id: int
    amount: Decimal
    code: str
    buyer_email: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<Order(id={self.id}, code='{self.code}', amount={self.amount})>"
