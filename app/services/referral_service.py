"""
Referral Service

Click tracking and read-side aggregates:
- Click logging for referral links
- Per-code stats (clicks, orders, revenue, commissions)
- Direct referrals of a user
"""

import logging
from decimal import Decimal
from typing import List, Optional

from app.core.exceptions import ReferralCodeNotFoundError
from app.database import ReferralStore
from app.models.click import Click
from app.models.commission import Commission
from app.models.user import User
from app.services.commission_service import CommissionService


logger = logging.getLogger(__name__)


class ReferralService:
    """Service for referral link clicks and stats."""

    def __init__(self, store: ReferralStore):
        self.store = store

    def get_owner(self, code: str) -> User:
        owner = self.store.get_user_by_code(code)
        if owner is None:
            raise ReferralCodeNotFoundError(code)
        return owner

    def record_click(
        self,
        code: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Click:
        """
        Log a click on a referral link.

        Raises:
            ReferralCodeNotFoundError: no user owns `code`
        """
        if not self.store.code_exists(code):
            logger.info(f"Click on unknown referral code {code} from {ip}")
            raise ReferralCodeNotFoundError(code)
        return self.store.add_click(code=code, ip=ip, user_agent=user_agent)

    def count_clicks(self, code: str) -> int:
        return self.store.count_clicks(code)

    def get_stats(self, code: str) -> dict:
        """
        Aggregate totals for a referral code.

        `commissions` is everything the code's owner earned, including
        upline commissions from orders on other codes.
        """
        owner = self.get_owner(code)
        orders = self.store.list_orders(code=code)

        return {
            "code": code,
            "clicks": self.store.count_clicks(code),
            "orders": len(orders),
            "revenue": sum((o.amount for o in orders), Decimal("0")),
            "commissions": CommissionService(self.store).total_earned(owner.id),
        }

    def list_referrals(self, user: User) -> List[User]:
        return self.store.list_referrals(user.code)

    def list_commissions(self, user: User) -> List[Commission]:
        return self.store.list_commissions(user_id=user.id)
