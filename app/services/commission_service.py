"""
Commission Service

Multi-level commission allocation for orders placed through a referral code:
- Level 1 pays the owner of the code
- Levels 2+ walk the owner's upline (referrer, referrer's referrer, ...)
- Each level has a fixed percent from COMMISSION_LEVELS
"""

import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Sequence

from app.database import ReferralStore
from app.models.order import Order
from app.models.user import User


logger = logging.getLogger(__name__)


# Percent of the order amount paid per level, closest level first.
# The number of entries is also the maximum depth of the upline walk.
COMMISSION_LEVELS: tuple[Decimal, ...] = (
    Decimal("0.10"),
    Decimal("0.05"),
    Decimal("0.02"),
)


@dataclass
class Payout:
    """Commission paid to one user on one order."""
    user_id: int
    level: int
    percent: Decimal
    amount: Decimal


class CommissionService:
    """Allocates and records commissions for new orders."""

    def __init__(self, store: ReferralStore, levels: Sequence[Decimal] = COMMISSION_LEVELS):
        self.store = store
        self.levels = tuple(levels)

    def percent_for_level(self, level: int) -> Decimal:
        """Schedule percent for a 1-based level, 0 beyond the schedule."""
        if 1 <= level <= len(self.levels):
            return self.levels[level - 1]
        return Decimal("0")

    def get_upline(self, owner: User) -> List[User]:
        """
        Referrers of `owner`, nearest first.

        The walk stops at a missing or unknown referrer code, once
        len(levels) - 1 ancestors are collected, or when it reaches a user
        already seen (self-referral or a referral loop).
        """
        max_depth = max(len(self.levels) - 1, 0)
        upline: List[User] = []
        visited = {owner.id}
        code = owner.referrer_code

        while code and len(upline) < max_depth:
            referrer = self.store.get_user_by_code(code)
            if referrer is None:
                logger.info(f"Upline of user {owner.id} ends at unknown referrer code {code}")
                break
            if referrer.id in visited:
                logger.warning(f"Referral cycle at user {referrer.id} while walking upline of user {owner.id}")
                break
            visited.add(referrer.id)
            upline.append(referrer)
            code = referrer.referrer_code

        return upline

    def allocate(self, order: Order, owner: User) -> List[Payout]:
        """
        Record commissions for `order` and return the payouts, level ascending.

        `owner` must be the user who owns `order.code`. Zero-amount
        commissions are skipped and never stored.
        """
        earners = [owner] + self.get_upline(owner)
        payouts: List[Payout] = []

        for index, earner in enumerate(earners):
            level = index + 1
            percent = self.percent_for_level(level)
            amount = order.amount * percent
            if amount <= 0:
                continue

            self.store.add_commission(
                order_id=order.id,
                user_id=earner.id,
                level=level,
                percent=percent,
                amount=amount,
            )
            payouts.append(Payout(user_id=earner.id, level=level, percent=percent, amount=amount))
            logger.debug(
                f"Commission for order {order.id}: user {earner.id} "
                f"level {level} ({percent}) = {amount}"
            )

        return payouts

    def total_earned(self, user_id: int) -> Decimal:
        """Sum of every commission the user has earned, across all levels."""
        return sum(
            (c.amount for c in self.store.list_commissions(user_id=user_id)),
            Decimal("0"),
        )
