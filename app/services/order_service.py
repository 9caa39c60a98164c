import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import List, Optional

from app.core.exceptions import ReferralCodeNotFoundError
from app.database import ReferralStore
from app.models.order import Order
from app.services.commission_service import CommissionService, Payout


logger = logging.getLogger(__name__)


@dataclass
class OrderResult:
    """Created order plus the commissions it paid out."""
    order: Order
    payouts: List[Payout]

    @property
    def total_commission(self) -> Decimal:
        return sum((p.amount for p in self.payouts), Decimal("0"))


class OrderService:
    """Order creation and referral attribution."""

    def __init__(self, store: ReferralStore):
        self.store = store
        self.commissions = CommissionService(store)

    def create_order(
        self,
        amount: Decimal,
        code: str,
        buyer_email: Optional[str] = None,
    ) -> OrderResult:
        """
        Record an order attributed to `code` and pay commissions up the chain.

        Not idempotent: the same request twice creates two orders.

        Raises:
            ReferralCodeNotFoundError: no user owns `code`
        """
        owner = self.store.get_user_by_code(code)
        if owner is None:
            logger.warning(f"Order rejected, unknown referral code: {code}")
            raise ReferralCodeNotFoundError(code)

        order = self.store.add_order(amount=amount, code=code, buyer_email=buyer_email)
        payouts = self.commissions.allocate(order, owner)

        logger.info(
            f"Order {order.id} attributed to user {owner.id} ({code}): "
            f"amount {amount}, {len(payouts)} payouts"
        )
        return OrderResult(order=order, payouts=payouts)
