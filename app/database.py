"""
Referral data store.

Handlers and services never touch module-level lists directly. They receive a
`ReferralStore` through the `get_store` dependency, so the in-memory backend
can be swapped for a persistent one without touching allocation logic.

Users are indexed by referral code and by email; every other collection is an
append-only list.
"""

import logging
from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Dict, List, Optional

from app.models.user import User
from app.models.click import Click
from app.models.order import Order
from app.models.commission import Commission


logger = logging.getLogger(__name__)


class ReferralStore(ABC):
    """Read/query and append operations used by the services."""

    # Users

    @abstractmethod
    def add_user(
        self,
        email: str,
        password_hash: str,
        code: str,
        name: Optional[str] = None,
        referrer_code: Optional[str] = None,
    ) -> User:
        ...

    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_code(self, code: str) -> Optional[User]:
        ...

    @abstractmethod
    def get_user_by_email(self, email: str) -> Optional[User]:
        ...

    @abstractmethod
    def list_referrals(self, code: str) -> List[User]:
        """Users whose referrer code is `code`, in signup order."""

    def code_exists(self, code: str) -> bool:
        return self.get_user_by_code(code) is not None

    # Clicks

    @abstractmethod
    def add_click(
        self,
        code: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Click:
        ...

    @abstractmethod
    def count_clicks(self, code: str) -> int:
        ...

    # Orders

    @abstractmethod
    def add_order(
        self,
        amount: Decimal,
        code: str,
        buyer_email: Optional[str] = None,
    ) -> Order:
        ...

    @abstractmethod
    def list_orders(self, code: Optional[str] = None) -> List[Order]:
        ...

    # Commissions

    @abstractmethod
    def add_commission(
        self,
        order_id: int,
        user_id: int,
        level: int,
        percent: Decimal,
        amount: Decimal,
    ) -> Commission:
        ...

    @abstractmethod
    def list_commissions(
        self,
        user_id: Optional[int] = None,
        order_id: Optional[int] = None,
    ) -> List[Commission]:
        ...

    @abstractmethod
    def counts(self) -> Dict[str, int]:
        """Number of records per collection."""

    @abstractmethod
    def reset(self) -> None:
        """Drop every record."""


class InMemoryStore(ReferralStore):
    """Process-local store. Contents are lost on restart."""

    def __init__(self):
        self._users: List[User] = []
        self._users_by_code: Dict[str, User] = {}
        self._users_by_email: Dict[str, User] = {}
        self._clicks: List[Click] = []
        self._orders: List[Order] = []
        self._commissions: List[Commission] = []

    def add_user(
        self,
        email: str,
        password_hash: str,
        code: str,
        name: Optional[str] = None,
        referrer_code: Optional[str] = None,
    ) -> User:
        user = User(
            id=len(self._users) + 1,
            email=email,
            password_hash=password_hash,
            code=code,
            name=name,
            referrer_code=referrer_code,
        )
        self._users.append(user)
        self._users_by_code[user.code] = user
        self._users_by_email[user.email] = user
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        # Ids are sequential from 1 and users are never deleted
        if 1 <= user_id <= len(self._users):
            return self._users[user_id - 1]
        return None

    def get_user_by_code(self, code: str) -> Optional[User]:
        return self._users_by_code.get(code)

    def get_user_by_email(self, email: str) -> Optional[User]:
        return self._users_by_email.get(email)

    def list_referrals(self, code: str) -> List[User]:
        return [u for u in self._users if u.referrer_code == code]

    def add_click(
        self,
        code: str,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Click:
        click = Click(code=code, ip=ip, user_agent=user_agent)
        self._clicks.append(click)
        return click

    def count_clicks(self, code: str) -> int:
        return sum(1 for c in self._clicks if c.code == code)

    def add_order(
        self,
        amount: Decimal,
        code: str,
        buyer_email: Optional[str] = None,
    ) -> Order:
        order = Order(
            id=len(self._orders) + 1,
            amount=amount,
            code=code,
            buyer_email=buyer_email,
        )
        self._orders.append(order)
        return order

    def list_orders(self, code: Optional[str] = None) -> List[Order]:
        if code is None:
            return list(self._orders)
        return [o for o in self._orders if o.code == code]

    def add_commission(
        self,
        order_id: int,
        user_id: int,
        level: int,
        percent: Decimal,
        amount: Decimal,
    ) -> Commission:
        commission = Commission(
            order_id=order_id,
            user_id=user_id,
            level=level,
            percent=percent,
            amount=amount,
        )
        self._commissions.append(commission)
        return commission

    def list_commissions(
        self,
        user_id: Optional[int] = None,
        order_id: Optional[int] = None,
    ) -> List[Commission]:
        return [
            c for c in self._commissions
            if (user_id is None or c.user_id == user_id)
            and (order_id is None or c.order_id == order_id)
        ]

    def counts(self) -> Dict[str, int]:
        return {
            "users": len(self._users),
            "clicks": len(self._clicks),
            "orders": len(self._orders),
            "commissions": len(self._commissions),
        }

    def reset(self) -> None:
        self._users.clear()
        self._users_by_code.clear()
        self._users_by_email.clear()
        self._clicks.clear()
        self._orders.clear()
        self._commissions.clear()
        logger.info("In-memory store cleared")


# Process-wide store backing the API
store = InMemoryStore()


def get_store() -> ReferralStore:
    """Dependency that provides the referral store."""
    return store
