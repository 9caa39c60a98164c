from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class User:
    """
    Registered user.

    Every user owns one referral code and may point at the code of whoever
    referred them. `referrer_code` is never validated, so it can dangle.
    """
    id: int
    email: str
    password_hash: str
    code: str
    name: Optional[str] = None
    referrer_code: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email='{self.email}', code='{self.code}')>"
