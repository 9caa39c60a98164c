from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional


@dataclass
class Click:
    """One hit on a referral link. Identity is insertion order only."""
    code: str
    ip: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
