"""
Domain exceptions raised by the service layer.

Endpoints translate these into HTTP responses; services never build
HTTPExceptions themselves.
"""

from typing import Any, Dict, Optional


class ReferralError(Exception):
    """Base exception for referral tracking errors."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        self.message = message
        self.details = details or {}
        super().__init__(self.message)


class EmailAlreadyRegisteredError(ReferralError):
    """Signup with an email that already has an account."""

    def __init__(self, email: str):
        super().__init__("email exists", {"email": email})


class InvalidCredentialsError(ReferralError):
    """Unknown email or wrong password at login."""

    def __init__(self):
        super().__init__("invalid creds")


class ReferralCodeNotFoundError(ReferralError):
    """Referral code does not belong to any user."""

    def __init__(self, code: str):
        super().__init__("referral code not found", {"code": code})
