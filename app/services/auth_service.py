import logging
import secrets
import string
from typing import Optional, Tuple

from app.config import settings
from app.core.exceptions import EmailAlreadyRegisteredError, InvalidCredentialsError
from app.core.security import (
    verify_password,
    get_password_hash,
    create_user_token,
    get_token_user_id,
)
from app.database import ReferralStore
from app.models.user import User


logger = logging.getLogger(__name__)

CODE_ALPHABET = string.ascii_letters + string.digits


class AuthService:
    """Authentication service for signup, login and token management."""

    def __init__(self, store: ReferralStore):
        self.store = store

    def generate_referral_code(self) -> str:
        """
        Generate a referral code that no user owns yet.
        Example: Xk7Qm2aP
        """
        while True:
            code = ''.join(
                secrets.choice(CODE_ALPHABET) for _ in range(settings.REFERRAL_CODE_LENGTH)
            )
            if not self.store.code_exists(code):
                return code

    def register_user(
        self,
        email: str,
        password: str,
        name: Optional[str] = None,
        referrer_code: Optional[str] = None,
    ) -> User:
        """
        Create a user with a fresh referral code.

        The referrer code is stored as given, even when no user owns it.
        Commission allocation treats such a code as the end of the upline.

        Raises:
            EmailAlreadyRegisteredError: email already has an account
        """
        email = email.lower()
        if self.store.get_user_by_email(email):
            raise EmailAlreadyRegisteredError(email)

        user = self.store.add_user(
            email=email,
            password_hash=get_password_hash(password),
            code=self.generate_referral_code(),
            name=name or None,
            referrer_code=referrer_code or None,
        )

        if user.referrer_code and not self.store.code_exists(user.referrer_code):
            logger.warning(f"User {user.id} signed up with unknown referrer code {user.referrer_code}")

        logger.info(f"User {user.id} registered with code {user.code}")
        return user

    def authenticate_user(self, email: str, password: str) -> User:
        """
        Authenticate a user by email and password.

        Raises:
            InvalidCredentialsError: unknown email or wrong password
        """
        user = self.store.get_user_by_email(email.lower())
        if user is None or not verify_password(password, user.password_hash):
            logger.info(f"Failed login for {email}")
            raise InvalidCredentialsError()
        return user

    def create_token(self, user: User) -> Tuple[str, int]:
        """
        Issue an access token for the user.

        Returns:
            Tuple of (access_token, expires_in_seconds)
        """
        token = create_user_token(user)
        return token, settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

    def get_user_from_token(self, token: str) -> Optional[User]:
        """Resolve a bearer token to its user, or None when invalid."""
        user_id = get_token_user_id(token)
        if user_id is None:
            return None
        return self.store.get_user(user_id)
