from typing import Optional

from pydantic import EmailStr, Field, field_validator

from app.config import settings
from app.schemas.base import BaseCreateSchema, BaseResponseSchema


# bcrypt only looks at the first 72 bytes of a password
PASSWORD_MAX_LENGTH = 72


class SignupRequest(BaseCreateSchema):
    """Signup request schema."""
    name: Optional[str] = Field(None, max_length=100, description="Display name")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(
        ...,
        min_length=settings.PASSWORD_MIN_LENGTH,
        max_length=PASSWORD_MAX_LENGTH,
        description="User password",
    )
    ref: Optional[str] = Field(None, max_length=64, description="Referral code of the referrer")

    @field_validator('password')
    @classmethod
    def reject_nul_bytes(cls, v: str) -> str:
        if "\x00" in v:
            raise ValueError("Password must not contain NUL characters")
        return v


class LoginRequest(BaseCreateSchema):
    """Login request schema."""
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=1, description="User password")


class UserPublic(BaseResponseSchema):
    """User fields returned alongside a token."""
    id: int
    email: str
    code: str
    referrer_code: Optional[str] = None


class AuthResponse(BaseResponseSchema):
    """Token response schema."""
    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Access token expiration in seconds")
    user: UserPublic
