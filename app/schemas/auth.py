"""Request/response schemas for registration, login and the session identity."""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.core.security import (
    DISPLAY_NAME_MAX_LEN,
    DISPLAY_NAME_MIN_LEN,
    EMAIL_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from app.schemas.common import ApiModel, Role

EMAIL_RE = re.compile(r"\S+@\S+\.\S+")


def normalize_email(value: str) -> str:
    """Trim and lower-case an email; identities are unique on this form."""
    return value.strip().lower()


class RegisterRequest(ApiModel):
    """New account. role defaults to 'local'; any other value than local/business is rejected."""

    # Passwords are taken verbatim; other fields are stripped by their validators.
    model_config = ConfigDict(str_strip_whitespace=False)

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email address")
    password: str = Field(
        ...,
        min_length=PASSWORD_MIN_LEN,
        max_length=PASSWORD_MAX_LEN,
        description="Password",
    )
    display_name: str = Field(
        ...,
        min_length=DISPLAY_NAME_MIN_LEN,
        max_length=DISPLAY_NAME_MAX_LEN,
        description="Name shown on posts and the account screen",
    )
    role: Role | None = Field(default=None, description="local or business")
    town: str | None = Field(default=None, max_length=60)

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        v = normalize_email(v)
        if not EMAIL_RE.fullmatch(v):
            raise ValueError("email must be a valid email address")
        return v

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("displayName must be non-empty")
        return v

    @field_validator("town")
    @classmethod
    def validate_town(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return v.strip() or None


class LoginRequest(ApiModel):
    """Credentials for login."""

    model_config = ConfigDict(str_strip_whitespace=False)

    email: str = Field(..., min_length=1, max_length=EMAIL_MAX_LEN, description="Email address")
    password: str = Field(..., min_length=1, max_length=PASSWORD_MAX_LEN, description="Password")

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        return normalize_email(v)


class PublicProfile(ApiModel):
    """Member profile visible to other signed-in members (no email)."""

    id: int
    display_name: str
    role: str
    town: str | None = None
    bio: str | None = None
    looking_for: str | None = None
    instagram: str | None = None
    website: str | None = None
    avatar_key: str | None = None
    created_at: datetime | None = None


class PublicIdentity(PublicProfile):
    """The caller's own identity projection. Never includes the password hash."""

    email: str


class AuthResponse(ApiModel):
    """Token plus identity returned by register and login."""

    token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")
    identity: PublicIdentity


class SessionResponse(ApiModel):
    """Response for GET /auth/me."""

    identity: PublicIdentity


class CurrentUser(BaseModel):
    """Identity context attached to a request by the token verifier (id and role only)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    role: str
