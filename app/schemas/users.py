"""Schemas for account upgrade and member profile endpoints."""

from pydantic import Field, field_validator, model_validator

from app.core.security import DISPLAY_NAME_MAX_LEN
from app.schemas.auth import PublicIdentity
from app.schemas.common import ApiModel


class UpgradeResponse(ApiModel):
    """Result of PATCH /users/upgrade-to-business: a fresh token carrying the new role."""

    message: str
    token: str
    token_type: str = "bearer"
    identity: PublicIdentity


class ProfileUpdateRequest(ApiModel):
    """Partial profile update; only fields present in the body are changed."""

    display_name: str | None = Field(default=None, max_length=DISPLAY_NAME_MAX_LEN)
    town: str | None = Field(default=None, max_length=60)
    bio: str | None = Field(default=None, max_length=300)
    looking_for: str | None = Field(default=None, max_length=200)
    instagram: str | None = Field(default=None, max_length=60)
    website: str | None = Field(default=None, max_length=255)
    avatar_key: str | None = Field(default=None, max_length=64)

    @field_validator("display_name")
    @classmethod
    def validate_display_name(cls, v: str | None) -> str | None:
        if v is not None and not v:
            raise ValueError("displayName must be non-empty")
        return v

    @model_validator(mode="after")
    def display_name_not_null(self) -> "ProfileUpdateRequest":
        if "display_name" in self.model_fields_set and self.display_name is None:
            raise ValueError("displayName cannot be cleared")
        return self


class ProfileResponse(ApiModel):
    """Response for PATCH /users/me."""

    message: str
    identity: PublicIdentity
