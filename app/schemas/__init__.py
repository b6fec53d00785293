"""Pydantic request/response schemas."""

from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    PublicIdentity,
    PublicProfile,
    RegisterRequest,
    SessionResponse,
)
from app.schemas.common import Category, MessageResponse, PostType, Role, Town
from app.schemas.community import (
    LikeToggleResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    ReplyCreate,
    ReplyResponse,
)
from app.schemas.events import EventCreate, EventResponse, EventUpdate
from app.schemas.health import HealthResponse
from app.schemas.users import ProfileResponse, ProfileUpdateRequest, UpgradeResponse

__all__ = [
    "AuthResponse",
    "Category",
    "CurrentUser",
    "EventCreate",
    "EventResponse",
    "EventUpdate",
    "HealthResponse",
    "LikeToggleResponse",
    "LoginRequest",
    "MessageResponse",
    "PostCreate",
    "PostResponse",
    "PostType",
    "PostUpdate",
    "ProfileResponse",
    "ProfileUpdateRequest",
    "PublicIdentity",
    "PublicProfile",
    "RegisterRequest",
    "ReplyCreate",
    "ReplyResponse",
    "Role",
    "SessionResponse",
    "Town",
    "UpgradeResponse",
]
