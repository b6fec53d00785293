"""Registration, login and session endpoints, plus the auth dependencies (get_current_user, require_role)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.core.database import get_db
from app.core.errors import UnauthenticatedError
from app.core.security import decode_access_token
from app.schemas.auth import (
    AuthResponse,
    CurrentUser,
    LoginRequest,
    PublicIdentity,
    RegisterRequest,
    SessionResponse,
)
from app.schemas.common import ROLE_BUSINESS, ROLES
from app.services import accounts
from app.services.access import assert_role

router = APIRouter()
security = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
) -> CurrentUser:
    """
    Dependency: require a valid Bearer JWT and return the identity context.

    Raises 401 if the header is missing, not 'Bearer <token>', or the token is
    invalid or expired. Performs no database access; the role comes from the token.
    """
    if credentials is None:
        if request.headers.get("Authorization"):
            raise UnauthenticatedError("Invalid authorization format.")
        raise UnauthenticatedError("No authorization header provided.")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise UnauthenticatedError("Invalid or expired token.")
    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise UnauthenticatedError("Invalid or expired token.")
    role = payload.get("role")
    if role not in ROLES:
        raise UnauthenticatedError("Invalid or expired token.")

    current_user = CurrentUser(id=user_id, role=role)
    request.state.identity = current_user
    return current_user


def require_role(role: str):
    """Build a dependency that runs get_current_user, then rejects other roles with 403."""

    def _require_role(
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CurrentUser:
        return assert_role(current_user, role)

    return _require_role


require_business = require_role(ROLE_BUSINESS)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Create an account and return a session token.

    role is 'local' when omitted; values other than local/business are rejected.
    Returns 409 if the email is already registered (case-insensitive).
    """
    user = accounts.register_identity(db, body)
    return AuthResponse(
        token=accounts.issue_token(user),
        identity=PublicIdentity.model_validate(user),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Annotated[Session, Depends(get_db)],
) -> AuthResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <token>
    """
    user = accounts.authenticate(db, body.email, body.password)
    return AuthResponse(
        token=accounts.issue_token(user),
        identity=PublicIdentity.model_validate(user),
    )


@router.get("/me", response_model=SessionResponse)
def me(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    db: Annotated[Session, Depends(get_db)],
) -> SessionResponse:
    """Restore a session: verify the token and return the caller's identity."""
    user = accounts.restore_session(db, current_user)
    return SessionResponse(identity=PublicIdentity.model_validate(user))
