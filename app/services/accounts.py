"""Credential issuer and account operations: register, login, session restore, upgrade, profile."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import (
    ConflictError,
    InvalidInputError,
    NotFoundError,
    UnauthenticatedError,
)
from app.core.security import (
    create_access_token,
    dummy_password_hash,
    hash_password,
    verify_password,
)
from app.models import User
from app.schemas.auth import CurrentUser, RegisterRequest, normalize_email
from app.schemas.common import ROLE_BUSINESS, ROLE_LOCAL
from app.schemas.users import ProfileUpdateRequest

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid email or password."


def issue_token(user: User) -> str:
    """Mint a session token carrying the identity id and its current role."""
    return create_access_token(sub=user.id, role=user.role)


def find_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == normalize_email(email)).first()


def register_identity(db: Session, data: RegisterRequest) -> User:
    """
    Create an identity. Email is compared case-insensitively against existing
    accounts; a missing role becomes 'local'.

    Raises ConflictError if the email is already registered.
    """
    email = normalize_email(data.email)
    if find_by_email(db, email) is not None:
        raise ConflictError("Email is already registered.")

    user = User(
        email=email,
        password_hash=hash_password(data.password),
        display_name=data.display_name,
        role=data.role or ROLE_LOCAL,
        town=data.town,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        # Concurrent registration with the same email won the unique index.
        db.rollback()
        raise ConflictError("Email is already registered.") from e
    db.refresh(user)
    logger.info("Identity registered", extra={"user_id": user.id, "role": user.role})
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    """
    Return the identity for email/password.

    Unknown email and wrong password raise the same UnauthenticatedError, and
    both paths run one bcrypt comparison.
    """
    user = find_by_email(db, email)
    if user is None:
        verify_password(password, dummy_password_hash())
        logger.warning("Login failed")
        raise UnauthenticatedError(INVALID_CREDENTIALS)
    if not verify_password(password, user.password_hash):
        logger.warning("Login failed")
        raise UnauthenticatedError(INVALID_CREDENTIALS)
    return user


def restore_session(db: Session, identity: CurrentUser) -> User:
    """Load the identity behind a verified token; a vanished account counts as logged out."""
    user = db.get(User, identity.id)
    if user is None:
        raise UnauthenticatedError("Account no longer exists. Please log in again.")
    return user


def upgrade_to_business(db: Session, identity: CurrentUser) -> User:
    """Promote local -> business. Raises InvalidInputError if already business."""
    user = db.get(User, identity.id)
    if user is None:
        raise NotFoundError("User not found.")
    if user.role == ROLE_BUSINESS:
        raise InvalidInputError("Account is already a business account.")
    user.role = ROLE_BUSINESS
    db.commit()
    db.refresh(user)
    logger.info("Identity upgraded to business", extra={"user_id": user.id})
    return user


def update_profile(db: Session, identity: CurrentUser, changes: ProfileUpdateRequest) -> User:
    """Apply only the profile fields present in the request."""
    user = db.get(User, identity.id)
    if user is None:
        raise NotFoundError("User not found.")
    updates = changes.model_dump(exclude_unset=True)
    for field, value in updates.items():
        if isinstance(value, str) and field != "display_name":
            value = value or None
        setattr(user, field, value)
    db.commit()
    db.refresh(user)
    logger.info(
        "Profile updated",
        extra={"user_id": user.id, "fields": sorted(updates)},
    )
    return user


def get_public_profile(db: Session, user_id: int) -> User:
    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found.")
    return user
