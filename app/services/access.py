"""Role gate and ownership checks shared by every mutating endpoint.

Order of checks for a mutation: token (get_current_user) -> role (assert_role)
-> ownership (get_owned_or_404 / assert_owner) -> business validation in the
service. Each check raises before anything is written.
"""

import logging
from collections.abc import Callable
from typing import TypeVar

from sqlalchemy.orm import Session

from app.core.errors import ForbiddenError, NotFoundError, UnauthenticatedError
from app.schemas.auth import CurrentUser
from app.schemas.common import ROLE_BUSINESS

logger = logging.getLogger(__name__)

T = TypeVar("T")

ROLE_REQUIRED_MESSAGES = {
    ROLE_BUSINESS: "Business account required to perform this action.",
}


def assert_role(identity: CurrentUser | None, required_role: str) -> CurrentUser:
    """Raise unless an identity is attached and holds required_role."""
    if identity is None:
        raise UnauthenticatedError("Not authenticated. Please log in.")
    if identity.role != required_role:
        raise ForbiddenError(
            ROLE_REQUIRED_MESSAGES.get(required_role, f"Role '{required_role}' required.")
        )
    return identity


def assert_owner(
    resource: T,
    identity: CurrentUser,
    owner_of: Callable[[T], object],
    action: str = "edit",
    noun: str = "resource",
) -> T:
    """
    Raise ForbiddenError unless identity created resource.

    owner_of returns the stored creator reference; both sides are compared as
    strings so integer and string ids never drift apart.
    """
    owner = owner_of(resource)
    if owner is None or str(owner) != str(identity.id):
        logger.warning(
            "Ownership check denied",
            extra={"noun": noun, "action": action, "identity_id": identity.id},
        )
        raise ForbiddenError(f"You are not allowed to {action} this {noun}.")
    return resource


def get_or_404(db: Session, model: type[T], resource_id: int, noun: str) -> T:
    resource = db.get(model, resource_id)
    if resource is None:
        raise NotFoundError(f"{noun.capitalize()} not found.")
    return resource


def get_owned_or_404(
    db: Session,
    model: type[T],
    resource_id: int,
    identity: CurrentUser,
    owner_of: Callable[[T], object],
    action: str,
    noun: str,
) -> T:
    """Load resource_id (NotFoundError if absent) and assert identity owns it."""
    resource = get_or_404(db, model, resource_id, noun)
    return assert_owner(resource, identity, owner_of, action=action, noun=noun)
