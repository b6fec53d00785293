"""User endpoints: upgrade to a business account, edit own profile, view member profiles."""

from typing import Annotated

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.schemas.auth import CurrentUser, PublicIdentity, PublicProfile
from app.schemas.users import ProfileResponse, ProfileUpdateRequest, UpgradeResponse
from app.services import accounts

router = APIRouter()


@router.patch("/upgrade-to-business", response_model=UpgradeResponse)
def upgrade_to_business(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> UpgradeResponse:
    """
    Promote the caller from local to business.

    Returns a new token carrying the business role; tokens issued earlier keep
    the old role until they expire. Returns 400 if the account is already business.
    """
    user = accounts.upgrade_to_business(db, current_user)
    return UpgradeResponse(
        message="Account upgraded to business.",
        token=accounts.issue_token(user),
        identity=PublicIdentity.model_validate(user),
    )


@router.patch("/me", response_model=ProfileResponse)
def update_my_profile(
    body: ProfileUpdateRequest,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> ProfileResponse:
    """Update the caller's profile fields; omitted fields are kept, null clears optional ones."""
    user = accounts.update_profile(db, current_user, body)
    return ProfileResponse(message="Profile updated.", identity=PublicIdentity.model_validate(user))


@router.get("/{user_id}", response_model=PublicProfile)
def get_member_profile(
    user_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PublicProfile:
    """Public profile of another member (no email)."""
    return PublicProfile.model_validate(accounts.get_public_profile(db, user_id))
