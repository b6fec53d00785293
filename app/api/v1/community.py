"""Community board endpoints. Every route requires a signed-in member; edits and deletes require authorship."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user
from app.core.database import get_db
from app.models import CommunityPost
from app.schemas.auth import CurrentUser
from app.schemas.common import MessageResponse, PostType, Town
from app.schemas.community import (
    LikeToggleResponse,
    PostCreate,
    PostResponse,
    PostUpdate,
    ReplyCreate,
    ReplyResponse,
)
from app.services import community as community_service

router = APIRouter()


def owned_post(action: str):
    """Build a dependency that loads the path post and requires the caller authored it, ahead of body validation."""

    def _owned_post(
        post_id: int,
        db: Annotated[Session, Depends(get_db)],
        current_user: Annotated[CurrentUser, Depends(get_current_user)],
    ) -> CommunityPost:
        return community_service.get_owned_post(db, post_id, current_user, action=action)

    return _owned_post


def to_post_response(post: CommunityPost) -> PostResponse:
    """Build the API view of a post: like ids, like count and ordered replies."""
    likes = community_service.like_ids(post)
    return PostResponse(
        id=post.id,
        author_id=post.author_id,
        author_name=post.author_name,
        type=post.type,
        town=post.town,
        title=post.title,
        body=post.body,
        target_date=post.target_date,
        likes=likes,
        like_count=len(likes),
        replies=[ReplyResponse.model_validate(r) for r in post.replies],
        created_at=post.created_at,
        updated_at=post.updated_at,
    )


@router.get("", response_model=list[PostResponse])
def list_posts(
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
    post_type: Annotated[PostType | None, Query(alias="type")] = None,
    town: Annotated[Town | None, Query()] = None,
) -> list[PostResponse]:
    """Community posts, newest first. Filter with ?type=roadConditions|rideShare|eventBuddy and ?town=."""
    posts = community_service.list_posts(db, post_type=post_type, town=town)
    return [to_post_response(p) for p in posts]


@router.post("", response_model=PostResponse, status_code=status.HTTP_201_CREATED)
def create_post(
    body: PostCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostResponse:
    """Create a post authored by the caller. Any role may post."""
    return to_post_response(community_service.create_post(db, body, current_user))


@router.get("/{post_id}", response_model=PostResponse)
def get_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostResponse:
    return to_post_response(community_service.get_post(db, post_id))


@router.put("/{post_id}", response_model=PostResponse)
def update_post(
    post_id: int,
    body: PostUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    _post: Annotated[CommunityPost, Depends(owned_post("edit"))],
) -> PostResponse:
    """Update a post. Only its author may edit it; omitted fields are kept."""
    post = community_service.update_post(db, post_id, body, current_user)
    return to_post_response(post)


@router.delete("/{post_id}", response_model=MessageResponse)
def delete_post(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
    _post: Annotated[CommunityPost, Depends(owned_post("delete"))],
) -> MessageResponse:
    """Delete a post with its replies and likes. Only its author may delete it."""
    deleted_id = community_service.delete_post(db, post_id, current_user)
    return MessageResponse(message="Post deleted.", id=deleted_id)


@router.post(
    "/{post_id}/replies",
    response_model=PostResponse,
    status_code=status.HTTP_201_CREATED,
)
def add_reply(
    post_id: int,
    body: ReplyCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> PostResponse:
    """Reply under any post; returns the post with the reply appended."""
    post = community_service.add_reply(db, post_id, body.body, current_user)
    return to_post_response(post)


@router.post("/{post_id}/likes", response_model=LikeToggleResponse)
def toggle_like(
    post_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> LikeToggleResponse:
    """Like or unlike a post for the caller."""
    post, liked = community_service.toggle_like(db, post_id, current_user)
    likes = community_service.like_ids(post)
    return LikeToggleResponse(post_id=post.id, liked=liked, like_count=len(likes), likes=likes)
