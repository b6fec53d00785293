"""Community board service: posts scoped by author ownership, plus replies and likes."""

import logging

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.errors import InvalidInputError
from app.models import CommunityLike, CommunityPost, CommunityReply, User
from app.schemas.auth import CurrentUser
from app.schemas.community import PostCreate, PostUpdate
from app.services.access import get_or_404, get_owned_or_404

logger = logging.getLogger(__name__)

# Used when the author's account row is gone but the token is still valid.
FALLBACK_AUTHOR_NAME = "SummitScene member"


def _post_author(post: CommunityPost) -> int:
    return post.author_id


def _display_name(db: Session, identity: CurrentUser) -> str:
    user = db.get(User, identity.id)
    if user is None or not user.display_name:
        return FALLBACK_AUTHOR_NAME
    return user.display_name


def create_post(db: Session, data: PostCreate, identity: CurrentUser) -> CommunityPost:
    """Persist a post authored by the caller, snapshotting their display name."""
    post = CommunityPost(
        **data.model_dump(),
        author_id=identity.id,
        author_name=_display_name(db, identity),
    )
    db.add(post)
    db.commit()
    db.refresh(post)
    logger.info(
        "Community post created",
        extra={"post_id": post.id, "user_id": identity.id, "post_type": post.type},
    )
    return post


def list_posts(
    db: Session,
    post_type: str | None = None,
    town: str | None = None,
) -> list[CommunityPost]:
    """Posts newest first, optionally filtered by type and town."""
    query = db.query(CommunityPost)
    if post_type:
        query = query.filter(CommunityPost.type == post_type)
    if town:
        query = query.filter(CommunityPost.town == town)
    return query.order_by(CommunityPost.created_at.desc(), CommunityPost.id.desc()).all()


def get_post(db: Session, post_id: int) -> CommunityPost:
    return get_or_404(db, CommunityPost, post_id, "post")


def get_owned_post(
    db: Session, post_id: int, identity: CurrentUser, action: str = "edit"
) -> CommunityPost:
    """Load a post and require that the caller authored it."""
    return get_owned_or_404(
        db, CommunityPost, post_id, identity, _post_author, action=action, noun="post"
    )


def update_post(
    db: Session,
    post_id: int,
    changes: PostUpdate,
    identity: CurrentUser,
) -> CommunityPost:
    """Merge the provided editable fields into a post the caller authored."""
    post = get_owned_post(db, post_id, identity, action="edit")
    updates = changes.model_dump(exclude_unset=True)
    if not updates:
        raise InvalidInputError("No post fields provided to update.")
    for field, value in updates.items():
        setattr(post, field, value)
    db.commit()
    db.refresh(post)
    logger.info(
        "Community post updated",
        extra={"post_id": post.id, "user_id": identity.id, "fields": sorted(updates)},
    )
    return post


def delete_post(db: Session, post_id: int, identity: CurrentUser) -> int:
    """Delete a post the caller authored, with its replies and likes."""
    post = get_owned_post(db, post_id, identity, action="delete")
    db.delete(post)
    db.commit()
    logger.info("Community post deleted", extra={"post_id": post_id, "user_id": identity.id})
    return post_id


def add_reply(db: Session, post_id: int, body: str, identity: CurrentUser) -> CommunityPost:
    """Append a reply to any post; requires only an authenticated caller."""
    body = body.strip()
    if not body:
        raise InvalidInputError("Reply text (body) is required.")
    post = get_post(db, post_id)
    post.replies.append(
        CommunityReply(
            author_id=identity.id,
            author_name=_display_name(db, identity),
            body=body,
        )
    )
    db.commit()
    db.refresh(post)
    logger.info("Community reply added", extra={"post_id": post.id, "user_id": identity.id})
    return post


def toggle_like(db: Session, post_id: int, identity: CurrentUser) -> tuple[CommunityPost, bool]:
    """
    Like the post if the caller has not, otherwise remove their like.

    Returns (post, liked) where liked is the caller's state after the toggle.
    """
    post = get_post(db, post_id)
    existing = db.get(CommunityLike, (post.id, identity.id))
    if existing is None:
        db.add(CommunityLike(post_id=post.id, user_id=identity.id))
        liked = True
    else:
        db.delete(existing)
        liked = False
    try:
        db.commit()
    except IntegrityError:
        # A concurrent request from the same member already stored this like.
        db.rollback()
        logger.info("Duplicate like ignored", extra={"post_id": post_id, "user_id": identity.id})
        liked = True
    db.refresh(post)
    return post, liked


def like_ids(post: CommunityPost) -> list[int]:
    return [like.user_id for like in post.likes]
