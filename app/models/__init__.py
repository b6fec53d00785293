"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.community import CommunityLike, CommunityPost, CommunityReply
from app.models.event import Event
from app.models.user import User

__all__ = ["Base", "CommunityLike", "CommunityPost", "CommunityReply", "Event", "User"]
