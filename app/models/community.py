"""ORM models for community board posts, their replies and likes."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, String, Text, func
from sqlalchemy.orm import relationship

from app.models.base import Base


class CommunityPost(Base):
    """
    Community board post (road conditions, ride shares, event buddies).

    author_name is a snapshot of the author's display name at posting time.
    Replies and likes belong to the post and are removed with it.
    """

    __tablename__ = "community_posts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_name = Column(String(80), nullable=False)
    type = Column(String(32), nullable=False, index=True)
    town = Column(String(60), nullable=False, index=True)
    title = Column(String(200), nullable=False)
    body = Column(Text, nullable=False)
    target_date = Column(Date, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    replies = relationship(
        "CommunityReply",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="CommunityReply.id",
    )
    likes = relationship(
        "CommunityLike",
        back_populates="post",
        cascade="all, delete-orphan",
        order_by="CommunityLike.user_id",
    )


class CommunityReply(Base):
    """Reply appended under a community post; kept in insertion order."""

    __tablename__ = "community_replies"

    id = Column(Integer, primary_key=True, autoincrement=True)
    post_id = Column(
        Integer,
        ForeignKey("community_posts.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    author_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    author_name = Column(String(80), nullable=False)
    body = Column(Text, nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    post = relationship("CommunityPost", back_populates="replies")


class CommunityLike(Base):
    """One identity's like on one post; the composite key makes likes a set."""

    __tablename__ = "community_likes"

    post_id = Column(
        Integer,
        ForeignKey("community_posts.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    post = relationship("CommunityPost", back_populates="likes")
