"""ORM model for registered identities (auth, roles and member profile)."""

from sqlalchemy import Column, DateTime, Integer, String, func

from app.models.base import Base


class User(Base):
    """
    Registered account for JWT authentication and role-based access control.

    role: 'local' or 'business'. email is stored trimmed and lower-cased so the
    unique index is effectively case-insensitive.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    display_name = Column(String(80), nullable=False)
    role = Column(String(16), nullable=False, default="local", server_default="local")

    # Member profile
    town = Column(String(60), nullable=True)
    bio = Column(String(300), nullable=True)
    looking_for = Column(String(200), nullable=True)
    instagram = Column(String(60), nullable=True)
    website = Column(String(255), nullable=True)
    avatar_key = Column(String(64), nullable=True)

    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )
