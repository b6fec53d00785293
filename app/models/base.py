"""SQLAlchemy declarative Base shared by every table."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for users, events and community tables."""

    pass
