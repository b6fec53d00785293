"""ORM model for events posted by business accounts."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text, func

from app.models.base import Base


class Event(Base):
    """
    A dated event in one of the supported towns.

    date is kept as an ISO 'YYYY-MM-DD' string rather than a timestamp so the
    calendar day never shifts with the client's or server's timezone; ISO
    strings also sort and compare in calendar order.
    """

    __tablename__ = "events"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    town = Column(String(60), nullable=False, index=True)
    category = Column(String(40), nullable=False, index=True)
    date = Column(String(10), nullable=False, index=True)
    time = Column(String(20), nullable=True)
    # 24-hour "HH:MM" parsed from time; ordering key for events on the same day.
    start_time = Column(String(5), nullable=True)
    end_time = Column(String(20), nullable=True)
    location = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    image_url = Column(String(2048), nullable=True)
    created_by = Column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
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
