"""Event service: create, list, fetch, update and delete events scoped by ownership."""

import logging
from datetime import date, datetime

from sqlalchemy.orm import Session

from app.core.errors import InvalidInputError
from app.models import Event
from app.schemas.auth import CurrentUser
from app.schemas.events import EventCreate, EventUpdate
from app.services.access import get_or_404, get_owned_or_404

logger = logging.getLogger(__name__)


def _event_owner(event: Event) -> int:
    return event.created_by


# Accepted spellings of a start time, tried in order.
START_TIME_FORMATS = ("%I:%M %p", "%I:%M%p", "%I %p", "%I%p", "%H:%M")


def normalize_start_time(value: str | None) -> str | None:
    """
    Parse a display time such as "7:00 PM" into a sortable 24-hour "HH:MM".

    Returns None for missing or unrecognised times; those events list after
    timed ones on the same day.
    """
    if not value:
        return None
    text = " ".join(value.upper().split())
    for fmt in START_TIME_FORMATS:
        try:
            parsed = datetime.strptime(text, fmt)
        except ValueError:
            continue
        return parsed.strftime("%H:%M")
    return None


def _chronological(query):
    return query.order_by(
        Event.date.asc(),
        Event.start_time.is_(None),
        Event.start_time.asc(),
        Event.id.asc(),
    )


def create_event(db: Session, data: EventCreate, identity: CurrentUser) -> Event:
    """Persist a new event stamped with the caller as creator."""
    event = Event(
        **data.model_dump(),
        created_by=identity.id,
        start_time=normalize_start_time(data.time),
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info(
        "Event created",
        extra={"event_id": event.id, "user_id": identity.id, "town": event.town},
    )
    return event


def list_upcoming_events(
    db: Session,
    town: str | None = None,
    category: str | None = None,
    today: date | None = None,
) -> list[Event]:
    """Events dated today or later, soonest first; optionally filtered by town/category."""
    cutoff = (today or date.today()).isoformat()
    query = db.query(Event).filter(Event.date >= cutoff)
    if town:
        query = query.filter(Event.town == town)
    if category:
        query = query.filter(Event.category == category)
    return _chronological(query).all()


def list_events_by_creator(db: Session, identity: CurrentUser) -> list[Event]:
    """All events the caller created, past and future, in date order."""
    return _chronological(db.query(Event).filter(Event.created_by == identity.id)).all()


def get_event(db: Session, event_id: int) -> Event:
    return get_or_404(db, Event, event_id, "event")


def get_owned_event(
    db: Session, event_id: int, identity: CurrentUser, action: str = "edit"
) -> Event:
    """Load an event and require that the caller created it."""
    return get_owned_or_404(
        db, Event, event_id, identity, _event_owner, action=action, noun="event"
    )


def update_event(
    db: Session,
    event_id: int,
    changes: EventUpdate,
    identity: CurrentUser,
) -> Event:
    """Merge the provided fields into an event the caller created."""
    event = get_owned_event(db, event_id, identity, action="edit")
    updates = changes.model_dump(exclude_unset=True)
    if not updates:
        raise InvalidInputError("No event fields provided to update.")
    for field, value in updates.items():
        setattr(event, field, value)
    if "time" in updates:
        event.start_time = normalize_start_time(event.time)
    db.commit()
    db.refresh(event)
    logger.info(
        "Event updated",
        extra={"event_id": event.id, "user_id": identity.id, "fields": sorted(updates)},
    )
    return event


def delete_event(db: Session, event_id: int, identity: CurrentUser) -> int:
    """Delete an event the caller created; returns the deleted id."""
    event = get_owned_event(db, event_id, identity, action="delete")
    db.delete(event)
    db.commit()
    logger.info("Event deleted", extra={"event_id": event_id, "user_id": identity.id})
    return event_id
