"""Events endpoints: public listing and lookup; business-only create, update and delete."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_business
from app.core.database import get_db
from app.models import Event
from app.schemas.auth import CurrentUser
from app.schemas.common import Category, MessageResponse, Town
from app.schemas.events import EventCreate, EventResponse, EventUpdate
from app.services import events as event_service

router = APIRouter()


def owned_event(action: str):
    """
    Build a dependency that loads the path event and requires the caller created it.

    Runs as a dependency so 404 and 403 are decided before the request body is validated.
    """

    def _owned_event(
        event_id: int,
        db: Annotated[Session, Depends(get_db)],
        current_user: Annotated[CurrentUser, Depends(require_business)],
    ) -> Event:
        return event_service.get_owned_event(db, event_id, current_user, action=action)

    return _owned_event


@router.get("", response_model=list[EventResponse])
def list_events(
    db: Annotated[Session, Depends(get_db)],
    town: Annotated[Town | None, Query()] = None,
    category: Annotated[Category | None, Query()] = None,
) -> list[EventResponse]:
    """Upcoming events (dated today or later), soonest first. Public."""
    events = event_service.list_upcoming_events(db, town=town, category=category)
    return [EventResponse.model_validate(e) for e in events]


@router.get("/mine", response_model=list[EventResponse])
def list_my_events(
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> list[EventResponse]:
    """Events created by the caller, including past ones."""
    events = event_service.list_events_by_creator(db, current_user)
    return [EventResponse.model_validate(e) for e in events]


@router.get("/{event_id}", response_model=EventResponse)
def get_event(
    event_id: int,
    db: Annotated[Session, Depends(get_db)],
) -> EventResponse:
    return EventResponse.model_validate(event_service.get_event(db, event_id))


@router.post("", response_model=EventResponse, status_code=status.HTTP_201_CREATED)
def create_event(
    body: EventCreate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(require_business)],
) -> EventResponse:
    """
    Create an event. Requires a business account.

    title, town, category and date (YYYY-MM-DD) are required; the caller is
    recorded as createdBy.
    """
    event = event_service.create_event(db, body, current_user)
    return EventResponse.model_validate(event)


@router.put("/{event_id}", response_model=EventResponse)
def update_event(
    event_id: int,
    body: EventUpdate,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(require_business)],
    _event: Annotated[Event, Depends(owned_event("edit"))],
) -> EventResponse:
    """Update fields of an event. Only its creator may edit it; omitted fields are kept."""
    event = event_service.update_event(db, event_id, body, current_user)
    return EventResponse.model_validate(event)


@router.delete("/{event_id}", response_model=MessageResponse)
def delete_event(
    event_id: int,
    db: Annotated[Session, Depends(get_db)],
    current_user: Annotated[CurrentUser, Depends(require_business)],
    _event: Annotated[Event, Depends(owned_event("delete"))],
) -> MessageResponse:
    """Delete an event. Only its creator may delete it."""
    deleted_id = event_service.delete_event(db, event_id, current_user)
    return MessageResponse(message="Event deleted.", id=deleted_id)
