"""Request/response schemas for events."""

from datetime import datetime

from pydantic import Field, field_validator, model_validator

from app.schemas.common import ApiModel, Category, Town, validate_iso_date

# Fields an update may change but never set to null.
REQUIRED_EVENT_FIELDS = ("title", "town", "category", "date")


class EventFields(ApiModel):
    """Optional descriptive fields shared by create and update bodies."""

    time: str | None = Field(default=None, max_length=20, description='Start time, e.g. "7:00 PM"')
    end_time: str | None = Field(default=None, max_length=20, description="End time")
    location: str | None = Field(default=None, max_length=255, description="Venue or address")
    description: str | None = Field(default=None, max_length=5000)
    image_url: str | None = Field(default=None, max_length=2048, description="Poster image URL")


class EventCreate(EventFields):
    """Body for POST /events."""

    title: str = Field(..., min_length=1, max_length=200)
    town: Town
    category: Category
    date: str = Field(..., description="Calendar date, YYYY-MM-DD")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str) -> str:
        return validate_iso_date(v)


class EventUpdate(EventFields):
    """Body for PUT /events/{id}: any subset of fields; omitted fields keep their value."""

    title: str | None = Field(default=None, min_length=1, max_length=200)
    town: Town | None = None
    category: Category | None = None
    date: str | None = Field(default=None, description="Calendar date, YYYY-MM-DD")

    @field_validator("date")
    @classmethod
    def validate_date(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return validate_iso_date(v)

    @model_validator(mode="after")
    def required_fields_not_null(self) -> "EventUpdate":
        for name in REQUIRED_EVENT_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be cleared")
        return self


class EventResponse(EventFields):
    """Event as returned by the API."""

    id: int
    title: str
    town: str
    category: str
    date: str
    created_by: int
    created_at: datetime | None = None
    updated_at: datetime | None = None
