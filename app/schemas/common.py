"""Shared schema base, enumerations and validators used across request/response models."""

import re
from datetime import date
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Reusable enumerations for validation and type safety across schemas.
Role = Literal["local", "business"]
Town = Literal["Banff", "Canmore", "Lake Louise"]
Category = Literal[
    "Market",
    "Wellness",
    "Music",
    "Workshop",
    "Family",
    "Retail",
    "Outdoors",
    "Food",
    "Art",
]
PostType = Literal["roadConditions", "rideShare", "eventBuddy"]

ROLE_BUSINESS: Role = "business"
ROLE_LOCAL: Role = "local"
ROLES: frozenset[str] = frozenset({ROLE_LOCAL, ROLE_BUSINESS})

ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class ApiModel(BaseModel):
    """Base for API bodies: camelCase on the wire, snake_case in Python, either accepted on input."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )


class MessageResponse(ApiModel):
    """Confirmation returned by delete endpoints."""

    message: str
    id: int | None = Field(default=None, description="Id of the affected resource")


def validate_iso_date(value: str) -> str:
    """Ensure a calendar date string is exactly 'YYYY-MM-DD' and a real date."""
    if not ISO_DATE_RE.fullmatch(value):
        raise ValueError("date must be formatted as YYYY-MM-DD")
    try:
        date.fromisoformat(value)
    except ValueError as e:
        raise ValueError("date must be a valid calendar date (YYYY-MM-DD)") from e
    return value
