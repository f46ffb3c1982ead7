"""Event Schemas - API responses and the partial-update body.

Invariants:
    - EventUpdate never carries slug: the title owns it after creation
    - EventUpdate fields are optional; only fields actually sent are merged
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class EventResponse(BaseModel):
    """Public event representation."""
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    title: str
    slug: str
    description: str
    overview: str
    image: str
    venue: str
    location: str
    date: str
    time: str
    mode: str
    audience: str
    organizer: str
    agenda: list[str]
    tags: list[str]
    created_at: datetime
    updated_at: datetime


class EventUpdate(BaseModel):
    """PATCH body - every field optional, unknown fields rejected."""
    model_config = ConfigDict(extra="forbid")

    title: str | None = None
    description: str | None = None
    overview: str | None = None
    image: str | None = None
    venue: str | None = None
    location: str | None = None
    date: str | None = None
    time: str | None = None
    mode: str | None = None
    audience: str | None = None
    organizer: str | None = None
    agenda: list[str] | None = None
    tags: list[str] | None = None
