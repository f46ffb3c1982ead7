"""Booking Schemas - create body and response.

Invariants:
    - email is accepted as any string; shape is checked by core/enforce_booking
    - event_id must parse as a UUID (malformed ids are a 400, not a 404)
"""

from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict


class BookingCreate(BaseModel):
    event_id: UUID
    email: str


class BookingResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    event_id: UUID
    email: str
    created_at: datetime
