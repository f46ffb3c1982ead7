"""Booking Routes - create a booking for an existing event.

Invariants:
    - Malformed event_id is a 400 (Pydantic), unknown event_id is a 404
    - Email rules live in core/enforce_booking, not in the request schema
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.infrastructure.database import get_db
from eventdesk.schemas.booking import BookingCreate, BookingResponse
from eventdesk.services.booking_store import BookingStore

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(body: BookingCreate, db: AsyncSession = Depends(get_db)):
    """Book a spot on an event."""
    booking = await BookingStore(db).create_booking(body.event_id, body.email)
    return {
        "message": "Booking created successfully",
        "booking": BookingResponse.model_validate(booking).model_dump(mode="json"),
    }
