"""Booking Store - booking persistence behind the email and event-existence checks.

Invariants:
    - Email normalized/validated (prepare_booking) before any DB round trip
    - Event existence checked before insert; missing event -> EventNotFoundError
      and nothing is persisted
    - Timestamps are server-assigned

Design Decisions:
    - Check-then-insert without a transaction: events are never deleted, so the
      window cannot be hit; the bookings.event_id foreign key still rejects the
      insert on PostgreSQL if that ever changes, reported as EventNotFoundError
"""

import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.core.enforce_booking import prepare_booking
from eventdesk.core.errors import EventNotFoundError
from eventdesk.models.booking import Booking
from eventdesk.services.event_store import EventStore

logger = logging.getLogger(__name__)


class BookingStore:
    """Booking persistence on a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db
        self._events = EventStore(db)

    async def create_booking(self, event_id: UUID, email: object) -> Booking:
        """Validate and insert a booking.

        Raises:
            InvalidEmailFormatError: email malformed.
            EventNotFoundError: no event with this id.
        """
        record = prepare_booking(event_id, email)
        if not await self._events.exists(record.event_id):
            raise EventNotFoundError(str(record.event_id))

        booking = Booking(event_id=record.event_id, email=record.email)
        self._db.add(booking)
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            raise EventNotFoundError(str(record.event_id)) from e
        await self._db.refresh(booking)
        logger.info("Booking created", extra={"event_id": record.event_id})
        return booking

    async def count_for_event(self, slug: str) -> int:
        event = await self._events.get_by_slug(slug)
        result = await self._db.execute(
            select(func.count()).select_from(Booking).where(Booking.event_id == event.id),
        )
        return result.scalar_one()
