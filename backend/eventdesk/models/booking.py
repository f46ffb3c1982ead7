"""Booking ORM - one row per booking request.

Invariants:
    - event_id references events.id (indexed); the event is not owned (no cascade)
    - email is stored already trimmed and lowercased
    - No update/delete paths exist; updated_at mirrors created_at until then

Design Decisions:
    - Foreign key backs the store's existence check: on PostgreSQL the insert
      itself fails if the event vanished between check and write
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import Text, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from eventdesk.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Booking(Base):
    """Booking - weak reference to an Event plus the attendee email."""
    __tablename__ = "bookings"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    event_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("events.id"), nullable=False, index=True,
    )
    email: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )
