"""Event ORM - persists validated event documents.

Invariants:
    - id is UUID primary key (server-assigned)
    - slug carries a UNIQUE index; collisions surface as IntegrityError
    - agenda/tags are JSON arrays of strings (self-contained document rows)
    - created_at set once on insert; updated_at refreshed on every UPDATE

Design Decisions:
    - JSON columns for agenda/tags: no join tables for ordered string lists
    - date/time stored as canonical strings (YYYY-MM-DD / HH:MM), the same
      shape the API returns
    - Free-text columns are TEXT: the validator sets no length limits, so the
      column never rejects a record it accepted
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Text, DateTime, JSON, Index
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from eventdesk.core.domain_types import EventRecord
from eventdesk.db.base import Base


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Event(Base):
    """Event document - the aggregate bookings point at."""
    __tablename__ = "events"
    __table_args__ = (
        Index("ix_events_slug", "slug", unique=True),
        Index("ix_events_created_at", "created_at"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False)
    overview: Mapped[str] = mapped_column(Text, nullable=False)
    image: Mapped[str] = mapped_column(Text, nullable=False)
    venue: Mapped[str] = mapped_column(Text, nullable=False)
    location: Mapped[str] = mapped_column(Text, nullable=False)
    date: Mapped[str] = mapped_column(String(10), nullable=False)
    time: Mapped[str] = mapped_column(String(5), nullable=False)
    mode: Mapped[str] = mapped_column(Text, nullable=False)
    audience: Mapped[str] = mapped_column(Text, nullable=False)
    organizer: Mapped[str] = mapped_column(Text, nullable=False)
    agenda: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    tags: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=_utcnow, onupdate=_utcnow,
    )

    @classmethod
    def from_record(cls, record: EventRecord) -> "Event":
        return cls(**record.to_fields())

    def to_record(self) -> EventRecord:
        """Last persisted state, as the validator's `previous` argument."""
        return EventRecord(
            title=self.title, slug=self.slug, description=self.description,
            overview=self.overview, image=self.image, venue=self.venue,
            location=self.location, date=self.date, time=self.time,
            mode=self.mode, audience=self.audience, organizer=self.organizer,
            agenda=tuple(self.agenda), tags=tuple(self.tags),
        )

    def apply_record(self, record: EventRecord) -> None:
        for name, value in record.to_fields().items():
            setattr(self, name, value)
