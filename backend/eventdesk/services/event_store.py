"""Event Store - persistence for events with the validation pipeline on every write.

Invariants:
    - create_event and update_event both run validate_event_record before any
      row is added or modified; a rejected candidate leaves the DB untouched
    - Unique-index violations on slug are reported as DuplicateSlugError (409)
    - list_events is ordered by created_at descending
    - Updates whose normalized result equals the stored record issue no write

Design Decisions:
    - Uniqueness left to the DB index (no read-before-write): the index is the
      only check that holds under concurrent creates
"""

import logging
from collections.abc import Mapping
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from eventdesk.core.enforce_event import validate_event_record
from eventdesk.core.errors import DuplicateSlugError, EventNotFoundError
from eventdesk.core.similar_events import find_similar_events
from eventdesk.models.event import Event

logger = logging.getLogger(__name__)


class EventStore:
    """Event persistence on a request-scoped AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def create_event(self, candidate: Mapping[str, object]) -> Event:
        """Validate, normalize, and insert a new event.

        Raises:
            RecordValidationError: candidate rejected by the pipeline.
            DuplicateSlugError: another event already has the resulting slug.
        """
        record = validate_event_record(candidate)
        event = Event.from_record(record)
        self._db.add(event)
        await self._commit(record.slug)
        await self._db.refresh(event)
        logger.info(
            f"Event created: {event.slug}",
            extra={"event_slug": event.slug, "event_id": event.id},
        )
        return event

    async def update_event(self, slug: str, changes: Mapping[str, object]) -> Event:
        """Merge changes into the stored event and re-run the full pipeline."""
        event = await self.get_by_slug(slug)
        previous = event.to_record()
        record = validate_event_record({**previous.to_fields(), **changes}, previous)
        if record == previous:
            return event

        event.apply_record(record)
        await self._commit(record.slug)
        await self._db.refresh(event)
        logger.info(
            f"Event updated: {slug} -> {event.slug}",
            extra={"event_slug": event.slug, "event_id": event.id},
        )
        return event

    async def get_by_slug(self, slug: str) -> Event:
        result = await self._db.execute(select(Event).where(Event.slug == slug))
        event = result.scalar_one_or_none()
        if event is None:
            raise EventNotFoundError(slug)
        return event

    async def list_events(self) -> list[Event]:
        result = await self._db.execute(
            select(Event).order_by(Event.created_at.desc()),
        )
        return list(result.scalars().all())

    async def list_similar(self, slug: str, limit: int | None = None) -> list[Event]:
        """Other events sharing a tag with the given one, newest first."""
        reference = await self.get_by_slug(slug)
        return find_similar_events(reference, await self.list_events(), limit)

    async def exists(self, event_id: UUID) -> bool:
        result = await self._db.execute(select(Event.id).where(Event.id == event_id))
        return result.scalar_one_or_none() is not None

    async def _commit(self, slug: str) -> None:
        try:
            await self._db.commit()
        except IntegrityError as e:
            await self._db.rollback()
            logger.warning(
                f"Duplicate slug rejected: {slug}",
                extra={"event_slug": slug, "error_code": "DUPLICATE_SLUG"},
            )
            raise DuplicateSlugError(slug) from e
