"""Event Routes - list, read by slug, create (JSON or form), update, similar, booking count.

Invariants:
    - JSON and form submissions are reduced to the same candidate shape
      (core/parse_event_payload.py) before EventStore runs the pipeline
    - An uploaded image file is replaced by the image host URL before validation
    - Slug path parameters are normalized and pattern-checked before any query

Design Decisions:
    - create_event reads the raw Request instead of a Pydantic body: one endpoint
      serves both content types, and field rules stay in core/enforce_event
    - Absolute event URL built from app_base_url so server-side callers can
      follow it without knowing the host
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, status
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from eventdesk.config import get_settings
from eventdesk.core.errors import MissingRequiredFieldError, RecordValidationError
from eventdesk.core.generate_slug import normalize_slug_param
from eventdesk.core.parse_event_payload import candidate_from_form, candidate_from_json
from eventdesk.core.repository_protocols import ImageHost
from eventdesk.infrastructure.database import get_db
from eventdesk.infrastructure.image_host import get_image_host
from eventdesk.models.event import Event
from eventdesk.schemas.event import EventResponse, EventUpdate
from eventdesk.services.booking_store import BookingStore
from eventdesk.services.event_store import EventStore

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/events", tags=["events"])


def event_payload(event: Event) -> dict:
    """Serialize an Event row for responses."""
    payload = EventResponse.model_validate(event).model_dump(mode="json")
    base_url = get_settings().app_base_url.rstrip("/")
    payload["url"] = f"{base_url}/events/{event.slug}"
    return payload


@router.get("")
async def list_events(db: AsyncSession = Depends(get_db)):
    """All events, newest first."""
    events = await EventStore(db).list_events()
    return {
        "message": "Events fetched successfully",
        "events": [event_payload(e) for e in events],
    }


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_event(
    request: Request,
    db: AsyncSession = Depends(get_db),
    image_host: ImageHost = Depends(get_image_host),
):
    """Create an event from a JSON body or a multipart/url-encoded form."""
    content_type = request.headers.get("content-type", "")
    if "application/json" in content_type:
        candidate = await _candidate_from_json_request(request)
    else:
        candidate = await _candidate_from_form_request(request, image_host)

    event = await EventStore(db).create_event(candidate)
    return {"message": "Event created successfully", "event": event_payload(event)}


@router.get("/{slug}")
async def get_event(slug: str, db: AsyncSession = Depends(get_db)):
    """Read a single event by slug."""
    event = await EventStore(db).get_by_slug(normalize_slug_param(slug))
    return {"message": "Event fetched successfully", "event": event_payload(event)}


@router.patch("/{slug}")
async def update_event(
    slug: str, body: EventUpdate, db: AsyncSession = Depends(get_db),
):
    """Partially update an event; the merged record is fully re-validated."""
    changes = body.model_dump(exclude_unset=True)
    event = await EventStore(db).update_event(normalize_slug_param(slug), changes)
    return {"message": "Event updated successfully", "event": event_payload(event)}


@router.get("/{slug}/similar")
async def list_similar_events(
    slug: str,
    limit: int | None = Query(None, ge=1, le=50),
    db: AsyncSession = Depends(get_db),
):
    """Other events sharing at least one tag, newest first."""
    events = await EventStore(db).list_similar(normalize_slug_param(slug), limit)
    return {
        "message": "Similar events fetched successfully",
        "events": [event_payload(e) for e in events],
    }


@router.get("/{slug}/bookings/count")
async def count_bookings(slug: str, db: AsyncSession = Depends(get_db)):
    """Number of bookings for the event."""
    count = await BookingStore(db).count_for_event(normalize_slug_param(slug))
    return {"slug": slug.strip().lower(), "bookings": count}


# --- Payload helpers ---------------------------------------------------------

async def _candidate_from_json_request(request: Request) -> dict:
    try:
        body = await request.json()
    except ValueError as e:
        raise RecordValidationError("Request body is not valid JSON") from e
    if not isinstance(body, dict):
        raise RecordValidationError("Request body must be a JSON object")
    return candidate_from_json(body)


async def _candidate_from_form_request(request: Request, image_host: ImageHost) -> dict:
    form = await request.form()
    image_entry = form.get("image")

    if isinstance(image_entry, UploadFile) and image_entry.filename:
        data = await image_entry.read()
        image_url = await image_host.upload(data, image_entry.filename)
        logger.info(f"Event image uploaded: {image_entry.filename}")
    else:
        image_url = image_entry.strip() if isinstance(image_entry, str) else ""

    if not image_url:
        raise MissingRequiredFieldError("image")

    fields = {
        key: [value for value in form.getlist(key) if isinstance(value, str)]
        for key in form.keys()
    }
    return candidate_from_form(fields, image_url)
