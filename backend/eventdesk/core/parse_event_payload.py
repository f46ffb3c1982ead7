"""Event Payload Parsing - turns JSON bodies and form submissions into one candidate shape.

Invariants:
    - PURE: no IO; file uploads are resolved by the caller and passed as image_url
    - Output keys are exactly REQUIRED_EVENT_FIELDS + agenda + tags (+ slug when given)
    - No validation here: wrong types pass through so enforce_event reports them

Design Decisions:
    - Form agenda/tags accept either a JSON array string or repeated fields,
      matching what HTML forms and JS clients both send
"""

import json
from collections.abc import Mapping, Sequence

from eventdesk.core.domain_types import REQUIRED_EVENT_FIELDS, LIST_EVENT_FIELDS


def candidate_from_json(body: Mapping[str, object]) -> dict:
    """Candidate from a JSON object body."""
    candidate: dict = {name: body.get(name) for name in REQUIRED_EVENT_FIELDS}
    for name in LIST_EVENT_FIELDS:
        value = body.get(name)
        candidate[name] = list(value) if isinstance(value, (list, tuple)) else []
    if "slug" in body:
        candidate["slug"] = body["slug"]
    return candidate


def candidate_from_form(
    fields: Mapping[str, Sequence[str]], image_url: str,
) -> dict:
    """Candidate from multipart/url-encoded form fields.

    Args:
        fields: every text field name mapped to all its submitted values.
        image_url: uploaded image URL, or the submitted image URL string.
    """
    candidate: dict = {
        name: _first(fields.get(name, ())) for name in REQUIRED_EVENT_FIELDS
    }
    candidate["image"] = image_url
    for name in LIST_EVENT_FIELDS:
        candidate[name] = parse_list_field(fields.get(name, ()))
    slug = _first(fields.get("slug", ()))
    if slug:
        candidate["slug"] = slug
    return candidate


def parse_list_field(values: Sequence[str]) -> list:
    """A JSON array in a single field, else every repeated value trimmed."""
    if len(values) == 1:
        try:
            parsed = json.loads(values[0])
        except ValueError:
            parsed = None
        if isinstance(parsed, list):
            return parsed
    return [value.strip() for value in values]


def _first(values: Sequence[str]) -> str:
    return values[0].strip() if values else ""
