"""Event routes - JSON and form creation, slug reads, updates, error envelopes.

Invariants verified:
    - Both payload shapes reach the same pipeline and produce the same record
    - Uploaded images are swapped for the image host URL before validation
    - Validation -> 400, duplicate slug -> 409, unknown slug -> 404
"""

import json

from tests.services.factories import event_payload


async def _create(client, **overrides):
    res = await client.post("/api/v1/events", json=event_payload(**overrides))
    assert res.status_code == 201, res.text
    return res.json()["event"]


# --- Create (JSON) -----------------------------------------------------------

async def test_create_json_returns_normalized_event(client):
    res = await client.post("/api/v1/events", json=event_payload())
    assert res.status_code == 201
    body = res.json()
    assert body["message"] == "Event created successfully"
    event = body["event"]
    assert event["slug"] == "devs-meetup"
    assert event["date"] == "2025-03-07"
    assert event["time"] == "09:30"
    assert event["url"].endswith("/events/devs-meetup")


async def test_create_json_empty_agenda_is_400(client):
    res = await client.post("/api/v1/events", json=event_payload(agenda=[]))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_AGENDA"


async def test_create_json_missing_field_is_400(client):
    payload = event_payload()
    del payload["venue"]
    res = await client.post("/api/v1/events", json=payload)
    assert res.status_code == 400
    error = res.json()["error"]
    assert error["code"] == "MISSING_REQUIRED_FIELD"
    assert error["context"]["field"] == "venue"


async def test_create_json_bad_time_is_400(client):
    res = await client.post("/api/v1/events", json=event_payload(time="24:00"))
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_EVENT_TIME"


async def test_create_json_out_of_range_date_is_400(client):
    res = await client.post(
        "/api/v1/events", json=event_payload(date="0001-01-01T00:30:00+01:00"),
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_EVENT_DATE"


async def test_create_duplicate_slug_is_409(client):
    await _create(client, title="Dev's Meetup")
    res = await client.post("/api/v1/events", json=event_payload(title="DEVS meetup"))
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "DUPLICATE_SLUG"


async def test_create_malformed_json_is_400(client):
    res = await client.post(
        "/api/v1/events", content=b"{not json",
        headers={"content-type": "application/json"},
    )
    assert res.status_code == 400


async def test_create_json_array_body_is_400(client):
    res = await client.post("/api/v1/events", content=b"[]",
                            headers={"content-type": "application/json"})
    assert res.status_code == 400


# --- Create (form) -----------------------------------------------------------

def _form(**overrides) -> dict:
    data = event_payload(**overrides)
    data.pop("image", None)
    data["agenda"] = json.dumps(data["agenda"])
    return data


async def test_create_multipart_uploads_image(client, image_host):
    res = await client.post(
        "/api/v1/events",
        data=_form(),
        files={"image": ("banner.png", b"\x89PNG...", "image/png")},
    )
    assert res.status_code == 201, res.text
    event = res.json()["event"]
    assert event["image"] == "https://images.test/banner.png"
    assert event["agenda"] == ["Welcome", "Talks"]
    assert event["tags"] == ["python", "web"]
    assert image_host.uploads == [("banner.png", b"\x89PNG...")]


async def test_create_form_with_image_url(client, image_host):
    data = _form()
    data["image"] = "https://cdn.test/already-hosted.webp"
    res = await client.post("/api/v1/events", data=data)
    assert res.status_code == 201, res.text
    assert res.json()["event"]["image"] == "https://cdn.test/already-hosted.webp"
    assert image_host.uploads == []


async def test_create_form_without_image_is_400(client):
    res = await client.post("/api/v1/events", data=_form())
    assert res.status_code == 400
    assert res.json()["error"]["context"]["field"] == "image"


async def test_form_and_json_produce_same_record(client):
    data = _form(title="Form Event")
    data["image"] = "https://images.test/meetup.webp"
    form_event = (await client.post("/api/v1/events", data=data)).json()["event"]
    json_event = await _create(client, title="Json Event")
    for key in ("date", "time", "agenda", "tags", "venue", "image"):
        assert form_event[key] == json_event[key]


# --- Read ----------------------------------------------------------------------

async def test_list_events_empty(client):
    res = await client.get("/api/v1/events")
    assert res.status_code == 200
    assert res.json()["events"] == []


async def test_list_events_returns_created(client):
    await _create(client, title="One")
    await _create(client, title="Two")
    res = await client.get("/api/v1/events")
    assert {e["slug"] for e in res.json()["events"]} == {"one", "two"}


async def test_get_event_by_slug(client):
    await _create(client)
    res = await client.get("/api/v1/events/devs-meetup")
    assert res.status_code == 200
    assert res.json()["event"]["title"] == "Dev's Meetup!!"


async def test_get_event_slug_is_case_insensitive(client):
    await _create(client)
    res = await client.get("/api/v1/events/DEVS-MEETUP")
    assert res.status_code == 200


async def test_get_event_invalid_slug_is_400(client):
    res = await client.get("/api/v1/events/bad_slug")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_SLUG"


async def test_get_event_slug_with_stray_hyphens_is_400(client):
    res = await client.get("/api/v1/events/-devs-meetup")
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_SLUG"


async def test_get_event_not_found_is_404(client):
    res = await client.get("/api/v1/events/missing-event")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "EVENT_NOT_FOUND"


# --- Update / similar ----------------------------------------------------------

async def test_patch_title_regenerates_slug(client):
    await _create(client)
    res = await client.patch("/api/v1/events/devs-meetup", json={"title": "PyData Night"})
    assert res.status_code == 200
    assert res.json()["event"]["slug"] == "pydata-night"
    assert (await client.get("/api/v1/events/devs-meetup")).status_code == 404


async def test_patch_invalid_date_is_400(client):
    await _create(client)
    res = await client.patch("/api/v1/events/devs-meetup", json={"date": "05/03/2025"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_EVENT_DATE"


async def test_patch_rejects_slug_field(client):
    await _create(client)
    res = await client.patch("/api/v1/events/devs-meetup", json={"slug": "other"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_similar_events(client):
    await _create(client, title="Ref", tags=["python"])
    await _create(client, title="Match", tags=["python", "ml"])
    await _create(client, title="Other", tags=["rust"])
    res = await client.get("/api/v1/events/ref/similar")
    assert res.status_code == 200
    assert [e["slug"] for e in res.json()["events"]] == ["match"]
