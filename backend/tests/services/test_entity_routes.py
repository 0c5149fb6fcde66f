"""Entity Routes: listing filters, CRUD, soft delete and hours over HTTP.

Invariants:
    - GET /entities excludes archived unless status is requested
    - POST returns 201 with store-assigned id and timestamps
    - PATCH rejects unknown and rating fields with 400
    - DELETE archives and is repeatable; unknown id returns 404
"""

import pytest


async def _create(client, **overrides) -> dict:
    body = {
        "type": "cafe",
        "area": "center",
        "title": "Blue Door Cafe",
        "short_description": "Coffee and pastries",
        "tags": ["coffee"],
        "rating": 4.0,
        "rating_count": 12,
        "status": "active",
    }
    body.update(overrides)
    res = await client.post("/api/v1/entities", json=body)
    assert res.status_code == 201, res.text
    return res.json()


async def test_create_returns_201_with_assigned_fields(client):
    entity = await _create(client)
    assert entity["id"]
    assert entity["created_at"] == entity["updated_at"]
    assert entity["open_status"] == "unknown"


async def test_create_rejects_client_id(client):
    res = await client.post("/api/v1/entities", json={
        "id": "mine", "type": "cafe", "area": "c", "title": "T", "short_description": "",
    })
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_orders_by_rating_and_counts(client):
    await _create(client, title="A", rating=4.5)
    await _create(client, title="B", rating=4.8, status="flagged")
    await _create(client, title="C", rating=3.0, tags=["beach"])
    res = await client.get("/api/v1/entities")
    body = res.json()
    assert [e["title"] for e in body["entities"]] == ["B", "A", "C"]
    assert body["total"] == 3


async def test_list_tags_query_is_comma_separated_or(client):
    await _create(client, title="Beach", tags=["beach"])
    await _create(client, title="Museum", tags=["museum"])
    await _create(client, title="Park", tags=["park"])
    res = await client.get("/api/v1/entities", params={"tags": "beach,museum"})
    assert {e["title"] for e in res.json()["entities"]} == {"Beach", "Museum"}


async def test_list_search_uses_q_parameter(client):
    await _create(client, title="Sunset Bar", type="bar")
    await _create(client, title="Morning Cafe")
    res = await client.get("/api/v1/entities", params={"q": "SUNSET"})
    assert [e["title"] for e in res.json()["entities"]] == ["Sunset Bar"]


async def test_list_popular_only_active(client):
    await _create(client, title="A", rating=4.5)
    await _create(client, title="B", rating=4.8, status="flagged")
    res = await client.get("/api/v1/entities", params={"popular": "true", "limit": 1})
    assert [e["title"] for e in res.json()["entities"]] == ["A"]


async def test_list_limit_must_be_positive(client):
    res = await client.get("/api/v1/entities", params={"limit": 0})
    assert res.status_code == 400


async def test_get_unknown_entity_returns_404(client):
    res = await client.get("/api/v1/entities/missing")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_patch_merges_fields_and_bumps_updated_at(client, service_clock):
    entity = await _create(client)
    service_clock.advance(minutes=30)
    res = await client.patch(
        f"/api/v1/entities/{entity['id']}", json={"area": "north"},
    )
    assert res.status_code == 200
    updated = res.json()
    assert updated["area"] == "north"
    assert updated["title"] == entity["title"]
    assert updated["updated_at"] != entity["updated_at"]
    assert updated["created_at"] == entity["created_at"]


@pytest.mark.parametrize("payload", [{"rating": 5.0}, {"nickname": "x"}])
async def test_patch_rejects_non_updatable_fields(client, payload):
    entity = await _create(client)
    res = await client.patch(f"/api/v1/entities/{entity['id']}", json=payload)
    assert res.status_code == 400


async def test_patch_null_title_rejected_by_core(client):
    entity = await _create(client)
    res = await client.patch(f"/api/v1/entities/{entity['id']}", json={"title": None})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "INVALID_INPUT"


async def test_patch_unknown_entity_returns_404(client):
    res = await client.patch("/api/v1/entities/missing", json={"area": "x"})
    assert res.status_code == 404


async def test_delete_archives_and_hides_from_listing(client):
    entity = await _create(client)
    res = await client.delete(f"/api/v1/entities/{entity['id']}")
    assert res.status_code == 200
    assert res.json() == {"success": True}

    listing = await client.get("/api/v1/entities")
    assert listing.json()["total"] == 0

    archived = await client.get("/api/v1/entities", params={"status": "archived"})
    assert [e["id"] for e in archived.json()["entities"]] == [entity["id"]]


async def test_delete_twice_succeeds(client):
    entity = await _create(client)
    await client.delete(f"/api/v1/entities/{entity['id']}")
    res = await client.delete(f"/api/v1/entities/{entity['id']}")
    assert res.status_code == 200


async def test_delete_unknown_entity_returns_404(client):
    res = await client.delete("/api/v1/entities/missing")
    assert res.status_code == 404


async def test_hours_endpoint(client):
    entity = await _create(client, work_hours={
        "monday": {"open": "09:00", "close": "17:00"},
        "sunday": {"closed": True},
    })
    assert entity["open_status"] == "open"
    res = await client.get(f"/api/v1/entities/{entity['id']}/hours")
    body = res.json()
    assert body["open_status"] == "open"
    assert body["label"] == "Open"
    assert body["schedule_lines"] == ["Mon: 09:00-17:00", "Sun: Closed"]
