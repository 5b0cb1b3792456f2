import asyncio

import pytest
from fastapi.testclient import TestClient

from app.db.base import drop_db_and_tables
from app.main import app


@pytest.fixture
def client():
    # Entering the context runs startup, which creates the tables.
    with TestClient(app) as test_client:
        yield test_client
    asyncio.run(drop_db_and_tables())


def test_create_and_get_event(client):
    res = client.post("/api/events", json={"title": "Tech Fest", "attendees": 200, "id": "ignored"})
    assert res.status_code == 201
    created = res.json()["data"]

    assert created["id"] != "ignored"
    assert created["title"] == "Tech Fest"
    assert created["attendees"] == 200
    assert created["createdAt"] == created["updatedAt"]
    assert created["createdAt"].endswith("Z")

    fetched = client.get(f"/api/events/{created['id']}")
    assert fetched.status_code == 200
    assert fetched.json()["data"] == created


def test_list_is_newest_first(client):
    older = client.post("/api/events", json={"title": "older"}).json()["data"]
    newer = client.post("/api/events", json={"title": "newer"}).json()["data"]

    ids = [ev["id"] for ev in client.get("/api/events").json()["data"]]
    assert ids.index(newer["id"]) < ids.index(older["id"])


def test_update_merges_and_refreshes_timestamp(client):
    created = client.post("/api/events", json={"title": "Meetup", "city": "Pune"}).json()["data"]

    res = client.put(f"/api/events/{created['id']}", json={"city": "Delhi", "createdAt": "bogus"})
    assert res.status_code == 200
    updated = res.json()["data"]

    assert updated["title"] == "Meetup"
    assert updated["city"] == "Delhi"
    assert updated["createdAt"] == created["createdAt"]
    assert updated["updatedAt"] >= created["updatedAt"]


def test_delete_event(client):
    created = client.post("/api/events", json={"title": "Gone soon"}).json()["data"]

    res = client.delete(f"/api/events/{created['id']}")
    assert res.status_code == 200
    assert res.json()["success"] is True
    assert client.get(f"/api/events/{created['id']}").status_code == 404


@pytest.mark.parametrize("method", ["get", "put", "delete"])
def test_unknown_id_is_404(client, method):
    kwargs = {"json": {"title": "x"}} if method == "put" else {}
    res = getattr(client, method)("/api/events/does-not-exist", **kwargs)

    assert res.status_code == 404
    assert res.json()["success"] is False
    assert res.json()["message"] == "Event not found"


def test_healthz(client):
    res = client.get("/healthz")
    assert res.status_code == 200
    assert res.json() == {"status": "ok", "environment": "test", "db": "ok", "llm_provider": "stub"}
