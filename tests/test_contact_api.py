"""Contact form API tests."""

import pytest


def _submission(**overrides) -> dict:
    body = {
        "name": "Jane Client",
        "email": "jane@example.com",
        "service": "web-development",
        "message": "I'd like a new portfolio site.",
    }
    body.update(overrides)
    return body


@pytest.mark.asyncio
async def test_submit_contact(client):
    r = await client.post("/api/contact", json=_submission())
    assert r.status_code == 201
    body = r.json()
    assert body["success"] is True
    assert body["message"] == "Contact form submitted successfully"
    assert body["data"]["id"] > 0
    assert body["data"]["email"] == "jane@example.com"
    assert "createdAt" in body["data"]


@pytest.mark.asyncio
async def test_submit_contact_validation(client):
    r = await client.post(
        "/api/contact",
        json=_submission(email="not-an-email", message=""),
    )
    assert r.status_code == 400
    body = r.json()
    assert body["success"] is False
    assert {e["field"] for e in body["errors"]} == {"email", "message"}


@pytest.mark.asyncio
async def test_submit_contact_missing_fields(client):
    r = await client.post("/api/contact", json={"name": "Only a name"})
    assert r.status_code == 400
    assert {e["field"] for e in r.json()["errors"]} == {"email", "service", "message"}


@pytest.mark.asyncio
async def test_inbox_requires_admin(client, editor_client):
    r = await client.get("/api/contact")
    assert r.status_code == 401

    r = await editor_client.get("/api/contact")
    assert r.status_code == 403

    r = await editor_client.get("/api/contact/1")
    assert r.status_code == 403


@pytest.mark.asyncio
async def test_inbox_lists_newest_first(admin_client):
    await admin_client.post("/api/contact", json=_submission(name="First"))
    await admin_client.post("/api/contact", json=_submission(name="Second"))

    r = await admin_client.get("/api/contact")
    assert r.status_code == 200
    assert [s["name"] for s in r.json()["data"]] == ["Second", "First"]


@pytest.mark.asyncio
async def test_get_single_submission(admin_client):
    created = (await admin_client.post("/api/contact", json=_submission())).json()["data"]

    r = await admin_client.get(f"/api/contact/{created['id']}")
    assert r.status_code == 200
    assert r.json()["data"] == created

    r = await admin_client.get("/api/contact/99999")
    assert r.status_code == 404
    assert r.json()["message"] == "Contact submission not found"
