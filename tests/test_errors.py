"""Error envelope tests — unexpected failures never leak details."""

import pytest
from httpx import ASGITransport, AsyncClient

from folio.db.engine import get_db
from folio.errors import InternalError
from folio.main import app
from folio.services.blog_service import BlogService


@pytest.mark.asyncio
async def test_unhandled_error_is_generic_500():
    async def broken_db():
        raise RuntimeError("connection string with a password in it")
        yield  # pragma: no cover

    app.dependency_overrides[get_db] = broken_db
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            r = await ac.get("/api/blog")
    finally:
        app.dependency_overrides.clear()

    assert r.status_code == 500
    assert r.json() == {"success": False, "message": InternalError().message}
    assert r.json()["message"] == "An error occurred while processing your request"
    assert "password" not in r.text


@pytest.mark.asyncio
async def test_raised_internal_error_matches_unhandled_envelope(client, monkeypatch):
    async def fail(self, *args, **kwargs):
        raise InternalError()

    monkeypatch.setattr(BlogService, "list_posts", fail)
    r = await client.get("/api/blog")
    assert r.status_code == 500
    assert r.json() == {
        "success": False,
        "message": "An error occurred while processing your request",
    }
