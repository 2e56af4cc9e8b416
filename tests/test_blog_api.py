"""Blog API tests — public reads, admin writes, associations.

Auth flows through the real session cookie (see conftest).
"""

import pytest

from folio.services.blog_service import BlogService


def _post_body(slug: str, **overrides) -> dict:
    body = {
        "title": slug.replace("-", " ").title(),
        "slug": slug,
        "summary": "A short summary",
        "content": "Body text",
    }
    body.update(overrides)
    return body


async def _create_post(client, slug: str, **overrides) -> dict:
    r = await client.post("/api/admin/blog", json=_post_body(slug, **overrides))
    assert r.status_code == 201, r.text
    return r.json()["data"]


async def _create_category(client, slug: str, name: str | None = None) -> dict:
    r = await client.post(
        "/api/admin/category",
        json={"name": name or slug.title(), "slug": slug},
    )
    assert r.status_code == 201, r.text
    return r.json()["data"]


# ═══════════════════════════════════════════════════════════
# Admin gate
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_admin_routes_require_session(client):
    r = await client.post("/api/admin/blog", json=_post_body("nope"))
    assert r.status_code == 401
    assert r.json()["success"] is False

    r = await client.get("/api/admin/blog")
    assert r.status_code == 401

    r = await client.delete("/api/admin/category/1")
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_admin_routes_reject_non_admin(editor_client):
    r = await editor_client.post("/api/admin/blog", json=_post_body("nope"))
    assert r.status_code == 403
    assert r.json() == {"success": False, "message": "Admin access required"}

    r = await editor_client.post(
        "/api/admin/category", json={"name": "Design", "slug": "design"}
    )
    assert r.status_code == 403


# ═══════════════════════════════════════════════════════════
# Posts
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_create_post(admin_client, admin_user):
    r = await admin_client.post(
        "/api/admin/blog",
        json=_post_body("first-post", featuredImage="https://cdn.example.com/a.png"),
    )
    assert r.status_code == 201
    body = r.json()
    assert body["message"] == "Blog post created successfully"

    post = body["data"]
    assert post["slug"] == "first-post"
    assert post["published"] is False
    assert post["authorId"] == admin_user.id
    assert post["featuredImage"] == "https://cdn.example.com/a.png"
    assert "createdAt" in post and "updatedAt" in post


@pytest.mark.asyncio
async def test_create_post_duplicate_slug(admin_client):
    await _create_post(admin_client, "taken")
    r = await admin_client.post("/api/admin/blog", json=_post_body("taken"))
    assert r.status_code == 409
    assert r.json()["success"] is False


@pytest.mark.asyncio
async def test_create_post_invalid_body(admin_client):
    r = await admin_client.post(
        "/api/admin/blog",
        json=_post_body("Not A Slug!", title=""),
    )
    assert r.status_code == 400
    fields = {e["field"] for e in r.json()["errors"]}
    assert fields == {"slug", "title"}


@pytest.mark.asyncio
async def test_public_list_shows_only_published(client, admin_client):
    await _create_post(admin_client, "draft")
    await _create_post(admin_client, "live", published=True)

    r = await client.get("/api/blog")
    assert r.status_code == 200
    assert [p["slug"] for p in r.json()["data"]] == ["live"]

    r = await admin_client.get("/api/admin/blog")
    assert {p["slug"] for p in r.json()["data"]} == {"draft", "live"}


@pytest.mark.asyncio
async def test_public_list_pagination_bounds(client):
    r = await client.get("/api/blog", params={"limit": 101})
    assert r.status_code == 400
    assert r.json()["errors"][0]["field"] == "query.limit"

    r = await client.get("/api/blog", params={"limit": 0})
    assert r.status_code == 400

    r = await client.get("/api/blog", params={"offset": -1})
    assert r.status_code == 400

    r = await client.get("/api/blog", params={"limit": 100})
    assert r.status_code == 200
    assert r.json()["data"] == []


@pytest.mark.asyncio
async def test_draft_hidden_from_anonymous_visible_to_admin(client, admin_client):
    await _create_post(admin_client, "secret")

    r = await client.get("/api/blog/secret")
    missing = await client.get("/api/blog/never-existed")
    assert r.status_code == 404
    assert r.json() == missing.json()
    assert r.json()["message"] == "Blog post not found"

    r = await admin_client.get("/api/blog/secret")
    assert r.status_code == 200
    assert r.json()["data"]["slug"] == "secret"


@pytest.mark.asyncio
async def test_draft_hidden_from_non_admin(db_session, admin_user, editor_client):
    await BlogService(db_session).create_post(
        _post_body("editor-cannot-see"), author_id=admin_user.id
    )
    r = await editor_client.get("/api/blog/editor-cannot-see")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_get_post_by_id(admin_client):
    post = await _create_post(admin_client, "by-id")

    r = await admin_client.get(f"/api/admin/blog/{post['id']}")
    assert r.status_code == 200
    assert r.json()["data"]["slug"] == "by-id"

    r = await admin_client.get("/api/admin/blog/99999")
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_update_post_partial(admin_client):
    post = await _create_post(admin_client, "editable")

    r = await admin_client.put(
        f"/api/admin/blog/{post['id']}",
        json={"published": True, "summary": "New summary"},
    )
    assert r.status_code == 200
    body = r.json()
    assert body["message"] == "Blog post updated successfully"
    updated = body["data"]
    assert updated["published"] is True
    assert updated["summary"] == "New summary"
    assert updated["title"] == post["title"]
    assert updated["updatedAt"] >= post["updatedAt"]


@pytest.mark.asyncio
async def test_update_post_rejects_null_for_required_field(admin_client):
    post = await _create_post(admin_client, "no-nulls")
    r = await admin_client.put(f"/api/admin/blog/{post['id']}", json={"title": None})
    assert r.status_code == 400


@pytest.mark.asyncio
async def test_update_missing_post(admin_client):
    r = await admin_client.put("/api/admin/blog/99999", json={"title": "x"})
    assert r.status_code == 404
    assert r.json()["message"] == "Blog post not found"


@pytest.mark.asyncio
async def test_update_post_slug_conflict(admin_client):
    await _create_post(admin_client, "one")
    two = await _create_post(admin_client, "two")
    r = await admin_client.put(f"/api/admin/blog/{two['id']}", json={"slug": "one"})
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_delete_post_removes_links(client, admin_client):
    post = await _create_post(admin_client, "goodbye", published=True)
    cat = await _create_category(admin_client, "design")
    await admin_client.post(f"/api/admin/blog/{post['id']}/category/{cat['id']}")

    r = await admin_client.delete(f"/api/admin/blog/{post['id']}")
    assert r.status_code == 200
    assert r.json()["message"] == "Blog post deleted successfully"

    r = await client.get("/api/blog/goodbye")
    assert r.status_code == 404
    r = await client.get("/api/blog/category/design")
    assert r.json()["data"] == []

    r = await admin_client.delete(f"/api/admin/blog/{post['id']}")
    assert r.status_code == 404


# ═══════════════════════════════════════════════════════════
# Categories
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_category_crud(client, admin_client):
    cat = await _create_category(admin_client, "web3", "Web3")

    r = await client.get("/api/blog/categories")
    assert r.status_code == 200
    assert r.json()["data"] == [{"id": cat["id"], "name": "Web3", "slug": "web3"}]

    r = await admin_client.put(
        f"/api/admin/category/{cat['id']}", json={"name": "Web 3"}
    )
    assert r.status_code == 200
    assert r.json()["data"]["name"] == "Web 3"
    assert r.json()["data"]["slug"] == "web3"

    r = await admin_client.delete(f"/api/admin/category/{cat['id']}")
    assert r.status_code == 200
    assert r.json()["message"] == "Category deleted successfully"

    r = await client.get("/api/blog/categories")
    assert r.json()["data"] == []

    r = await admin_client.put(f"/api/admin/category/{cat['id']}", json={"name": "x"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_create_category_duplicate_slug(admin_client):
    await _create_category(admin_client, "design")
    r = await admin_client.post(
        "/api/admin/category", json={"name": "Design again", "slug": "design"}
    )
    assert r.status_code == 409


@pytest.mark.asyncio
async def test_categories_route_not_shadowed_by_slug(client, admin_client):
    """A post slugged "categories" never hides the category list."""
    await _create_post(admin_client, "categories", published=True)
    await _create_category(admin_client, "design")

    r = await client.get("/api/blog/categories")
    assert r.status_code == 200
    assert [c["slug"] for c in r.json()["data"]] == ["design"]


@pytest.mark.asyncio
async def test_unknown_category_is_404(client):
    r = await client.get("/api/blog/category/nope")
    assert r.status_code == 404
    assert r.json()["message"] == "Category not found"


# ═══════════════════════════════════════════════════════════
# Associations
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_link_post_to_category(client, admin_client):
    post = await _create_post(admin_client, "t", published=True)
    cat = await _create_category(admin_client, "design")
    link = f"/api/admin/blog/{post['id']}/category/{cat['id']}"

    r = await admin_client.post(link)
    assert r.status_code == 200
    assert r.json()["message"] == "Category added to blog post successfully"
    # Linking again is still a success and leaves a single link
    r = await admin_client.post(link)
    assert r.status_code == 200

    r = await client.get("/api/blog/t/categories")
    assert [c["slug"] for c in r.json()["data"]] == ["design"]

    r = await client.get("/api/blog/category/design")
    assert [p["slug"] for p in r.json()["data"]] == ["t"]

    # Unpublishing drops it from the category listing
    await admin_client.put(f"/api/admin/blog/{post['id']}", json={"published": False})
    r = await client.get("/api/blog/category/design")
    assert r.json()["data"] == []


@pytest.mark.asyncio
async def test_link_requires_existing_post_and_category(admin_client):
    post = await _create_post(admin_client, "real")
    cat = await _create_category(admin_client, "design")

    r = await admin_client.post(f"/api/admin/blog/99999/category/{cat['id']}")
    assert r.status_code == 404
    assert r.json()["message"] == "Blog post not found"

    r = await admin_client.post(f"/api/admin/blog/{post['id']}/category/99999")
    assert r.status_code == 404
    assert r.json()["message"] == "Category not found"


@pytest.mark.asyncio
async def test_unlink_is_idempotent(client, admin_client):
    post = await _create_post(admin_client, "unlinked", published=True)
    cat = await _create_category(admin_client, "design")
    link = f"/api/admin/blog/{post['id']}/category/{cat['id']}"

    await admin_client.post(link)
    r = await admin_client.delete(link)
    assert r.status_code == 200
    assert r.json()["message"] == "Category removed from blog post successfully"
    r = await admin_client.delete(link)
    assert r.status_code == 200

    r = await client.get("/api/blog/unlinked/categories")
    assert r.json()["data"] == []


@pytest.mark.asyncio
async def test_draft_categories_masked(client, admin_client):
    await _create_post(admin_client, "hidden")
    r = await client.get("/api/blog/hidden/categories")
    assert r.status_code == 404
