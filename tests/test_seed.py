"""Seeder tests — bootstrap content, safe to run repeatedly."""

import pytest
from sqlalchemy import func, select

from folio.config import settings
from folio.db.models import BlogCategory, BlogPost, BlogPostCategory, User
from folio.services.auth_service import AuthService
from folio.services.blog_service import BlogService
from folio.services.seed import DEFAULT_CATEGORIES, SAMPLE_POSTS, seed_database

from conftest import ADMIN_PASSWORD, ADMIN_USERNAME


def _cfg(**overrides):
    return settings.model_copy(
        update={
            "admin_username": "owner@example.com",
            "admin_password": "owner-password-1",
            **overrides,
        }
    )


async def _count(db, model) -> int:
    return await db.scalar(select(func.count()).select_from(model))


@pytest.mark.asyncio
async def test_seed_creates_admin_categories_and_posts(db_session):
    report = await seed_database(db_session, _cfg())

    assert report.admin_created is True
    assert sorted(report.categories_created) == sorted(
        c["slug"] for c in DEFAULT_CATEGORIES
    )
    assert report.posts_created == [p["slug"] for p in SAMPLE_POSTS]

    admin = await AuthService(db_session).authenticate(
        "owner@example.com", "owner-password-1"
    )
    assert admin.is_admin is True

    svc = BlogService(db_session)
    design = await svc.get_category_by_slug("design")
    posts = await svc.list_posts_by_category(design.id)
    assert [p.slug for p in posts] == ["future-web-design-2026"]
    assert all(p.author_id == admin.id for p in await svc.list_posts())


@pytest.mark.asyncio
async def test_seed_is_idempotent(db_session):
    await seed_database(db_session, _cfg())
    counts = [
        await _count(db_session, model)
        for model in (User, BlogCategory, BlogPost, BlogPostCategory)
    ]

    report = await seed_database(db_session, _cfg())
    assert report.admin_created is False
    assert report.categories_created == []
    assert report.posts_created == []
    assert [
        await _count(db_session, model)
        for model in (User, BlogCategory, BlogPost, BlogPostCategory)
    ] == counts


@pytest.mark.asyncio
async def test_seed_without_samples(db_session):
    report = await seed_database(db_session, _cfg(seed_sample_content=False))
    assert report.posts_created == []
    assert await _count(db_session, BlogPost) == 0
    assert await _count(db_session, BlogCategory) == len(DEFAULT_CATEGORIES)


@pytest.mark.asyncio
async def test_seed_keeps_existing_admin_password(db_session, admin_user):
    """An existing admin is never overwritten by the seeder."""
    await seed_database(
        db_session, _cfg(admin_username=ADMIN_USERNAME, admin_password="other")
    )
    user = await AuthService(db_session).authenticate(ADMIN_USERNAME, ADMIN_PASSWORD)
    assert user.id == admin_user.id
