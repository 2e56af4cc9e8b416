"""Public blog API.

Routes:
- GET /blog → published posts, newest first (limit/offset)
- GET /blog/categories → all categories
- GET /blog/category/:slug → published posts in a category
- GET /blog/:slug → one post; drafts are visible to admins only
- GET /blog/:slug/categories → categories of one post, same visibility

The static /blog/categories routes are declared before /blog/{slug} so
"categories" is never treated as a post slug.
"""

from dataclasses import dataclass
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from folio.auth.dependencies import get_current_principal_optional
from folio.auth.principal import CurrentPrincipal
from folio.config import settings
from folio.db.engine import get_db
from folio.errors import NotFound
from folio.schemas.blog import CategoryRead, PostRead
from folio.schemas.common import Envelope
from folio.services.blog_service import BlogService

router = APIRouter()


@dataclass
class Page:
    limit: int
    offset: int


def pagination(
    limit: int = Query(10, ge=1, le=settings.max_page_size),
    offset: int = Query(0, ge=0),
) -> Page:
    return Page(limit=limit, offset=offset)


def _svc(db: AsyncSession = Depends(get_db)) -> BlogService:
    return BlogService(db)


@router.get("/blog", response_model=Envelope[list[PostRead]])
async def list_published_posts(
    page: Page = Depends(pagination),
    svc: BlogService = Depends(_svc),
):
    posts = await svc.list_posts(page.limit, page.offset, published_only=True)
    return {"success": True, "data": posts}


@router.get("/blog/categories", response_model=Envelope[list[CategoryRead]])
async def list_categories(svc: BlogService = Depends(_svc)):
    return {"success": True, "data": await svc.list_categories()}


@router.get("/blog/category/{slug}", response_model=Envelope[list[PostRead]])
async def list_posts_in_category(
    slug: str,
    page: Page = Depends(pagination),
    svc: BlogService = Depends(_svc),
):
    category = await svc.get_category_by_slug(slug)
    if category is None:
        raise NotFound("Category not found")
    posts = await svc.list_posts_by_category(category.id, page.limit, page.offset)
    return {"success": True, "data": posts}


@router.get("/blog/{slug}", response_model=Envelope[PostRead])
async def get_post(
    slug: str,
    principal: Optional[CurrentPrincipal] = Depends(get_current_principal_optional),
    svc: BlogService = Depends(_svc),
):
    post = await svc.get_post_by_slug(slug, principal)
    return {"success": True, "data": post}


@router.get("/blog/{slug}/categories", response_model=Envelope[list[CategoryRead]])
async def get_post_categories(
    slug: str,
    principal: Optional[CurrentPrincipal] = Depends(get_current_principal_optional),
    svc: BlogService = Depends(_svc),
):
    post = await svc.get_post_by_slug(slug, principal)
    return {"success": True, "data": await svc.list_post_categories(post.id)}
