"""Admin blog API — every route here requires an admin session.

The admin gate is applied when the router is included (see folio.api),
so handlers only deal with the content itself.

Routes:
- GET /admin/blog → all posts including drafts
- GET /admin/blog/:id → one post by id
- POST /admin/blog → create a post authored by the caller
- PUT /admin/blog/:id → partial update
- DELETE /admin/blog/:id → delete the post and its category links
- POST /admin/category → create a category
- PUT /admin/category/:id → partial update
- DELETE /admin/category/:id → delete the category and its post links
- POST /admin/blog/:blogId/category/:categoryId → link (idempotent)
- DELETE /admin/blog/:blogId/category/:categoryId → unlink (idempotent)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from folio.api.blog import Page, pagination
from folio.auth.dependencies import get_admin
from folio.auth.principal import CurrentPrincipal
from folio.db.engine import get_db
from folio.errors import NotFound
from folio.schemas.blog import (
    CategoryCreate,
    CategoryRead,
    CategoryUpdate,
    PostCreate,
    PostRead,
    PostUpdate,
)
from folio.schemas.common import Envelope
from folio.services.blog_service import BlogService

router = APIRouter(prefix="/admin")


def _svc(db: AsyncSession = Depends(get_db)) -> BlogService:
    return BlogService(db)


# ─── Posts ──────────────────────────────────────────────


@router.get("/blog", response_model=Envelope[list[PostRead]])
async def list_all_posts(
    page: Page = Depends(pagination),
    svc: BlogService = Depends(_svc),
):
    posts = await svc.list_posts(page.limit, page.offset, published_only=False)
    return {"success": True, "data": posts}


@router.get("/blog/{post_id}", response_model=Envelope[PostRead])
async def get_post_by_id(post_id: int, svc: BlogService = Depends(_svc)):
    post = await svc.get_post_by_id(post_id)
    if post is None:
        raise NotFound("Blog post not found")
    return {"success": True, "data": post}


@router.post("/blog", response_model=Envelope[PostRead], status_code=201)
async def create_post(
    body: PostCreate,
    admin: CurrentPrincipal = Depends(get_admin),
    svc: BlogService = Depends(_svc),
):
    post = await svc.create_post(body.model_dump(), author_id=admin.user_id)
    return {
        "success": True,
        "message": "Blog post created successfully",
        "data": post,
    }


@router.put("/blog/{post_id}", response_model=Envelope[PostRead])
async def update_post(
    post_id: int,
    body: PostUpdate,
    svc: BlogService = Depends(_svc),
):
    post = await svc.update_post(post_id, body.model_dump(exclude_unset=True))
    if post is None:
        raise NotFound("Blog post not found")
    return {
        "success": True,
        "message": "Blog post updated successfully",
        "data": post,
    }


@router.delete("/blog/{post_id}", response_model=Envelope[None])
async def delete_post(post_id: int, svc: BlogService = Depends(_svc)):
    if not await svc.delete_post(post_id):
        raise NotFound("Blog post not found")
    return {"success": True, "message": "Blog post deleted successfully"}


# ─── Categories ─────────────────────────────────────────


@router.post("/category", response_model=Envelope[CategoryRead], status_code=201)
async def create_category(body: CategoryCreate, svc: BlogService = Depends(_svc)):
    category = await svc.create_category(body.model_dump())
    return {
        "success": True,
        "message": "Category created successfully",
        "data": category,
    }


@router.put("/category/{category_id}", response_model=Envelope[CategoryRead])
async def update_category(
    category_id: int,
    body: CategoryUpdate,
    svc: BlogService = Depends(_svc),
):
    category = await svc.update_category(
        category_id, body.model_dump(exclude_unset=True)
    )
    if category is None:
        raise NotFound("Category not found")
    return {
        "success": True,
        "message": "Category updated successfully",
        "data": category,
    }


@router.delete("/category/{category_id}", response_model=Envelope[None])
async def delete_category(category_id: int, svc: BlogService = Depends(_svc)):
    if not await svc.delete_category(category_id):
        raise NotFound("Category not found")
    return {"success": True, "message": "Category deleted successfully"}


# ─── Associations ───────────────────────────────────────


@router.post(
    "/blog/{blog_id}/category/{category_id}",
    response_model=Envelope[None],
)
async def add_category_to_post(
    blog_id: int,
    category_id: int,
    svc: BlogService = Depends(_svc),
):
    if await svc.get_post_by_id(blog_id) is None:
        raise NotFound("Blog post not found")
    if await svc.get_category_by_id(category_id) is None:
        raise NotFound("Category not found")

    await svc.add_category_to_post(blog_id, category_id)
    return {"success": True, "message": "Category added to blog post successfully"}


@router.delete(
    "/blog/{blog_id}/category/{category_id}",
    response_model=Envelope[None],
)
async def remove_category_from_post(
    blog_id: int,
    category_id: int,
    svc: BlogService = Depends(_svc),
):
    await svc.remove_category_from_post(blog_id, category_id)
    return {
        "success": True,
        "message": "Category removed from blog post successfully",
    }
