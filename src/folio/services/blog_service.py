"""Blog service — posts, categories, and the links between them.

Service layer separates business logic from HTTP routing. Routes call
the service, the service calls the database. Visibility and integrity
rules live here:

- Drafts (published=False) are never returned by the public reads.
  get_post_by_slug answers NotFound for a draft exactly as it does for a
  slug that does not exist, so non-admins cannot discover drafts.
- Slugs are unique for posts and for categories; a duplicate is a Conflict.
- Deleting a post or a category removes its association rows first, in
  the same transaction as the delete itself.
- Adding an association that already exists is a no-op; removing one
  that does not exist is a no-op.
"""

from typing import Any, Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from folio.auth.principal import CurrentPrincipal, is_admin
from folio.db.models import BlogCategory, BlogPost, BlogPostCategory, User, utcnow
from folio.errors import Conflict, NotFound, ValidationError

logger = structlog.get_logger()

POST_FIELDS = {"title", "slug", "summary", "content", "featured_image", "published"}
CATEGORY_FIELDS = {"name", "slug"}


class BlogService:
    """Business logic for the blog."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── Posts: reads ───────────────────────────────────

    async def list_posts(
        self,
        limit: int = 10,
        offset: int = 0,
        published_only: bool = True,
    ) -> list[BlogPost]:
        """Posts newest first. Drafts are included only when asked."""
        q = select(BlogPost)
        if published_only:
            q = q.where(BlogPost.published.is_(True))
        q = (
            q.order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
            .limit(limit)
            .offset(offset)
        )
        result = await self.db.execute(q)
        return list(result.scalars().all())

    async def get_post_by_id(self, post_id: int) -> BlogPost | None:
        return await self.db.get(BlogPost, post_id)

    async def get_post_by_slug(
        self,
        slug: str,
        requester: Optional[CurrentPrincipal] = None,
    ) -> BlogPost:
        """Fetch a post for display.

        Raises NotFound when the slug is unknown, and also when the post is
        a draft and the requester is not an admin. Keep the two cases
        identical.
        """
        result = await self.db.execute(
            select(BlogPost).where(BlogPost.slug == slug)
        )
        post = result.scalars().first()
        if post is None or (not post.published and not is_admin(requester)):
            raise NotFound("Blog post not found")
        return post

    # ─── Posts: writes ──────────────────────────────────

    async def create_post(self, data: dict[str, Any], author_id: int) -> BlogPost:
        """Create a post owned by author_id. Drafts by default."""
        if await self.db.get(User, author_id) is None:
            raise ValidationError(
                errors=[{"field": "authorId", "message": "Author does not exist"}]
            )
        await self._ensure_post_slug_free(data["slug"])

        fields = {k: v for k, v in data.items() if k in POST_FIELDS}
        fields.setdefault("published", False)
        post = BlogPost(**fields, author_id=author_id)
        self.db.add(post)
        await self._commit_unique(data["slug"])
        await self.db.refresh(post)

        logger.info(
            "blog.post_created",
            post_id=post.id,
            slug=post.slug,
            published=post.published,
        )
        return post

    async def update_post(
        self, post_id: int, changes: dict[str, Any]
    ) -> BlogPost | None:
        """Merge the supplied fields into the post. None if it doesn't exist.

        updated_at is refreshed on every successful call, even when no
        field actually changed.
        """
        post = await self.get_post_by_id(post_id)
        if post is None:
            return None

        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != post.slug:
            await self._ensure_post_slug_free(new_slug)

        for key, value in changes.items():
            if key in POST_FIELDS:
                setattr(post, key, value)
        post.updated_at = utcnow()

        await self._commit_unique(new_slug)
        await self.db.refresh(post)
        logger.info("blog.post_updated", post_id=post.id, fields=sorted(changes))
        return post

    async def delete_post(self, post_id: int) -> bool:
        """Delete a post and its category links. False if it doesn't exist."""
        post = await self.get_post_by_id(post_id)
        if post is None:
            return False

        # Associations go first; both statements commit together.
        await self.db.execute(
            delete(BlogPostCategory).where(BlogPostCategory.post_id == post_id)
        )
        await self.db.delete(post)
        await self.db.commit()

        logger.info("blog.post_deleted", post_id=post_id)
        return True

    # ─── Categories ─────────────────────────────────────

    async def list_categories(self) -> list[BlogCategory]:
        result = await self.db.execute(
            select(BlogCategory).order_by(BlogCategory.name)
        )
        return list(result.scalars().all())

    async def get_category_by_id(self, category_id: int) -> BlogCategory | None:
        return await self.db.get(BlogCategory, category_id)

    async def get_category_by_slug(self, slug: str) -> BlogCategory | None:
        result = await self.db.execute(
            select(BlogCategory).where(BlogCategory.slug == slug)
        )
        return result.scalars().first()

    async def create_category(self, data: dict[str, Any]) -> BlogCategory:
        await self._ensure_category_slug_free(data["slug"])

        category = BlogCategory(
            **{k: v for k, v in data.items() if k in CATEGORY_FIELDS}
        )
        self.db.add(category)
        await self._commit_unique(data["slug"])
        await self.db.refresh(category)

        logger.info("blog.category_created", category_id=category.id, slug=category.slug)
        return category

    async def update_category(
        self, category_id: int, changes: dict[str, Any]
    ) -> BlogCategory | None:
        category = await self.get_category_by_id(category_id)
        if category is None:
            return None

        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != category.slug:
            await self._ensure_category_slug_free(new_slug)

        for key, value in changes.items():
            if key in CATEGORY_FIELDS:
                setattr(category, key, value)

        await self._commit_unique(new_slug)
        await self.db.refresh(category)
        return category

    async def delete_category(self, category_id: int) -> bool:
        """Delete a category and its post links. False if it doesn't exist."""
        category = await self.get_category_by_id(category_id)
        if category is None:
            return False

        await self.db.execute(
            delete(BlogPostCategory).where(
                BlogPostCategory.category_id == category_id
            )
        )
        await self.db.delete(category)
        await self.db.commit()

        logger.info("blog.category_deleted", category_id=category_id)
        return True

    # ─── Associations ───────────────────────────────────

    async def add_category_to_post(self, post_id: int, category_id: int) -> None:
        """Link a category to a post. Linking twice leaves one row."""
        if await self._association_exists(post_id, category_id):
            return

        self.db.add(BlogPostCategory(post_id=post_id, category_id=category_id))
        try:
            await self.db.commit()
        except IntegrityError:
            # A concurrent request inserted the same pair first.
            await self.db.rollback()
            if not await self._association_exists(post_id, category_id):
                raise

    async def remove_category_from_post(
        self, post_id: int, category_id: int
    ) -> None:
        """Unlink a category from a post. Unlinking a missing pair is fine."""
        await self.db.execute(
            delete(BlogPostCategory).where(
                BlogPostCategory.post_id == post_id,
                BlogPostCategory.category_id == category_id,
            )
        )
        await self.db.commit()

    async def list_post_categories(self, post_id: int) -> list[BlogCategory]:
        result = await self.db.execute(
            select(BlogCategory)
            .join(BlogPostCategory, BlogPostCategory.category_id == BlogCategory.id)
            .where(BlogPostCategory.post_id == post_id)
            .order_by(BlogCategory.name)
        )
        return list(result.scalars().all())

    async def list_posts_by_category(
        self,
        category_id: int,
        limit: int = 10,
        offset: int = 0,
    ) -> list[BlogPost]:
        """Published posts linked to the category, newest first."""
        result = await self.db.execute(
            select(BlogPostCategory.post_id).where(
                BlogPostCategory.category_id == category_id
            )
        )
        post_ids = list(result.scalars().all())
        if not post_ids:
            return []

        result = await self.db.execute(
            select(BlogPost)
            .where(BlogPost.id.in_(post_ids), BlogPost.published.is_(True))
            .order_by(BlogPost.created_at.desc(), BlogPost.id.desc())
            .limit(limit)
            .offset(offset)
        )
        return list(result.scalars().all())

    # ─── Helpers ────────────────────────────────────────

    async def _association_exists(self, post_id: int, category_id: int) -> bool:
        result = await self.db.execute(
            select(BlogPostCategory).where(
                BlogPostCategory.post_id == post_id,
                BlogPostCategory.category_id == category_id,
            )
        )
        return result.scalars().first() is not None

    async def _ensure_post_slug_free(self, slug: str) -> None:
        result = await self.db.execute(
            select(BlogPost.id).where(BlogPost.slug == slug)
        )
        if result.first() is not None:
            raise Conflict(f"Slug '{slug}' is already in use")

    async def _ensure_category_slug_free(self, slug: str) -> None:
        result = await self.db.execute(
            select(BlogCategory.id).where(BlogCategory.slug == slug)
        )
        if result.first() is not None:
            raise Conflict(f"Slug '{slug}' is already in use")

    async def _commit_unique(self, slug: Optional[str] = None) -> None:
        """Commit, turning a unique-constraint race into a Conflict.

        The message names the slug only when the write actually set one.
        """
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            if slug is None:
                raise Conflict()
            raise Conflict(f"Slug '{slug}' is already in use")
