"""Database seeding — bootstrap admin, default categories, sample posts.

Every step checks before inserting, so running the seeder on every
startup is safe. The admin credentials come from settings
(FOLIO_ADMIN_USERNAME / FOLIO_ADMIN_PASSWORD / ...).
"""

from dataclasses import dataclass, field

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from folio.config import Settings, settings as default_settings
from folio.db.models import BlogCategory, BlogPost, User
from folio.services.auth_service import AuthService
from folio.services.blog_service import BlogService

logger = structlog.get_logger()


DEFAULT_CATEGORIES: list[dict[str, str]] = [
    {"name": "Design", "slug": "design"},
    {"name": "Development", "slug": "development"},
    {"name": "Digital Marketing", "slug": "digital-marketing"},
    {"name": "Web3", "slug": "web3"},
    {"name": "UX/UI", "slug": "ux-ui"},
]

SAMPLE_POSTS: list[dict] = [
    {
        "title": "The Future of Web Design in 2026",
        "slug": "future-web-design-2026",
        "summary": (
            "Exploring upcoming trends in web design that will shape the "
            "digital landscape in the coming years."
        ),
        "content": (
            "<h2>The Evolution of Web Design</h2>\n"
            "<p>Web design has come a long way since the early days of the "
            "internet. From simple static pages to dynamic, interactive "
            "experiences, the journey has been remarkable.</p>\n\n"
            "<h2>Current Trends</h2>\n"
            "<p>Today, we're seeing a shift towards minimalist designs, dark "
            "mode interfaces, and immersive 3D elements.</p>\n\n"
            "<h2>What's Coming Next</h2>\n"
            "<p>Expect more AI-driven design tools and interfaces that adapt "
            "to user behavior in real time.</p>"
        ),
        "featured_image": "https://images.unsplash.com/photo-1561070791-2526d30994b5",
        "categories": ["design", "ux-ui"],
    },
    {
        "title": "Mastering React: Tips and Tricks for Modern Web Development",
        "slug": "mastering-react-tips-tricks",
        "summary": (
            "Advanced techniques and best practices for building scalable "
            "React applications."
        ),
        "content": (
            "<h2>Why React Continues to Dominate</h2>\n"
            "<p>A component-based architecture and strong community support "
            "keep React popular.</p>\n\n"
            "<h2>Performance Optimization</h2>\n"
            "<p>Use useMemo, useCallback, and React.memo to prevent "
            "unnecessary re-renders.</p>\n\n"
            "<h2>Testing Strategies</h2>\n"
            "<p>Jest and React Testing Library make components verifiable "
            "across scenarios.</p>"
        ),
        "featured_image": "https://images.unsplash.com/photo-1633356122102-3fe601e05bd2",
        "categories": ["development"],
    },
    {
        "title": "Building Effective Social Media Strategies for 2026",
        "slug": "social-media-strategies-2026",
        "summary": (
            "How to create engaging social media campaigns that drive results "
            "in today's digital landscape."
        ),
        "content": (
            "<h2>The Changing Social Media Landscape</h2>\n"
            "<p>As platforms evolve, strategies need to adapt to stay "
            "relevant.</p>\n\n"
            "<h2>Content that Resonates</h2>\n"
            "<p>Authentic storytelling builds meaningful connections.</p>\n\n"
            "<h2>Measuring Impact</h2>\n"
            "<p>Track KPIs that align with business objectives rather than "
            "vanity metrics.</p>"
        ),
        "featured_image": "https://images.unsplash.com/photo-1611162617213-7d7a39e9b1d7",
        "categories": ["digital-marketing"],
    },
]


@dataclass
class SeedReport:
    """What a seeding run actually created."""
    admin_created: bool = False
    categories_created: list[str] = field(default_factory=list)
    posts_created: list[str] = field(default_factory=list)


async def seed_admin_user(db: AsyncSession, cfg: Settings) -> bool:
    auth = AuthService(db)
    if await auth.get_user_by_username(cfg.admin_username):
        return False
    await auth.create_user(
        cfg.admin_username,
        cfg.admin_password,
        email=cfg.admin_email,
        full_name=cfg.admin_full_name,
        is_admin=True,
    )
    return True


async def seed_categories(db: AsyncSession) -> list[str]:
    created = []
    for category in DEFAULT_CATEGORIES:
        result = await db.execute(
            select(BlogCategory.id).where(BlogCategory.slug == category["slug"])
        )
        if result.first() is None:
            db.add(BlogCategory(**category))
            created.append(category["slug"])
    await db.commit()
    return created


async def seed_sample_posts(db: AsyncSession, cfg: Settings) -> list[str]:
    result = await db.execute(select(User).where(User.username == cfg.admin_username))
    admin = result.scalars().first()
    if admin is None:
        logger.warning("seed.admin_missing", username=cfg.admin_username)
        return []

    blog = BlogService(db)
    created = []
    for sample in SAMPLE_POSTS:
        result = await db.execute(
            select(BlogPost.id).where(BlogPost.slug == sample["slug"])
        )
        if result.first() is not None:
            continue

        data = {k: v for k, v in sample.items() if k != "categories"}
        post = await blog.create_post({**data, "published": True}, author_id=admin.id)
        for slug in sample["categories"]:
            category = await blog.get_category_by_slug(slug)
            if category is not None:
                await blog.add_category_to_post(post.id, category.id)
        created.append(post.slug)
    return created


async def seed_database(
    db: AsyncSession,
    cfg: Settings | None = None,
) -> SeedReport:
    """Run every seeding step. Safe to call repeatedly."""
    cfg = cfg or default_settings
    report = SeedReport()
    report.admin_created = await seed_admin_user(db, cfg)
    report.categories_created = await seed_categories(db)
    if cfg.seed_sample_content:
        report.posts_created = await seed_sample_posts(db, cfg)

    logger.info(
        "seed.completed",
        admin_created=report.admin_created,
        categories=len(report.categories_created),
        posts=len(report.posts_created),
    )
    return report
