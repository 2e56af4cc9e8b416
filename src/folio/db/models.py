"""SQLAlchemy ORM models — single source of truth for the database schema.

Declarative ORM mapping with SQLAlchemy 2.0 style (Mapped[] + mapped_column).
Each class = one table. Alembic migrations mirror these definitions.

Key concepts:
- Integer primary keys (the public site links posts by slug, not id)
- Unique slugs enforced by the database, not just by the service layer
- The post/category join uses a composite primary key, so a duplicate
  (post, category) pair cannot exist even under concurrent inserts
- Timestamps default on the Python side (microsecond precision keeps
  "newest first" ordering stable on every backend)
"""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""
    pass


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ══════════════════════════════════════════════════════════════
# Principals + sessions
# ══════════════════════════════════════════════════════════════


class User(Base):
    """A principal that can log in. Only admins exist in practice.

    Users are created by the seeder or the CLI; there is no HTTP path
    to register, update, or delete them.
    """

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    full_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_admin: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


class AuthSession(Base):
    """Server-side login session.

    The cookie carries an opaque random handle; only its SHA-256 digest is
    stored, so a leaked table cannot be replayed as cookies. Rows past
    expires_at are treated as absent and purged opportunistically.
    """

    __tablename__ = "sessions"
    __table_args__ = (
        Index("idx_sessions_expires", "expires_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    token_hash: Mapped[str] = mapped_column(String(64), unique=True, nullable=False)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )


# ══════════════════════════════════════════════════════════════
# Contact form
# ══════════════════════════════════════════════════════════════


class ContactSubmission(Base):
    """A message sent through the public contact form. Append-only."""

    __tablename__ = "contact_submissions"
    __table_args__ = (
        Index("idx_contact_submissions_created", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    email: Mapped[str] = mapped_column(Text, nullable=False)
    service: Mapped[str] = mapped_column(Text, nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


# ══════════════════════════════════════════════════════════════
# Blog
# ══════════════════════════════════════════════════════════════


class BlogPost(Base):
    """A blog post. Drafts (published=False) are visible to admins only."""

    __tablename__ = "blog_posts"
    __table_args__ = (
        Index("idx_blog_posts_published_created", "published", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)
    summary: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)  # HTML
    featured_image: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    author_id: Mapped[Optional[int]] = mapped_column(
        Integer, ForeignKey("users.id"), nullable=True
    )
    published: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false"
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=utcnow, server_default=func.now()
    )


class BlogCategory(Base):
    __tablename__ = "blog_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)


class BlogPostCategory(Base):
    """Post ↔ category join row.

    The composite primary key makes a duplicate pair impossible at the
    database level; the service also checks before inserting so that
    adding an existing association is a no-op rather than an error.
    """

    __tablename__ = "blog_post_categories"
    __table_args__ = (
        Index("idx_blog_post_categories_category", "category_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("blog_posts.id"), primary_key=True
    )
    category_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("blog_categories.id"), primary_key=True
    )
