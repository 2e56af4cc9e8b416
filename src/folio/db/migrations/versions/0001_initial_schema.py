"""initial schema: users, sessions, contact submissions, blog

Creates the six tables behind the site: principals and their login
sessions, the contact form inbox, blog posts, categories, and the
post/category join table (composite primary key, so a pair can only
exist once).

Revision ID: 0001_initial_schema
Revises:
Create Date: 2026-10-19 09:00:00.000000
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '0001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(255), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("full_name", sa.String(255), nullable=True),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("token_hash", sa.String(64), nullable=False, unique=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_sessions_expires", "sessions", ["expires_at"])

    op.create_table(
        "contact_submissions",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("email", sa.Text(), nullable=False),
        sa.Column("service", sa.Text(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        "idx_contact_submissions_created", "contact_submissions", ["created_at"]
    )

    op.create_table(
        "blog_posts",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
        sa.Column("summary", sa.Text(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("featured_image", sa.Text(), nullable=True),
        sa.Column("author_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=True),
        sa.Column("published", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index(
        "idx_blog_posts_published_created", "blog_posts", ["published", "created_at"]
    )

    op.create_table(
        "blog_categories",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("slug", sa.String(255), nullable=False, unique=True),
    )

    op.create_table(
        "blog_post_categories",
        sa.Column(
            "post_id", sa.Integer(), sa.ForeignKey("blog_posts.id"), primary_key=True
        ),
        sa.Column(
            "category_id",
            sa.Integer(),
            sa.ForeignKey("blog_categories.id"),
            primary_key=True,
        ),
    )
    op.create_index(
        "idx_blog_post_categories_category", "blog_post_categories", ["category_id"]
    )


def downgrade() -> None:
    op.drop_index("idx_blog_post_categories_category", table_name="blog_post_categories")
    op.drop_table("blog_post_categories")
    op.drop_table("blog_categories")
    op.drop_index("idx_blog_posts_published_created", table_name="blog_posts")
    op.drop_table("blog_posts")
    op.drop_index("idx_contact_submissions_created", table_name="contact_submissions")
    op.drop_table("contact_submissions")
    op.drop_index("idx_sessions_expires", table_name="sessions")
    op.drop_table("sessions")
    op.drop_table("users")
