"""Pydantic schemas for blog posts and categories.

"Create" schemas (input) are separate from "Read" schemas (output).
"Update" schemas have every field optional but not nullable: omitting a
field leaves it unchanged, sending null for a required column is a 400.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from folio.schemas.common import CamelModel

SLUG_PATTERN = r"^[a-z0-9]+(?:-[a-z0-9]+)*$"


# ─── Categories ─────────────────────────────────────────

class CategoryCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=100)
    slug: str = Field(..., min_length=1, max_length=100, pattern=SLUG_PATTERN)


class CategoryUpdate(CamelModel):
    name: str = Field(None, min_length=1, max_length=100)
    slug: str = Field(None, min_length=1, max_length=100, pattern=SLUG_PATTERN)


class CategoryRead(CamelModel):
    id: int
    name: str
    slug: str


# ─── Posts ──────────────────────────────────────────────

class PostCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=500)
    slug: str = Field(..., min_length=1, max_length=255, pattern=SLUG_PATTERN)
    summary: str = Field(..., min_length=1)
    content: str = Field(..., min_length=1)
    featured_image: Optional[str] = Field(None, max_length=2000)
    published: bool = False


class PostUpdate(CamelModel):
    title: str = Field(None, min_length=1, max_length=500)
    slug: str = Field(None, min_length=1, max_length=255, pattern=SLUG_PATTERN)
    summary: str = Field(None, min_length=1)
    content: str = Field(None, min_length=1)
    featured_image: Optional[str] = Field(None, max_length=2000)
    published: bool = Field(None)


class PostRead(CamelModel):
    id: int
    title: str
    slug: str
    summary: str
    content: str
    featured_image: Optional[str] = None
    author_id: Optional[int] = None
    published: bool
    created_at: datetime
    updated_at: datetime
