"""Pydantic schemas for contact form submissions."""

from datetime import datetime

from pydantic import Field

from folio.schemas.common import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class ContactCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    email: str = Field(..., max_length=255, pattern=EMAIL_PATTERN)
    service: str = Field(..., min_length=1, max_length=100)
    message: str = Field(..., min_length=1, max_length=10_000)


class ContactRead(CamelModel):
    id: int
    name: str
    email: str
    service: str
    message: str
    created_at: datetime
