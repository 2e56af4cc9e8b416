"""Pydantic schemas for login and the current principal."""

from typing import Optional

from pydantic import Field

from folio.schemas.common import CamelModel


class LoginRequest(CamelModel):
    username: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1)


class PrincipalRead(CamelModel):
    id: int
    username: str
    is_admin: bool
    full_name: Optional[str] = None
