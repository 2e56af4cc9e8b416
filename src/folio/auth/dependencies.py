"""FastAPI auth dependencies.

These are used as Depends() in route handlers to resolve the session
cookie into the current principal and to gate admin-only routers.
"""

from typing import Optional

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from folio.auth.principal import CurrentPrincipal, require_admin
from folio.config import settings
from folio.db.engine import get_db
from folio.errors import Unauthenticated
from folio.services.auth_service import AuthService


def get_session_token(request: Request) -> Optional[str]:
    """Read the opaque session handle from the cookie, if any."""
    return request.cookies.get(settings.session_cookie_name)


async def get_current_principal_optional(
    token: Optional[str] = Depends(get_session_token),
    db: AsyncSession = Depends(get_db),
) -> Optional[CurrentPrincipal]:
    """Resolve the caller (optional — returns None for Anonymous).

    This is the "soft" dependency: a missing or expired session is a
    normal state here, not an error.
    """
    user = await AuthService(db).resolve_session(token)
    if user is None:
        return None
    return CurrentPrincipal.from_user(user)


async def get_current_principal(
    principal: Optional[CurrentPrincipal] = Depends(get_current_principal_optional),
) -> CurrentPrincipal:
    """Resolve the caller (required — 401 if Anonymous)."""
    if principal is None:
        raise Unauthenticated("Not authenticated")
    return principal


async def get_admin(
    principal: Optional[CurrentPrincipal] = Depends(get_current_principal_optional),
) -> CurrentPrincipal:
    """Admin gate — 401 for Anonymous, 403 for non-admin principals."""
    return require_admin(principal)
