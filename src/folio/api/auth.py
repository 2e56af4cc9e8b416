"""Auth API — session login, logout, current user.

Routes:
- POST /login → username/password → session cookie + principal summary
- POST /logout → terminate the session (works with or without one)
- GET /user → the current principal, or 401
"""

from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.ext.asyncio import AsyncSession

from folio.auth.dependencies import get_current_principal, get_session_token
from folio.auth.principal import CurrentPrincipal
from folio.config import settings
from folio.db.engine import get_db
from folio.schemas.auth import LoginRequest, PrincipalRead
from folio.schemas.common import Envelope
from folio.services.auth_service import AuthService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> AuthService:
    return AuthService(db)


# ─── Login ───────────────────────────────────────────────


@router.post("/login", response_model=Envelope[PrincipalRead])
async def login(
    body: LoginRequest,
    response: Response,
    svc: AuthService = Depends(_svc),
):
    """Verify credentials and start a server-side session."""
    user = await svc.authenticate(body.username, body.password)
    token = await svc.establish_session(user)

    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        max_age=int(svc.ttl.total_seconds()),
        httponly=True,
        secure=settings.session_cookie_secure,
        samesite="lax",
        path="/",
    )
    return {
        "success": True,
        "message": "Login successful",
        "data": CurrentPrincipal.from_user(user).summary(),
    }


# ─── Logout ──────────────────────────────────────────────


@router.post("/logout", response_model=Envelope[None])
async def logout(
    response: Response,
    token: Optional[str] = Depends(get_session_token),
    svc: AuthService = Depends(_svc),
):
    """End the session. Logging out twice is not an error."""
    await svc.terminate_session(token)
    response.delete_cookie(key=settings.session_cookie_name, path="/")
    return {"success": True, "message": "Logged out successfully"}


# ─── Current user ───────────────────────────────────────


@router.get("/user", response_model=Envelope[PrincipalRead])
async def get_user(principal: CurrentPrincipal = Depends(get_current_principal)):
    return {"success": True, "data": principal.summary()}
