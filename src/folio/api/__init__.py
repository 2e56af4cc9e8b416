"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Admin protection is applied at the include_router level using FastAPI's
dependencies parameter, so every /api/admin route is gated without
touching individual handlers. The contact router mixes a public POST
with admin GETs and gates those per route.
"""

from fastapi import APIRouter, Depends

from folio.api.admin import router as admin_router
from folio.api.auth import router as auth_router
from folio.api.blog import router as blog_router
from folio.api.contact import router as contact_router
from folio.api.health import router as health_router
from folio.auth.dependencies import get_admin

_admin = [Depends(get_admin)]

api_router = APIRouter(prefix="/api")

# Open routes, no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(blog_router, tags=["blog"])
api_router.include_router(contact_router, tags=["contact"])

# Admin routes, require an admin session
api_router.include_router(admin_router, tags=["admin"], dependencies=_admin)
