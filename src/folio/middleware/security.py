"""Security headers middleware.

Adds standard security headers to every response:
- X-Content-Type-Options: prevents MIME-type sniffing
- X-Frame-Options: prevents clickjacking
- Referrer-Policy: limits referrer info leakage
- Strict-Transport-Security: forces HTTPS (only on HTTPS connections)

Responses that depend on the session (login, current user, admin data,
the contact inbox) are also marked Cache-Control: no-store so shared
caches never keep a copy. Public blog reads vary on Cookie, since an
admin session can see drafts there.
"""

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from folio.config import settings

PRIVATE_PREFIXES = ("/api/login", "/api/logout", "/api/user", "/api/admin")


def _is_private(request: Request) -> bool:
    # Any request carrying a session may see drafts or admin data.
    if settings.session_cookie_name in request.cookies:
        return True
    path = request.url.path
    if path.startswith(PRIVATE_PREFIXES):
        return True
    return request.method == "GET" and path.startswith("/api/contact")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Add security headers to all responses."""

    async def dispatch(self, request: Request, call_next) -> Response:
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        if _is_private(request):
            response.headers["Cache-Control"] = "no-store"
        if request.url.path.startswith("/api/blog"):
            response.headers.add_vary_header("Cookie")
        # Only add HSTS on HTTPS connections
        if request.url.scheme == "https":
            response.headers["Strict-Transport-Security"] = (
                "max-age=31536000; includeSubDomains"
            )
        return response
