"""Rate limiting middleware — Redis-based fixed window.

Uses a per-minute counter stored in Redis. Each IP gets a counter key
like "folio:rl:{ip}:{bucket}:{minute}". The login endpoint and the
public contact form share a stricter bucket to slow down password
guessing and form spam.

Gracefully skips rate limiting if Redis is unavailable (e.g., in tests).
"""

import time

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

STRICT_ROUTES = {
    ("POST", "/api/login"),
    ("POST", "/api/contact"),
}


class RateLimitMiddleware(BaseHTTPMiddleware):
    """Redis-based rate limiting per IP per minute."""

    def __init__(self, app, default_rpm: int = 100, strict_rpm: int = 10):
        super().__init__(app)
        self.default_rpm = default_rpm
        self.strict_rpm = strict_rpm

    async def dispatch(self, request: Request, call_next) -> Response:
        # Skip rate limiting if Redis was never initialized
        try:
            from folio.db.redis import get_redis

            redis = get_redis()
        except RuntimeError:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        is_strict = (request.method, request.url.path.rstrip("/")) in STRICT_ROUTES
        rpm = self.strict_rpm if is_strict else self.default_rpm

        window = int(time.time() // 60)
        bucket = "strict" if is_strict else "api"
        key = f"folio:rl:{client_ip}:{bucket}:{window}"

        try:
            count = await redis.incr(key)
            if count == 1:
                await redis.expire(key, 120)  # 2-min TTL for safety
        except Exception:
            # Redis error: let the request through
            return await call_next(request)

        if count > rpm:
            return JSONResponse(
                status_code=429,
                content={
                    "success": False,
                    "message": "Rate limit exceeded. Try again later.",
                },
                headers={"Retry-After": "60"},
            )

        response = await call_next(request)
        response.headers["X-RateLimit-Limit"] = str(rpm)
        response.headers["X-RateLimit-Remaining"] = str(max(0, rpm - count))
        return response
