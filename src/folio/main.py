"""FastAPI application factory.

App factory pattern — create_app() returns a configured FastAPI instance.
Lifespan manages startup/shutdown (Redis, seeding, database engine).
Middleware, CORS, exception handlers, and routers all registered here.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from folio import __version__
from folio.api import api_router
from folio.api.envelope import register_exception_handlers
from folio.config import settings

logger = structlog.get_logger()


async def _bootstrap_database() -> None:
    """Seed the bootstrap content and drop expired sessions.

    Failures are logged, not raised: the site should still serve its
    existing content when seeding cannot run.
    """
    from folio.db.engine import async_session_factory
    from folio.services.auth_service import AuthService
    from folio.services.seed import seed_database

    try:
        async with async_session_factory() as db:
            if settings.seed_on_startup:
                await seed_database(db)
            await AuthService(db).purge_expired_sessions()
    except Exception as e:
        logger.warning("folio.bootstrap_failed", error=str(e))


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown lifecycle.

    Anything before `yield` runs at startup, after `yield` runs at shutdown.
    """
    logger.info(
        "folio.starting",
        version=__version__,
        environment=settings.environment,
        port=settings.port,
    )

    from folio.db.redis import close_redis, init_redis
    try:
        await init_redis()
        logger.info("folio.redis_connected", url=settings.redis_url)
    except Exception as e:
        logger.warning("folio.redis_unavailable", error=str(e))
        # Redis is optional; only rate limiting is lost

    await _bootstrap_database()

    yield

    logger.info("folio.shutdown")
    await close_redis()

    from folio.db.engine import engine
    await engine.dispose()


def create_app() -> FastAPI:
    """Build and return the FastAPI application."""
    app = FastAPI(
        title="Folio",
        description="Portfolio site backend — blog CMS, contact inbox, admin sessions",
        version=__version__,
        lifespan=lifespan,
    )

    # ── Middleware stack ──────────────────────────────────────
    # Starlette middleware executes in reverse order of registration.
    # Request flow: CORS → RateLimit → Security → RequestId → handler

    from folio.middleware.rate_limit import RateLimitMiddleware
    from folio.middleware.request_id import RequestIdMiddleware
    from folio.middleware.security import SecurityHeadersMiddleware

    app.add_middleware(RequestIdMiddleware)
    app.add_middleware(SecurityHeadersMiddleware)
    app.add_middleware(
        RateLimitMiddleware,
        default_rpm=settings.rate_limit_rpm,
        strict_rpm=settings.rate_limit_strict_rpm,
    )
    # Credentials are required for the session cookie to cross origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(api_router)

    return app


# Default app instance (used by uvicorn: folio.main:app)
app = create_app()
