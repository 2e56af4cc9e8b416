"""Async SQLAlchemy engine and session factory.

SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.
Both services receive the session explicitly; nothing holds a global handle
to the store except this factory.
"""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from folio.config import settings


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """Create an engine, sizing the pool only for server databases."""
    kwargs: dict = {"echo": echo}
    if not url.startswith("sqlite"):
        # Connection pool: min 5, max 20 connections.
        kwargs.update(pool_size=5, max_overflow=15, pool_pre_ping=True)
    return create_async_engine(url, **kwargs)


engine = build_engine(settings.database_url, echo=settings.debug)

# Session factory: each request gets its own session.
async_session_factory = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


async def get_db() -> AsyncSession:
    """FastAPI dependency — yields a session per request, auto-closes."""
    async with async_session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
