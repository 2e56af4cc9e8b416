"""Session authentication service — credentials in, principal out.

Manages the login lifecycle:
1. authenticate → look up the user by username, verify the password
2. establish_session → persist a session row, hand back an opaque handle
3. resolve_session → handle → user, or None (Anonymous) when the handle is
   missing, unknown, or past its expiry
4. terminate_session → delete the row (idempotent)

Session state: created → active → expired (passive, time-based) or
terminated (logout). Both terminal states look the same to callers.
"""

import hashlib
import secrets
from datetime import timedelta
from typing import Optional

import structlog
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.concurrency import run_in_threadpool

from folio.auth.password import hash_password, needs_upgrade, verify_password
from folio.config import settings
from folio.db.models import AuthSession, User, utcnow
from folio.errors import Conflict, InvalidCredentials

logger = structlog.get_logger()


def hash_session_token(token: str) -> str:
    """Digest stored in place of the raw session handle."""
    return hashlib.sha256(token.encode("utf-8")).hexdigest()


class AuthService:
    """Credential verification and server-side sessions."""

    def __init__(self, db: AsyncSession, ttl: Optional[timedelta] = None):
        self.db = db
        self.ttl = ttl or timedelta(days=settings.session_ttl_days)

    # ─── Users ────────────────────────────────────────────

    async def get_user(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    async def get_user_by_username(self, username: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.username == username)
        )
        return result.scalars().first()

    async def create_user(
        self,
        username: str,
        password: str,
        *,
        email: Optional[str] = None,
        full_name: Optional[str] = None,
        is_admin: bool = False,
    ) -> User:
        """Create a principal. Used by the seeder and the CLI only."""
        if await self.get_user_by_username(username):
            raise Conflict(f"User '{username}' already exists")

        user = User(
            username=username,
            password_hash=await run_in_threadpool(hash_password, password),
            email=email,
            full_name=full_name,
            is_admin=is_admin,
        )
        self.db.add(user)
        await self.db.commit()
        await self.db.refresh(user)
        logger.info("auth.user_created", user_id=user.id, is_admin=is_admin)
        return user

    # ─── Credentials ──────────────────────────────────────

    async def authenticate(self, username: str, password: str) -> User:
        """Verify credentials. Raises InvalidCredentials on any mismatch.

        An unknown username and a wrong password produce the same error so
        the response does not reveal which usernames exist.
        """
        user = await self.get_user_by_username(username)
        # scrypt is CPU-bound; keep it off the event loop.
        if not user or not await run_in_threadpool(
            verify_password, password, user.password_hash
        ):
            logger.info("auth.login_failed", username=username)
            raise InvalidCredentials()

        # Auto-upgrade legacy bcrypt hashes to scrypt on successful login
        if needs_upgrade(user.password_hash):
            user.password_hash = await run_in_threadpool(hash_password, password)
            await self.db.commit()
            logger.info("auth.password_hash_upgraded", user_id=user.id)

        return user

    # ─── Sessions ─────────────────────────────────────────

    async def establish_session(self, user: User) -> str:
        """Persist a new session for the user and return its opaque handle."""
        token = secrets.token_urlsafe(32)
        now = utcnow()
        session = AuthSession(
            token_hash=hash_session_token(token),
            user_id=user.id,
            created_at=now,
            expires_at=now + self.ttl,
        )
        self.db.add(session)
        await self.db.commit()
        logger.info("auth.session_established", user_id=user.id)
        return token

    async def resolve_session(self, token: Optional[str]) -> User | None:
        """Map a session handle to its user; None means Anonymous.

        The expiry comparison happens in SQL so it is evaluated against
        the stored timestamp on every backend.
        """
        if not token:
            return None

        result = await self.db.execute(
            select(User)
            .join(AuthSession, AuthSession.user_id == User.id)
            .where(
                AuthSession.token_hash == hash_session_token(token),
                AuthSession.expires_at > utcnow(),
            )
        )
        return result.scalars().first()

    async def terminate_session(self, token: Optional[str]) -> None:
        """Delete the session row. Terminating a missing session is a no-op."""
        if not token:
            return
        await self.db.execute(
            delete(AuthSession).where(
                AuthSession.token_hash == hash_session_token(token)
            )
        )
        await self.db.commit()

    async def purge_expired_sessions(self) -> int:
        """Delete every expired session row. Returns how many were removed."""
        result = await self.db.execute(
            delete(AuthSession)
            .where(AuthSession.expires_at <= utcnow())
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        purged = result.rowcount or 0
        if purged:
            logger.info("auth.sessions_purged", count=purged)
        return purged
