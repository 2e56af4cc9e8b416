"""The authenticated principal and the admin predicate."""

from typing import Optional

from folio.db.models import User
from folio.errors import Forbidden, Unauthenticated


class CurrentPrincipal:
    """Represents the authenticated user making the request.

    Anonymous callers are represented by None, never by an instance.
    """

    def __init__(
        self,
        user_id: int,
        username: str,
        is_admin: bool = False,
        full_name: Optional[str] = None,
        email: Optional[str] = None,
    ):
        self.user_id = user_id
        self.username = username
        self.is_admin = is_admin
        self.full_name = full_name
        self.email = email

    @classmethod
    def from_user(cls, user: User) -> "CurrentPrincipal":
        return cls(
            user_id=user.id,
            username=user.username,
            is_admin=user.is_admin,
            full_name=user.full_name,
            email=user.email,
        )

    def summary(self) -> dict:
        """Public view returned by /api/login and /api/user."""
        return {
            "id": self.user_id,
            "username": self.username,
            "isAdmin": self.is_admin,
            "fullName": self.full_name,
        }


def is_admin(principal: Optional[CurrentPrincipal]) -> bool:
    return principal is not None and principal.is_admin


def require_admin(principal: Optional[CurrentPrincipal]) -> CurrentPrincipal:
    """Raise Unauthenticated for Anonymous, Forbidden for non-admins."""
    if principal is None:
        raise Unauthenticated()
    if not principal.is_admin:
        raise Forbidden()
    return principal
