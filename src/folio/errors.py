"""Domain error taxonomy.

Services raise these; the exception handlers in folio.api.envelope turn
them into `{success: false, message, errors?}` responses with the
matching status code. The message is always safe to show a client.
"""

from typing import Any, Optional


class FolioError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code: int = 500
    default_message: str = "An unexpected error occurred"

    def __init__(
        self,
        message: Optional[str] = None,
        errors: Optional[list[dict[str, Any]]] = None,
    ):
        self.message = message or self.default_message
        self.errors = errors
        super().__init__(self.message)


class ValidationError(FolioError):
    """Malformed input. Carries field-level detail in `errors`."""

    status_code = 400
    default_message = "Validation error"


class Unauthenticated(FolioError):
    status_code = 401
    default_message = "Authentication required"


class InvalidCredentials(Unauthenticated):
    default_message = "Invalid username or password"


class Forbidden(FolioError):
    status_code = 403
    default_message = "Admin access required"


class NotFound(FolioError):
    status_code = 404
    default_message = "Not found"


class Conflict(FolioError):
    """Duplicate unique key (slug, username)."""

    status_code = 409
    default_message = "Resource already exists"


class InternalError(FolioError):
    """Unexpected failure. The message never carries internal detail."""

    status_code = 500
    default_message = "An error occurred while processing your request"
