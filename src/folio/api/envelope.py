"""Exception handlers — every error leaves as the standard envelope.

- FolioError subclasses carry their own status and client-safe message.
- Request validation failures (body, path, query) become 400 with
  field-level `errors`.
- Starlette HTTP errors (404 for unknown routes, 405, ...) keep their
  status and detail.
- Anything else is logged with its traceback and answered with a
  generic 500 (InternalError); no internal detail reaches the client.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from folio.errors import FolioError, InternalError

logger = structlog.get_logger()


def error_response(status_code: int, message: str, errors=None, headers=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    return JSONResponse(status_code=status_code, content=content, headers=headers)


def _field_errors(exc: RequestValidationError) -> list[dict]:
    errors = []
    for err in exc.errors():
        # loc looks like ("body", "slug") or ("query", "limit")
        loc = [str(part) for part in err.get("loc", ()) if part != "body"]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "")})
    return errors


async def folio_error_handler(request: Request, exc: FolioError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("request.failed", path=request.url.path, error=exc.message)
    return error_response(exc.status_code, exc.message, exc.errors)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    return error_response(400, "Validation error", _field_errors(exc))


async def http_error_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    return error_response(
        exc.status_code,
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "request.unhandled_error",
        path=request.url.path,
        method=request.method,
    )
    error = InternalError()
    return error_response(error.status_code, error.message)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(FolioError, folio_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
