"""Error taxonomy shared by services and routes, plus the handlers that render it.

Services raise these exceptions; the handlers registered in app.main turn them
into ``{"error": <kind>, "detail": <message>}`` JSON responses.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

logger = logging.getLogger(__name__)


class ServiceError(Exception):
    """Base class for errors surfaced to API callers with a stable kind."""

    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    headers: dict[str, str] | None = None

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidInputError(ServiceError):
    """Missing or malformed request fields."""

    kind = "invalid_input"
    status_code = status.HTTP_400_BAD_REQUEST


class UnauthenticatedError(ServiceError):
    """Missing, malformed, invalid or expired credentials."""

    kind = "unauthenticated"
    status_code = status.HTTP_401_UNAUTHORIZED
    headers = {"WWW-Authenticate": "Bearer"}


class ForbiddenError(ServiceError):
    """Valid identity, but wrong role or not the owner of the resource."""

    kind = "forbidden"
    status_code = status.HTTP_403_FORBIDDEN


class NotFoundError(ServiceError):
    kind = "not_found"
    status_code = status.HTTP_404_NOT_FOUND


class ConflictError(ServiceError):
    kind = "conflict"
    status_code = status.HTTP_409_CONFLICT


class InternalError(ServiceError):
    kind = "internal"
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


def error_body(kind: str, message: str) -> dict[str, str]:
    return {"error": kind, "detail": message}


def _format_location(loc: tuple | list) -> str:
    # Drop the leading "body"/"query" segment; callers think in field names.
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.kind, exc.message),
        headers=exc.headers,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    fields = [_format_location(err.get("loc", ())) for err in exc.errors()]
    messages = [
        f"{field}: {err.get('msg', 'invalid value')}" if field else err.get("msg", "invalid value")
        for field, err in zip(fields, exc.errors())
    ]
    body = error_body(InvalidInputError.kind, "; ".join(messages) or "Invalid request.")
    body["fields"] = fields
    return JSONResponse(status_code=InvalidInputError.status_code, content=body)


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception(
        "Database error while handling request",
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=InternalError.status_code,
        content=error_body(InternalError.kind, "The data store could not complete the request."),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(
        "Unhandled error while handling request",
        extra={"method": request.method, "path": request.url.path},
    )
    return JSONResponse(
        status_code=InternalError.status_code,
        content=error_body(InternalError.kind, "Unexpected server error."),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the error-to-response handlers to a FastAPI app."""
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
