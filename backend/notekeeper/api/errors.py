from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import HTTPException, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from notekeeper.core.exceptions import (
    AuthenticationError,
    ConflictError,
    DatabaseNotReadyError,
    FeatureUnavailableError,
    NotekeeperError,
    NotFoundError,
)
from notekeeper.utils.logging import get_logger

if TYPE_CHECKING:
    from fastapi import FastAPI, Request

logger = get_logger(__name__)


DOMAIN_STATUS_CODES: dict[type[NotekeeperError], int] = {
    AuthenticationError: status.HTTP_401_UNAUTHORIZED,
    NotFoundError: status.HTTP_404_NOT_FOUND,
    ConflictError: status.HTTP_409_CONFLICT,
    FeatureUnavailableError: status.HTTP_503_SERVICE_UNAVAILABLE,
    DatabaseNotReadyError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def to_http_exception(err: ValueError | NotekeeperError) -> HTTPException:
    """Map a validation or domain error to exactly one HTTP error."""
    if isinstance(err, NotekeeperError):
        for exc_type, status_code in DOMAIN_STATUS_CODES.items():
            if isinstance(err, exc_type):
                return HTTPException(status_code=status_code, detail=err.message)
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=err.message)
    return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(err))


def error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
        headers=headers,
    )


def format_validation_error(exc: RequestValidationError) -> str:
    """Turn the first validation error into a readable sentence."""
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    message = first.get("msg", "Invalid value")
    if first.get("type") == "value_error":
        ctx_error = (first.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
        return message.removeprefix("Value error, ")
    if first.get("type") == "json_invalid":
        return "Request body is not valid JSON"
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {message}" if location else message


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    message = format_validation_error(exc)
    logger.info("Request validation failed", extra={"path": request.url.path, "detail": message})
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Unhandled error",
        extra={"path": request.url.path, "error_type": type(exc).__name__, "error": str(exc)},
    )
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"success": false, "message": ...}``."""
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
