"""Application error taxonomy and the handlers that render it.

Two body shapes are in use and clients depend on both:

* contact/messages routes answer ``{"success": false, "message": ...}``
* every other route answers ``{"error": ...}``
"""

from enum import Enum
from typing import Any

from asgi_correlation_id import correlation_id
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.portfolio_api.core.config import get_settings
from src.portfolio_api.core.logging import get_logger

logger = get_logger(__name__)

_ENVELOPE_PREFIXES = ("/api/contact", "/api/messages")


class ErrorStyle(str, Enum):
    """Error body shape."""

    ENVELOPE = "envelope"  # {"success": false, "message": ...}
    PLAIN = "plain"  # {"error": ...}


class AppError(Exception):
    """Base class for errors that map to an HTTP response."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Internal server error"
    style: ErrorStyle | None = None  # None = pick by route family

    def __init__(self, message: str | None = None, *, detail: str | None = None):
        self.message = message or self.default_message
        self.detail = detail
        super().__init__(self.message)


class InputValidationError(AppError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class NotFoundError(AppError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Resource not found"


class InvalidCredentialsError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Invalid credentials"
    style = ErrorStyle.PLAIN


class MissingTokenError(AppError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Access token required"
    style = ErrorStyle.PLAIN


class InvalidTokenError(AppError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Invalid or expired token"
    style = ErrorStyle.PLAIN


class UploadTooLargeError(AppError):
    status_code = 413
    default_message = "File size exceeds limit (5MB)"


class StorageFailureError(AppError):
    """Any failure of the storage layer, including pool acquisition timeouts."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"


def style_for_path(path: str) -> ErrorStyle:
    """Pick the error body shape used by the route family serving ``path``."""
    if path.startswith(_ENVELOPE_PREFIXES):
        return ErrorStyle.ENVELOPE
    return ErrorStyle.PLAIN


def error_body(style: ErrorStyle, message: str, detail: str | None = None) -> dict[str, Any]:
    """Build an error body; ``detail`` is only included when given."""
    if style is ErrorStyle.ENVELOPE:
        body: dict[str, Any] = {"success": False, "message": message}
        if detail is not None:
            body["error"] = detail
        return body

    body = {"error": message}
    if detail is not None:
        body["message"] = detail
    return body


def _exposed_detail(detail: str | None) -> str | None:
    # Internal details only leave the process in development
    if detail is None or not get_settings().is_development:
        return None
    return detail


def setup_exception_handlers(app: FastAPI) -> None:
    """Configure exception handlers for the application error taxonomy."""

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        style = exc.style or style_for_path(request.url.path)
        detail = None
        if exc.status_code >= 500:
            logger.error(
                exc.message,
                error_type=type(exc).__name__,
                detail=exc.detail,
                path=request.url.path,
                request_id=correlation_id.get(),
            )
            detail = _exposed_detail(exc.detail)
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(style, exc.message, detail),
        )

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.info("Rejected malformed request", path=request.url.path, errors=exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=error_body(style_for_path(request.url.path), "Invalid request data"),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            logger.info("Endpoint not found", method=request.method, path=request.url.path)
            return JSONResponse(
                status_code=exc.status_code,
                content={"error": "Endpoint not found", "path": request.url.path},
            )
        return JSONResponse(
            status_code=exc.status_code,
            content=error_body(style_for_path(request.url.path), str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        request_id = correlation_id.get()
        logger.exception(
            "Unhandled exception",
            exc_info=exc,
            request_id=request_id,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=error_body(
                style_for_path(request.url.path),
                "Internal server error",
                _exposed_detail(str(exc)),
            ),
        )
