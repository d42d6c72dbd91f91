# =============================================================================
# app/exceptions.py - Custom Exceptions and Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every failure leaves the API as the same envelope:
#   {"success": false, "error": "...", "message": "..."}
# Internal detail is logged by whoever raises, never sent to the client.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.constants import MESSAGES

logger = logging.getLogger(__name__)


class PortfolioException(Exception):
    """
    Base exception for the portfolio API.

    All custom exceptions inherit from this class. `error` is the short
    label shown to the frontend, `message` the human-readable sentence.
    """

    def __init__(
        self,
        message: str,
        error: str = "Error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
        headers: dict[str, str] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.error = error
        self.status_code = status_code
        self.details = details or {}
        self.headers = headers or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "success": False,
            "error": self.error,
            "message": self.message,
        }
        result.update(self.details)
        return result


# =============================================================================
# Request Exceptions
# =============================================================================

class ValidationError(PortfolioException):
    """Raised when a request body or path parameter is malformed."""

    def __init__(self, message: str, error: str = MESSAGES.VALIDATION_FAILED):
        super().__init__(message=message, error=error, status_code=400)


class NotFoundError(PortfolioException):
    """Raised when no record matches the requested identifier."""

    def __init__(self, error: str = "Not found", message: str = MESSAGES.NOT_FOUND):
        super().__init__(message=message, error=error, status_code=404)


class WithdrawnCapabilityError(PortfolioException):
    """Raised by routes that are intentionally switched off (410 Gone)."""

    def __init__(self, error: str, message: str):
        super().__init__(message=message, error=error, status_code=410)


class RateLimitError(PortfolioException):
    """Raised when a client exhausts its window for a route category."""

    def __init__(self, limit: int, retry_after: int):
        super().__init__(
            message=f"Too many requests. Limit: {limit} per minute",
            error=MESSAGES.RATE_LIMIT_EXCEEDED,
            status_code=429,
            details={"retryAfter": retry_after},
            headers={"Retry-After": str(retry_after)},
        )
        self.retry_after = retry_after


# =============================================================================
# Backend Exceptions
# =============================================================================

class DatabaseConnectionError(PortfolioException):
    """Raised when the database is unconfigured, unreachable or fails its ping."""

    def __init__(self, reason: str = MESSAGES.DATABASE_CONNECTION):
        super().__init__(
            message=reason,
            error=MESSAGES.DATABASE_CONNECTION,
            status_code=503,
        )


class FetchError(PortfolioException):
    """
    Raised by data-access services when a query fails or times out.

    The message is fixed per operation (e.g. "Failed to fetch experiences").
    """

    def __init__(self, message: str):
        super().__init__(message=message, error=message, status_code=500)


class UpstreamError(PortfolioException):
    """Raised when a third-party API fails or returns no result."""

    def __init__(self, error: str, message: str):
        super().__init__(message=message, error=error, status_code=500)


class InternalError(PortfolioException):
    """Anything unanticipated."""

    def __init__(self, message: str = MESSAGES.UNEXPECTED_ERROR):
        super().__init__(
            message=message,
            error=MESSAGES.INTERNAL_SERVER_ERROR,
            status_code=500,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

def internal_error_response() -> JSONResponse:
    """The uniform 500 envelope."""
    return JSONResponse(status_code=500, content=InternalError().to_dict())


async def portfolio_exception_handler(
    request: Request,
    exc: PortfolioException
) -> JSONResponse:
    """Convert PortfolioException to its JSON envelope."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict(),
        headers=exc.headers or None,
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle FastAPI request validation errors.

    Reports the first failing field as a 400 envelope.
    """
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    else:
        message = MESSAGES.VALIDATION_FAILED
    return await portfolio_exception_handler(request, ValidationError(message))


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """Wrap framework HTTP errors (unmatched routes, wrong methods) in the envelope."""
    if exc.status_code == 404:
        error = NotFoundError(
            error="Not found",
            message="The requested endpoint does not exist",
        )
        return await portfolio_exception_handler(request, error)

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "success": False,
            "error": str(exc.detail),
            "message": str(exc.detail),
        },
        headers=getattr(exc, "headers", None),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler for unexpected exceptions."""
    logger.exception(f"Unexpected error on {request.method} {request.url.path}: {exc}")
    return internal_error_response()
