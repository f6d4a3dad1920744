"""
Mapping from the application exception hierarchy to HTTP responses.

Every client-visible error body carries an ``error`` string. Anything that
is not an AppError becomes a generic 500 and is logged with its traceback.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from modules.security.exceptions import RateLimitExceededError
from shared.exceptions import (
    AppError,
    AuthenticationError,
    AuthorizationError,
    ExternalServiceError,
    NotFoundError,
    QuotaExceededError,
    RateLimitError,
    ValidationError,
)

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred"

# First match wins; order subclasses before their bases
_STATUS_CODES: tuple[tuple[type[AppError], int], ...] = (
    (ValidationError, 400),
    (AuthenticationError, 401),
    (AuthorizationError, 403),
    (QuotaExceededError, 403),
    (NotFoundError, 404),
    (RateLimitError, 429),
    (ExternalServiceError, 500),
)


def status_code_for(exc: AppError) -> int:
    """HTTP status for an application error (500 if unmapped)."""
    for error_type, status_code in _STATUS_CODES:
        if isinstance(exc, error_type):
            return status_code
    return 500


def error_response(exc: AppError) -> JSONResponse:
    """Render an application error as a JSON response."""
    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error("%s: %s", exc.code, exc.message)

    headers = {}
    if isinstance(exc, RateLimitExceededError):
        headers["Retry-After"] = str(exc.retry_after)

    return JSONResponse(exc.to_dict(), status_code=status_code, headers=headers)


def internal_error_response() -> JSONResponse:
    """Generic 500 response; details stay in the server log."""
    return JSONResponse({"error": GENERIC_ERROR_MESSAGE}, status_code=500)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Exception handler for AppErrors raised outside the security wrapper."""
    return error_response(exc)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Render framework HTTP errors (404/405 routing) in the same body shape."""
    return JSONResponse(
        {"error": str(exc.detail)},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return internal_error_response()
