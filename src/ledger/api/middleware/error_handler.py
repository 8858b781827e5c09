"""Global error handling.

Every error leaves the API in the same JSON shape: error_code, message,
user_message, suggestion and retry_allowed. Known failures come from the
error catalog; anything else becomes a generic SYS_001.
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError

from ledger.config import settings
from ledger.core.errors import get_error
from ledger.core.exceptions import LedgerError

logger = logging.getLogger(__name__)


def _error_body(code: str, message: str, user_message: str, suggestion: str, retry_allowed: bool) -> dict:
    return {
        "error_code": code,
        "message": message,
        "user_message": user_message,
        "suggestion": suggestion,
        "retry_allowed": retry_allowed,
    }


async def handle_ledger_error(request: Request, exc: LedgerError) -> JSONResponse:
    """Render a LedgerError from the error catalog."""
    error_info = get_error(exc.error_code)

    # Details may carry row content; only log them in debug.
    extra = {"error_code": exc.error_code, "path": request.url.path, "method": request.method}
    if settings.debug:
        extra["details"] = exc.details

    log = logger.error if exc.http_status >= 500 else logger.warning
    log(f"Ledger error: {exc.error_code}", extra=extra)

    return JSONResponse(
        status_code=exc.http_status,
        content=_error_body(
            exc.error_code,
            error_info["message"],
            error_info["user_message"],
            error_info["suggestion"],
            error_info["retry_allowed"],
        ),
    )


async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Render request validation failures as VAL_001."""
    errors = exc.errors()
    error_messages = []
    for error in errors:
        field = ".".join(str(x) for x in error.get("loc", []))
        error_messages.append(f"{field}: {error.get('msg', 'Invalid value')}")

    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        extra["errors"] = errors
    logger.warning(f"Validation error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=_error_body(
            "VAL_001",
            " | ".join(error_messages),
            "Invalid input data",
            "Please check your input and try again",
            True,
        ),
    )


async def handle_integrity_error(request: Request, exc: IntegrityError) -> JSONResponse:
    # Do not log str(exc): it includes SQL and bound parameters.
    extra = {"path": request.url.path, "method": request.method}
    if settings.debug:
        logger.exception(f"Database integrity error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Database integrity error on {request.url.path}", extra=extra)

    error_msg = str(exc).lower()
    if "unique" in error_msg or "duplicate" in error_msg:
        return JSONResponse(
            status_code=status.HTTP_409_CONFLICT,
            content=_error_body(
                "DB_002",
                "Resource already exists",
                "This record already exists",
                "Please check if the record was already created",
                False,
            ),
        )

    error_info = get_error("DB_001")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "DB_001",
            error_info["message"],
            error_info["user_message"],
            error_info["suggestion"],
            error_info["retry_allowed"],
        ),
    )


async def handle_generic_error(request: Request, exc: Exception) -> JSONResponse:
    """Last-resort handler; never exposes internal details."""
    extra = {"error_type": type(exc).__name__, "path": request.url.path, "method": request.method}
    if settings.debug:
        logger.exception(f"Unexpected error on {request.url.path}", extra=extra)
    else:
        logger.error(f"Unexpected error on {request.url.path}", extra=extra)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "SYS_001",
            "Internal server error",
            "An unexpected error occurred",
            "Please try again later",
            True,
        ),
    )
