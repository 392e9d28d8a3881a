"""Exception handlers for converting exceptions to HTTP responses.

Instead of creating individual handlers for each exception, base exception
handlers determine the HTTP status code from the error_code attribute, and
every failure is rendered as the standard envelope with success=false.

To add a new exception:
1. Create the exception class (inheriting from ApplicationError or DomainException)
2. Add its error_code to ERROR_CODE_TO_HTTP_STATUS in error_codes.py
"""

import logging

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from app.application.exceptions import ApplicationError
from app.domain.exceptions import DomainException
from app.presentation.error_codes import get_http_status_for_error_code
from app.presentation.schemas import error_response

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Internal server error"


async def application_error_handler(
    request: Request, exc: ApplicationError
) -> JSONResponse:
    """Handle ALL application layer exceptions."""
    return error_response(
        get_http_status_for_error_code(exc.error_code),
        exc.message,
        exc.error_code,
        exc.details,
    )


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Handle ALL domain layer exceptions."""
    return error_response(
        get_http_status_for_error_code(exc.error_code),
        exc.message,
        exc.error_code,
    )


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Handle Pydantic validation errors from request data.

    Groups messages per field: {"password": ["...", "..."]}. Input values
    are never echoed back, so submitted passwords cannot leak into responses.
    """
    details: dict[str, list[str]] = {}
    for error in exc.errors():
        # Drop the "body"/"query" prefix; clients know where they sent the field
        location = [str(loc) for loc in error["loc"] if loc not in ("body", "query", "path")]
        field = ".".join(location) or "body"
        details.setdefault(field, []).append(_clean_message(error["msg"]))

    return error_response(
        status.HTTP_400_BAD_REQUEST,
        "Validation error",
        "VALIDATION_ERROR",
        details,
    )


async def database_error_handler(
    request: Request, exc: SQLAlchemyError
) -> JSONResponse:
    """
    Handle database errors.

    Logs the failure server-side and answers with the generic internal error.
    """
    logger.error(f"Database error on {request.method} {request.url.path}: {type(exc).__name__}", exc_info=True)

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        "INTERNAL_ERROR",
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle all other unhandled exceptions."""
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}", exc_info=True)

    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        "INTERNAL_ERROR",
    )


def _clean_message(message: str) -> str:
    # Pydantic prefixes custom validator messages with "Value error, "
    prefix = "Value error, "
    return message[len(prefix):] if message.startswith(prefix) else message
