"""Application layer exceptions."""

from app.application.exceptions.exceptions import (
    AccountNotFoundError,
    ApplicationError,
    DuplicateEmailError,
    EmailNotVerifiedError,
    InvalidCredentialsError,
    TokenExpiredError,
    TokenNotFoundError,
    UnauthorizedError,
    ValidationFailedError,
)

__all__ = [
    "ApplicationError",
    "ValidationFailedError",
    "DuplicateEmailError",
    "AccountNotFoundError",
    "InvalidCredentialsError",
    "EmailNotVerifiedError",
    "TokenNotFoundError",
    "TokenExpiredError",
    "UnauthorizedError",
]
