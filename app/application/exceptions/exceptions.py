"""Application layer exceptions."""

from typing import Any


class ApplicationError(Exception):
    """Base application layer exception."""

    def __init__(
        self,
        message: str,
        error_code: str = "APPLICATION_ERROR",
        details: dict[str, Any] | None = None,
    ):
        """
        Initialize application exception.

        Args:
            message: Human-readable error message
            error_code: Machine-readable error code
            details: Field-level validation messages (never secrets)
        """
        self.message = message
        self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class ValidationFailedError(ApplicationError):
    """Raised when input is malformed or violates a policy."""

    def __init__(
        self,
        message: str = "Validation error",
        details: dict[str, list[str]] | None = None,
    ):
        super().__init__(message, error_code="VALIDATION_ERROR", details=details)


class DuplicateEmailError(ApplicationError):
    """Raised when attempting to register an email that already exists."""

    def __init__(self, message: str = "Email already registered"):
        super().__init__(message, error_code="EMAIL_ALREADY_EXISTS")


class AccountNotFoundError(ApplicationError):
    """Raised when an account is not found by id."""

    def __init__(self, message: str = "Account not found"):
        super().__init__(message, error_code="ACCOUNT_NOT_FOUND")


class InvalidCredentialsError(ApplicationError):
    """Raised when login credentials are invalid (unknown email or wrong password)."""

    def __init__(self, message: str = "Invalid email or password"):
        super().__init__(message, error_code="INVALID_CREDENTIALS")


class EmailNotVerifiedError(ApplicationError):
    """Raised when an unverified account attempts to log in."""

    def __init__(
        self,
        message: str = "Email not verified. Please check your email for verification link.",
    ):
        super().__init__(message, error_code="EMAIL_NOT_VERIFIED")


class TokenNotFoundError(ApplicationError):
    """Raised when no account holds the presented verification/reset token."""

    def __init__(self, message: str = "Invalid token"):
        super().__init__(message, error_code="TOKEN_NOT_FOUND")


class TokenExpiredError(ApplicationError):
    """Raised when a token has expired."""

    def __init__(self, message: str = "Token has expired"):
        super().__init__(message, error_code="TOKEN_EXPIRED")


class UnauthorizedError(ApplicationError):
    """Raised when a request carries no valid session."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__(message, error_code="UNAUTHORIZED")
