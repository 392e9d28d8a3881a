"""HTTP status for every machine-readable error code.

Exception handlers look the status up here, so a new exception only needs
its error_code registered in this table.
"""

from fastapi import status

ERROR_CODE_TO_HTTP_STATUS = {
    # Registration and login
    "EMAIL_ALREADY_EXISTS": status.HTTP_409_CONFLICT,
    "INVALID_CREDENTIALS": status.HTTP_401_UNAUTHORIZED,
    "EMAIL_NOT_VERIFIED": status.HTTP_401_UNAUTHORIZED,
    "ACCOUNT_NOT_FOUND": status.HTTP_404_NOT_FOUND,

    # Mailed tokens and sessions
    "TOKEN_NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "TOKEN_EXPIRED": status.HTTP_401_UNAUTHORIZED,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,

    # Input and entity rules
    "VALIDATION_ERROR": status.HTTP_400_BAD_REQUEST,
    "INVALID_ENTITY_STATE": status.HTTP_400_BAD_REQUEST,
    "BUSINESS_RULE_VIOLATION": status.HTTP_400_BAD_REQUEST,
    "DOMAIN_ERROR": status.HTTP_400_BAD_REQUEST,
    "APPLICATION_ERROR": status.HTTP_400_BAD_REQUEST,

    "INTERNAL_ERROR": status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def get_http_status_for_error_code(error_code: str) -> int:
    """Status for error_code; unregistered codes are treated as client errors (400)."""
    return ERROR_CODE_TO_HTTP_STATUS.get(error_code, status.HTTP_400_BAD_REQUEST)
