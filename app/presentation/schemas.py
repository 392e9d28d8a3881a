"""Response envelope shared by every endpoint (and used for OpenAPI generation)."""

from typing import Any, Generic, TypeVar

from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

T = TypeVar("T")


class ApiResponse(BaseModel, Generic[T]):
    """Standard envelope: {success, message, data?, error?, details?}."""

    success: bool = Field(..., description="Whether the request succeeded")
    message: str = Field(..., description="Human-readable outcome")
    data: T | None = Field(default=None, description="Payload on success")
    error: str | None = Field(
        default=None,
        description="Machine-readable error code on failure",
        examples=["TOKEN_EXPIRED"],
    )
    details: dict[str, list[str]] | None = Field(
        default=None,
        description="Field-level validation messages",
        examples=[{"password": ["Password must contain at least one number"]}],
    )


class ErrorResponse(ApiResponse[None]):
    """Failure envelope as documented in the OpenAPI schema."""

    model_config = {
        "json_schema_extra": {
            "example": {
                "success": False,
                "message": "Validation error",
                "error": "VALIDATION_ERROR",
                "details": {"email": ["value is not a valid email address"]},
            }
        }
    }


def error_response(
    status_code: int,
    message: str,
    error_code: str,
    details: dict[str, list[str]] | None = None,
) -> JSONResponse:
    """Build a failure envelope response."""
    content: dict[str, Any] = {"success": False, "message": message, "error": error_code}
    if details:
        content["details"] = details
    return JSONResponse(status_code=status_code, content=content)
