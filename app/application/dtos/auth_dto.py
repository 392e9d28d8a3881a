"""Authentication DTOs for the application layer."""

from typing import Annotated

from pydantic import (
    AliasChoices,
    BaseModel,
    BeforeValidator,
    ConfigDict,
    EmailStr,
    Field,
    field_validator,
)

from app.application.dtos.account_dto import AccountDTO
from app.domain.entities.account import normalize_email
from app.domain.services.password_policy import password_policy_violations


def _normalize_email(v: object) -> object:
    return normalize_email(v) if isinstance(v, str) else v


def _strip_whitespace(v: object) -> object:
    return v.strip() if isinstance(v, str) else v


NormalizedEmail = Annotated[EmailStr, BeforeValidator(_normalize_email)]


def _check_password_strength(password: str) -> str:
    violations = password_policy_violations(password)
    if violations:
        raise ValueError("; ".join(violations))
    return password


class RegisterDTO(BaseModel):
    """
    DTO for account registration.

    Validation:
    - email: valid format, lower-cased and trimmed
    - password: 8-128 chars with upper, lower and digit
    - display_name: optional, 2-100 chars after trimming (also accepted as displayName)
    """

    email: NormalizedEmail
    password: str
    display_name: Annotated[str | None, BeforeValidator(_strip_whitespace)] = Field(
        default=None,
        min_length=2,
        max_length=100,
        validation_alias=AliasChoices("display_name", "displayName"),
    )

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "Passw0rd",
                "display_name": "Jane Doe",
            }
        },
    )

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_strength(v)


class LoginDTO(BaseModel):
    """DTO for login request. Strength rules are not re-checked at login."""

    email: NormalizedEmail = Field(..., description="Account email address")
    password: str = Field(..., min_length=1, description="Account password")

    model_config = ConfigDict(
        json_schema_extra={"examples": [{"email": "user@example.com", "password": "Passw0rd"}]}
    )


class VerifyEmailDTO(BaseModel):
    """DTO for email verification request."""

    token: str = Field(..., min_length=1, description="Verification token from the email link")


class ForgotPasswordDTO(BaseModel):
    """DTO for password reset request."""

    email: NormalizedEmail


class ResetPasswordDTO(BaseModel):
    """DTO for completing a password reset."""

    token: str = Field(..., min_length=1, description="Reset token from the email link")
    password: str = Field(..., description="New password")

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        return _check_password_strength(v)


class LoginResultDTO(BaseModel):
    """DTO for a successful login."""

    token: str = Field(..., description="Signed session token")
    token_type: str = Field(default="bearer", description="Token type")
    expires_in: int = Field(..., description="Session token lifetime in seconds")
    account: AccountDTO
