"""Data Transfer Objects for application layer."""

from app.application.dtos.account_dto import AccountDTO
from app.application.dtos.auth_dto import (
    ForgotPasswordDTO,
    LoginDTO,
    LoginResultDTO,
    RegisterDTO,
    ResetPasswordDTO,
    VerifyEmailDTO,
)

__all__ = [
    "AccountDTO",
    "RegisterDTO",
    "LoginDTO",
    "LoginResultDTO",
    "VerifyEmailDTO",
    "ForgotPasswordDTO",
    "ResetPasswordDTO",
]
