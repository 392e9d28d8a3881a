"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status

from app.application.dtos.account_dto import AccountDTO
from app.application.dtos.auth_dto import (
    ForgotPasswordDTO,
    LoginDTO,
    LoginResultDTO,
    RegisterDTO,
    ResetPasswordDTO,
    VerifyEmailDTO,
)
from app.application.services.auth_service import AuthService
from app.presentation.dependencies import get_auth_service
from app.presentation.schemas import ApiResponse, ErrorResponse

FORGOT_PASSWORD_MESSAGE = "If an account exists for that email, a password reset link has been sent"

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Validation error"},
    500: {"model": ErrorResponse, "description": "Internal server error"},
}

router = APIRouter(prefix="/auth", tags=["authentication"], responses=_ERROR_RESPONSES)


@router.post(
    "/register",
    response_model=ApiResponse[AccountDTO],
    status_code=status.HTTP_201_CREATED,
    summary="Register a new account",
    description="Create an unverified account and email a verification link.",
    responses={409: {"model": ErrorResponse, "description": "Email already registered"}},
)
async def register(
    dto: RegisterDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Register with email, password and an optional display name.

    The account cannot log in until the emailed link has been followed.
    A failed verification email does not fail registration.

    Raises:
        400 Bad Request: If the payload is malformed or the password is weak
        409 Conflict: If the email is already registered
    """
    account = await auth_service.register(dto)
    return ApiResponse[AccountDTO](
        success=True,
        message="Registration successful. Please check your email to verify your account.",
        data=account,
    )


@router.post(
    "/login",
    response_model=ApiResponse[LoginResultDTO],
    status_code=status.HTTP_200_OK,
    summary="Log in",
    description="Authenticate with email and password, returns a session token.",
    responses={401: {"model": ErrorResponse, "description": "Invalid credentials or unverified email"}},
)
async def login(
    dto: LoginDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Authenticate and receive a session token.

    Send the token as ``Authorization: Bearer <token>`` on protected routes.

    Raises:
        401 Unauthorized: If the credentials are wrong or the email is unverified
    """
    result = await auth_service.login(dto)
    return ApiResponse[LoginResultDTO](success=True, message="Login successful", data=result)


@router.post(
    "/verify-email",
    response_model=ApiResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Verify email address",
    responses={
        401: {"model": ErrorResponse, "description": "Verification token expired"},
        404: {"model": ErrorResponse, "description": "Unknown verification token"},
    },
)
async def verify_email(
    dto: VerifyEmailDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.verify_email(dto.token)
    return ApiResponse[None](success=True, message="Email verified successfully")


@router.post(
    "/forgot-password",
    response_model=ApiResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Request a password reset",
    description="Always answers with the same message, whether or not the account exists.",
)
async def forgot_password(
    dto: ForgotPasswordDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    await auth_service.forgot_password(dto.email)
    return ApiResponse[None](success=True, message=FORGOT_PASSWORD_MESSAGE)


@router.post(
    "/reset-password",
    response_model=ApiResponse[None],
    status_code=status.HTTP_200_OK,
    summary="Reset password",
    responses={
        401: {"model": ErrorResponse, "description": "Reset token expired"},
        404: {"model": ErrorResponse, "description": "Unknown reset token"},
    },
)
async def reset_password(
    dto: ResetPasswordDTO,
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Set a new password with the token from the reset email.

    Raises:
        400 Bad Request: If the new password is weak
        401 Unauthorized: If the token has expired
        404 Not Found: If the token is unknown or already used
    """
    await auth_service.reset_password(dto.token, dto.password)
    return ApiResponse[None](success=True, message="Password reset successfully")
