"""Endpoints for the authenticated account (behind SessionGateMiddleware)."""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from app.application.dtos.account_dto import AccountDTO
from app.application.services.auth_service import AuthService
from app.presentation.dependencies import get_auth_service, get_current_account_id
from app.presentation.schemas import ApiResponse, ErrorResponse


class CurrentAccountData(BaseModel):
    account_id: int
    account: AccountDTO


router = APIRouter(prefix="/user", tags=["user"])


@router.get(
    "/me",
    response_model=ApiResponse[CurrentAccountData],
    status_code=status.HTTP_200_OK,
    summary="Get current account",
    responses={401: {"model": ErrorResponse, "description": "Missing, invalid or expired session token"}},
)
async def get_me(
    account_id: int = Depends(get_current_account_id),
    auth_service: AuthService = Depends(get_auth_service),
):
    """
    Get the account the session token belongs to.

    Requires ``Authorization: Bearer <token>``; the gate rejects the request
    with 401 before it reaches this handler otherwise.
    """
    account = await auth_service.get_account(account_id)
    return ApiResponse[CurrentAccountData](
        success=True,
        message="Success",
        data=CurrentAccountData(account_id=account_id, account=account),
    )
