from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from pydantic import BaseModel, Field

from config import ApplicationConfig
from src.api.error import ClientError, ServerError
from src.api.utils.rate_limit import PASSWORD_RESET_RATE_LIMIT, limiter
from src.app.services.email_sender import EmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.app.use_cases.auth import (
    RequestPasswordResetUseCase,
    VerifyResetTokenUseCase,
    ConfirmPasswordResetUseCase,
    PasswordResetMessageResponse,
    VerifyResetTokenResponse,
)
from src.depends import get_email_sender, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])

TOKEN_REJECTION_CODES = ("INVALID_TOKEN", "TOKEN_EXPIRED_OR_USED", "ACCOUNT_INACTIVE")


def _client_ip(request: Request) -> Optional[str]:
    return request.client.host if request.client else None


class ForgotPasswordRequest(BaseModel):
    """
    Forgot password HTTP request payload

    Email format is validated by the use case so that a missing and a
    malformed email both map to a 400 with a readable message.
    """

    email: Optional[str] = Field(None, description="Advisor email address")


@router.post(
    "/forgot-password",
    status_code=status.HTTP_200_OK,
    response_model=PasswordResetMessageResponse,
)
@limiter.limit(PASSWORD_RESET_RATE_LIMIT)
async def forgot_password(
    payload: ForgotPasswordRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
    email_sender: EmailSender = Depends(get_email_sender),
):
    """
    Request Password Reset

    Creates a reset token for an active advisor and e-mails the reset link.

    Security:
        - No email enumeration (same response for unknown/inactive accounts)
        - Rate limited per client address
        - Previous reset links of the advisor stop working

    Returns:
        - 200 OK: Generic success message
        - 400 Bad Request: Email missing or malformed
        - 429 Too Many Requests: Rate limit exceeded
        - 500 Internal Server Error: Reset e-mail could not be sent
    """
    use_case = RequestPasswordResetUseCase(
        uow,
        email_sender,
        frontend_url=ApplicationConfig.FRONTEND_URL,
        expiry_hours=ApplicationConfig.PASSWORD_RESET_EXPIRY_HOURS,
    )
    result = await use_case.execute(
        payload.email,
        requested_from_ip=_client_ip(request),
        user_agent=request.headers.get("user-agent"),
    )

    if result.is_err():
        error = result.error
        if error.code == "INVALID_EMAIL":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        if error.code == "EMAIL_DISPATCH_FAILED":
            raise ServerError(error, public_message=error.message)
        raise ServerError(error)

    return result.value


@router.get(
    "/verify-reset-token/{token}",
    status_code=status.HTTP_200_OK,
    response_model=VerifyResetTokenResponse,
)
async def verify_reset_token(token: str, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    Verify Reset Token

    Read-only check used by the reset page before asking for a new password.

    Raises:
        - 400 Bad Request: Invalid, expired/used token or inactive account
        - 500 Internal Server Error: Server error
    """
    use_case = VerifyResetTokenUseCase(uow)
    result = await use_case.execute(token)

    if result.is_err():
        error = result.error
        if error.code in TOKEN_REJECTION_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload

    Presence and strength are checked by the use case.
    """

    token: Optional[str] = Field(None, description="Password reset token from email")
    password: Optional[str] = Field(None, description="New password")


@router.post(
    "/reset-password",
    status_code=status.HTTP_200_OK,
    response_model=PasswordResetMessageResponse,
)
@limiter.limit(PASSWORD_RESET_RATE_LIMIT)
async def reset_password(
    payload: ResetPasswordRequest,
    request: Request,
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Confirm Password Reset

    Consumes the reset token and stores the new password hash.

    Raises:
        - 400 Bad Request: Missing fields, invalid/expired/used token,
          inactive account or weak password
        - 429 Too Many Requests: Rate limit exceeded
        - 500 Internal Server Error: Server error
    """
    use_case = ConfirmPasswordResetUseCase(uow, bcrypt_rounds=ApplicationConfig.BCRYPT_ROUNDS)
    result = await use_case.execute(payload.token, payload.password, client_ip=_client_ip(request))

    if result.is_err():
        error = result.error
        if error.code in ("MISSING_FIELDS", "WEAK_PASSWORD") + TOKEN_REJECTION_CODES:
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value
