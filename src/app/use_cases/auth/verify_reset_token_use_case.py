"""
Verify Reset Token Use Case

Read-only check that a reset link can still be used.
"""

from datetime import datetime

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Error, Result, Return
from .dtos import ResetTokenDetails, VerifyResetTokenResponse
from .reset_token_checks import load_resettable_token


class VerifyResetTokenUseCase:
    """
    Use case for verifying a password reset token.

    Business Rules:
    - Never mutates the token (safe to call any number of times)
    - Returns only display data: email, advisor name, expiry
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, secret: str) -> Result[VerifyResetTokenResponse]:
        """
        Execute verify reset token use case.

        Errors:
            - INVALID_TOKEN: Token missing or not found
            - TOKEN_EXPIRED_OR_USED: Token used or expired
            - ACCOUNT_INACTIVE: Advisor no longer active
        """
        if not secret:
            return Return.err(Error("INVALID_TOKEN", "Invalid or expired reset token"))

        async with self.uow:
            loaded = await load_resettable_token(self.uow, secret, datetime.utcnow())
            if loaded.is_err():
                return Return.err(loaded.error)

            reset_token, advisor = loaded.value

            return Return.ok(
                VerifyResetTokenResponse(
                    success=True,
                    message="Token is valid",
                    data=ResetTokenDetails(
                        email=reset_token.email,
                        name=advisor.display_name,
                        expires_at=reset_token.expires_at,
                    ),
                )
            )
