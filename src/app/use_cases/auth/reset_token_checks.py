"""
Shared validity checks for presented password reset secrets.
"""

import logging
from datetime import datetime
from typing import Tuple

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import Advisor, PasswordResetToken
from src.domain.result import Error, Result, Return

logger = logging.getLogger(__name__)


async def load_resettable_token(
    uow: UnitOfWork, secret: str, now: datetime
) -> Result[Tuple[PasswordResetToken, Advisor]]:
    """
    Resolve a raw secret to its token and advisor, if a reset may proceed.

    Errors:
        - INVALID_TOKEN: No token matches the secret
        - TOKEN_EXPIRED_OR_USED: Token already used or past expires_at
        - ACCOUNT_INACTIVE: Advisor deleted or not active
    """
    reset_token = await uow.password_reset_tokens.get_by_secret(secret)
    if reset_token is None:
        logger.info("Password reset rejected: unknown token")
        return Return.err(Error("INVALID_TOKEN", "Invalid or expired reset token"))

    if not reset_token.is_valid(now):
        logger.info(
            f"Password reset rejected: token {reset_token.id} is {reset_token.state(now).value}"
        )
        return Return.err(
            Error(
                "TOKEN_EXPIRED_OR_USED",
                "Reset token has expired or has already been used",
            )
        )

    advisor = await uow.advisors.get_by_id(reset_token.advisor_id)
    if advisor is None or not advisor.is_active():
        logger.info(f"Password reset rejected: advisor {reset_token.advisor_id} is not active")
        return Return.err(Error("ACCOUNT_INACTIVE", "Account is no longer active"))

    return Return.ok((reset_token, advisor))
