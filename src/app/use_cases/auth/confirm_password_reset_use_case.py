"""
Confirm Password Reset Use Case

Consumes a reset token and sets the advisor's new password.
"""

import logging
from datetime import datetime
from typing import Optional

import bcrypt

from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent
from src.domain.password_policy import validate_password_strength
from src.domain.result import Error, Result, Return
from .dtos import PasswordResetMessageResponse
from .reset_token_checks import load_resettable_token

logger = logging.getLogger(__name__)


class ConfirmPasswordResetUseCase:
    """
    Use case for confirming password reset.

    Business Rules:
    - Token must exist, be unused, be unexpired and belong to an active advisor
    - New password must satisfy the composition policy
    - Token is claimed with an atomic conditional update, so only one
      concurrent confirmation of the same token can succeed
    - Password is hashed with bcrypt (cost factor 12 or higher)
    - Every other valid token of the advisor is invalidated
    - Audit event created for security tracking
    """

    def __init__(self, uow: UnitOfWork, bcrypt_rounds: int = 12):
        self.uow = uow
        self.bcrypt_rounds = max(bcrypt_rounds, 12)

    async def execute(
        self,
        secret: Optional[str],
        new_password: Optional[str],
        client_ip: Optional[str] = None,
    ) -> Result[PasswordResetMessageResponse]:
        """
        Execute confirm password reset use case.

        Args:
            secret: Password reset token (plain text from email link)
            new_password: New password to set
            client_ip: Client IP, recorded in the audit trail

        Errors:
            - MISSING_FIELDS: Token or password not provided
            - INVALID_TOKEN: Token not found
            - TOKEN_EXPIRED_OR_USED: Token used, expired, or claimed concurrently
            - ACCOUNT_INACTIVE: Advisor no longer active
            - WEAK_PASSWORD: Password does not meet the composition policy
        """
        if not secret or not new_password:
            return Return.err(Error("MISSING_FIELDS", "Token and new password are required"))

        async with self.uow:
            now = datetime.utcnow()

            loaded = await load_resettable_token(self.uow, secret, now)
            if loaded.is_err():
                return Return.err(loaded.error)
            reset_token, advisor = loaded.value

            strength = validate_password_strength(new_password)
            if strength.is_err():
                return Return.err(strength.error)

            password_hash = bcrypt.hashpw(new_password.encode(), bcrypt.gensalt(self.bcrypt_rounds))

            # Compare-and-set; a concurrent confirmation of this token loses here
            claimed = await self.uow.password_reset_tokens.mark_used_if_valid(reset_token.id, now)
            if not claimed:
                logger.info(f"Password reset rejected: token {reset_token.id} was claimed concurrently")
                await self.uow.rollback()
                return Return.err(
                    Error(
                        "TOKEN_EXPIRED_OR_USED",
                        "Reset token has expired or has already been used",
                    )
                )

            await self.uow.advisors.update_password_hash(advisor.id, password_hash.decode())

            invalidated = await self.uow.password_reset_tokens.invalidate_all_for_advisor(
                advisor.id, now, exclude_token_id=reset_token.id
            )

            audit_event = AuditEvent(
                advisor_id=advisor.id,
                action="password_reset_completed",
                event_metadata={
                    "token_id": str(reset_token.id),
                    "tokens_invalidated": invalidated,
                    "ip": client_ip,
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            logger.info(f"Password reset completed for advisor {advisor.id}, token {reset_token.id}")

            return Return.ok(
                PasswordResetMessageResponse(
                    success=True,
                    message="Password has been reset successfully. You can now login with your new password.",
                )
            )
