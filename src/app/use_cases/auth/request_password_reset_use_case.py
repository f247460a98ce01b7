"""
Request Password Reset Use Case

Generates a single-use reset token and e-mails the reset link.
"""

import logging
import secrets
from datetime import datetime, timedelta
from typing import Optional

from email_validator import EmailNotValidError, validate_email

from src.app.services.email_sender import EmailSender
from src.app.services.unit_of_work import UnitOfWork
from src.domain.entities import AuditEvent, PasswordResetToken
from src.domain.result import Error, Result, Return
from .dtos import PasswordResetMessageResponse
from .password_reset_email import build_reset_url, render_password_reset_email

logger = logging.getLogger(__name__)

GENERIC_RESET_MESSAGE = "If an account with this email exists, a reset link has been sent"


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - Generate cryptographically secure 32-byte token
    - Store only the SHA-256 digest of the token
    - Token expires after the configured window (default 1 hour)
    - Prior valid tokens of the advisor are invalidated first
    - The advisor row is locked while its tokens are rotated, so concurrent
      requests leave exactly one valid token
    - No email enumeration: unknown and inactive accounts get the same response
    - If the e-mail cannot be sent, the new token is deleted again
    """

    def __init__(
        self,
        uow: UnitOfWork,
        email_sender: EmailSender,
        frontend_url: str = "http://localhost:3000",
        expiry_hours: float = 1,
    ):
        self.uow = uow
        self.email_sender = email_sender
        self.frontend_url = frontend_url
        self.expiry_hours = expiry_hours

    @staticmethod
    def _normalize_email(email: Optional[str]) -> Result[str]:
        if email is None or not email.strip():
            return Return.err(Error("INVALID_EMAIL", "Email is required"))
        try:
            validate_email(email.strip(), check_deliverability=False)
        except EmailNotValidError:
            return Return.err(Error("INVALID_EMAIL", "Please enter a valid email address"))
        return Return.ok(email.strip().lower())

    @staticmethod
    def _generic_response() -> PasswordResetMessageResponse:
        return PasswordResetMessageResponse(success=True, message=GENERIC_RESET_MESSAGE)

    async def execute(
        self,
        email: Optional[str],
        requested_from_ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Result[PasswordResetMessageResponse]:
        """
        Execute request password reset use case.

        Args:
            email: Advisor's email address
            requested_from_ip: Client IP, stored for audit
            user_agent: Client user agent, stored for audit

        Returns:
            Result with the generic message, or Error

        Errors:
            - INVALID_EMAIL: Email missing or malformed
            - EMAIL_DISPATCH_FAILED: Reset e-mail could not be sent
        """
        normalized = self._normalize_email(email)
        if normalized.is_err():
            return Return.err(normalized.error)
        email = normalized.value

        async with self.uow:
            advisor = await self.uow.advisors.get_by_email(email, for_update=True)

            if advisor is None:
                logger.info(f"Password reset requested for unknown email {email} from {requested_from_ip}")
                return Return.ok(self._generic_response())

            if not advisor.is_active():
                logger.info(
                    f"Password reset requested for {advisor.status.value} advisor {advisor.id} "
                    f"from {requested_from_ip}"
                )
                return Return.ok(self._generic_response())

            now = datetime.utcnow()

            # Close out any reset already in flight before issuing a new one
            invalidated = await self.uow.password_reset_tokens.invalidate_all_for_advisor(
                advisor.id, now
            )

            secret = secrets.token_hex(32)
            reset_token = PasswordResetToken(
                advisor_id=advisor.id,
                email=email,
                token_hash=PasswordResetToken.hash_secret(secret),
                used=False,
                expires_at=now + timedelta(hours=self.expiry_hours),
                requested_from_ip=requested_from_ip,
                user_agent=user_agent,
                created_at=now,
                updated_at=now,
            )
            await self.uow.password_reset_tokens.create(reset_token)

            audit_event = AuditEvent(
                advisor_id=advisor.id,
                action="password_reset_requested",
                event_metadata={
                    "token_id": str(reset_token.id),
                    "tokens_invalidated": invalidated,
                    "ip": requested_from_ip,
                    "user_agent": user_agent,
                },
            )
            await self.uow.audit_events.create(audit_event)

            await self.uow.commit()

            reset_url = build_reset_url(self.frontend_url, secret)
            subject, html_body = render_password_reset_email(
                advisor, reset_url, reset_token.expires_at, self.expiry_hours
            )

            try:
                send_result = await self.email_sender.send(advisor.email, subject, html_body)
                send_error = None if send_result.success else send_result.error
            except Exception as exc:
                logger.exception("Password reset email sender raised")
                send_error = str(exc)

            if send_error is not None:
                logger.error(
                    f"Failed to send password reset email for advisor {advisor.id}, "
                    f"token {reset_token.id}: {send_error}"
                )
                await self.uow.password_reset_tokens.delete_by_id(reset_token.id)
                await self.uow.commit()
                return Return.err(
                    Error(
                        "EMAIL_DISPATCH_FAILED",
                        "Failed to send password reset email. Please try again later.",
                    )
                )

            logger.info(f"Password reset email sent for advisor {advisor.id}, token {reset_token.id}")
            return Return.ok(self._generic_response())
