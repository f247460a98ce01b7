"""
PasswordResetToken Entity

Single-use bearer tokens authorizing a password change.
"""

import hashlib
from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from .enums import ResetTokenState


class PasswordResetToken(SQLModel, table=True):
    """
    PasswordResetToken entity - secure password reset tokens.

    Business Rules:
    - Valid iff not used and not yet expired
    - Raw secret is never stored, only its SHA-256 digest
    - used_at is set if and only if used is True
    - At most one valid token per advisor (older ones are invalidated)
    - Expired rows are hard-deleted by the periodic sweep
    """

    __tablename__ = "password_reset_tokens"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    advisor_id: UUID = Field(foreign_key="advisors.id")
    email: str = Field(max_length=255)
    token_hash: str = Field(unique=True, index=True, max_length=64)  # SHA-256 output

    used: bool = Field(default=False)
    used_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    # Audit metadata captured at request time
    requested_from_ip: Optional[str] = Field(default=None, max_length=64)
    user_agent: Optional[str] = Field(default=None, max_length=512)

    # Timestamps
    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )
    updated_at: datetime = Field(
        default_factory=lambda: datetime.utcnow(), sa_column=Column(DateTime)
    )

    __table_args__ = (
        Index("idx_password_reset_expires_at", "expires_at"),
        Index("idx_password_reset_advisor_used", "advisor_id", "used"),
    )

    @staticmethod
    def hash_secret(secret: str) -> str:
        return hashlib.sha256(secret.encode()).hexdigest()

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        now = now or datetime.utcnow()
        return now >= self.expires_at

    def is_valid(self, now: Optional[datetime] = None) -> bool:
        return not self.used and not self.is_expired(now)

    def state(self, now: Optional[datetime] = None) -> ResetTokenState:
        if self.used:
            return ResetTokenState.used
        if self.is_expired(now):
            return ResetTokenState.expired
        return ResetTokenState.active
