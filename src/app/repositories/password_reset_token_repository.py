from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from uuid import UUID

from src.domain.entities import PasswordResetToken


class IPasswordResetTokenRepository(ABC):
    """PasswordResetToken repository interface - application layer"""

    @abstractmethod
    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        pass

    @abstractmethod
    async def get_by_secret(self, secret: str) -> Optional[PasswordResetToken]:
        """Get password reset token by its raw secret (exact match on digest)"""
        pass

    @abstractmethod
    async def list_by_advisor(self, advisor_id: UUID) -> List[PasswordResetToken]:
        """Get all password reset tokens for an advisor"""
        pass

    @abstractmethod
    async def invalidate_all_for_advisor(
        self,
        advisor_id: UUID,
        now: datetime,
        exclude_token_id: Optional[UUID] = None,
    ) -> int:
        """Mark every valid token of an advisor as used, returns affected row count"""
        pass

    @abstractmethod
    async def mark_used_if_valid(self, token_id: UUID, now: datetime) -> bool:
        """
        Atomically claim a token.

        Returns True only if this call flipped the token from valid to used.
        """
        pass

    @abstractmethod
    async def delete_by_id(self, token_id: UUID) -> None:
        """Hard-delete a password reset token"""
        pass

    @abstractmethod
    async def delete_expired_before(self, now: datetime) -> int:
        """Hard-delete tokens with expires_at before now, returns deleted row count"""
        pass
