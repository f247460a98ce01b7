from datetime import datetime
from typing import List, Optional
from uuid import UUID

from sqlmodel import delete, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from src.domain.entities import PasswordResetToken


class PasswordResetTokenRepository(IPasswordResetTokenRepository):
    """PasswordResetToken repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, token: PasswordResetToken) -> PasswordResetToken:
        """Create a new password reset token"""
        self.session.add(token)
        await self.session.flush()
        await self.session.refresh(token)
        return token

    async def get_by_secret(self, secret: str) -> Optional[PasswordResetToken]:
        """Get password reset token by its raw secret (exact match on digest)"""
        token_hash = PasswordResetToken.hash_secret(secret)
        stmt = select(PasswordResetToken).where(PasswordResetToken.token_hash == token_hash)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_advisor(self, advisor_id: UUID) -> List[PasswordResetToken]:
        """Get all password reset tokens for an advisor, oldest first"""
        stmt = (
            select(PasswordResetToken)
            .where(PasswordResetToken.advisor_id == advisor_id)
            .order_by(PasswordResetToken.created_at)
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def invalidate_all_for_advisor(
        self,
        advisor_id: UUID,
        now: datetime,
        exclude_token_id: Optional[UUID] = None,
    ) -> int:
        """Mark every valid token of an advisor as used in one bulk update"""
        stmt = update(PasswordResetToken).where(
            PasswordResetToken.advisor_id == advisor_id,
            PasswordResetToken.used == False,  # noqa: E712
            PasswordResetToken.expires_at > now,
        )
        if exclude_token_id is not None:
            stmt = stmt.where(PasswordResetToken.id != exclude_token_id)
        stmt = stmt.values(used=True, used_at=now, updated_at=now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount

    async def mark_used_if_valid(self, token_id: UUID, now: datetime) -> bool:
        """Compare-and-set: flip used only while the row is still unused and unexpired"""
        stmt = (
            update(PasswordResetToken)
            .where(
                PasswordResetToken.id == token_id,
                PasswordResetToken.used == False,  # noqa: E712
                PasswordResetToken.expires_at > now,
            )
            .values(used=True, used_at=now, updated_at=now)
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1

    async def delete_by_id(self, token_id: UUID) -> None:
        """Hard-delete a password reset token"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.id == token_id)
        await self.session.execute(stmt)
        await self.session.flush()

    async def delete_expired_before(self, now: datetime) -> int:
        """Hard-delete tokens that expired before now"""
        stmt = delete(PasswordResetToken).where(PasswordResetToken.expires_at < now)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount
