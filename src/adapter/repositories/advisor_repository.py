from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlmodel import func, select, update
from sqlmodel.ext.asyncio.session import AsyncSession

from src.app.repositories.advisor_repository import IAdvisorRepository
from src.domain.entities import Advisor


class AdvisorRepository(IAdvisorRepository):
    """Advisor repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str, for_update: bool = False) -> Optional[Advisor]:
        """Get advisor by email address (case-insensitive)

        With for_update the row stays locked until the transaction ends, which
        serializes concurrent reset requests for the same advisor.
        """
        stmt = select(Advisor).where(func.lower(Advisor.email) == email.strip().lower())
        if for_update:
            stmt = stmt.with_for_update()
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, advisor_id: UUID) -> Optional[Advisor]:
        """Get advisor by ID"""
        stmt = select(Advisor).where(Advisor.id == advisor_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, advisor: Advisor) -> Advisor:
        """Create a new advisor"""
        advisor.email = advisor.email.strip().lower()
        self.session.add(advisor)
        await self.session.flush()
        await self.session.refresh(advisor)
        return advisor

    async def update_password_hash(self, advisor_id: UUID, password_hash: str) -> bool:
        """Replace the stored password hash in a single write"""
        stmt = (
            update(Advisor)
            .where(Advisor.id == advisor_id)
            .values(password_hash=password_hash, updated_at=datetime.utcnow())
        )
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount == 1
