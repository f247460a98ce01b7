"""
Use Case: Cleanup Expired Reset Tokens

Hard-deletes password reset tokens whose expiry has passed. Used by the
background sweeper and the admin cleanup endpoint.
"""

import logging
from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from src.app.services.unit_of_work import UnitOfWork
from src.domain.result import Result, Return

logger = logging.getLogger(__name__)


class CleanupExpiredResetTokensResponse(BaseModel):
    """Response DTO for CleanupExpiredResetTokensUseCase"""

    status: str
    deleted_count: int


class CleanupExpiredResetTokensUseCase:
    """Delete reset tokens with expires_at before now. Idempotent."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, now: Optional[datetime] = None) -> Result[CleanupExpiredResetTokensResponse]:
        now = now or datetime.utcnow()

        async with self.uow:
            deleted_count = await self.uow.password_reset_tokens.delete_expired_before(now)
            await self.uow.commit()

        if deleted_count:
            logger.info(f"Cleaned up {deleted_count} expired password reset tokens")

        return Return.ok(
            CleanupExpiredResetTokensResponse(status="completed", deleted_count=deleted_count)
        )
