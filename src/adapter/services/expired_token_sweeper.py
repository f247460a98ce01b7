"""
Expired password reset token sweeper.

Background asyncio task that periodically hard-deletes reset tokens whose
expiry has passed. Each run uses a fresh session, so it is safe to run on
every replica alongside live traffic.
"""

import asyncio
import logging
from typing import Callable, Optional

from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.maintenance import CleanupExpiredResetTokensUseCase

logger = logging.getLogger(__name__)


class ExpiredTokenSweeper:
    """Runs CleanupExpiredResetTokensUseCase every ``interval_seconds``"""

    def __init__(self, session_factory: Callable, interval_seconds: float = 300.0):
        self.session_factory = session_factory
        self.interval_seconds = interval_seconds
        self._running = False
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._running

    async def start(self):
        """Start the sweep loop."""
        if self._running:
            return
        self._running = True
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info(f"Expired token sweeper started, interval {self.interval_seconds}s")

    async def stop(self):
        """Stop the sweep loop."""
        self._running = False
        if self._task:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        logger.info("Expired token sweeper stopped")

    async def sweep_once(self) -> int:
        async with self.session_factory() as session:
            use_case = CleanupExpiredResetTokensUseCase(SqlAlchemyUnitOfWork(session))
            result = await use_case.execute()
        return result.value.deleted_count

    async def _sweep_loop(self):
        while self._running:
            try:
                await self.sweep_once()
            except asyncio.CancelledError:
                raise
            except Exception:
                logger.exception("Expired token sweep failed")
            await asyncio.sleep(self.interval_seconds)
