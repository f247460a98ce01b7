from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from src.domain.entities import Advisor


class IAdvisorRepository(ABC):
    """Advisor repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str, for_update: bool = False) -> Optional[Advisor]:
        """Get advisor by email address (case-insensitive), optionally locking the row"""
        pass

    @abstractmethod
    async def get_by_id(self, advisor_id: UUID) -> Optional[Advisor]:
        """Get advisor by ID"""
        pass

    @abstractmethod
    async def create(self, advisor: Advisor) -> Advisor:
        """Create a new advisor"""
        pass

    @abstractmethod
    async def update_password_hash(self, advisor_id: UUID, password_hash: str) -> bool:
        """Replace the stored password hash in a single write"""
        pass
