from abc import ABC, abstractmethod
from typing import Optional

from pydantic import BaseModel


class EmailSendResult(BaseModel):
    """Outcome of a single outbound e-mail attempt"""

    success: bool
    message_id: Optional[str] = None
    error: Optional[str] = None


class EmailSender(ABC):
    """Outbound e-mail transport interface - application layer"""

    @abstractmethod
    async def send(self, to: str, subject: str, html_body: str) -> EmailSendResult:
        """
        Send one HTML e-mail.

        Transport failures are reported through the result, never raised.
        """
        pass
