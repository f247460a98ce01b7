import pytest
from unittest.mock import AsyncMock, MagicMock

from src.app.services.email_sender import EmailSendResult


@pytest.fixture
def mock_uow():
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    # Mock repositories
    uow.advisors = MagicMock()
    uow.advisors.get_by_email = AsyncMock(return_value=None)
    uow.advisors.get_by_id = AsyncMock(return_value=None)
    uow.advisors.update_password_hash = AsyncMock(return_value=True)

    uow.password_reset_tokens = MagicMock()
    uow.password_reset_tokens.create = AsyncMock(side_effect=lambda token: token)
    uow.password_reset_tokens.get_by_secret = AsyncMock(return_value=None)
    uow.password_reset_tokens.invalidate_all_for_advisor = AsyncMock(return_value=0)
    uow.password_reset_tokens.mark_used_if_valid = AsyncMock(return_value=True)
    uow.password_reset_tokens.delete_by_id = AsyncMock()
    uow.password_reset_tokens.delete_expired_before = AsyncMock(return_value=0)

    uow.audit_events = MagicMock()
    uow.audit_events.create = AsyncMock(side_effect=lambda event: event)

    return uow


@pytest.fixture
def mock_email_sender():
    sender = MagicMock()
    sender.send = AsyncMock(return_value=EmailSendResult(success=True, message_id="<msg@test>"))
    return sender
