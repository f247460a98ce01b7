import secrets
from datetime import datetime, timedelta
from typing import List, Optional, Tuple

import bcrypt
import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession
from src.api.utils.rate_limit import limiter
from src.depends import get_email_sender, get_unit_of_work
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.services.email_sender import EmailSender, EmailSendResult
from src.domain.entities import Advisor, AdvisorStatus, PasswordResetToken

OLD_PASSWORD = "OldPass123!"


class RecordingEmailSender(EmailSender):
    """In-memory EmailSender that records every message it is asked to send"""

    def __init__(self, fail_with: Optional[str] = None):
        self.fail_with = fail_with
        self.sent: List[Tuple[str, str, str]] = []

    async def send(self, to: str, subject: str, html_body: str) -> EmailSendResult:
        if self.fail_with is not None:
            return EmailSendResult(success=False, error=self.fail_with)
        self.sent.append((to, subject, html_body))
        return EmailSendResult(success=True, message_id=f"<{len(self.sent)}@test>")

    def last_reset_secret(self) -> str:
        _, _, html_body = self.sent[-1]
        marker = "/reset-password/"
        start = html_body.index(marker) + len(marker)
        return html_body[start:start + 64]


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest.fixture
def email_sender():
    return RecordingEmailSender()


@pytest.fixture(autouse=True)
def reset_rate_limits():
    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture
def app(db_session, email_sender):
    from src.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_email_sender] = lambda: email_sender
    return app


@pytest_asyncio.fixture
async def client(app):
    from httpx import ASGITransport

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def create_advisor(db_session):
    async def _create(
        email: str = "advisor@example.com",
        status: AdvisorStatus = AdvisorStatus.active,
        password: str = OLD_PASSWORD,
    ) -> Advisor:
        advisor = Advisor(
            email=email,
            first_name="Asha",
            last_name="Rao",
            password_hash=bcrypt.hashpw(password.encode(), bcrypt.gensalt(4)).decode(),
            status=status,
        )
        db_session.add(advisor)
        await db_session.commit()
        await db_session.refresh(advisor)
        return advisor

    return _create


@pytest.fixture
def create_reset_token(db_session):
    async def _create(advisor: Advisor, expired: bool = False, used: bool = False) -> tuple:
        secret = secrets.token_hex(32)
        now = datetime.utcnow()
        token = PasswordResetToken(
            advisor_id=advisor.id,
            email=advisor.email,
            token_hash=PasswordResetToken.hash_secret(secret),
            used=used,
            used_at=now if used else None,
            expires_at=now - timedelta(hours=2) if expired else now + timedelta(minutes=30),
        )
        db_session.add(token)
        await db_session.commit()
        await db_session.refresh(token)
        return token, secret

    return _create
