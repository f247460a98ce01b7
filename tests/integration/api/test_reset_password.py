"""
Integration tests for POST /auth/reset-password
"""
import secrets

import bcrypt
import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.domain.entities import AdvisorStatus, AuditEvent

NEW_PASSWORD = "NewPass1!"


@pytest.mark.asyncio
async def test_successful_reset(client: AsyncClient, db_session, create_advisor, create_reset_token):
    advisor = await create_advisor()
    token, secret = await create_reset_token(advisor)
    old_hash = advisor.password_hash

    response = await client.post("/auth/reset-password", json={"token": secret, "password": NEW_PASSWORD})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert "You can now login" in data["message"]

    await db_session.refresh(advisor)
    assert advisor.password_hash != old_hash
    assert bcrypt.checkpw(NEW_PASSWORD.encode(), advisor.password_hash.encode())

    await db_session.refresh(token)
    assert token.used is True
    assert token.used_at is not None

    events = (await db_session.exec(select(AuditEvent))).all()
    assert [event.action for event in events] == ["password_reset_completed"]


@pytest.mark.asyncio
async def test_reset_invalidates_sibling_tokens(client: AsyncClient, db_session, create_advisor, create_reset_token):
    advisor = await create_advisor()
    other_advisor = await create_advisor(email="other@example.com")
    sibling, _ = await create_reset_token(advisor)
    token, secret = await create_reset_token(advisor)
    unrelated, _ = await create_reset_token(other_advisor)

    response = await client.post("/auth/reset-password", json={"token": secret, "password": NEW_PASSWORD})

    assert response.status_code == 200
    for row in (sibling, token, unrelated):
        await db_session.refresh(row)
    assert sibling.used is True
    assert token.used is True
    assert unrelated.used is False


@pytest.mark.asyncio
async def test_second_consume_fails(client: AsyncClient, db_session, create_advisor, create_reset_token):
    advisor = await create_advisor()
    _, secret = await create_reset_token(advisor)

    first = await client.post("/auth/reset-password", json={"token": secret, "password": NEW_PASSWORD})
    second = await client.post("/auth/reset-password", json={"token": secret, "password": "Another1!"})

    assert first.status_code == 200
    assert second.status_code == 400
    assert second.json()["error"]["code"] == "TOKEN_EXPIRED_OR_USED"

    await db_session.refresh(advisor)
    assert bcrypt.checkpw(NEW_PASSWORD.encode(), advisor.password_hash.encode())


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body",
    [{}, {"token": "abc"}, {"password": NEW_PASSWORD}, {"token": "", "password": ""}],
)
async def test_missing_fields(client: AsyncClient, body):
    response = await client.post("/auth/reset-password", json=body)

    assert response.status_code == 400
    data = response.json()
    assert data["success"] is False
    assert data["error"]["code"] == "MISSING_FIELDS"


@pytest.mark.asyncio
async def test_invalid_token(client: AsyncClient):
    response = await client.post(
        "/auth/reset-password", json={"token": secrets.token_hex(32), "password": NEW_PASSWORD}
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "INVALID_TOKEN"


@pytest.mark.asyncio
async def test_expired_token(client: AsyncClient, db_session, create_advisor, create_reset_token):
    advisor = await create_advisor()
    token, secret = await create_reset_token(advisor, expired=True)

    response = await client.post("/auth/reset-password", json={"token": secret, "password": NEW_PASSWORD})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED_OR_USED"
    await db_session.refresh(token)
    assert token.used is False


@pytest.mark.asyncio
async def test_inactive_account(client: AsyncClient, db_session, create_advisor, create_reset_token):
    advisor = await create_advisor(status=AdvisorStatus.inactive)
    _, secret = await create_reset_token(advisor)

    response = await client.post("/auth/reset-password", json={"token": secret, "password": NEW_PASSWORD})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "ACCOUNT_INACTIVE"


@pytest.mark.asyncio
@pytest.mark.parametrize("password", ["short1", "alllowercase1!", "NOLOWERCASE1!", "NoDigits!!"])
async def test_weak_password(client: AsyncClient, db_session, create_advisor, create_reset_token, password):
    advisor = await create_advisor()
    token, secret = await create_reset_token(advisor)
    old_hash = advisor.password_hash

    response = await client.post("/auth/reset-password", json={"token": secret, "password": password})

    assert response.status_code == 400
    data = response.json()
    assert data["error"]["code"] == "WEAK_PASSWORD"
    assert data["message"].startswith("Password must")

    await db_session.refresh(token)
    await db_session.refresh(advisor)
    assert token.used is False
    assert advisor.password_hash == old_hash
