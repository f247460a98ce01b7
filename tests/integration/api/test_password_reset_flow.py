"""
End-to-end password reset scenarios through the HTTP API
"""
import bcrypt
import pytest
from httpx import AsyncClient
from sqlmodel import select

from src.app.use_cases.auth import GENERIC_RESET_MESSAGE
from src.domain.entities import PasswordResetToken


@pytest.mark.asyncio
async def test_request_verify_consume_then_reuse(client: AsyncClient, db_session, create_advisor, email_sender):
    advisor = await create_advisor(email="user@x.com")
    old_hash = advisor.password_hash

    # Request
    response = await client.post("/auth/forgot-password", json={"email": "user@x.com"})
    assert response.status_code == 200
    tokens = (await db_session.exec(select(PasswordResetToken))).all()
    assert len(tokens) == 1
    assert tokens[0].used is False
    secret = email_sender.last_reset_secret()

    # Verify
    response = await client.get(f"/auth/verify-reset-token/{secret}")
    assert response.status_code == 200
    assert response.json()["data"]["email"] == "user@x.com"

    # Consume
    response = await client.post("/auth/reset-password", json={"token": secret, "password": "NewPass1!"})
    assert response.status_code == 200

    await db_session.refresh(advisor)
    assert advisor.password_hash != old_hash
    assert bcrypt.checkpw(b"NewPass1!", advisor.password_hash.encode())
    await db_session.refresh(tokens[0])
    assert tokens[0].used is True

    # Reuse
    response = await client.post("/auth/reset-password", json={"token": secret, "password": "NewPass2!"})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TOKEN_EXPIRED_OR_USED"


@pytest.mark.asyncio
async def test_only_latest_link_works(client: AsyncClient, db_session, create_advisor, email_sender):
    await create_advisor(email="user@x.com")

    await client.post("/auth/forgot-password", json={"email": "user@x.com"})
    first_secret = email_sender.last_reset_secret()
    await client.post("/auth/forgot-password", json={"email": "user@x.com"})
    second_secret = email_sender.last_reset_secret()

    stale = await client.post("/auth/reset-password", json={"token": first_secret, "password": "NewPass1!"})
    assert stale.status_code == 400
    assert stale.json()["error"]["code"] == "TOKEN_EXPIRED_OR_USED"

    fresh = await client.post("/auth/reset-password", json={"token": second_secret, "password": "NewPass1!"})
    assert fresh.status_code == 200


@pytest.mark.asyncio
async def test_non_existent_email_same_shape_and_no_rows(client: AsyncClient, db_session, create_advisor):
    await create_advisor(email="user@x.com")

    existing = await client.post("/auth/forgot-password", json={"email": "user@x.com"})
    missing = await client.post("/auth/forgot-password", json={"email": "ghost@x.com"})

    assert missing.status_code == existing.status_code == 200
    assert missing.json() == existing.json() == {"success": True, "message": GENERIC_RESET_MESSAGE}

    tokens = (await db_session.exec(select(PasswordResetToken))).all()
    assert {token.email for token in tokens} == {"user@x.com"}
