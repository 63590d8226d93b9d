"""
FormBuilder Backend - Account Endpoint Tests
=============================================

What:  POST /register and POST /login through the full app stack.
How:   httpx AsyncClient over ASGITransport, in-memory SQLite.
"""

import pytest
from sqlalchemy import func, select

from formbuilder.database import async_session_factory
from formbuilder.models.account import Account


async def _count_accounts(username: str) -> int:
    async with async_session_factory() as session:
        result = await session.execute(
            select(func.count()).select_from(Account).where(Account.username == username)
        )
        return result.scalar_one()


class TestRegister:

    @pytest.mark.asyncio
    async def test_register_returns_201_and_token(self, test_client):
        response = await test_client.post("/register", json={"username": "a", "password": "p"})

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "User registered successfully"
        assert body["token"]

    @pytest.mark.asyncio
    async def test_duplicate_username_is_400_and_stores_one_account(self, test_client):
        first = await test_client.post("/register", json={"username": "a", "password": "p"})
        second = await test_client.post("/register", json={"username": "a", "password": "q"})

        assert first.status_code == 201
        assert second.status_code == 400
        assert second.json()["error"] == "conflict"
        assert second.json()["message"] == "User already exists"
        assert await _count_accounts("a") == 1

    @pytest.mark.asyncio
    async def test_password_is_not_stored_in_plaintext(self, test_client):
        await test_client.post("/register", json={"username": "a", "password": "p"})

        async with async_session_factory() as session:
            account = (
                await session.execute(select(Account).where(Account.username == "a"))
            ).scalar_one()

        assert account.password_hash != "p"
        assert account.password_hash.startswith("$2")

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "payload",
        [
            {},
            {"username": "a"},
            {"password": "p"},
            {"username": "", "password": "p"},
            {"username": "a", "password": "x" * 73},
        ],
    )
    async def test_invalid_body_is_422(self, test_client, payload):
        response = await test_client.post("/register", json=payload)

        assert response.status_code == 422


class TestLogin:

    @pytest.mark.asyncio
    async def test_login_returns_token_usable_as_bearer(self, test_client):
        await test_client.post("/register", json={"username": "a", "password": "p"})

        response = await test_client.post("/login", json={"username": "a", "password": "p"})

        assert response.status_code == 200
        token = response.json()["token"]
        forms = await test_client.get("/getForms", headers={"Authorization": f"Bearer {token}"})
        assert forms.status_code == 200

    @pytest.mark.asyncio
    async def test_wrong_password_is_401(self, test_client):
        await test_client.post("/register", json={"username": "a", "password": "p"})

        response = await test_client.post("/login", json={"username": "a", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"] == "invalid_credentials"
        assert response.json()["message"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_unknown_user_is_401_with_same_message(self, test_client):
        response = await test_client.post("/login", json={"username": "ghost", "password": "p"})

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid credentials"
