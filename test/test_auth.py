"""
Tests for registration, login and token handling.
"""

from datetime import timedelta

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth import create_access_token, decode_access_token, hash_password, verify_password
from vidshare.exceptions import (
    DuplicateResourceError,
    InvalidCredentialsError,
    InvalidTokenError,
    TokenExpiredError,
    UserNotFoundError,
)
from vidshare.models.user import User
from vidshare.services.auth_service import authenticate_user, register_user
from vidshare.utils.identity import new_id


class TestTokens:
    """Tests for JWT helpers."""

    def test_round_trip_subject(self):
        user_id = new_id()
        token = create_access_token({"sub": user_id})
        assert decode_access_token(token) == user_id

    def test_missing_subject(self):
        with pytest.raises(ValueError):
            create_access_token({"name": "nobody"})

    def test_expired_token(self):
        token = create_access_token({"sub": new_id()}, expires_delta=timedelta(minutes=-1))
        with pytest.raises(TokenExpiredError):
            decode_access_token(token)

    def test_garbage_token(self):
        with pytest.raises(InvalidTokenError):
            decode_access_token("not.a.jwt")

    def test_subject_must_be_an_id(self):
        token = create_access_token({"sub": "someone@example.com"})
        with pytest.raises(InvalidTokenError):
            decode_access_token(token)

    def test_password_hashing(self):
        hashed = hash_password("s3cret!")
        assert hashed != "s3cret!"
        assert verify_password("s3cret!", hashed)
        assert not verify_password("wrong", hashed)


class TestAuthService:
    """Tests for register_user and authenticate_user."""

    @pytest.mark.asyncio
    async def test_duplicate_email(self, test_db: AsyncSession, test_user: User):
        with pytest.raises(DuplicateResourceError) as exc_info:
            await register_user("fresh", "testuser@example.com", "password", test_db)
        assert exc_info.value.details["field"] == "email"

    @pytest.mark.asyncio
    async def test_duplicate_username(self, test_db: AsyncSession, test_user: User):
        with pytest.raises(DuplicateResourceError) as exc_info:
            await register_user("testuser", "fresh@example.com", "password", test_db)
        assert exc_info.value.details["field"] == "username"

    @pytest.mark.asyncio
    async def test_authenticate(self, test_db: AsyncSession, test_user: User):
        user = await authenticate_user("testuser@example.com", "testpassword", test_db)
        assert user.id == test_user.id

    @pytest.mark.asyncio
    async def test_unknown_email(self, test_db: AsyncSession):
        with pytest.raises(UserNotFoundError):
            await authenticate_user("ghost@example.com", "whatever", test_db)

    @pytest.mark.asyncio
    async def test_wrong_password(self, test_db: AsyncSession, test_user: User):
        with pytest.raises(InvalidCredentialsError):
            await authenticate_user("testuser@example.com", "wrong", test_db)


class TestAuthEndpoints:
    """Tests for /auth endpoints."""

    @pytest.mark.asyncio
    async def test_register(self, client: AsyncClient):
        response = await client.post(
            "/auth/register",
            json={"username": "newbie", "email": "newbie@example.com", "password": "password123"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["username"] == "newbie"
        assert data["hasChannel"] is False
        assert "hashedPassword" not in data
        assert "hashed_password" not in data

    @pytest.mark.asyncio
    async def test_register_duplicate(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/auth/register",
            json={"username": "testuser", "email": "another@example.com", "password": "password123"},
        )

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_register_short_password(self, client: AsyncClient):
        response = await client.post(
            "/auth/register",
            json={"username": "newbie", "email": "newbie@example.com", "password": "123"},
        )

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_login_sets_cookie(self, client: AsyncClient, test_user: User):
        response = await client.post(
            "/auth/login", json={"email": "testuser@example.com", "password": "testpassword"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["user"]["id"] == test_user.id
        assert decode_access_token(data["token"]) == test_user.id
        assert "access_token" in response.cookies

    @pytest.mark.asyncio
    async def test_login_cookie_authenticates_follow_up(self, client: AsyncClient, test_user: User):
        await client.post("/auth/login", json={"email": "testuser@example.com", "password": "testpassword"})

        response = await client.get("/auth/check/status")

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "User is authenticated",
            "user": {"id": test_user.id},
        }

    @pytest.mark.asyncio
    async def test_login_unknown_email(self, client: AsyncClient):
        response = await client.post("/auth/login", json={"email": "ghost@example.com", "password": "whatever"})

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_login_wrong_password(self, client: AsyncClient, test_user: User):
        response = await client.post("/auth/login", json={"email": "testuser@example.com", "password": "nope"})

        assert response.status_code == 401
        assert response.json()["error"]["error_code"] == "AUTH_INVALID_CREDENTIALS"

    @pytest.mark.asyncio
    async def test_logout_clears_cookie(self, client: AsyncClient, test_user: User):
        await client.post("/auth/login", json={"email": "testuser@example.com", "password": "testpassword"})

        response = await client.post("/auth/logout")
        assert response.status_code == 200

        follow_up = await client.get("/auth/check/status")
        assert follow_up.status_code == 401

    @pytest.mark.asyncio
    async def test_check_status_without_token(self, client: AsyncClient):
        response = await client.get("/auth/check/status")

        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_token_for_deleted_user(self, client: AsyncClient):
        headers = {"Authorization": f"Bearer {create_access_token({'sub': new_id()})}"}

        response = await client.get("/auth/check/status", headers=headers)

        assert response.status_code == 401
        assert response.json()["error"]["error_code"] == "AUTH_TOKEN_INVALID"
