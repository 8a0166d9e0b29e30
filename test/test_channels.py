"""
Tests for channel management.
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.exceptions import DuplicateResourceError
from vidshare.models.user import User
from vidshare.schemas.channel import ChannelCreate
from vidshare.services.channel_service import ChannelService
from vidshare.utils.identity import new_id


class TestChannelService:
    """Tests for ChannelService."""

    @pytest.mark.asyncio
    async def test_create_channel_marks_user(self, test_db: AsyncSession, test_user: User):
        channel = await ChannelService(test_db).create_channel(test_user.id, ChannelCreate(name="My Channel"))

        assert channel.user_id == test_user.id
        assert test_user.has_channel is True

    @pytest.mark.asyncio
    async def test_second_channel_rejected(self, test_db: AsyncSession, test_user: User):
        service = ChannelService(test_db)
        await service.create_channel(test_user.id, ChannelCreate(name="First"))

        with pytest.raises(DuplicateResourceError):
            await service.create_channel(test_user.id, ChannelCreate(name="Second"))

    @pytest.mark.asyncio
    async def test_delete_channel_clears_flag(self, test_db: AsyncSession, test_user: User, test_channel):
        await ChannelService(test_db).delete_channel(test_user.id)

        assert test_user.has_channel is False


class TestChannelEndpoints:
    """Tests for /channels endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_fetch(self, client: AsyncClient, auth_headers: dict, test_user: User):
        response = await client.post(
            "/channels", json={"name": "Cooking Daily", "description": "Recipes"}, headers=auth_headers
        )
        assert response.status_code == 201
        assert response.json()["name"] == "Cooking Daily"

        mine = await client.get("/channels/me", headers=auth_headers)
        assert mine.status_code == 200
        assert mine.json()["userId"] == test_user.id

        public = await client.get(f"/channels/{test_user.id}")
        assert public.json()["name"] == "Cooking Daily"

    @pytest.mark.asyncio
    async def test_invalid_channel_name(self, client: AsyncClient, auth_headers: dict):
        response = await client.post("/channels", json={"name": "Bad!Name"}, headers=auth_headers)

        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_duplicate_channel(self, client: AsyncClient, auth_headers: dict, test_channel):
        response = await client.post("/channels", json={"name": "Another One"}, headers=auth_headers)

        assert response.status_code == 409

    @pytest.mark.asyncio
    async def test_check_status(self, client: AsyncClient, auth_headers: dict, other_auth_headers: dict, test_channel):
        response = await client.get("/channels/check/status", headers=auth_headers)
        assert response.json()["hasChannel"] is True
        assert response.json()["channel"]["name"] == "Test Channel"

        response = await client.get("/channels/check/status", headers=other_auth_headers)
        assert response.json() == {"hasChannel": False, "channel": None}

    @pytest.mark.asyncio
    async def test_update_channel(self, client: AsyncClient, auth_headers: dict, test_channel):
        response = await client.put("/channels", json={"description": "Updated"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["description"] == "Updated"
        assert response.json()["name"] == "Test Channel"

    @pytest.mark.asyncio
    async def test_delete_channel(self, client: AsyncClient, auth_headers: dict, test_channel):
        response = await client.delete("/channels", headers=auth_headers)
        assert response.status_code == 200

        status_response = await client.get("/channels/check/status", headers=auth_headers)
        assert status_response.json()["hasChannel"] is False

    @pytest.mark.asyncio
    async def test_unknown_channel(self, client: AsyncClient):
        response = await client.get(f"/channels/{new_id()}")

        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_malformed_user_id(self, client: AsyncClient):
        response = await client.get("/channels/abc")

        assert response.status_code == 400
