"""
Channel Service

One channel per user. Owning a channel is what allows a user to publish
videos, mirrored on ``User.has_channel``.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.exceptions import ChannelNotFoundError, DuplicateResourceError, UserNotFoundError
from vidshare.models.channel import Channel
from vidshare.models.user import User
from vidshare.schemas.channel import ChannelCreate, ChannelUpdate
from vidshare.utils.identity import parse_id

logger = logging.getLogger(__name__)


class ChannelService:
    """Service for managing channels."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_channel_for_user(self, user_id: str) -> Channel | None:
        result = await self.db.execute(select(Channel).where(Channel.user_id == user_id))
        return result.unique().scalar_one_or_none()

    async def get_channel(self, user_id: str) -> Channel:
        """Get a user's channel, or raise ChannelNotFoundError."""
        user_id = parse_id(user_id, "User")
        channel = await self.get_channel_for_user(user_id)
        if channel is None:
            raise ChannelNotFoundError(user_id)
        return channel

    async def create_channel(self, user_id: str, data: ChannelCreate) -> Channel:
        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if await self.get_channel_for_user(user_id) is not None:
            raise DuplicateResourceError("Channel", "user_id", user_id)

        channel = Channel(
            user_id=user_id,
            name=data.name.strip(),
            description=data.description,
            banner=data.banner,
        )
        self.db.add(channel)
        user.has_channel = True
        await self.db.commit()

        logger.info(f"Channel created: id={channel.id}, user={user_id}")
        return await self.get_channel(user_id)

    async def update_channel(self, user_id: str, data: ChannelUpdate) -> Channel:
        channel = await self.get_channel(user_id)

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if "name" in changes:
            changes["name"] = changes["name"].strip()
        for field, value in changes.items():
            setattr(channel, field, value)

        await self.db.commit()
        await self.db.refresh(channel)

        logger.info(f"Channel updated: id={channel.id}, fields={sorted(changes)}")
        return channel

    async def delete_channel(self, user_id: str) -> None:
        channel = await self.get_channel(user_id)
        user = await self.db.get(User, user_id)

        await self.db.delete(channel)
        if user is not None:
            user.has_channel = False
        await self.db.commit()

        logger.info(f"Channel deleted: user={user_id}")
