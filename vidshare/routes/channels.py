"""
Channel Routes

A user owns at most one channel; owning one is required to publish videos.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth import get_current_user
from vidshare.database import get_db
from vidshare.models.user import User
from vidshare.schemas.channel import ChannelCreate, ChannelResponse, ChannelStatusResponse, ChannelUpdate
from vidshare.schemas.video import MessageResponse
from vidshare.services.channel_service import ChannelService

router = APIRouter(tags=["Channels"])


@router.post("", response_model=ChannelResponse, status_code=status.HTTP_201_CREATED)
async def create_channel(
    data: ChannelCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChannelResponse:
    channel = await ChannelService(db).create_channel(current_user.id, data)
    return ChannelResponse.model_validate(channel)


@router.get("/me", response_model=ChannelResponse)
async def get_my_channel(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChannelResponse:
    channel = await ChannelService(db).get_channel(current_user.id)
    return ChannelResponse.model_validate(channel)


@router.get("/check/status", response_model=ChannelStatusResponse)
async def check_channel_status(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChannelStatusResponse:
    """Whether the caller owns a channel, and the channel if so."""
    channel = await ChannelService(db).get_channel_for_user(current_user.id)
    if channel is None:
        return ChannelStatusResponse(has_channel=False)
    return ChannelStatusResponse(has_channel=True, channel=ChannelResponse.model_validate(channel))


@router.get("/{user_id}", response_model=ChannelResponse)
async def get_channel(user_id: str, db: AsyncSession = Depends(get_db)) -> ChannelResponse:
    channel = await ChannelService(db).get_channel(user_id)
    return ChannelResponse.model_validate(channel)


@router.put("", response_model=ChannelResponse)
async def update_channel(
    data: ChannelUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ChannelResponse:
    channel = await ChannelService(db).update_channel(current_user.id, data)
    return ChannelResponse.model_validate(channel)


@router.delete("", response_model=MessageResponse)
async def delete_channel(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    await ChannelService(db).delete_channel(current_user.id)
    return MessageResponse(message="Channel deleted successfully")
