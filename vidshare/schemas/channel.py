from datetime import datetime
from typing import Optional

from pydantic import Field

from vidshare.schemas.base import CamelModel

CHANNEL_NAME_PATTERN = r"^[a-zA-Z0-9\s]+$"


class ChannelCreate(CamelModel):
    name: str = Field(..., min_length=3, max_length=100, pattern=CHANNEL_NAME_PATTERN)
    description: str = Field("", max_length=5000)
    banner: str = ""


class ChannelUpdate(CamelModel):
    name: Optional[str] = Field(None, min_length=3, max_length=100, pattern=CHANNEL_NAME_PATTERN)
    description: Optional[str] = Field(None, max_length=5000)
    banner: Optional[str] = None


class ChannelResponse(CamelModel):
    id: str
    user_id: str
    name: str
    description: str = ""
    banner: str = ""
    subscribers: int = 0
    is_verified: bool = False
    created_at: datetime
    updated_at: datetime


class ChannelStatusResponse(CamelModel):
    has_channel: bool
    channel: Optional[ChannelResponse] = None
