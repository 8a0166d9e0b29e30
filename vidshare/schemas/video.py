from datetime import datetime
from typing import Optional

from pydantic import Field

from vidshare.schemas.base import CamelModel


class CreatorSummary(CamelModel):
    id: str
    username: str
    profile_pic: str = ""


class VideoCreate(CamelModel):
    title: str = Field(..., min_length=1, max_length=200, description="Title shown on the watch page.")
    description: str = Field("", max_length=5000)
    video_url: str = Field(..., min_length=1, description="URL of the already hosted media file.")
    thumbnail_url: str = Field("", description="URL of the already hosted thumbnail.")


class VideoResponse(CamelModel):
    id: str
    title: str
    description: str = ""
    video_url: str
    thumbnail_url: str = ""
    created_by: Optional[CreatorSummary] = None
    views: int = 0
    likes: list[str] = Field(default_factory=list)
    dislikes: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class VideoCreatedResponse(CamelModel):
    message: str
    new_video: VideoResponse


class UserVideosResponse(CamelModel):
    videos: list[VideoResponse]
    has_channel: bool = True


class ReactionResponse(CamelModel):
    message: str
    likes: list[str]
    dislikes: list[str]


class MessageResponse(CamelModel):
    message: str
