from datetime import datetime

from pydantic import Field

from vidshare.schemas.base import CamelModel
from vidshare.schemas.video import VideoResponse


class PlaylistCreate(CamelModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = Field("", max_length=5000)
    is_public: bool = False


class PlaylistResponse(CamelModel):
    id: str
    name: str
    description: str = ""
    created_by: str
    is_public: bool = False
    videos: list[VideoResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime
