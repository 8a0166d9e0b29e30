from datetime import datetime

from vidshare.schemas.base import CamelModel
from vidshare.schemas.video import VideoResponse


class HistoryVideo(VideoResponse):
    viewed_at: datetime


class HistoryPageResponse(CamelModel):
    history: list[HistoryVideo]
    total_items: int
    total_pages: int
    current_page: int
