import logging

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.database import insert_if_absent
from vidshare.exceptions import VideoNotFoundError
from vidshare.models.video import Video
from vidshare.models.watch_history import WatchLaterItem
from vidshare.utils.identity import parse_id

logger = logging.getLogger(__name__)


class WatchLaterService:
    """A user's watch-later list (set semantics)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_videos(self, user_id: str) -> list[Video]:
        result = await self.db.execute(
            select(WatchLaterItem).where(WatchLaterItem.user_id == user_id).order_by(WatchLaterItem.added_at.desc())
        )
        return [item.video for item in result.unique().scalars().all()]

    async def add(self, user_id: str, video_id: str) -> bool:
        """Add a video; returns False if it was already on the list."""
        video_id = parse_id(video_id, "Video")
        if await self.db.scalar(select(Video.id).where(Video.id == video_id)) is None:
            raise VideoNotFoundError(video_id)

        result = await self.db.execute(
            insert_if_absent(
                self.db,
                WatchLaterItem,
                {"user_id": user_id, "video_id": video_id},
                ["user_id", "video_id"],
            )
        )
        await self.db.commit()

        added = result.rowcount == 1
        logger.info(f"Watch later add: user={user_id}, video={video_id}, added={added}")
        return added

    async def remove(self, user_id: str, video_id: str) -> bool:
        video_id = parse_id(video_id, "Video")
        result = await self.db.execute(
            delete(WatchLaterItem)
            .where(WatchLaterItem.user_id == user_id, WatchLaterItem.video_id == video_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()
        return result.rowcount == 1
