"""
History Service

Paginated, most-recent-first watch history and bulk clearing. Entries whose
video no longer exists are deleted before a page is computed, so a deleted
video never breaks a history read or skews its counts.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import and_, delete, exists, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.exceptions import UserNotFoundError
from vidshare.models.user import User
from vidshare.models.video import Video
from vidshare.models.watch_history import WatchHistoryEntry
from vidshare.utils.pagination import PageRequest, total_pages

logger = logging.getLogger(__name__)


@dataclass
class HistoryPage:
    entries: list[WatchHistoryEntry]
    total_items: int
    total_pages: int
    current_page: int


class HistoryService:
    """Service for reading and clearing a user's watch history."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def prune_dangling(self, user_id: str) -> int:
        """Delete history entries that no longer reference an existing video."""
        video_exists = exists().where(Video.id == WatchHistoryEntry.video_id)
        result = await self.db.execute(
            delete(WatchHistoryEntry)
            .where(
                and_(
                    WatchHistoryEntry.user_id == user_id,
                    or_(WatchHistoryEntry.video_id.is_(None), ~video_exists),
                )
            )
            .execution_options(synchronize_session=False)
        )
        pruned = result.rowcount or 0
        if pruned:
            logger.info(f"Pruned {pruned} dangling history entries for user {user_id}")
        return pruned

    async def get_history(self, user_id: str, page: PageRequest) -> HistoryPage:
        """
        Get one page of a user's history, newest first.

        Args:
            user_id: Owner of the history
            page: Validated page number and size

        Returns:
            HistoryPage whose counts describe the pruned history
        """
        await self.prune_dangling(user_id)
        await self.db.commit()

        # Inner join: a video deleted after the prune still never reaches the page
        total_items = (
            await self.db.scalar(
                select(func.count(WatchHistoryEntry.id))
                .join(Video, Video.id == WatchHistoryEntry.video_id)
                .where(WatchHistoryEntry.user_id == user_id)
            )
            or 0
        )

        result = await self.db.execute(
            select(WatchHistoryEntry)
            .join(Video, Video.id == WatchHistoryEntry.video_id)
            .where(WatchHistoryEntry.user_id == user_id)
            .order_by(WatchHistoryEntry.watched_at.desc(), WatchHistoryEntry.id.desc())
            .offset(page.offset)
            .limit(page.limit)
        )
        entries = list(result.unique().scalars().all())

        return HistoryPage(
            entries=entries,
            total_items=total_items,
            total_pages=total_pages(total_items, page.limit),
            current_page=page.page,
        )

    async def clear_history(self, user_id: str) -> int:
        """Delete every history entry of the user. Returns how many were removed."""
        user_exists = await self.db.scalar(select(User.id).where(User.id == user_id))
        if user_exists is None:
            raise UserNotFoundError(user_id)

        result = await self.db.execute(
            delete(WatchHistoryEntry)
            .where(WatchHistoryEntry.user_id == user_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        removed = result.rowcount or 0
        logger.info(f"Watch history cleared for user {user_id} ({removed} entries)")
        return removed
