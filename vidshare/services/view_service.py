"""
View Service

Decides, for each video-detail fetch, whether the fetch is a viewer's
first view of the video (count it) or a repeat (leave the counter alone).

- Identified viewers: ``video_viewers`` is the durable record. The insert
  into it is conditional, and the counter moves only when that insert
  actually created the row.
- Anonymous viewers: a marker in the injected ``ViewSessionStore``, keyed
  on video and client address. Markers expire with the session.

Identified viewers also get a history entry on every fetch, repeat or not.
"""

import logging
from dataclasses import dataclass

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.database import insert_if_absent
from vidshare.exceptions import VideoNotFoundError
from vidshare.models.user import utcnow
from vidshare.models.video import Video, VideoViewer
from vidshare.models.watch_history import WatchHistoryEntry
from vidshare.utils.identity import parse_id
from vidshare.utils.session import ViewSessionStore, anonymous_view_key

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Viewer:
    """Either an authenticated user id or an anonymous client address."""

    user_id: str | None = None
    client: str | None = None

    @property
    def is_identified(self) -> bool:
        return self.user_id is not None


@dataclass(frozen=True)
class ViewOutcome:
    counted: bool
    views: int


class ViewService:
    """Service for view counting and watch-history appends."""

    def __init__(self, db: AsyncSession, session_store: ViewSessionStore | None = None):
        self.db = db
        self.session_store = session_store

    async def record_view(self, video_id: str, viewer: Viewer) -> ViewOutcome:
        """
        Account for one qualifying fetch of ``video_id`` by ``viewer``.

        Raises:
            InvalidIdentifierError: malformed ``video_id``; nothing is touched
            VideoNotFoundError: no such video; nothing is touched
        """
        video_id = parse_id(video_id, "Video")

        exists = await self.db.scalar(select(Video.id).where(Video.id == video_id))
        if exists is None:
            raise VideoNotFoundError(video_id)

        if viewer.is_identified:
            counted = await self._record_identified_view(video_id, viewer.user_id)
        else:
            counted = await self._record_anonymous_view(video_id, viewer.client)

        await self.db.commit()

        views = await self.db.scalar(select(Video.views).where(Video.id == video_id))
        return ViewOutcome(counted=counted, views=views or 0)

    async def _record_identified_view(self, video_id: str, user_id: str) -> bool:
        # The viewer row and the counter move together in one transaction
        result = await self.db.execute(
            insert_if_absent(
                self.db,
                VideoViewer,
                {"video_id": video_id, "user_id": user_id},
                ["video_id", "user_id"],
            )
        )
        counted = result.rowcount == 1
        if counted:
            await self._increment_views(video_id)
            logger.info(f"First view counted: video={video_id}, user={user_id}")
        else:
            logger.debug(f"Repeat view: video={video_id}, user={user_id}")

        self.db.add(WatchHistoryEntry(user_id=user_id, video_id=video_id, watched_at=utcnow()))
        return counted

    async def _record_anonymous_view(self, video_id: str, client: str | None) -> bool:
        if self.session_store is None:
            raise RuntimeError("Anonymous view accounting requires a view session store")

        key = anonymous_view_key(video_id, client or "unknown")
        if not await self.session_store.set(key):
            logger.debug(f"Repeat anonymous view: video={video_id}")
            return False

        await self._increment_views(video_id)
        logger.info(f"Anonymous view counted: video={video_id}")
        return True

    async def _increment_views(self, video_id: str) -> None:
        await self.db.execute(
            update(Video)
            .where(Video.id == video_id)
            .values(views=Video.views + 1)
            .execution_options(synchronize_session=False)
        )
