"""
Video Service

The video catalogue: listing, detail, publishing, deletion, recommendations
and liked videos. View counting and reactions live in their own services.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config import settings
from vidshare.exceptions import AuthorizationError, UserNotFoundError, VideoNotFoundError
from vidshare.models.user import User
from vidshare.models.video import ReactionType, Video, VideoReaction
from vidshare.schemas.video import CreatorSummary, VideoCreate, VideoResponse
from vidshare.services.reaction_service import ReactionService
from vidshare.utils.identity import parse_id, same_id

logger = logging.getLogger(__name__)


class VideoService:
    """Service for managing videos."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_video(self, video_id: str) -> Video:
        """Load a video with fresh column values, or raise VideoNotFoundError."""
        video_id = parse_id(video_id, "Video")
        result = await self.db.execute(
            select(Video).where(Video.id == video_id).execution_options(populate_existing=True)
        )
        video = result.unique().scalar_one_or_none()
        if video is None:
            raise VideoNotFoundError(video_id)
        return video

    async def list_videos(self) -> list[Video]:
        """All videos, newest first."""
        result = await self.db.execute(select(Video).order_by(Video.created_at.desc()))
        return list(result.unique().scalars().all())

    async def create_video(self, user_id: str, data: VideoCreate) -> Video:
        """
        Publish a video for ``user_id``.

        The uploader must own a channel.
        """
        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not user.has_channel:
            raise AuthorizationError(
                "You need to create a channel before uploading videos",
                details={"needsChannel": True},
            )

        video = Video(
            title=data.title,
            description=data.description,
            video_url=data.video_url,
            thumbnail_url=data.thumbnail_url,
            created_by=user_id,
        )
        self.db.add(video)
        await self.db.commit()

        logger.info(f"Video created: id={video.id}, user={user_id}")
        return await self.get_video(video.id)

    async def get_user_videos(self, user_id: str) -> list[Video]:
        """Videos uploaded by ``user_id``, newest first. Requires a channel."""
        user = await self.db.get(User, user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not user.has_channel:
            raise AuthorizationError("You need to create a channel first", details={"hasChannel": False})

        result = await self.db.execute(
            select(Video).where(Video.created_by == user_id).order_by(Video.created_at.desc())
        )
        videos = list(result.unique().scalars().all())
        logger.debug(f"Found {len(videos)} videos for user {user_id}")
        return videos

    async def get_recommended(self, video_id: str, limit: int | None = None) -> list[Video]:
        """
        Most viewed videos by the same creator, topped up with the most viewed
        videos of other creators. Never includes the video itself.
        """
        limit = limit or settings.recommended_limit
        current = await self.get_video(video_id)

        result = await self.db.execute(
            select(Video)
            .where(Video.id != current.id, Video.created_by == current.created_by)
            .order_by(Video.views.desc(), Video.created_at.desc())
            .limit(limit)
        )
        recommended = list(result.unique().scalars().all())

        if len(recommended) < limit:
            others = select(Video).where(Video.id != current.id)
            if current.created_by is not None:
                others = others.where((Video.created_by != current.created_by) | Video.created_by.is_(None))
            result = await self.db.execute(
                others.order_by(Video.views.desc(), Video.created_at.desc()).limit(limit - len(recommended))
            )
            recommended.extend(result.unique().scalars().all())

        return recommended

    async def delete_video(self, video_id: str, user_id: str) -> None:
        """Delete a video. Only its creator may do so."""
        video = await self.get_video(video_id)

        if not same_id(video.created_by, user_id):
            raise AuthorizationError("You can only delete your own videos")

        await self.db.delete(video)
        await self.db.commit()
        logger.info(f"Video deleted: id={video.id}, by_user={user_id}")

    async def get_liked_videos(self, user_id: str) -> list[Video]:
        """Videos the user currently likes, most recently liked first."""
        result = await self.db.execute(
            select(Video)
            .join(VideoReaction, VideoReaction.video_id == Video.id)
            .where(
                VideoReaction.user_id == user_id,
                VideoReaction.reaction_type == ReactionType.LIKE,
            )
            .order_by(VideoReaction.created_at.desc(), VideoReaction.id.desc())
        )
        return list(result.unique().scalars().all())


def _creator_summary(video: Video) -> CreatorSummary | None:
    if video.creator is None:
        return None
    return CreatorSummary(
        id=video.creator.id,
        username=video.creator.username,
        profile_pic=video.creator.profile_pic or "",
    )


def video_to_response(video: Video, likes: list[str], dislikes: list[str]) -> VideoResponse:
    return VideoResponse(
        id=video.id,
        title=video.title,
        description=video.description or "",
        video_url=video.video_url,
        thumbnail_url=video.thumbnail_url or "",
        created_by=_creator_summary(video),
        views=video.views or 0,
        likes=likes,
        dislikes=dislikes,
        created_at=video.created_at,
        updated_at=video.updated_at,
    )


async def videos_to_response(db: AsyncSession, videos: list[Video]) -> list[VideoResponse]:
    """Serialize videos with their like/dislike sets in one extra query."""
    reaction_map = await ReactionService(db).get_reaction_map([v.id for v in videos])
    return [video_to_response(v, *reaction_map[v.id]) for v in videos]
