"""
Reaction Service

Like/dislike toggling on videos. A user's reaction to a video is one of
none, liked or disliked, stored as at most one ``VideoReaction`` row.

Each transition is a single conditional statement keyed on the expected
prior state, so a double-click racing against itself cannot leave the
user in both sets or apply a transition twice.
"""

import logging
from dataclasses import dataclass, field

from sqlalchemy import and_, delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.config import settings
from vidshare.database import insert_if_absent
from vidshare.exceptions import ConcurrentModificationError, VideoNotFoundError
from vidshare.models.video import ReactionType, Video, VideoReaction
from vidshare.utils.identity import parse_id

logger = logging.getLogger(__name__)

MESSAGES = {
    ReactionType.LIKE: {
        "removed": "Like removed",
        "switched": "Dislike removed and like added",
        "added": "Video liked",
    },
    ReactionType.DISLIKE: {
        "removed": "Dislike removed",
        "switched": "Like removed and dislike added",
        "added": "Video disliked",
    },
}


@dataclass
class ReactionResult:
    message: str
    likes: list[str] = field(default_factory=list)
    dislikes: list[str] = field(default_factory=list)


class ReactionService:
    """Service for toggling reactions on videos."""

    def __init__(self, db: AsyncSession, cas_attempts: int | None = None):
        self.db = db
        self.cas_attempts = cas_attempts if cas_attempts is not None else settings.reaction_cas_attempts
        if self.cas_attempts < 1:
            raise ValueError("cas_attempts must be at least 1")

    async def like(self, video_id: str, user_id: str) -> ReactionResult:
        return await self.toggle(video_id, user_id, ReactionType.LIKE)

    async def dislike(self, video_id: str, user_id: str) -> ReactionResult:
        return await self.toggle(video_id, user_id, ReactionType.DISLIKE)

    async def toggle(self, video_id: str, user_id: str, reaction: ReactionType) -> ReactionResult:
        """
        Apply ``reaction`` for ``user_id`` on ``video_id``.

        - same reaction already present: remove it (toggle off)
        - opposite reaction present: switch it
        - no reaction: add it

        Returns the resulting like/dislike sets.
        """
        video_id = parse_id(video_id, "Video")

        exists = await self.db.scalar(select(Video.id).where(Video.id == video_id))
        if exists is None:
            raise VideoNotFoundError(video_id)

        for attempt in range(1, self.cas_attempts + 1):
            outcome = await self._apply_transition(video_id, user_id, reaction)
            if outcome is not None:
                await self.db.commit()
                logger.info(
                    f"Reaction {outcome}: video={video_id}, user={user_id}, type={reaction.value}"
                )
                likes, dislikes = await self.get_reaction_sets(video_id)
                return ReactionResult(message=MESSAGES[reaction][outcome], likes=likes, dislikes=dislikes)

            await self.db.rollback()
            logger.warning(
                f"Reaction CAS lost to a concurrent update: video={video_id}, user={user_id}, attempt={attempt}"
            )

        raise ConcurrentModificationError("Video", video_id)

    async def _apply_transition(self, video_id: str, user_id: str, reaction: ReactionType) -> str | None:
        """Try each transition's compare-and-swap in turn; return which one applied."""
        row_filter = and_(VideoReaction.video_id == video_id, VideoReaction.user_id == user_id)

        # liked -> none
        result = await self.db.execute(
            delete(VideoReaction)
            .where(row_filter, VideoReaction.reaction_type == reaction)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return "removed"

        # disliked -> liked
        result = await self.db.execute(
            update(VideoReaction)
            .where(row_filter, VideoReaction.reaction_type == reaction.opposite)
            .values(reaction_type=reaction)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 1:
            return "switched"

        # none -> liked
        result = await self.db.execute(
            insert_if_absent(
                self.db,
                VideoReaction,
                {"video_id": video_id, "user_id": user_id, "reaction_type": reaction},
                ["video_id", "user_id"],
            )
        )
        if result.rowcount == 1:
            return "added"

        return None

    async def get_reaction_sets(self, video_id: str) -> tuple[list[str], list[str]]:
        """Return (likes, dislikes) as lists of user ids, oldest reaction first."""
        result = await self.db.execute(
            select(VideoReaction.user_id, VideoReaction.reaction_type)
            .where(VideoReaction.video_id == video_id)
            .order_by(VideoReaction.created_at, VideoReaction.id)
        )
        likes: list[str] = []
        dislikes: list[str] = []
        for user_id, reaction_type in result.all():
            (likes if reaction_type == ReactionType.LIKE else dislikes).append(user_id)
        return likes, dislikes

    async def get_reaction_map(self, video_ids: list[str]) -> dict[str, tuple[list[str], list[str]]]:
        """Batch variant of ``get_reaction_sets`` for listings."""
        reaction_map: dict[str, tuple[list[str], list[str]]] = {vid: ([], []) for vid in video_ids}
        if not video_ids:
            return reaction_map

        result = await self.db.execute(
            select(VideoReaction.video_id, VideoReaction.user_id, VideoReaction.reaction_type)
            .where(VideoReaction.video_id.in_(video_ids))
            .order_by(VideoReaction.created_at, VideoReaction.id)
        )
        for video_id, user_id, reaction_type in result.all():
            likes, dislikes = reaction_map[video_id]
            (likes if reaction_type == ReactionType.LIKE else dislikes).append(user_id)
        return reaction_map

    async def get_user_reaction(self, video_id: str, user_id: str) -> ReactionType | None:
        """Get a user's reaction on a video, or None."""
        return await self.db.scalar(
            select(VideoReaction.reaction_type).where(
                and_(VideoReaction.video_id == video_id, VideoReaction.user_id == user_id)
            )
        )
