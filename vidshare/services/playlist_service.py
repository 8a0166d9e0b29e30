"""
Playlist Service

Playlists belong to the user who created them. Private playlists are
visible to their owner only; public ones to everybody.
"""

import logging

from sqlalchemy import delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.database import insert_if_absent
from vidshare.exceptions import AuthorizationError, PlaylistNotFoundError, VideoNotFoundError
from vidshare.models.playlist import Playlist, PlaylistVideo
from vidshare.models.video import Video
from vidshare.schemas.playlist import PlaylistCreate
from vidshare.utils.identity import parse_id, same_id

logger = logging.getLogger(__name__)


class PlaylistService:
    """Service for managing playlists."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_playlist(self, user_id: str, data: PlaylistCreate) -> Playlist:
        playlist = Playlist(
            name=data.name,
            description=data.description,
            is_public=data.is_public,
            created_by=user_id,
        )
        self.db.add(playlist)
        await self.db.commit()

        logger.info(f"Playlist created: id={playlist.id}, user={user_id}")
        return playlist

    async def get_user_playlists(self, user_id: str) -> list[Playlist]:
        result = await self.db.execute(
            select(Playlist).where(Playlist.created_by == user_id).order_by(Playlist.created_at.desc())
        )
        return list(result.scalars().all())

    async def _get(self, playlist_id: str) -> Playlist:
        playlist_id = parse_id(playlist_id, "Playlist")
        playlist = await self.db.get(Playlist, playlist_id)
        if playlist is None:
            raise PlaylistNotFoundError(playlist_id)
        return playlist

    async def _get_owned(self, playlist_id: str, user_id: str) -> Playlist:
        playlist = await self._get(playlist_id)
        if not same_id(playlist.created_by, user_id):
            raise AuthorizationError("You can only modify your own playlists")
        return playlist

    async def get_playlist(self, playlist_id: str, user_id: str) -> Playlist:
        """Get a playlist visible to ``user_id``."""
        playlist = await self._get(playlist_id)
        if not playlist.is_public and not same_id(playlist.created_by, user_id):
            raise AuthorizationError("This playlist is private")
        return playlist

    async def get_playlist_videos(self, playlist_id: str) -> list[Video]:
        result = await self.db.execute(
            select(PlaylistVideo)
            .where(PlaylistVideo.playlist_id == playlist_id)
            .order_by(PlaylistVideo.position, PlaylistVideo.added_at)
        )
        return [item.video for item in result.unique().scalars().all() if item.video is not None]

    async def delete_playlist(self, playlist_id: str, user_id: str) -> None:
        playlist = await self._get_owned(playlist_id, user_id)
        await self.db.delete(playlist)
        await self.db.commit()
        logger.info(f"Playlist deleted: id={playlist.id}, by_user={user_id}")

    async def add_video(self, playlist_id: str, video_id: str, user_id: str) -> Playlist:
        """Append a video to the playlist. Adding a video already present is a no-op."""
        video_id = parse_id(video_id, "Video")
        playlist = await self._get_owned(playlist_id, user_id)

        if await self.db.scalar(select(Video.id).where(Video.id == video_id)) is None:
            raise VideoNotFoundError(video_id)

        next_position = await self.db.scalar(
            select(func.coalesce(func.max(PlaylistVideo.position), -1) + 1).where(
                PlaylistVideo.playlist_id == playlist.id
            )
        )
        await self.db.execute(
            insert_if_absent(
                self.db,
                PlaylistVideo,
                {"playlist_id": playlist.id, "video_id": video_id, "position": next_position},
                ["playlist_id", "video_id"],
            )
        )
        await self.db.commit()

        logger.info(f"Video {video_id} added to playlist {playlist.id}")
        return playlist

    async def remove_video(self, playlist_id: str, video_id: str, user_id: str) -> Playlist:
        video_id = parse_id(video_id, "Video")
        playlist = await self._get_owned(playlist_id, user_id)

        await self.db.execute(
            delete(PlaylistVideo)
            .where(PlaylistVideo.playlist_id == playlist.id, PlaylistVideo.video_id == video_id)
            .execution_options(synchronize_session=False)
        )
        await self.db.commit()

        logger.info(f"Video {video_id} removed from playlist {playlist.id}")
        return playlist
