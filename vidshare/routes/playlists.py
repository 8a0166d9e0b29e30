"""
Playlist Routes
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth import get_current_user
from vidshare.database import get_db
from vidshare.models.playlist import Playlist
from vidshare.models.user import User
from vidshare.schemas.playlist import PlaylistCreate, PlaylistResponse
from vidshare.schemas.video import MessageResponse
from vidshare.services.playlist_service import PlaylistService
from vidshare.services.video_service import videos_to_response

router = APIRouter(tags=["Playlists"])


async def _playlist_response(db: AsyncSession, service: PlaylistService, playlist: Playlist) -> PlaylistResponse:
    videos = await service.get_playlist_videos(playlist.id)
    return PlaylistResponse(
        id=playlist.id,
        name=playlist.name,
        description=playlist.description,
        created_by=playlist.created_by,
        is_public=playlist.is_public,
        videos=await videos_to_response(db, videos),
        created_at=playlist.created_at,
        updated_at=playlist.updated_at,
    )


@router.post("", response_model=PlaylistResponse, status_code=status.HTTP_201_CREATED)
async def create_playlist(
    data: PlaylistCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PlaylistResponse:
    service = PlaylistService(db)
    playlist = await service.create_playlist(current_user.id, data)
    return await _playlist_response(db, service, playlist)


@router.get("", response_model=list[PlaylistResponse])
async def list_playlists(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[PlaylistResponse]:
    """The caller's playlists, newest first."""
    service = PlaylistService(db)
    playlists = await service.get_user_playlists(current_user.id)
    return [await _playlist_response(db, service, playlist) for playlist in playlists]


@router.get("/{playlist_id}", response_model=PlaylistResponse)
async def get_playlist(
    playlist_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PlaylistResponse:
    service = PlaylistService(db)
    playlist = await service.get_playlist(playlist_id, current_user.id)
    return await _playlist_response(db, service, playlist)


@router.delete("/{playlist_id}", response_model=MessageResponse)
async def delete_playlist(
    playlist_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    await PlaylistService(db).delete_playlist(playlist_id, current_user.id)
    return MessageResponse(message="Playlist deleted successfully")


@router.post("/{playlist_id}/videos/{video_id}", response_model=PlaylistResponse)
async def add_video_to_playlist(
    playlist_id: str,
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PlaylistResponse:
    service = PlaylistService(db)
    playlist = await service.add_video(playlist_id, video_id, current_user.id)
    return await _playlist_response(db, service, playlist)


@router.delete("/{playlist_id}/videos/{video_id}", response_model=PlaylistResponse)
async def remove_video_from_playlist(
    playlist_id: str,
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> PlaylistResponse:
    service = PlaylistService(db)
    playlist = await service.remove_video(playlist_id, video_id, current_user.id)
    return await _playlist_response(db, service, playlist)
