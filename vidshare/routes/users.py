"""
User Routes

Per-user lists: watch history, liked videos and watch later.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth import get_current_user
from vidshare.database import get_db
from vidshare.models.user import User
from vidshare.schemas.history import HistoryPageResponse, HistoryVideo
from vidshare.schemas.video import MessageResponse, VideoResponse
from vidshare.services.history_service import HistoryService
from vidshare.services.reaction_service import ReactionService
from vidshare.services.video_service import VideoService, video_to_response, videos_to_response
from vidshare.services.view_service import Viewer, ViewService
from vidshare.services.watch_later_service import WatchLaterService
from vidshare.utils.pagination import PaginationParams

router = APIRouter(tags=["Users"])


# ============== Watch History ==============


@router.get("/history", response_model=HistoryPageResponse)
async def get_history(
    pagination: PaginationParams = Depends(),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> HistoryPageResponse:
    """The caller's watch history, most recent first."""
    page = await HistoryService(db).get_history(current_user.id, pagination.to_request())

    reaction_map = await ReactionService(db).get_reaction_map(list({e.video_id for e in page.entries}))
    history = [
        HistoryVideo(
            **video_to_response(entry.video, *reaction_map[entry.video_id]).model_dump(),
            viewed_at=entry.watched_at,
        )
        for entry in page.entries
    ]

    return HistoryPageResponse(
        history=history,
        total_items=page.total_items,
        total_pages=page.total_pages,
        current_page=page.current_page,
    )


@router.post("/history/{video_id}", response_model=MessageResponse)
async def add_to_history(
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Record a watch explicitly; counts the view the same way a detail fetch does."""
    await ViewService(db).record_view(video_id, Viewer(user_id=current_user.id))
    return MessageResponse(message="Added to watch history")


@router.delete("/history", response_model=MessageResponse)
async def clear_history(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Remove every entry from the caller's watch history."""
    await HistoryService(db).clear_history(current_user.id)
    return MessageResponse(message="Watch history cleared")


# ============== Liked Videos ==============


@router.get("/liked-videos", response_model=list[VideoResponse])
async def get_liked_videos(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[VideoResponse]:
    videos = await VideoService(db).get_liked_videos(current_user.id)
    return await videos_to_response(db, videos)


# ============== Watch Later ==============


@router.get("/watch-later", response_model=list[VideoResponse])
async def get_watch_later(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> list[VideoResponse]:
    videos = await WatchLaterService(db).list_videos(current_user.id)
    return await videos_to_response(db, videos)


@router.post("/watch-later/{video_id}", response_model=MessageResponse, status_code=status.HTTP_200_OK)
async def add_to_watch_later(
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    await WatchLaterService(db).add(current_user.id, video_id)
    return MessageResponse(message="Added to Watch Later")


@router.delete("/watch-later/{video_id}", response_model=MessageResponse)
async def remove_from_watch_later(
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    await WatchLaterService(db).remove(current_user.id, video_id)
    return MessageResponse(message="Removed from Watch Later")
