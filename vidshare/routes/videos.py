"""
Video Routes

Catalogue endpoints plus the two mutation paths on a video: view
accounting on detail fetches, and like/dislike toggles.
"""

from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from vidshare.auth import get_current_user, get_optional_user
from vidshare.database import get_db
from vidshare.middleware.logging import get_client_ip
from vidshare.models.user import User
from vidshare.schemas.video import (
    MessageResponse,
    ReactionResponse,
    UserVideosResponse,
    VideoCreate,
    VideoCreatedResponse,
    VideoResponse,
)
from vidshare.services.reaction_service import ReactionService
from vidshare.services.video_service import VideoService, videos_to_response
from vidshare.services.view_service import Viewer, ViewService
from vidshare.utils.session import ViewSessionStore, get_view_session_store

router = APIRouter(tags=["Videos"])


@router.get("", response_model=list[VideoResponse])
async def list_videos(db: AsyncSession = Depends(get_db)) -> list[VideoResponse]:
    """All videos, newest first."""
    videos = await VideoService(db).list_videos()
    return await videos_to_response(db, videos)


@router.post("", response_model=VideoCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_video(
    data: VideoCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> VideoCreatedResponse:
    """
    Publish a video from already hosted media URLs.

    The caller must own a channel.
    """
    video = await VideoService(db).create_video(current_user.id, data)
    [response] = await videos_to_response(db, [video])
    return VideoCreatedResponse(message="Video uploaded successfully", new_video=response)


@router.get("/user/videos", response_model=UserVideosResponse)
async def get_user_videos(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> UserVideosResponse:
    """Videos uploaded by the caller."""
    videos = await VideoService(db).get_user_videos(current_user.id)
    return UserVideosResponse(videos=await videos_to_response(db, videos), has_channel=True)


@router.get("/{video_id}", response_model=VideoResponse)
async def get_video(
    video_id: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    current_user: User | None = Depends(get_optional_user),
    session_store: ViewSessionStore = Depends(get_view_session_store),
) -> VideoResponse:
    """
    Video detail.

    Counts the caller's first view of the video and, for signed-in callers,
    appends a watch-history entry.
    """
    if current_user is not None:
        viewer = Viewer(user_id=current_user.id)
    else:
        viewer = Viewer(client=get_client_ip(request))

    await ViewService(db, session_store).record_view(video_id, viewer)

    video = await VideoService(db).get_video(video_id)
    [response] = await videos_to_response(db, [video])
    return response


@router.put("/{video_id}/like", response_model=ReactionResponse)
async def like_video(
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReactionResponse:
    """Toggle the caller's like on a video."""
    user_id = current_user.id
    result = await ReactionService(db).like(video_id, user_id)
    return ReactionResponse(message=result.message, likes=result.likes, dislikes=result.dislikes)


@router.put("/{video_id}/dislike", response_model=ReactionResponse)
async def dislike_video(
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> ReactionResponse:
    """Toggle the caller's dislike on a video."""
    user_id = current_user.id
    result = await ReactionService(db).dislike(video_id, user_id)
    return ReactionResponse(message=result.message, likes=result.likes, dislikes=result.dislikes)


@router.get("/{video_id}/recommended", response_model=list[VideoResponse])
async def get_recommended_videos(video_id: str, db: AsyncSession = Depends(get_db)) -> list[VideoResponse]:
    """Videos to watch next."""
    videos = await VideoService(db).get_recommended(video_id)
    return await videos_to_response(db, videos)


@router.delete("/{video_id}", response_model=MessageResponse)
async def delete_video(
    video_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> MessageResponse:
    """Delete one of the caller's videos."""
    await VideoService(db).delete_video(video_id, current_user.id)
    return MessageResponse(message="Video deleted successfully")
