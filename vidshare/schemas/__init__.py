from .channel import ChannelCreate, ChannelResponse, ChannelStatusResponse, ChannelUpdate
from .history import HistoryPageResponse, HistoryVideo
from .playlist import PlaylistCreate, PlaylistResponse
from .user import AuthStatusResponse, LoginResponse, UserCreate, UserLogin, UserResponse
from .video import (
    CreatorSummary,
    MessageResponse,
    ReactionResponse,
    UserVideosResponse,
    VideoCreate,
    VideoCreatedResponse,
    VideoResponse,
)

# Define the public API of this module
__all__ = [
    "AuthStatusResponse",
    "ChannelCreate",
    "ChannelResponse",
    "ChannelStatusResponse",
    "ChannelUpdate",
    "CreatorSummary",
    "HistoryPageResponse",
    "HistoryVideo",
    "LoginResponse",
    "MessageResponse",
    "PlaylistCreate",
    "PlaylistResponse",
    "ReactionResponse",
    "UserCreate",
    "UserLogin",
    "UserResponse",
    "UserVideosResponse",
    "VideoCreate",
    "VideoCreatedResponse",
    "VideoResponse",
]
