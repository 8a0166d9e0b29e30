from .channel import Channel
from .playlist import Playlist, PlaylistVideo
from .user import User
from .video import ReactionType, Video, VideoReaction, VideoViewer
from .watch_history import WatchHistoryEntry, WatchLaterItem

__all__ = [
    "Channel",
    "Playlist",
    "PlaylistVideo",
    "ReactionType",
    "User",
    "Video",
    "VideoReaction",
    "VideoViewer",
    "WatchHistoryEntry",
    "WatchLaterItem",
]
