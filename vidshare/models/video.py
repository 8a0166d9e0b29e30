"""
Video Models

A video's ``likes``/``dislikes`` sets live in ``video_reactions`` (one row
per video and user, so a user can never be in both sets) and its
``viewedBy`` set lives in ``video_viewers``.
"""

import enum

from sqlalchemy import (
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from vidshare.database import Base
from vidshare.models.user import utcnow
from vidshare.utils.identity import new_id


class ReactionType(str, enum.Enum):
    """Reaction types for videos."""

    LIKE = "like"
    DISLIKE = "dislike"

    @property
    def opposite(self) -> "ReactionType":
        return ReactionType.DISLIKE if self is ReactionType.LIKE else ReactionType.LIKE


class Video(Base):
    __tablename__ = "videos"

    id = Column(String(36), primary_key=True, default=new_id)
    title = Column(String(200), nullable=False)
    description = Column(Text, default="", nullable=False)
    video_url = Column(String, nullable=False)
    thumbnail_url = Column(String, default="", nullable=False)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=True, index=True)
    views = Column(Integer, default=0, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    creator = relationship("User", back_populates="videos", lazy="joined")

    __table_args__ = (Index("idx_videos_created_at", "created_at"),)

    def __repr__(self) -> str:
        return f"<Video(id={self.id}, title={self.title!r}, views={self.views})>"


class VideoReaction(Base):
    """
    Reaction on a video (like or dislike).

    Each user can have at most one reaction per video.
    """

    __tablename__ = "video_reactions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    video_id = Column(String(36), ForeignKey("videos.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    reaction_type = Column(Enum(ReactionType), nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    __table_args__ = (UniqueConstraint("video_id", "user_id", name="uq_video_reaction_user"),)

    def __repr__(self) -> str:
        return f"<VideoReaction(video={self.video_id}, user={self.user_id}, type={self.reaction_type})>"


class VideoViewer(Base):
    """Identified viewer whose first fetch of a video was counted."""

    __tablename__ = "video_viewers"

    video_id = Column(String(36), ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True, index=True)
    first_viewed_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
