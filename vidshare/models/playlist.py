from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from vidshare.database import Base
from vidshare.models.user import utcnow
from vidshare.utils.identity import new_id


class Playlist(Base):
    __tablename__ = "playlists"

    id = Column(String(36), primary_key=True, default=new_id)
    name = Column(String(200), nullable=False)
    description = Column(Text, default="", nullable=False)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    is_public = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    def __repr__(self) -> str:
        return f"<Playlist(id={self.id}, name={self.name!r})>"


class PlaylistVideo(Base):
    __tablename__ = "playlist_videos"

    playlist_id = Column(String(36), ForeignKey("playlists.id", ondelete="CASCADE"), primary_key=True)
    video_id = Column(String(36), ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    added_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    video = relationship("Video", lazy="joined")
