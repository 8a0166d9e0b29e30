"""Watch history log and watch-later list."""

from sqlalchemy import Column, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import relationship

from vidshare.database import Base
from vidshare.models.user import utcnow


class WatchHistoryEntry(Base):
    __tablename__ = "watch_history"

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    # Left dangling (NULL) when the video goes away; pruned on the next history read
    video_id = Column(String(36), ForeignKey("videos.id", ondelete="SET NULL"), nullable=True)
    watched_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    video = relationship("Video", lazy="joined")

    __table_args__ = (Index("idx_watch_history_user_watched", "user_id", "watched_at"),)

    def __repr__(self) -> str:
        return f"<WatchHistoryEntry(user={self.user_id}, video={self.video_id}, at={self.watched_at})>"


class WatchLaterItem(Base):
    __tablename__ = "watch_later"

    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    video_id = Column(String(36), ForeignKey("videos.id", ondelete="CASCADE"), primary_key=True)
    added_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)

    video = relationship("Video", lazy="joined")
