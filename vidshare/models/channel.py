"""Channel model: one per user, required before publishing videos."""

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from vidshare.database import Base
from vidshare.models.user import utcnow
from vidshare.utils.identity import new_id


class Channel(Base):
    __tablename__ = "channels"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    name = Column(String(100), nullable=False)
    description = Column(Text, default="", nullable=False)
    banner = Column(String, default="", nullable=False)
    subscribers = Column(Integer, default=0, nullable=False)
    is_verified = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    owner = relationship("User", back_populates="channel", lazy="joined")

    def __repr__(self) -> str:
        return f"<Channel(id={self.id}, user={self.user_id}, name={self.name})>"
