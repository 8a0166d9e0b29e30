from datetime import datetime, timezone

from sqlalchemy import Boolean, Column, DateTime, String
from sqlalchemy.orm import relationship

from vidshare.database import Base
from vidshare.utils.identity import new_id


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=new_id)
    username = Column(String(50), unique=True, index=True, nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String, nullable=False)
    profile_pic = Column(String, default="", nullable=False)
    has_channel = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow, nullable=False)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow, nullable=False)

    channel = relationship("Channel", back_populates="owner", uselist=False, passive_deletes=True)
    videos = relationship("Video", back_populates="creator", passive_deletes=True)

    def __repr__(self) -> str:
        return f"<User(id={self.id}, username={self.username})>"
