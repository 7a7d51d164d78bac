from sqlalchemy import Column, Integer, DateTime, ForeignKey, Boolean, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class WatchHistory(Base):
    """
    Playback checkpoints.
    One row per tracked progress ping, each holding the cumulative position
    in seconds. Rows are append-only.
    """
    __tablename__ = "watch_history"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    media_id = Column(Integer, ForeignKey("media.id", ondelete="CASCADE"), nullable=False, index=True)

    progress = Column(Integer, default=0, server_default="0", nullable=False)  # seconds
    completed = Column(Boolean, default=False)

    watched_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    user = relationship("User", back_populates="watch_history")
    media = relationship("Media", back_populates="watch_history")

    __table_args__ = (
        Index('idx_watch_history_media_watched', 'media_id', 'watched_at'),
        Index('idx_watch_history_user_media', 'user_id', 'media_id'),
    )
