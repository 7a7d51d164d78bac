# app/models/media.py
"""Media model - catalogue items attributed to a content provider"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class Media(Base):
    __tablename__ = "media"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    duration = Column(Integer, nullable=True)  # in minutes

    # Owner; NULL means unattributed content (never shares in the provider pool)
    provider_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Relationships
    provider = relationship("User", back_populates="provided_media")
    watch_history = relationship("WatchHistory", back_populates="media", cascade="all, delete-orphan")

    def __repr__(self):
        return f"<Media(id={self.id}, title={self.title}, provider_id={self.provider_id})>"
