"""
User model
Providers (content creators) are users holding the ContentCreator role
"""
from sqlalchemy import Column, Integer, String, Boolean, DateTime, Enum as SQLEnum
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum
from ..database import Base


# ==================== ENUMS ====================

class UserRole(str, Enum):
    """User role enumeration"""
    ADMIN = "Admin"
    CONTENT_CREATOR = "ContentCreator"
    CLIENT = "Client"


# ==================== USER MODEL ====================

class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)

    # Basic Info
    name = Column(String(255), nullable=True)
    email = Column(String(255), unique=True, index=True, nullable=True)
    phone_number = Column(String(20), unique=True, index=True, nullable=True)

    # Role & Status
    role = Column(
        SQLEnum(
            UserRole,
            name="user_role",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        default=UserRole.CLIENT,
        index=True,
        nullable=False,
    )
    is_active = Column(Boolean, default=True, index=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)

    # ==================== RELATIONSHIPS ====================

    provided_media = relationship(
        "Media",
        back_populates="provider",
        order_by="Media.id",
    )
    watch_history = relationship("WatchHistory", back_populates="user", cascade="all, delete-orphan")
    transactions = relationship("Transaction", back_populates="user")
    subscriptions = relationship("UserSubscription", back_populates="user", cascade="all, delete-orphan")
    activity_logs = relationship("ActivityLog", back_populates="user")

    # ==================== METHODS ====================

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, role={self.role})>"

    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def is_content_creator(self) -> bool:
        return self.role == UserRole.CONTENT_CREATOR
