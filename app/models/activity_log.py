from sqlalchemy import Column, Integer, String, Text, DateTime, ForeignKey, Index
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
from ..database import Base


class ActivityLog(Base):
    """
    Append-only audit trail.
    Provider withdrawals live here as action=PROVIDER_WITHDRAWAL rows whose
    details carry "amount=<decimal>"; balances are derived by re-summing them.
    """
    __tablename__ = "activity_logs"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    action = Column(String(100), nullable=False)
    details = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    user = relationship("User", back_populates="activity_logs")

    __table_args__ = (
        Index('ix_activity_logs_user_action', 'user_id', 'action'),
    )

    def __repr__(self):
        return f"<ActivityLog(id={self.id}, user_id={self.user_id}, action={self.action})>"
