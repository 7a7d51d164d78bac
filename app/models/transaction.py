"""
Transaction Model
Completed subscription payments (mobile money). Rows are immutable once written
"""
from sqlalchemy import Column, Integer, String, Numeric, DateTime, Enum as SQLEnum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from enum import Enum
from ..database import Base


# ==================== ENUMS ====================

class PaymentProvider(str, Enum):
    """Payment provider options"""
    MPESA = "mpesa"
    TIGOPESA = "tigopesa"
    AIRTEL_MONEY = "airtel_money"
    HALOPESA = "halopesa"
    CARD = "card"


# ==================== TRANSACTION MODEL ====================

class Transaction(Base):
    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)

    # Payment Amount
    amount = Column(Numeric(12, 2), nullable=False)
    currency = Column(String(3), default='TZS', nullable=False)

    # Payment Method Details
    payment_provider = Column(
        SQLEnum(
            PaymentProvider,
            name="payment_provider_type",
            values_callable=lambda obj: [e.value for e in obj],
        ),
        nullable=True,
    )
    reference = Column(String(255), nullable=True, index=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True, nullable=False)

    # ==================== RELATIONSHIPS ====================

    user = relationship("User", back_populates="transactions")

    def __repr__(self):
        return f"<Transaction(id={self.id}, amount={self.amount}, created_at={self.created_at})>"
