from app.database import Base
from app.models.user import User, UserRole
from app.models.media import Media
from app.models.watch_history import WatchHistory
from app.models.transaction import Transaction, PaymentProvider
from app.models.subscription import SubscriptionPlan, UserSubscription
from app.models.activity_log import ActivityLog

# This ensures all models are registered with Base.metadata
__all__ = [
    "Base", "User", "UserRole", "Media", "WatchHistory", "Transaction",
    "PaymentProvider", "SubscriptionPlan", "UserSubscription", "ActivityLog"
]
