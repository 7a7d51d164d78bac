"""
Revenue Summary Calculator
Lifetime and current-month subscription revenue, split between the platform
and the provider pool
"""
import calendar
import logging
from datetime import datetime
from typing import Optional, Tuple

import pytz
from sqlalchemy import func
from sqlalchemy.orm import Session

from ..config import settings
from ..models.transaction import Transaction
from ..schemas.analytics import RevenueSummary

logger = logging.getLogger(__name__)

# Fixed business rule: half of all revenue is retained, half goes to providers
ADMIN_SHARE_RATIO = 0.5
PROVIDER_SHARE_RATIO = 1 - ADMIN_SHARE_RATIO


def localize(moment: datetime) -> datetime:
    """
    Timezone-aware moment in the analytics zone.
    Naive values are read as wall-clock time in that zone; aware values are
    converted. Without ANALYTICS_TIMEZONE the host's local zone is used.
    """
    if settings.ANALYTICS_TIMEZONE:
        tz = pytz.timezone(settings.ANALYTICS_TIMEZONE)
        if moment.tzinfo is None:
            return tz.localize(moment)
        return moment.astimezone(tz)
    return moment.astimezone()


def current_time() -> datetime:
    """Current time in the analytics zone, always timezone-aware"""
    return localize(datetime.now(pytz.utc))


def start_of_month(now: datetime) -> datetime:
    return now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def end_of_month(now: datetime) -> datetime:
    last_day = calendar.monthrange(now.year, now.month)[1]
    return now.replace(day=last_day, hour=23, minute=59, second=59, microsecond=999000)


def month_window(now: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Inclusive [first day 00:00:00, last day 23:59:59.999] of now's month in
    the analytics zone, as aware instants so the database compares them
    against stored timestamps regardless of its session timezone.
    """
    wall_clock = (localize(now) if now is not None else current_time()).replace(tzinfo=None)
    # Bounds are localized separately so each carries its own DST offset
    return localize(start_of_month(wall_clock)), localize(end_of_month(wall_clock))


def compute_revenue_summary(db: Session, now: Optional[datetime] = None) -> RevenueSummary:
    """
    Sum every transaction, and those inside the current month, then split both
    totals between admin share and provider pool.
    """
    month_start, month_end = month_window(now)

    total_revenue = db.query(func.coalesce(func.sum(Transaction.amount), 0)).scalar()
    monthly_revenue = (
        db.query(func.coalesce(func.sum(Transaction.amount), 0))
        .filter(Transaction.created_at >= month_start)
        .filter(Transaction.created_at <= month_end)
        .scalar()
    )

    total_revenue = float(total_revenue or 0)
    monthly_revenue = float(monthly_revenue or 0)

    logger.debug(
        f"💰 Revenue {settings.CURRENCY} total={total_revenue:,.2f} monthly={monthly_revenue:,.2f} "
        f"window={month_start.date()}..{month_end.date()}"
    )

    return RevenueSummary(
        total_revenue=total_revenue,
        monthly_revenue=monthly_revenue,
        admin_share_total=total_revenue * ADMIN_SHARE_RATIO,
        admin_share_monthly=monthly_revenue * ADMIN_SHARE_RATIO,
        provider_share_total=total_revenue * PROVIDER_SHARE_RATIO,
        provider_share_monthly=monthly_revenue * PROVIDER_SHARE_RATIO,
    )
