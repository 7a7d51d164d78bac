"""
Provider Performance Aggregator
Rolls per-item consumption up to every content provider and accumulates the
platform-wide minute totals used as allocation denominators.
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session, selectinload

from ..models.user import User, UserRole
from ..schemas.analytics import (
    PerformanceReport,
    ProviderItemAnalytics,
    ProviderPerformance,
    RevenueSummary,
)
from .media_stats import compute_media_stats
from .revenue import month_window
from .revenue_allocator import allocate_revenue

logger = logging.getLogger(__name__)


def list_providers(db: Session) -> List[User]:
    """Every ContentCreator with their media, including providers with none"""
    return (
        db.query(User)
        .options(selectinload(User.provided_media))
        .filter(User.role == UserRole.CONTENT_CREATOR)
        .order_by(User.id)
        .all()
    )


def aggregate_provider(
    db: Session,
    provider: User,
    month_start: datetime,
    month_end: datetime,
) -> ProviderPerformance:
    items = []
    minutes = 0.0
    monthly_minutes = 0.0
    views = 0
    unique_views = 0

    for media in provider.provided_media:
        stats = compute_media_stats(db, media.id, month_start, month_end)

        minutes += stats.minutes_consumed
        monthly_minutes += stats.monthly_minutes
        views += stats.total_views
        # Per-item distinct viewers summed as-is: one person watching two
        # items of the same provider counts twice here
        unique_views += stats.unique_views

        items.append(ProviderItemAnalytics(
            id=str(media.id),
            title=media.title,
            duration=media.duration,
            total_views=stats.total_views,
            unique_views=stats.unique_views,
            minutes_consumed=stats.minutes_consumed,
            monthly_minutes=stats.monthly_minutes,
        ))

    return ProviderPerformance(
        provider_id=str(provider.id),
        provider_name=provider.name,
        provider_email=provider.email,
        total_views=views,
        unique_views=unique_views,
        minutes_consumed=minutes,
        monthly_minutes=monthly_minutes,
        items=items,
    )


def aggregate_provider_performance(db: Session, now: Optional[datetime] = None) -> PerformanceReport:
    """
    First pass: consumption figures only, every revenue field left at zero.
    Allocation needs the platform totals, so it runs afterwards.
    """
    month_start, month_end = month_window(now)

    providers = []
    total_platform_minutes = 0.0
    total_platform_monthly_minutes = 0.0

    for provider in list_providers(db):
        performance = aggregate_provider(db, provider, month_start, month_end)
        total_platform_minutes += performance.minutes_consumed
        total_platform_monthly_minutes += performance.monthly_minutes
        providers.append(performance)

    logger.debug(
        f"📊 Aggregated {len(providers)} providers: "
        f"{total_platform_minutes:,.1f} min lifetime, "
        f"{total_platform_monthly_minutes:,.1f} min this month"
    )

    return PerformanceReport(
        provider_performance=providers,
        total_platform_minutes=total_platform_minutes,
        total_platform_monthly_minutes=total_platform_monthly_minutes,
    )


def compute_provider_performance(
    db: Session,
    revenue_summary: RevenueSummary,
    now: Optional[datetime] = None,
) -> PerformanceReport:
    """Aggregate consumption for every provider, then split the provider pool"""
    report = aggregate_provider_performance(db, now)
    return allocate_revenue(revenue_summary, report)
