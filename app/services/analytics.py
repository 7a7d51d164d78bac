"""
Analytics views
Platform-wide report for admins and the per-provider dashboard
"""
import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ..schemas.analytics import AdminAnalytics, ProviderAnalytics, ProviderTotals
from .provider_performance import compute_provider_performance
from .revenue import compute_revenue_summary
from .subscription_activity import get_subscription_activity

logger = logging.getLogger(__name__)

NO_PROVIDER_MEDIA_MESSAGE = "No media found for this provider (ensure media.provider_id exists)."


class AnalyticsService:

    def get_admin_analytics(self, db: Session, now: Optional[datetime] = None) -> AdminAnalytics:
        """Revenue summary, subscription activity and allocated provider performance"""
        revenue = compute_revenue_summary(db, now)
        user_activity = get_subscription_activity(db)
        report = compute_provider_performance(db, revenue, now)

        logger.info(
            f"📊 Admin analytics: revenue={revenue.total_revenue:,.2f}, "
            f"providers={len(report.provider_performance)}"
        )

        return AdminAnalytics(
            revenue=revenue,
            user_activity=user_activity,
            provider_performance=report.provider_performance,
        )

    def get_provider_analytics(
        self,
        db: Session,
        provider_id: int,
        now: Optional[datetime] = None,
    ) -> ProviderAnalytics:
        """
        One provider's items and totals.

        Shares depend on platform-wide minutes, so the whole platform is
        computed and then filtered. A provider that is unknown or owns no
        media gets an empty result with a message, not an error.
        """
        revenue = compute_revenue_summary(db, now)
        report = compute_provider_performance(db, revenue, now)

        provider = next(
            (p for p in report.provider_performance if p.provider_id == str(provider_id)),
            None,
        )

        if provider is None or not provider.items:
            logger.info(f"ℹ️ No attributable media for provider {provider_id}")
            return ProviderAnalytics(
                analytics=[],
                provider_totals=ProviderTotals(),
                message=NO_PROVIDER_MEDIA_MESSAGE,
            )

        return ProviderAnalytics(
            analytics=provider.items,
            provider_totals=ProviderTotals(
                provider_total_minutes=provider.minutes_consumed,
                provider_monthly_minutes=provider.monthly_minutes,
                provider_share_total=provider.revenue_earned,
                provider_share_monthly=provider.monthly_revenue_earned,
            ),
        )


# Singleton instance
analytics_service = AnalyticsService()
