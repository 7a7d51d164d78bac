"""
Revenue Allocator
Distributes the provider pool across providers by their share of platform
minutes, then inside each provider across its items by their share of the
provider's minutes.

Pure computation over already-aggregated figures. Nothing is rounded here;
rounding happens once when the payload is serialised, so the two stages do
not compound rounding error.
"""
from ..schemas.analytics import (
    PerformanceReport,
    ProviderItemAnalytics,
    ProviderPerformance,
    RevenueSummary,
)


def proportional_share(pool: float, part: float, whole: float) -> float:
    """pool * part / whole, or 0 when there is nothing to divide by"""
    if whole <= 0:
        return 0.0
    return pool * (part / whole)


def allocate_item(
    item: ProviderItemAnalytics,
    provider: ProviderPerformance,
    provider_share: float,
    provider_monthly_share: float,
) -> ProviderItemAnalytics:
    return item.model_copy(update={
        "revenue_earned": proportional_share(
            provider_share, item.minutes_consumed, provider.minutes_consumed
        ),
        "monthly_earnings": proportional_share(
            provider_monthly_share, item.monthly_minutes, provider.monthly_minutes
        ),
    })


def allocate_provider(
    provider: ProviderPerformance,
    revenue: RevenueSummary,
    total_platform_minutes: float,
    total_platform_monthly_minutes: float,
) -> ProviderPerformance:
    provider_share = proportional_share(
        revenue.provider_share_total, provider.minutes_consumed, total_platform_minutes
    )
    provider_monthly_share = proportional_share(
        revenue.provider_share_monthly, provider.monthly_minutes, total_platform_monthly_minutes
    )

    items = [
        allocate_item(item, provider, provider_share, provider_monthly_share)
        for item in provider.items
    ]

    return provider.model_copy(update={
        "revenue_earned": provider_share,
        "monthly_revenue_earned": provider_monthly_share,
        "items": items,
    })


def allocate_revenue(revenue: RevenueSummary, report: PerformanceReport) -> PerformanceReport:
    """
    Populate revenue_earned / monthly_revenue_earned per provider and
    revenue_earned / monthly_earnings per item.

    With zero platform minutes everybody gets exactly 0.
    """
    providers = [
        allocate_provider(
            provider,
            revenue,
            report.total_platform_minutes,
            report.total_platform_monthly_minutes,
        )
        for provider in report.provider_performance
    ]

    return report.model_copy(update={"provider_performance": providers})
