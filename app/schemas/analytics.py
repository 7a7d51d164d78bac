"""
Analytics payloads.
Field names are snake_case in Python and camelCase on the wire; minute and
currency figures are held unrounded and rounded once when serialised.
"""
from pydantic import BaseModel, ConfigDict, Field, field_serializer, model_serializer
from pydantic.alias_generators import to_camel
from typing import List, Optional

from ..utils.money import round_money


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ==================== Revenue ====================

class RevenueSummary(CamelModel):
    total_revenue: float = 0.0
    monthly_revenue: float = 0.0
    admin_share_total: float = 0.0
    admin_share_monthly: float = 0.0
    provider_share_total: float = 0.0
    provider_share_monthly: float = 0.0


class RevenueTotal(CamelModel):
    total_revenue: float = 0.0


# ==================== Consumption ====================

class MediaStats(CamelModel):
    total_views: int = 0
    unique_views: int = 0
    minutes_consumed: float = 0.0
    monthly_minutes: float = 0.0


class ProviderItemAnalytics(CamelModel):
    id: str
    title: str
    duration: Optional[int] = None
    total_views: int = 0
    unique_views: int = 0
    minutes_consumed: float = 0.0
    monthly_minutes: float = 0.0
    revenue_earned: float = 0.0
    monthly_earnings: float = 0.0

    @field_serializer("minutes_consumed", "monthly_minutes", "revenue_earned", "monthly_earnings")
    def _round(self, value: float) -> float:
        return round_money(value)


class ProviderPerformance(CamelModel):
    provider_id: str
    provider_name: Optional[str] = None
    provider_email: Optional[str] = None
    total_views: int = 0
    unique_views: int = 0  # sum of per-item unique viewers, not deduplicated
    minutes_consumed: float = 0.0
    monthly_minutes: float = 0.0
    revenue_earned: float = 0.0
    monthly_revenue_earned: float = 0.0
    items: List[ProviderItemAnalytics] = Field(default_factory=list)

    @field_serializer("minutes_consumed", "monthly_minutes", "revenue_earned", "monthly_revenue_earned")
    def _round(self, value: float) -> float:
        return round_money(value)


class PerformanceReport(CamelModel):
    provider_performance: List[ProviderPerformance] = Field(default_factory=list)
    total_platform_minutes: float = 0.0
    total_platform_monthly_minutes: float = 0.0


# ==================== Subscription activity ====================

class SubscriptionBreakdownRow(CamelModel):
    subscription_id: int = Field(alias="subscription_id")
    type: str
    count: int


class SubscriptionActivity(CamelModel):
    active: int = 0
    inactive: int = 0
    subscription_breakdown: List[SubscriptionBreakdownRow] = Field(default_factory=list)


# ==================== Views ====================

class AdminAnalytics(CamelModel):
    revenue: RevenueSummary
    user_activity: SubscriptionActivity
    provider_performance: List[ProviderPerformance]


class ProviderTotals(CamelModel):
    provider_total_minutes: float = 0.0
    provider_monthly_minutes: float = 0.0
    provider_share_total: float = 0.0
    provider_share_monthly: float = 0.0

    @field_serializer("*")
    def _round(self, value: float) -> float:
        return round_money(value)


class ProviderAnalytics(CamelModel):
    analytics: List[ProviderItemAnalytics] = Field(default_factory=list)
    provider_totals: ProviderTotals = Field(default_factory=ProviderTotals)
    message: Optional[str] = None

    @model_serializer(mode="wrap")
    def _drop_empty_message(self, handler):
        data = handler(self)
        if self.message is None:
            data.pop("message", None)
        return data
