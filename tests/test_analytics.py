import pytest

from app.models import UserRole
from app.services.analytics import NO_PROVIDER_MEDIA_MESSAGE, analytics_service
from app.services.provider_performance import (
    aggregate_provider_performance,
    compute_provider_performance,
)
from app.services.revenue import compute_revenue_summary
from app.services.subscription_activity import get_subscription_activity
from conftest import (
    LAST_MONTH,
    NOW,
    add_subscription,
    add_transaction,
    add_watch,
    make_media,
    make_plan,
    make_user,
)


@pytest.fixture
def catalogue(db, provider, viewer):
    """Two providers, one idle provider and an unattributed title"""
    other = make_user(db, name="Provider Two", role=UserRole.CONTENT_CREATOR)
    idle = make_user(db, name="Idle Provider", role=UserRole.CONTENT_CREATOR)
    second_viewer = make_user(db, name="Second Viewer")

    drama = make_media(db, provider, title="Drama", duration=90)
    comedy = make_media(db, provider, title="Comedy", duration=45)
    docu = make_media(db, other, title="Docu", duration=60)
    orphan = make_media(db, None, title="Orphan")

    # provider: 30 + 10 lifetime minutes, 30 this month
    add_watch(db, viewer, drama, 1200)
    add_watch(db, second_viewer, drama, 600)
    add_watch(db, viewer, comedy, 600, watched_at=LAST_MONTH)
    # other: 20 lifetime minutes, 10 this month
    add_watch(db, viewer, docu, 600)
    add_watch(db, viewer, docu, 600, watched_at=LAST_MONTH)
    # never attributed to anyone
    add_watch(db, viewer, orphan, 6000)

    add_transaction(db, 600)
    add_transaction(db, 400, created_at=LAST_MONTH)

    return {"other": other, "idle": idle, "drama": drama, "comedy": comedy, "docu": docu}


def test_every_content_creator_is_listed(db, provider, catalogue):
    report = aggregate_provider_performance(db, now=NOW)

    ids = [p.provider_id for p in report.provider_performance]
    assert ids == [str(provider.id), str(catalogue["other"].id), str(catalogue["idle"].id)]

    idle = report.provider_performance[2]
    assert idle.items == []
    assert idle.minutes_consumed == 0


def test_unattributed_media_is_left_out_of_platform_minutes(db, catalogue):
    report = aggregate_provider_performance(db, now=NOW)

    assert report.total_platform_minutes == pytest.approx(60.0)
    assert report.total_platform_monthly_minutes == pytest.approx(40.0)


def test_provider_totals_are_sums_of_items(db, provider, catalogue):
    report = aggregate_provider_performance(db, now=NOW)
    performance = report.provider_performance[0]

    assert performance.provider_name == "Provider One"
    assert performance.minutes_consumed == pytest.approx(40.0)
    assert performance.monthly_minutes == pytest.approx(30.0)
    assert performance.total_views == 3
    assert [item.title for item in performance.items] == ["Drama", "Comedy"]
    assert performance.items[0].duration == 90


def test_provider_unique_views_are_summed_per_item(db, provider, catalogue):
    report = aggregate_provider_performance(db, now=NOW)
    performance = report.provider_performance[0]

    # viewer watched both Drama and Comedy and is counted once per item
    assert [item.unique_views for item in performance.items] == [2, 1]
    assert performance.unique_views == 3


def test_revenue_fields_are_zero_before_allocation(db, catalogue):
    report = aggregate_provider_performance(db, now=NOW)

    for performance in report.provider_performance:
        assert performance.revenue_earned == 0
        for item in performance.items:
            assert item.revenue_earned == 0


def test_compute_provider_performance_allocates_the_pool(db, catalogue):
    revenue = compute_revenue_summary(db, now=NOW)
    report = compute_provider_performance(db, revenue, now=NOW)
    first, second, idle = report.provider_performance

    # pool 500 lifetime / 300 monthly, split 40:20 and 30:10
    assert first.revenue_earned == pytest.approx(500 * 40 / 60)
    assert second.revenue_earned == pytest.approx(500 * 20 / 60)
    assert first.monthly_revenue_earned == pytest.approx(300 * 30 / 40)
    assert second.monthly_revenue_earned == pytest.approx(300 * 10 / 40)
    assert idle.revenue_earned == 0

    drama, comedy = first.items
    assert drama.revenue_earned == pytest.approx(first.revenue_earned * 30 / 40)
    assert comedy.revenue_earned == pytest.approx(first.revenue_earned * 10 / 40)
    assert comedy.monthly_earnings == 0


def test_admin_analytics_bundles_revenue_activity_and_performance(db, catalogue, viewer):
    plan = make_plan(db, type="premium")
    add_subscription(db, viewer, plan)
    add_subscription(db, catalogue["other"], plan, is_active=False)

    result = analytics_service.get_admin_analytics(db, now=NOW)
    payload = result.model_dump(by_alias=True)

    assert payload["revenue"]["totalRevenue"] == 1000
    assert payload["revenue"]["providerShareMonthly"] == 300
    assert payload["userActivity"]["active"] == 1
    assert payload["userActivity"]["inactive"] == 1
    assert len(payload["providerPerformance"]) == 3
    assert payload["providerPerformance"][0]["revenueEarned"] == 333.33
    assert payload["providerPerformance"][1]["monthlyRevenueEarned"] == 75.0


def test_provider_analytics_for_one_provider(db, provider, catalogue):
    result = analytics_service.get_provider_analytics(db, provider.id, now=NOW)
    payload = result.model_dump(by_alias=True)

    assert "message" not in payload
    assert [item["title"] for item in payload["analytics"]] == ["Drama", "Comedy"]
    assert payload["analytics"][0]["id"] == str(catalogue["drama"].id)
    assert payload["providerTotals"] == {
        "providerTotalMinutes": 40.0,
        "providerMonthlyMinutes": 30.0,
        "providerShareTotal": 333.33,
        "providerShareMonthly": 225.0,
    }


def test_provider_without_media_gets_message(db, catalogue):
    result = analytics_service.get_provider_analytics(db, catalogue["idle"].id, now=NOW)

    assert result.analytics == []
    assert result.provider_totals.provider_share_total == 0
    assert result.message == NO_PROVIDER_MEDIA_MESSAGE


def test_unknown_provider_gets_message(db, catalogue):
    result = analytics_service.get_provider_analytics(db, 999, now=NOW)

    assert result.analytics == []
    assert result.message == NO_PROVIDER_MEDIA_MESSAGE


def test_subscription_activity_breakdown(db, viewer, provider):
    mobile = make_plan(db, type="mobile", price=3000)
    premium = make_plan(db, type="premium", price=12000)
    another = make_user(db, name="Another")

    add_subscription(db, viewer, mobile)
    add_subscription(db, another, mobile)
    add_subscription(db, provider, premium)
    add_subscription(db, another, premium, is_active=False)

    activity = get_subscription_activity(db)

    assert activity.active == 3
    assert activity.inactive == 1
    rows = [row.model_dump(by_alias=True) for row in activity.subscription_breakdown]
    assert rows == [
        {"subscription_id": mobile.id, "type": "mobile", "count": 2},
        {"subscription_id": premium.id, "type": "premium", "count": 1},
    ]


def test_subscription_activity_when_empty(db):
    activity = get_subscription_activity(db)

    assert activity.active == 0
    assert activity.inactive == 0
    assert activity.subscription_breakdown == []
