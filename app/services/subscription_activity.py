from sqlalchemy import func
from sqlalchemy.orm import Session

from ..models.subscription import SubscriptionPlan, UserSubscription
from ..schemas.analytics import SubscriptionActivity, SubscriptionBreakdownRow


def get_subscription_activity(db: Session) -> SubscriptionActivity:
    """Active/inactive subscription counts and active count per plan"""
    active = (
        db.query(func.count(UserSubscription.id))
        .filter(UserSubscription.is_active == True)
        .scalar() or 0
    )
    inactive = (
        db.query(func.count(UserSubscription.id))
        .filter(UserSubscription.is_active == False)
        .scalar() or 0
    )

    breakdown = (
        db.query(
            UserSubscription.subscription_id,
            func.count(UserSubscription.id).label("count"),
        )
        .filter(UserSubscription.is_active == True)
        .group_by(UserSubscription.subscription_id)
        .order_by(UserSubscription.subscription_id)
        .all()
    )

    plan_ids = [row.subscription_id for row in breakdown]
    plans = {
        plan.id: plan
        for plan in db.query(SubscriptionPlan).filter(SubscriptionPlan.id.in_(plan_ids)).all()
    } if plan_ids else {}

    rows = []
    for row in breakdown:
        plan = plans.get(row.subscription_id)
        rows.append(SubscriptionBreakdownRow(
            subscription_id=row.subscription_id,
            type=plan.type if plan else "Unknown",
            count=row.count,
        ))

    return SubscriptionActivity(
        active=active,
        inactive=inactive,
        subscription_breakdown=rows,
    )
