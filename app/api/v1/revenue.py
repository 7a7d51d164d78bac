# app/api/v1/revenue.py
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ...database import get_db
from ...api.deps import get_current_admin
from ...models.user import User
from ...schemas.analytics import RevenueSummary, RevenueTotal
from ...services.revenue import compute_revenue_summary

logger = logging.getLogger(__name__)
router = APIRouter()


@router.get("", response_model=RevenueTotal)
def get_total_revenue(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """Lifetime transaction revenue"""
    try:
        summary = compute_revenue_summary(db)
        return RevenueTotal(total_revenue=summary.total_revenue)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error fetching total revenue: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch total revenue"
        )


@router.get("/summary", response_model=RevenueSummary)
def get_revenue_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """Lifetime and current-month revenue with the admin / provider split"""
    try:
        return compute_revenue_summary(db)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error fetching revenue summary: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to fetch revenue summary"
        )
