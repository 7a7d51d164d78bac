# app/api/v1/admin.py
"""Platform-wide analytics and audit trail for admins"""
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session, joinedload
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy import desc
import logging

from ...database import get_db
from ...api.deps import get_current_admin
from ...models.activity_log import ActivityLog
from ...models.user import User
from ...schemas.activity import ActivityLogEntry
from ...schemas.analytics import AdminAnalytics
from ...services.analytics import analytics_service

logger = logging.getLogger(__name__)
router = APIRouter()

ACTIVITY_LOG_LIMIT = 50


@router.get("/analytics", response_model=AdminAnalytics)
def get_admin_analytics(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """
    Revenue summary, subscription activity and every provider's
    performance with allocated revenue
    """
    try:
        return analytics_service.get_admin_analytics(db)
    except SQLAlchemyError as e:
        logger.error(f"❌ Admin analytics error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load admin analytics"
        )


@router.get("/activity-logs", response_model=List[ActivityLogEntry])
def get_activity_logs(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_admin),
):
    """Latest audit entries, newest first, optionally for one user"""
    try:
        query = db.query(ActivityLog).options(joinedload(ActivityLog.user))
        if user_id is not None:
            query = query.filter(ActivityLog.user_id == user_id)

        logs = (
            query.order_by(desc(ActivityLog.created_at), desc(ActivityLog.id))
            .limit(ACTIVITY_LOG_LIMIT)
            .all()
        )

        return [
            ActivityLogEntry(
                id=str(log.id),
                user_id=str(log.user_id),
                user_name=log.user.name if log.user else None,
                phone_number=log.user.phone_number if log.user else None,
                action=log.action,
                details=log.details,
                created_at=log.created_at,
            )
            for log in logs
        ]

    except SQLAlchemyError as e:
        logger.error(f"❌ Admin logs error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load activity logs"
        )
