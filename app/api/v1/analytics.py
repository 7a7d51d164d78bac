# app/api/v1/analytics.py
"""Provider dashboards and playback tracking"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from sqlalchemy.exc import SQLAlchemyError
import logging

from ...database import get_db
from ...api.deps import get_current_user
from ...models.media import Media
from ...models.user import User
from ...schemas.activity import TrackRequest
from ...schemas.analytics import ProviderAnalytics
from ...services.analytics import analytics_service
from ...services.watch_tracking import record_watch_progress

logger = logging.getLogger(__name__)
router = APIRouter()


def parse_id(value, label: str) -> int:
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"invalid {label}"
        )


# ==================== PROVIDER ANALYTICS ====================

@router.get("/provider/{provider_id}", response_model=ProviderAnalytics)
def get_provider_analytics(
    provider_id: str,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Per-item views, minutes and revenue share for one provider.

    Admins may read any provider; a provider may read only their own.
    A provider with no media gets an empty list and a message (200).
    """
    provider_id_num = parse_id(provider_id, "providerId")

    if not current_user.is_admin() and current_user.id != provider_id_num:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not enough permissions"
        )

    try:
        return analytics_service.get_provider_analytics(db, provider_id_num)
    except SQLAlchemyError as e:
        logger.error(f"❌ Error computing analytics for provider {provider_id_num}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error while computing analytics."
        )


# ==================== TRACKING ====================

@router.post("/track")
def track_view(
    payload: TrackRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """
    Record a playback checkpoint for the current user.
    Checkpoints behind the user's latest position are dropped.
    """
    if payload.media_id is None or str(payload.media_id).strip() == "":
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="mediaId is required."
        )
    media_id = parse_id(payload.media_id, "mediaId")

    try:
        if db.query(Media.id).filter(Media.id == media_id).first() is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Media not found"
            )

        record_watch_progress(
            db,
            user_id=current_user.id,
            media_id=media_id,
            progress_seconds=payload.progress_seconds or 0,
            completed=bool(payload.completed),
        )
        return {"status": "tracked"}

    except HTTPException:
        raise
    except SQLAlchemyError as e:
        logger.error(f"❌ Track analytics error: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to track view."
        )
