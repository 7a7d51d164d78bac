"""
Media Consumption Aggregator
"""
from datetime import datetime

from sqlalchemy import and_, case, func
from sqlalchemy.orm import Session

from ..models.watch_history import WatchHistory
from ..schemas.analytics import MediaStats

SECONDS_PER_MINUTE = 60


def compute_media_stats(
    db: Session,
    media_id: int,
    month_start: datetime,
    month_end: datetime,
) -> MediaStats:
    """
    Views, distinct viewers and minutes for one media item.

    - total_views counts checkpoint rows, not sessions
    - minutes are sum(progress) / 60 over every checkpoint row, so repeated
      pings from one playback each contribute their cumulative position
    - monthly_minutes restricts the same sum to watched_at within the window
    """
    in_window = and_(
        WatchHistory.watched_at >= month_start,
        WatchHistory.watched_at <= month_end,
    )

    total_views, unique_views, total_progress, monthly_progress = (
        db.query(
            func.count(WatchHistory.id),
            func.count(func.distinct(WatchHistory.user_id)),
            func.coalesce(func.sum(WatchHistory.progress), 0),
            func.coalesce(func.sum(case((in_window, WatchHistory.progress), else_=0)), 0),
        )
        .filter(WatchHistory.media_id == media_id)
        .one()
    )

    total_progress = float(total_progress or 0)
    monthly_progress = float(monthly_progress or 0)

    return MediaStats(
        total_views=int(total_views or 0),
        unique_views=int(unique_views or 0),
        minutes_consumed=total_progress / SECONDS_PER_MINUTE if total_progress > 0 else 0.0,
        monthly_minutes=monthly_progress / SECONDS_PER_MINUTE if monthly_progress > 0 else 0.0,
    )
