"""
Playback checkpoint recording
"""
import logging
from typing import Optional

from sqlalchemy import desc
from sqlalchemy.orm import Session

from ..models.watch_history import WatchHistory

logger = logging.getLogger(__name__)


def latest_checkpoint(db: Session, user_id: int, media_id: int) -> Optional[WatchHistory]:
    return (
        db.query(WatchHistory)
        .filter(
            WatchHistory.user_id == user_id,
            WatchHistory.media_id == media_id,
        )
        .order_by(desc(WatchHistory.watched_at), desc(WatchHistory.id))
        .first()
    )


def record_watch_progress(
    db: Session,
    user_id: int,
    media_id: int,
    progress_seconds: float = 0,
    completed: bool = False,
) -> bool:
    """
    Append a checkpoint unless it would move backwards from the user's
    latest one for this media. The raw value is compared; what is stored
    is clamped to whole non-negative seconds. Returns True when a row was
    written.
    """
    requested = progress_seconds or 0

    previous = latest_checkpoint(db, user_id, media_id)
    if previous is not None and requested < (previous.progress or 0):
        logger.debug(
            f"⏪ Ignored regressing checkpoint: user {user_id} media {media_id} "
            f"{requested}s < {previous.progress}s"
        )
        return False

    progress = max(int(requested), 0)

    try:
        db.add(WatchHistory(
            user_id=user_id,
            media_id=media_id,
            progress=progress,
            completed=bool(completed),
        ))
        db.commit()
    except Exception:
        db.rollback()
        raise

    return True
