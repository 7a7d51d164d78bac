"""add_revenue_analytics_indexes

Revision ID: 3c9d1e7a42b0
Revises:
Create Date: 2026-10-19 09:12:44.201873

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3c9d1e7a42b0'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

def upgrade():
    # withdrawal balance scans
    op.create_index(
        "ix_activity_logs_user_action",
        "activity_logs",
        ["user_id", "action"],
    )
    # per-media consumption sums, monthly window
    op.create_index(
        "idx_watch_history_media_watched",
        "watch_history",
        ["media_id", "watched_at"],
    )
    op.create_index(
        "idx_watch_history_user_media",
        "watch_history",
        ["user_id", "media_id"],
    )
    op.alter_column("watch_history", "progress",
        existing_type=sa.Integer(),
        nullable=False,
        server_default="0"
    )

def downgrade():
    op.alter_column("watch_history", "progress",
        existing_type=sa.Integer(),
        nullable=True,
        server_default=None
    )
    op.drop_index("idx_watch_history_user_media", table_name="watch_history")
    op.drop_index("idx_watch_history_media_watched", table_name="watch_history")
    op.drop_index("ix_activity_logs_user_action", table_name="activity_logs")
