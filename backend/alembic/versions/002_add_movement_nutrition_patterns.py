"""Add movement logs, nutrition tasks and user patterns

Revision ID: 002
Revises: 001
Create Date: 2024-06-15 00:00:00.000000+00:00

What:  Tables behind /api/movement, /api/nutrition/tasks and
       /api/user/patterns.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _user_fk(unique: bool = False) -> sa.Column:
    return sa.Column(
        "user_id",
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        unique=unique,
    )


def upgrade() -> None:
    op.create_table(
        "movement_logs",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        _user_fk(),
        sa.Column("activity_type", sa.String(50), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=True),
        sa.Column("video_id", sa.String(255), nullable=True),
        sa.Column(
            "completed_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index(
        "idx_movement_logs_user_completed", "movement_logs", ["user_id", "completed_at"]
    )

    op.create_table(
        "nutrition_tasks",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        _user_fk(),
        sa.Column("task_description", sa.Text(), nullable=False),
        sa.Column("completed", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("completed_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
    )
    op.create_index("idx_nutrition_tasks_user_date", "nutrition_tasks", ["user_id", "date"])

    op.create_table(
        "user_patterns",
        sa.Column("id", sa.Uuid(), nullable=False, primary_key=True),
        _user_fk(unique=True),
        sa.Column("pattern_data", JSONType, nullable=True),
        sa.Column(
            "last_updated",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.text("CURRENT_TIMESTAMP"),
        ),
    )


def downgrade() -> None:
    op.drop_table("user_patterns")
    op.drop_index("idx_nutrition_tasks_user_date", table_name="nutrition_tasks")
    op.drop_table("nutrition_tasks")
    op.drop_index("idx_movement_logs_user_completed", table_name="movement_logs")
    op.drop_table("movement_logs")
