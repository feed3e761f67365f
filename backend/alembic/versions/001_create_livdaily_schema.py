"""Create LivDaily schema

Revision ID: 001
Revises: None
Create Date: 2024-06-01 00:00:00.000000+00:00

What:  Creates every table the API uses: accounts (users, sessions,
       subscriptions, profiles), the daily wellness logs and the curated
       mindfulness and motivation content.
How:   Generic Uuid/JSON types so the same migration runs on PostgreSQL
       (native UUID, JSONB) and SQLite.

Rollback: downgrade() drops all tables in reverse dependency order.
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

JSONType = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def _id() -> sa.Column:
    return sa.Column("id", sa.Uuid(), nullable=False, primary_key=True)


def _user_fk() -> sa.Column:
    return sa.Column(
        "user_id",
        sa.Uuid(),
        sa.ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )


def _timestamp(name: str) -> sa.Column:
    return sa.Column(
        name,
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.text("CURRENT_TIMESTAMP"),
    )


def upgrade() -> None:
    # ── Accounts ──────────────────────────────────────────────────────────
    op.create_table(
        "users",
        _id(),
        sa.Column("email", sa.String(320), nullable=True, unique=True),
        sa.Column("password_hash", sa.String(255), nullable=True),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column("is_anonymous", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("role", sa.String(20), nullable=False, server_default="user"),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "auth_sessions",
        _id(),
        _user_fk(),
        sa.Column("token", sa.String(128), nullable=False, unique=True),
        _timestamp("created_at"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_auth_sessions_user_id", "auth_sessions", ["user_id"])

    op.create_table(
        "subscriptions",
        _id(),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("subscription_type", sa.String(20), nullable=False, server_default="free"),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        _timestamp("start_date"),
        sa.Column("end_date", sa.DateTime(timezone=True), nullable=True),
        _timestamp("created_at"),
    )

    op.create_table(
        "user_profiles",
        _id(),
        sa.Column(
            "user_id",
            sa.Uuid(),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
            unique=True,
        ),
        sa.Column("name", sa.String(255), nullable=True),
        sa.Column(
            "theme_preference", sa.String(50), nullable=False, server_default="earth_tones"
        ),
        sa.Column("notification_settings", JSONType, nullable=True),
        _timestamp("created_at"),
    )

    # ── Daily wellness logs ───────────────────────────────────────────────
    op.create_table(
        "journal_entries",
        _id(),
        _user_fk(),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("mood", sa.String(50), nullable=True),
        sa.Column("energy_level", sa.String(50), nullable=True),
        sa.Column("prompt_used", sa.Text(), nullable=True),
        sa.Column("rhythm_phase", sa.String(20), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index(
        "idx_journal_entries_user_created", "journal_entries", ["user_id", "created_at"]
    )

    op.create_table(
        "grounding_sessions",
        _id(),
        _user_fk(),
        sa.Column("session_type", sa.String(50), nullable=False),
        sa.Column("duration_minutes", sa.Integer(), nullable=False),
        _timestamp("completed_at"),
        sa.Column("notes", sa.Text(), nullable=True),
    )
    op.create_index(
        "idx_grounding_sessions_user_completed",
        "grounding_sessions",
        ["user_id", "completed_at"],
    )

    op.create_table(
        "sleep_logs",
        _id(),
        _user_fk(),
        sa.Column("bedtime", sa.DateTime(timezone=True), nullable=True),
        sa.Column("wake_time", sa.DateTime(timezone=True), nullable=True),
        sa.Column("quality_rating", sa.Integer(), nullable=True),
        sa.Column("wind_down_activity", sa.String(255), nullable=True),
        sa.Column("reflection", sa.Text(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        _timestamp("created_at"),
    )
    op.create_index("idx_sleep_logs_user_date", "sleep_logs", ["user_id", "date"])

    op.create_table(
        "daily_rhythms",
        _id(),
        _user_fk(),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("morning_mood", sa.String(50), nullable=True),
        sa.Column("midday_energy", sa.String(50), nullable=True),
        sa.Column("evening_state", sa.String(50), nullable=True),
        sa.Column("night_quality", sa.String(50), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index("idx_daily_rhythms_user_date", "daily_rhythms", ["user_id", "date"])

    # ── Curated content ───────────────────────────────────────────────────
    op.create_table(
        "content_items",
        _id(),
        sa.Column("module", sa.String(30), nullable=False, server_default="mindfulness"),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("payload", JSONType, nullable=True),
        sa.Column("content_type", sa.String(50), nullable=True),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("duration", sa.Integer(), nullable=True),
        sa.Column("is_premium", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("ai_generated", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        _timestamp("created_at"),
        _timestamp("updated_at"),
    )

    op.create_table(
        "mindfulness_journal_entries",
        _id(),
        _user_fk(),
        sa.Column(
            "content_item_id",
            sa.Uuid(),
            sa.ForeignKey("content_items.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("mood", sa.String(50), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index(
        "ix_mindfulness_journal_entries_user_id", "mindfulness_journal_entries", ["user_id"]
    )

    op.create_table(
        "weekly_motivations",
        _id(),
        sa.Column("week_start_date", sa.Date(), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column("author", sa.String(255), nullable=True),
        _timestamp("created_at"),
    )
    op.create_index(
        "ix_weekly_motivations_week_start_date", "weekly_motivations", ["week_start_date"]
    )


def downgrade() -> None:
    """Drop every table. Destructive: all user data is lost."""
    op.drop_index("ix_weekly_motivations_week_start_date", table_name="weekly_motivations")
    op.drop_table("weekly_motivations")
    op.drop_index(
        "ix_mindfulness_journal_entries_user_id", table_name="mindfulness_journal_entries"
    )
    op.drop_table("mindfulness_journal_entries")
    op.drop_table("content_items")
    op.drop_index("idx_daily_rhythms_user_date", table_name="daily_rhythms")
    op.drop_table("daily_rhythms")
    op.drop_index("idx_sleep_logs_user_date", table_name="sleep_logs")
    op.drop_table("sleep_logs")
    op.drop_index("idx_grounding_sessions_user_completed", table_name="grounding_sessions")
    op.drop_table("grounding_sessions")
    op.drop_index("idx_journal_entries_user_created", table_name="journal_entries")
    op.drop_table("journal_entries")
    op.drop_table("user_profiles")
    op.drop_table("subscriptions")
    op.drop_index("ix_auth_sessions_user_id", table_name="auth_sessions")
    op.drop_table("auth_sessions")
    op.drop_table("users")
