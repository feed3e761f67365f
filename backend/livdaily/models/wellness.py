"""
LivDaily Backend — Daily Wellness Log Models
==============================================

What:  User-owned log tables: journal entries, grounding sessions, sleep logs,
       daily rhythm check-ins, movement logs and nutrition tasks.
Who:   The matching CRUD services in livdaily.services.

Every table carries user_id → users.id ON DELETE CASCADE plus an index that
serves the "my recent records" listing.
"""

import uuid
import datetime as dt
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    Boolean, Date, DateTime, ForeignKey, Index, Integer, String, Text, Uuid, false, func,
)
from sqlalchemy.orm import Mapped, mapped_column

from livdaily.database import Base
from livdaily.models.user import utcnow


class JournalEntry(Base):
    __tablename__ = "journal_entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    mood: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    energy_level: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    prompt_used: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    # morning | midday | afternoon | evening | night
    rhythm_phase: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (
        Index("idx_journal_entries_user_created", "user_id", "created_at"),
    )


class GroundingSession(Base):
    """A completed breathwork / grounding timer run."""

    __tablename__ = "grounding_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    session_type: Mapped[str] = mapped_column(String(50), nullable=False)
    duration_minutes: Mapped[int] = mapped_column(Integer, nullable=False)
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_grounding_sessions_user_completed", "user_id", "completed_at"),
    )


class SleepLog(Base):
    __tablename__ = "sleep_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    bedtime: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    wake_time: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    # 1..10
    quality_rating: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    wind_down_activity: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    reflection: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (Index("idx_sleep_logs_user_date", "user_id", "date"),)


class DailyRhythm(Base):
    """One check-in row per day covering the four rhythm phases."""

    __tablename__ = "daily_rhythms"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)
    morning_mood: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    midday_energy: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    evening_state: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    night_quality: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    __table_args__ = (Index("idx_daily_rhythms_user_date", "user_id", "date"),)


class MovementLog(Base):
    """A finished movement session (walk, stretch, follow-along video)."""

    __tablename__ = "movement_logs"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    activity_type: Mapped[str] = mapped_column(String(50), nullable=False)
    duration_minutes: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    video_id: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    __table_args__ = (
        Index("idx_movement_logs_user_completed", "user_id", "completed_at"),
    )


class NutritionTask(Base):
    __tablename__ = "nutrition_tasks"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    task_description: Mapped[str] = mapped_column(Text, nullable=False)
    completed: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default=false()
    )
    completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
    date: Mapped[dt.date] = mapped_column(Date, nullable=False)

    __table_args__ = (Index("idx_nutrition_tasks_user_date", "user_id", "date"),)
