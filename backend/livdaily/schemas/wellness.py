"""
LivDaily Backend — Wellness Log Schemas
=========================================

What:  Request and response shapes for journal entries, grounding sessions,
       sleep logs, daily rhythms, movement logs, nutrition tasks, the user
       profile and stored user patterns.

Conventions:
    - *Create: body of POST; required fields mirror the NOT NULL columns
    - *Update: body of PUT; every field optional, only sent fields change
    - *Response: public DTO; never exposes anything beyond the owner's row
"""

import uuid
import datetime as dt
from datetime import datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from livdaily.schemas.common import ApiModel

RhythmPhase = Literal["morning", "midday", "afternoon", "evening", "night"]


# ══════════════════════════════════════════════════════════════════════════
# Journal
# ══════════════════════════════════════════════════════════════════════════

class JournalEntryCreate(ApiModel):
    content: str = Field(min_length=1, max_length=20_000)
    mood: Optional[str] = Field(default=None, max_length=50)
    energy_level: Optional[str] = Field(default=None, max_length=50)
    prompt_used: Optional[str] = None

    # Defaults to the server's current phase when omitted
    rhythm_phase: Optional[RhythmPhase] = None


class JournalEntryUpdate(ApiModel):
    content: Optional[str] = Field(default=None, min_length=1, max_length=20_000)
    mood: Optional[str] = Field(default=None, max_length=50)
    energy_level: Optional[str] = Field(default=None, max_length=50)
    prompt_used: Optional[str] = None
    rhythm_phase: Optional[RhythmPhase] = None


class JournalEntryResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    content: str
    mood: Optional[str] = None
    energy_level: Optional[str] = None
    prompt_used: Optional[str] = None
    rhythm_phase: Optional[str] = None
    created_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# Grounding
# ══════════════════════════════════════════════════════════════════════════

class GroundingSessionCreate(ApiModel):
    session_type: str = Field(min_length=1, max_length=50)
    duration_minutes: int = Field(ge=0, le=24 * 60)
    notes: Optional[str] = None


class GroundingSessionResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    session_type: str
    duration_minutes: int
    completed_at: datetime
    notes: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════════
# Sleep
# ══════════════════════════════════════════════════════════════════════════

class SleepLogCreate(ApiModel):
    date: dt.date
    bedtime: Optional[datetime] = None
    wake_time: Optional[datetime] = None
    quality_rating: Optional[int] = Field(default=None, ge=1, le=10)
    wind_down_activity: Optional[str] = Field(default=None, max_length=255)
    reflection: Optional[str] = None


class SleepLogUpdate(ApiModel):
    date: Optional[dt.date] = None
    bedtime: Optional[datetime] = None
    wake_time: Optional[datetime] = None
    quality_rating: Optional[int] = Field(default=None, ge=1, le=10)
    wind_down_activity: Optional[str] = Field(default=None, max_length=255)
    reflection: Optional[str] = None


class SleepLogResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    date: dt.date
    bedtime: Optional[datetime] = None
    wake_time: Optional[datetime] = None
    quality_rating: Optional[int] = None
    wind_down_activity: Optional[str] = None
    reflection: Optional[str] = None
    created_at: datetime


class SleepPatterns(ApiModel):
    most_common_wind_down: Optional[str] = None
    log_count: int = 0


class SleepStatsResponse(ApiModel):
    """Aggregates over the last 7 (week) or 30 (month) days; hours for avg_duration."""
    avg_quality: float = 0.0
    avg_duration: float = 0.0
    patterns: SleepPatterns
    period: Literal["week", "month"]


# ══════════════════════════════════════════════════════════════════════════
# Daily Rhythms
# ══════════════════════════════════════════════════════════════════════════

class DailyRhythmCreate(ApiModel):
    date: dt.date
    morning_mood: Optional[str] = Field(default=None, max_length=50)
    midday_energy: Optional[str] = Field(default=None, max_length=50)
    evening_state: Optional[str] = Field(default=None, max_length=50)
    night_quality: Optional[str] = Field(default=None, max_length=50)


class DailyRhythmUpdate(ApiModel):
    morning_mood: Optional[str] = Field(default=None, max_length=50)
    midday_energy: Optional[str] = Field(default=None, max_length=50)
    evening_state: Optional[str] = Field(default=None, max_length=50)
    night_quality: Optional[str] = Field(default=None, max_length=50)


class DailyRhythmResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    date: dt.date
    morning_mood: Optional[str] = None
    midday_energy: Optional[str] = None
    evening_state: Optional[str] = None
    night_quality: Optional[str] = None
    created_at: datetime


class CurrentPhaseResponse(ApiModel):
    phase: RhythmPhase
    hour: int


# ══════════════════════════════════════════════════════════════════════════
# Movement
# ══════════════════════════════════════════════════════════════════════════

class MovementLogCreate(ApiModel):
    activity_type: str = Field(min_length=1, max_length=50)
    duration_minutes: Optional[int] = Field(default=None, ge=0, le=24 * 60)
    video_id: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None


class MovementLogUpdate(ApiModel):
    activity_type: Optional[str] = Field(default=None, min_length=1, max_length=50)
    duration_minutes: Optional[int] = Field(default=None, ge=0, le=24 * 60)
    video_id: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = None


class MovementLogResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    activity_type: str
    duration_minutes: Optional[int] = None
    video_id: Optional[str] = None
    completed_at: datetime
    notes: Optional[str] = None


class ActivityCount(ApiModel):
    activity: str
    count: int


class MovementStatsResponse(ApiModel):
    total_minutes: int = 0
    sessions_count: int = 0

    # Most frequent first
    favorite_activities: List[ActivityCount] = Field(default_factory=list)
    period: Literal["week", "month"]


# ══════════════════════════════════════════════════════════════════════════
# Nutrition Tasks
# ══════════════════════════════════════════════════════════════════════════

class NutritionTaskCreate(ApiModel):
    task_description: str = Field(min_length=1, max_length=1000)
    date: dt.date


class NutritionTaskUpdate(ApiModel):
    task_description: Optional[str] = Field(default=None, min_length=1, max_length=1000)
    completed: Optional[bool] = None

    # Stamped with the current time when completed=true arrives without it
    completed_at: Optional[datetime] = None


class NutritionTaskResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    task_description: str
    completed: bool
    completed_at: Optional[datetime] = None
    date: dt.date


# ══════════════════════════════════════════════════════════════════════════
# User Profile
# ══════════════════════════════════════════════════════════════════════════

class UserProfileUpdate(ApiModel):
    name: Optional[str] = Field(default=None, max_length=255)
    theme_preference: Optional[str] = Field(default=None, max_length=50)
    notification_settings: Optional[Dict[str, Any]] = None


class UserProfileResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    name: Optional[str] = None
    theme_preference: str
    notification_settings: Optional[Dict[str, Any]] = None
    created_at: datetime


# ══════════════════════════════════════════════════════════════════════════
# User Patterns
# ══════════════════════════════════════════════════════════════════════════

class UserPatternsUpdate(ApiModel):
    patterns: Dict[str, Any]


class UserPatternsResponse(ApiModel):
    patterns: Dict[str, Any] = Field(default_factory=dict)
    last_updated: datetime
