"""
ORM models. Importing this package registers every table on Base.metadata,
which Alembic autogenerate and the test schema setup both rely on.
"""

from livdaily.models.user import AuthSession, Subscription, User, UserPattern, UserProfile
from livdaily.models.wellness import (
    DailyRhythm,
    GroundingSession,
    JournalEntry,
    MovementLog,
    NutritionTask,
    SleepLog,
)
from livdaily.models.content import ContentItem, MindfulnessJournalEntry, WeeklyMotivation

__all__ = [
    "AuthSession",
    "ContentItem",
    "DailyRhythm",
    "GroundingSession",
    "JournalEntry",
    "MindfulnessJournalEntry",
    "MovementLog",
    "NutritionTask",
    "SleepLog",
    "Subscription",
    "User",
    "UserPattern",
    "UserProfile",
    "WeeklyMotivation",
]
