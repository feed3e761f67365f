"""
LivDaily Backend — Mindfulness, Subscription & Motivation Schemas
==================================================================

What:  DTOs for curated content (with the premium gate applied), the caller's
       subscription, the mindfulness journal and weekly motivation.

ContentItemResponse.content holds whatever the gate decided: the full body for
premium callers, a 100-character preview plus "..." for free callers.
`is_truncated` tells the client which one it got.
"""

import uuid
from datetime import date, datetime
from typing import Any, Dict, Literal, Optional

from pydantic import Field

from livdaily.schemas.common import ApiModel

ContentModule = Literal[
    "mindfulness", "breathwork", "movement", "nutrition", "focus",
    "calm", "sleep", "grounding", "motivation",
]


# ── Content Items ─────────────────────────────────────────────────────────

class ContentItemResponse(ApiModel):
    id: uuid.UUID
    module: str
    title: str
    content: str
    payload: Optional[Dict[str, Any]] = None
    content_type: Optional[str] = None
    category: Optional[str] = None
    duration: Optional[int] = None
    is_premium: bool
    ai_generated: bool = False
    is_active: bool = True
    is_truncated: bool = False
    created_at: datetime


class ContentItemCreate(ApiModel):
    module: ContentModule = "mindfulness"
    title: str = Field(min_length=1, max_length=255)
    content: str = Field(min_length=1)
    payload: Optional[Dict[str, Any]] = None
    content_type: Optional[str] = Field(default=None, max_length=50)
    category: Optional[str] = Field(default=None, max_length=100)
    duration: Optional[int] = Field(default=None, ge=0)
    is_premium: bool = False
    ai_generated: bool = False


class ContentItemUpdate(ApiModel):
    module: Optional[ContentModule] = None
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    content: Optional[str] = Field(default=None, min_length=1)
    payload: Optional[Dict[str, Any]] = None
    content_type: Optional[str] = Field(default=None, max_length=50)
    category: Optional[str] = Field(default=None, max_length=100)
    duration: Optional[int] = Field(default=None, ge=0)
    is_premium: Optional[bool] = None
    is_active: Optional[bool] = None


class ContentGenerateRequest(ApiModel):
    """Admin request to have the model write a new content item."""
    module: ContentModule = "mindfulness"
    content_type: Literal["article", "exercise", "meditation"]
    category: str = Field(min_length=1, max_length=100)
    duration: Optional[int] = Field(default=None, ge=1, le=240)
    is_premium: bool = False


# ── Subscription ──────────────────────────────────────────────────────────

class SubscriptionResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    subscription_type: str
    status: str
    start_date: datetime
    end_date: Optional[datetime] = None
    is_premium: bool = False


# ── Mindfulness Journal ───────────────────────────────────────────────────

class MindfulnessJournalCreate(ApiModel):
    content_item_id: Optional[uuid.UUID] = None
    content: str = Field(min_length=1, max_length=20_000)
    mood: Optional[str] = Field(default=None, max_length=50)


class MindfulnessJournalResponse(ApiModel):
    id: uuid.UUID
    user_id: uuid.UUID
    content_item_id: Optional[uuid.UUID] = None
    content: str
    mood: Optional[str] = None
    created_at: datetime


# ── Weekly Motivation ─────────────────────────────────────────────────────

class MotivationResponse(ApiModel):
    id: uuid.UUID
    week_start_date: date
    content: str
    author: Optional[str] = None
    created_at: datetime


class MotivationCreate(ApiModel):
    week_start_date: date
    content: str = Field(min_length=1)
    author: Optional[str] = Field(default=None, max_length=255)


class MotivationUpdate(ApiModel):
    week_start_date: Optional[date] = None
    content: Optional[str] = Field(default=None, min_length=1)
    author: Optional[str] = Field(default=None, max_length=255)
