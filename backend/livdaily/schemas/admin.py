"""Admin-only request/response schemas."""

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import Field

from livdaily.schemas.common import ApiModel


class AdminUserResponse(ApiModel):
    id: uuid.UUID
    email: Optional[str] = None
    name: Optional[str] = None
    is_anonymous: bool
    role: str
    created_at: datetime


class RoleUpdateRequest(ApiModel):
    # Checked in the service so an unknown role answers 400 rather than 422
    role: str


class AppStatsResponse(ApiModel):
    total_users: int
    total_journal_entries: int
    total_sleep_logs: int
    total_grounding_sessions: int
    total_rhythms: int
    active_premium_subscriptions: int


class GrantSubscriptionRequest(ApiModel):
    user_id: uuid.UUID
    subscription_type: Literal["free", "premium"] = "premium"
    duration_days: int = Field(default=30, ge=1, le=3650)
