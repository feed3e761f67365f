"""
LivDaily Backend — Subscription Resolver & Content Gate
=========================================================

What:  Looks up (or lazily creates) a user's subscription, classifies the
       caller as free or premium, and decides how much of a content body
       the caller may see.
Who:   Mindfulness routes (gate), admin routes (grant/list).

Rules:
    resolve(user):          existing row, or a new {free, active} row
    is_premium_eligible:    subscription_type == 'premium' AND status == 'active'
    gate_content(body):     premium → full body
                            free    → body[:100] + "..." (at most 103 chars)

The gate is pure: it never touches the database and never mutates the stored
body.
"""

import logging
import uuid
from datetime import datetime, timedelta, timezone
from typing import List, Optional, Tuple

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.config import settings
from livdaily.exceptions import DatabaseError, LivDailyError, NotFoundError
from livdaily.models.user import Subscription, User
from livdaily.schemas.mindfulness import SubscriptionResponse
from livdaily.services.base import get_or_create_for_user

logger = logging.getLogger(__name__)

FREE = "free"
PREMIUM = "premium"
ACTIVE = "active"
INACTIVE = "inactive"

ELLIPSIS = "..."


def is_premium_eligible(subscription: Optional[Subscription]) -> bool:
    if subscription is None:
        return False
    return subscription.subscription_type == PREMIUM and subscription.status == ACTIVE


def gate_content(
    body: str, premium: bool, preview_chars: Optional[int] = None
) -> Tuple[str, bool]:
    """
    Apply the free/premium truncation rule.

    Returns (visible_body, truncated). Free callers always get the preview
    form, even for bodies shorter than the preview length.
    """
    if premium:
        return body, False
    limit = preview_chars if preview_chars is not None else settings.free_preview_chars
    return body[:limit] + ELLIPSIS, True


def to_response(subscription: Subscription) -> SubscriptionResponse:
    response = SubscriptionResponse.model_validate(subscription)
    response.is_premium = is_premium_eligible(subscription)
    return response


class SubscriptionService:
    """
    Lookup-or-create subscription access.

    No billing state machine lives here: besides the lazy default row, the
    only write is an admin grant.
    """

    async def resolve(self, db: AsyncSession, user_id: uuid.UUID) -> Subscription:
        """
        Return the user's subscription, creating the default free/active row
        on first access.
        """
        try:
            subscription, created = await get_or_create_for_user(
                db,
                Subscription,
                user_id,
                subscription_type=FREE,
                status=ACTIVE,
                start_date=datetime.now(timezone.utc),
            )
            if created:
                logger.info("Created default free subscription for user %s", user_id)
            return subscription
        except Exception as e:
            logger.error("Failed to resolve subscription for %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not load your subscription. Please try again.",
                context={"user_id": str(user_id)},
            )

    async def is_premium(self, db: AsyncSession, user_id: uuid.UUID) -> bool:
        return is_premium_eligible(await self.resolve(db, user_id))

    async def grant(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        subscription_type: str,
        duration_days: int,
    ) -> Subscription:
        """Admin grant: upsert an active subscription ending duration_days from now."""
        try:
            if await db.get(User, user_id) is None:
                raise NotFoundError(resource="user", resource_id=str(user_id))

            subscription = await self.resolve(db, user_id)
            now = datetime.now(timezone.utc)
            subscription.subscription_type = subscription_type
            subscription.status = ACTIVE
            subscription.start_date = now
            subscription.end_date = now + timedelta(days=duration_days)
            await db.flush()
            logger.info(
                "Granted %s subscription to user %s for %d days",
                subscription_type, user_id, duration_days,
            )
            return subscription
        except LivDailyError:
            raise
        except Exception as e:
            logger.error("Failed to grant subscription to %s: %s", user_id, str(e))
            raise DatabaseError(
                message="Could not grant the subscription. Please try again.",
                context={"user_id": str(user_id)},
            )

    async def list_all(self, db: AsyncSession) -> List[Subscription]:
        try:
            result = await db.execute(
                select(Subscription).order_by(desc(Subscription.created_at))
            )
            return list(result.scalars().all())
        except Exception as e:
            logger.error("Failed to list subscriptions: %s", str(e))
            raise DatabaseError(message="Could not list subscriptions. Please try again.")


subscription_service = SubscriptionService()
