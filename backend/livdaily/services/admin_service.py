"""
LivDaily Backend — Admin Service
==================================

What:  User listing, role changes and app-wide counters for the admin panel.
       Subscription grants live in subscription_service; content and
       motivation curation in their own services.
Who:   /api/admin routes, behind require_admin.
"""

import logging
import uuid
from typing import List

from sqlalchemy import desc, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.exceptions import NotFoundError, ValidationError
from livdaily.models.user import Subscription, User
from livdaily.models.wellness import DailyRhythm, GroundingSession, JournalEntry, SleepLog
from livdaily.schemas.admin import AdminUserResponse, AppStatsResponse
from livdaily.services.base import translate_db_errors

logger = logging.getLogger(__name__)

VALID_ROLES = ("user", "admin")


class AdminService:

    @translate_db_errors("list users")
    async def list_users(self, db: AsyncSession) -> List[AdminUserResponse]:
        result = await db.execute(select(User).order_by(desc(User.created_at)))
        return [AdminUserResponse.model_validate(u) for u in result.scalars().all()]

    @translate_db_errors("update the user role")
    async def update_role(
        self, db: AsyncSession, user_id: uuid.UUID, role: str
    ) -> AdminUserResponse:
        if role not in VALID_ROLES:
            raise ValidationError(
                message=f"Invalid role '{role}'. Must be one of: {', '.join(VALID_ROLES)}",
                field="role",
            )
        user = await db.get(User, user_id)
        if user is None:
            raise NotFoundError(resource="user", resource_id=str(user_id))
        user.role = role
        await db.flush()
        logger.info("Role of user %s set to %s", user_id, role)
        return AdminUserResponse.model_validate(user)

    async def _count(self, db: AsyncSession, model, *criteria) -> int:
        query = select(func.count()).select_from(model)
        if criteria:
            query = query.where(*criteria)
        result = await db.execute(query)
        return int(result.scalar_one())

    @translate_db_errors("calculate app statistics")
    async def get_stats(self, db: AsyncSession) -> AppStatsResponse:
        return AppStatsResponse(
            total_users=await self._count(db, User),
            total_journal_entries=await self._count(db, JournalEntry),
            total_sleep_logs=await self._count(db, SleepLog),
            total_grounding_sessions=await self._count(db, GroundingSession),
            total_rhythms=await self._count(db, DailyRhythm),
            active_premium_subscriptions=await self._count(
                db,
                Subscription,
                Subscription.subscription_type == "premium",
                Subscription.status == "active",
            ),
        )


admin_service = AdminService()
