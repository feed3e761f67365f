"""
User profile and stored habit patterns. Both are one row per user, created
on first read and partially updated on PUT.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.models.user import UserPattern, UserProfile
from livdaily.schemas.wellness import (
    UserPatternsResponse,
    UserPatternsUpdate,
    UserProfileResponse,
    UserProfileUpdate,
)
from livdaily.services.base import get_or_create_for_user, translate_db_errors

logger = logging.getLogger(__name__)

DEFAULT_THEME = "earth_tones"


def to_patterns_response(row: UserPattern) -> UserPatternsResponse:
    return UserPatternsResponse(patterns=row.pattern_data or {}, last_updated=row.last_updated)


class ProfileService:

    async def _profile(self, db: AsyncSession, user_id: uuid.UUID) -> UserProfile:
        profile, created = await get_or_create_for_user(
            db, UserProfile, user_id, theme_preference=DEFAULT_THEME
        )
        if created:
            logger.info("Created default profile for user %s", user_id)
        return profile

    async def _patterns(self, db: AsyncSession, user_id: uuid.UUID) -> UserPattern:
        patterns, created = await get_or_create_for_user(db, UserPattern, user_id, pattern_data={})
        if created:
            logger.info("Created empty pattern record for user %s", user_id)
        return patterns

    @translate_db_errors("load your profile")
    async def get_profile(self, db: AsyncSession, user_id: uuid.UUID) -> UserProfileResponse:
        return UserProfileResponse.model_validate(await self._profile(db, user_id))

    @translate_db_errors("update your profile")
    async def update_profile(
        self, db: AsyncSession, user_id: uuid.UUID, data: UserProfileUpdate
    ) -> UserProfileResponse:
        profile = await self._profile(db, user_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if field == "theme_preference" and value is None:
                continue
            setattr(profile, field, value)
        await db.flush()
        return UserProfileResponse.model_validate(profile)

    @translate_db_errors("load your patterns")
    async def get_patterns(self, db: AsyncSession, user_id: uuid.UUID) -> UserPatternsResponse:
        return to_patterns_response(await self._patterns(db, user_id))

    @translate_db_errors("save your patterns")
    async def update_patterns(
        self, db: AsyncSession, user_id: uuid.UUID, data: UserPatternsUpdate
    ) -> UserPatternsResponse:
        """Replaces the stored pattern data wholesale."""
        row = await self._patterns(db, user_id)
        row.pattern_data = data.patterns
        await db.flush()
        await db.refresh(row)
        return to_patterns_response(row)


profile_service = ProfileService()
