"""
LivDaily Backend — Weekly Motivation Service
==============================================

What:  Reads the motivation for the current week and the recent history;
       admins create, edit and delete entries.

"Current week" is keyed by the Monday of today's week. When several rows
share that Monday the newest one wins.
"""

import logging
import uuid
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.exceptions import NotFoundError
from livdaily.models.content import WeeklyMotivation
from livdaily.schemas.mindfulness import MotivationCreate, MotivationResponse, MotivationUpdate
from livdaily.services.base import translate_db_errors

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 10


def week_start(today: Optional[date] = None) -> date:
    today = today or date.today()
    return today - timedelta(days=today.weekday())


class MotivationService:

    @translate_db_errors("load this week's motivation")
    async def get_current(
        self, db: AsyncSession, today: Optional[date] = None
    ) -> MotivationResponse:
        monday = week_start(today)
        result = await db.execute(
            select(WeeklyMotivation)
            .where(WeeklyMotivation.week_start_date == monday)
            .order_by(desc(WeeklyMotivation.created_at))
            .limit(1)
        )
        motivation = result.scalar_one_or_none()
        if motivation is None:
            raise NotFoundError(resource="motivation for this week")
        return MotivationResponse.model_validate(motivation)

    @translate_db_errors("load motivation history")
    async def get_history(
        self, db: AsyncSession, limit: int = DEFAULT_HISTORY_LIMIT
    ) -> List[MotivationResponse]:
        result = await db.execute(
            select(WeeklyMotivation)
            .order_by(desc(WeeklyMotivation.week_start_date), desc(WeeklyMotivation.created_at))
            .limit(limit)
        )
        return [MotivationResponse.model_validate(m) for m in result.scalars().all()]

    @translate_db_errors("create the motivation")
    async def create(self, db: AsyncSession, data: MotivationCreate) -> MotivationResponse:
        motivation = WeeklyMotivation(**data.model_dump())
        db.add(motivation)
        await db.flush()
        logger.info("Motivation %s created for week %s", motivation.id, motivation.week_start_date)
        return MotivationResponse.model_validate(motivation)

    async def _get(self, db: AsyncSession, motivation_id: uuid.UUID) -> WeeklyMotivation:
        motivation = await db.get(WeeklyMotivation, motivation_id)
        if motivation is None:
            raise NotFoundError(resource="motivation", resource_id=str(motivation_id))
        return motivation

    @translate_db_errors("update the motivation")
    async def update(
        self, db: AsyncSession, motivation_id: uuid.UUID, data: MotivationUpdate
    ) -> MotivationResponse:
        motivation = await self._get(db, motivation_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("week_start_date", "content"):
                continue
            setattr(motivation, field, value)
        await db.flush()
        return MotivationResponse.model_validate(motivation)

    @translate_db_errors("delete the motivation")
    async def delete(self, db: AsyncSession, motivation_id: uuid.UUID) -> None:
        motivation = await self._get(db, motivation_id)
        await db.delete(motivation)
        await db.flush()
        logger.info("Motivation %s deleted", motivation_id)


motivation_service = MotivationService()
