"""
LivDaily Backend — Daily Rhythm Service
=========================================

What:  CRUD for daily rhythm check-ins and the time-of-day → rhythm phase
       mapping used for journal tagging and client greetings.

Phases by local hour:
    [6, 10)  morning
    [10, 14) midday
    [14, 18) afternoon
    [18, 22) evening
    otherwise night
"""

import logging
import uuid
from datetime import date, datetime
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.models.wellness import DailyRhythm
from livdaily.schemas.wellness import (
    DailyRhythmCreate,
    DailyRhythmResponse,
    DailyRhythmUpdate,
)
from livdaily.services.base import OwnedRecordService, translate_db_errors

logger = logging.getLogger(__name__)


def rhythm_phase_for_hour(hour: int) -> str:
    if 6 <= hour < 10:
        return "morning"
    if 10 <= hour < 14:
        return "midday"
    if 14 <= hour < 18:
        return "afternoon"
    if 18 <= hour < 22:
        return "evening"
    return "night"


def current_rhythm_phase(now: Optional[datetime] = None) -> str:
    """Phase for the server's local clock (or `now` when given)."""
    return rhythm_phase_for_hour((now or datetime.now()).hour)


class RhythmService(OwnedRecordService[DailyRhythm]):
    model = DailyRhythm
    resource = "rhythm"
    required_fields = ("date",)

    @translate_db_errors("list rhythms")
    async def list_rhythms(
        self, db: AsyncSession, user_id: uuid.UUID, on_date: Optional[date] = None
    ) -> List[DailyRhythmResponse]:
        query = select(DailyRhythm).where(DailyRhythm.user_id == user_id)
        if on_date is not None:
            query = query.where(DailyRhythm.date == on_date)
        query = query.order_by(desc(DailyRhythm.date), desc(DailyRhythm.created_at))

        result = await db.execute(query)
        return [DailyRhythmResponse.model_validate(r) for r in result.scalars().all()]

    @translate_db_errors("save the rhythm")
    async def create_rhythm(
        self, db: AsyncSession, user_id: uuid.UUID, data: DailyRhythmCreate
    ) -> DailyRhythmResponse:
        rhythm = DailyRhythm(user_id=user_id, **data.model_dump())
        db.add(rhythm)
        await db.flush()
        logger.info("Rhythm %s created for user %s", rhythm.id, user_id)
        return DailyRhythmResponse.model_validate(rhythm)

    @translate_db_errors("update the rhythm")
    async def update_rhythm(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        rhythm_id: uuid.UUID,
        data: DailyRhythmUpdate,
    ) -> DailyRhythmResponse:
        rhythm = await self.get_owned(db, user_id, rhythm_id)
        self.apply_changes(rhythm, data.model_dump(exclude_unset=True))
        await db.flush()
        return DailyRhythmResponse.model_validate(rhythm)

    @translate_db_errors("delete the rhythm")
    async def delete_rhythm(
        self, db: AsyncSession, user_id: uuid.UUID, rhythm_id: uuid.UUID
    ) -> None:
        await self.delete_owned(db, user_id, rhythm_id)


rhythm_service = RhythmService()
