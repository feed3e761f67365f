"""
LivDaily Backend — Movement Service
=====================================

What:  Log of finished movement sessions plus rolling statistics.
Who:   /api/movement routes.

Statistics (GET /api/movement/stats):
    period=week  → sessions completed within the last 7 days
    period=month → sessions completed within the last 30 days

    total_minutes        sum of duration_minutes (missing durations count 0)
    sessions_count       number of sessions in the window
    favorite_activities  [{activity, count}], most frequent first
"""

import logging
import uuid
from collections import Counter
from datetime import date, datetime, timedelta, timezone
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.models.wellness import MovementLog
from livdaily.schemas.wellness import (
    ActivityCount,
    MovementLogCreate,
    MovementLogResponse,
    MovementLogUpdate,
    MovementStatsResponse,
)
from livdaily.services.base import OwnedRecordService, optional_range, translate_db_errors
from livdaily.services.sleep_service import PERIOD_DAYS

logger = logging.getLogger(__name__)


def summarize_movement(logs: List[MovementLog], period: str) -> MovementStatsResponse:
    activities = Counter(log.activity_type for log in logs if log.activity_type)
    return MovementStatsResponse(
        total_minutes=sum(log.duration_minutes or 0 for log in logs),
        sessions_count=len(logs),
        favorite_activities=[
            ActivityCount(activity=activity, count=count)
            for activity, count in activities.most_common()
        ],
        period=period,
    )


class MovementService(OwnedRecordService[MovementLog]):
    model = MovementLog
    resource = "movement log"
    required_fields = ("activity_type",)

    @translate_db_errors("list movement logs")
    async def list_logs(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[MovementLogResponse]:
        start, end = optional_range(start_date, end_date)
        query = select(MovementLog).where(MovementLog.user_id == user_id)
        if start is not None:
            query = query.where(MovementLog.completed_at >= start)
        if end is not None:
            query = query.where(MovementLog.completed_at < end)
        query = query.order_by(desc(MovementLog.completed_at))

        result = await db.execute(query)
        return [MovementLogResponse.model_validate(log) for log in result.scalars().all()]

    @translate_db_errors("save the movement log")
    async def create_log(
        self, db: AsyncSession, user_id: uuid.UUID, data: MovementLogCreate
    ) -> MovementLogResponse:
        log = MovementLog(
            user_id=user_id,
            completed_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        db.add(log)
        await db.flush()
        logger.info(
            "Movement log %s (%s, %s min) recorded for user %s",
            log.id, log.activity_type, log.duration_minutes, user_id,
        )
        return MovementLogResponse.model_validate(log)

    @translate_db_errors("update the movement log")
    async def update_log(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        log_id: uuid.UUID,
        data: MovementLogUpdate,
    ) -> MovementLogResponse:
        log = await self.get_owned(db, user_id, log_id)
        self.apply_changes(log, data.model_dump(exclude_unset=True))
        await db.flush()
        return MovementLogResponse.model_validate(log)

    @translate_db_errors("delete the movement log")
    async def delete_log(
        self, db: AsyncSession, user_id: uuid.UUID, log_id: uuid.UUID
    ) -> None:
        await self.delete_owned(db, user_id, log_id)

    @translate_db_errors("calculate movement statistics")
    async def get_stats(
        self, db: AsyncSession, user_id: uuid.UUID, period: str = "week"
    ) -> MovementStatsResponse:
        since = datetime.now(timezone.utc) - timedelta(days=PERIOD_DAYS.get(period, 7))
        result = await db.execute(
            select(MovementLog).where(
                MovementLog.user_id == user_id, MovementLog.completed_at >= since
            )
        )
        return summarize_movement(list(result.scalars().all()), period)


movement_service = MovementService()
