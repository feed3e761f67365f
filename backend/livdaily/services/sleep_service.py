"""
LivDaily Backend — Sleep Service
==================================

What:  CRUD for nightly sleep logs plus rolling statistics.
Who:   /api/sleep routes.

Statistics (GET /api/sleep/stats):
    period=week  → logs dated within the last 7 days
    period=month → logs dated within the last 30 days

    avgQuality                     mean of non-null quality ratings, 1 decimal
    avgDuration                    mean of (wake_time - bedtime) for logs that
                                   have both, in hours, 1 decimal
    patterns.mostCommonWindDown    most frequent non-empty wind-down activity
    patterns.logCount              number of logs in the window

Empty windows report 0.0 averages and no wind-down activity.
"""

import logging
import uuid
from collections import Counter
from datetime import date, timedelta
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.models.wellness import SleepLog
from livdaily.schemas.wellness import (
    SleepLogCreate,
    SleepLogResponse,
    SleepLogUpdate,
    SleepPatterns,
    SleepStatsResponse,
)
from livdaily.services.base import OwnedRecordService, translate_db_errors

logger = logging.getLogger(__name__)

PERIOD_DAYS = {"week": 7, "month": 30}


def summarize_sleep(logs: List[SleepLog], period: str) -> SleepStatsResponse:
    ratings = [log.quality_rating for log in logs if log.quality_rating is not None]
    durations = [
        (log.wake_time - log.bedtime).total_seconds() / 3600
        for log in logs
        if log.bedtime is not None and log.wake_time is not None
    ]
    activities = Counter(log.wind_down_activity for log in logs if log.wind_down_activity)

    return SleepStatsResponse(
        avg_quality=round(sum(ratings) / len(ratings), 1) if ratings else 0.0,
        avg_duration=round(sum(durations) / len(durations), 1) if durations else 0.0,
        patterns=SleepPatterns(
            most_common_wind_down=activities.most_common(1)[0][0] if activities else None,
            log_count=len(logs),
        ),
        period=period,
    )


class SleepService(OwnedRecordService[SleepLog]):
    model = SleepLog
    resource = "sleep log"
    required_fields = ("date",)

    @translate_db_errors("list sleep logs")
    async def list_logs(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[SleepLogResponse]:
        query = select(SleepLog).where(SleepLog.user_id == user_id)
        if start_date is not None:
            query = query.where(SleepLog.date >= start_date)
        if end_date is not None:
            query = query.where(SleepLog.date <= end_date)
        query = query.order_by(desc(SleepLog.date), desc(SleepLog.created_at))

        result = await db.execute(query)
        return [SleepLogResponse.model_validate(log) for log in result.scalars().all()]

    @translate_db_errors("save the sleep log")
    async def create_log(
        self, db: AsyncSession, user_id: uuid.UUID, data: SleepLogCreate
    ) -> SleepLogResponse:
        log = SleepLog(user_id=user_id, **data.model_dump())
        db.add(log)
        await db.flush()
        logger.info("Sleep log %s created for user %s", log.id, user_id)
        return SleepLogResponse.model_validate(log)

    @translate_db_errors("update the sleep log")
    async def update_log(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        log_id: uuid.UUID,
        data: SleepLogUpdate,
    ) -> SleepLogResponse:
        log = await self.get_owned(db, user_id, log_id)
        self.apply_changes(log, data.model_dump(exclude_unset=True))
        await db.flush()
        return SleepLogResponse.model_validate(log)

    @translate_db_errors("delete the sleep log")
    async def delete_log(
        self, db: AsyncSession, user_id: uuid.UUID, log_id: uuid.UUID
    ) -> None:
        await self.delete_owned(db, user_id, log_id)

    @translate_db_errors("calculate sleep statistics")
    async def get_stats(
        self, db: AsyncSession, user_id: uuid.UUID, period: str = "week"
    ) -> SleepStatsResponse:
        since = date.today() - timedelta(days=PERIOD_DAYS.get(period, 7))
        result = await db.execute(
            select(SleepLog).where(SleepLog.user_id == user_id, SleepLog.date >= since)
        )
        return summarize_sleep(list(result.scalars().all()), period)


sleep_service = SleepService()
