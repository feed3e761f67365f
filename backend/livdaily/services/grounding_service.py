"""Grounding (breathwork timer) session log: list, record and delete."""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.models.wellness import GroundingSession
from livdaily.schemas.wellness import GroundingSessionCreate, GroundingSessionResponse
from livdaily.services.base import OwnedRecordService, optional_range, translate_db_errors

logger = logging.getLogger(__name__)


class GroundingService(OwnedRecordService[GroundingSession]):
    model = GroundingSession
    resource = "grounding session"

    @translate_db_errors("list grounding sessions")
    async def list_sessions(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> List[GroundingSessionResponse]:
        start, end = optional_range(start_date, end_date)
        query = select(GroundingSession).where(GroundingSession.user_id == user_id)
        if start is not None:
            query = query.where(GroundingSession.completed_at >= start)
        if end is not None:
            query = query.where(GroundingSession.completed_at < end)
        query = query.order_by(desc(GroundingSession.completed_at))

        result = await db.execute(query)
        return [GroundingSessionResponse.model_validate(s) for s in result.scalars().all()]

    @translate_db_errors("record the grounding session")
    async def create_session(
        self, db: AsyncSession, user_id: uuid.UUID, data: GroundingSessionCreate
    ) -> GroundingSessionResponse:
        # Recorded when the timer finishes
        session = GroundingSession(
            user_id=user_id,
            completed_at=datetime.now(timezone.utc),
            **data.model_dump(),
        )
        db.add(session)
        await db.flush()
        logger.info(
            "Grounding session %s (%s, %d min) recorded for user %s",
            session.id, session.session_type, session.duration_minutes, user_id,
        )
        return GroundingSessionResponse.model_validate(session)

    @translate_db_errors("delete the grounding session")
    async def delete_session(
        self, db: AsyncSession, user_id: uuid.UUID, session_id: uuid.UUID
    ) -> None:
        await self.delete_owned(db, user_id, session_id)


grounding_service = GroundingService()
