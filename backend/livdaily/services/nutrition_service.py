"""Daily nutrition tasks: list by date, add, tick off (or edit) and delete."""

import logging
import uuid
from datetime import date, datetime, timezone
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.models.wellness import NutritionTask
from livdaily.schemas.wellness import (
    NutritionTaskCreate,
    NutritionTaskResponse,
    NutritionTaskUpdate,
)
from livdaily.services.base import OwnedRecordService, translate_db_errors

logger = logging.getLogger(__name__)


class NutritionService(OwnedRecordService[NutritionTask]):
    model = NutritionTask
    resource = "nutrition task"
    required_fields = ("task_description", "completed")

    @translate_db_errors("list nutrition tasks")
    async def list_tasks(
        self, db: AsyncSession, user_id: uuid.UUID, on_date: date
    ) -> List[NutritionTaskResponse]:
        result = await db.execute(
            select(NutritionTask)
            .where(NutritionTask.user_id == user_id, NutritionTask.date == on_date)
            .order_by(NutritionTask.completed, NutritionTask.task_description)
        )
        return [NutritionTaskResponse.model_validate(t) for t in result.scalars().all()]

    @translate_db_errors("save the nutrition task")
    async def create_task(
        self, db: AsyncSession, user_id: uuid.UUID, data: NutritionTaskCreate
    ) -> NutritionTaskResponse:
        task = NutritionTask(user_id=user_id, completed=False, **data.model_dump())
        db.add(task)
        await db.flush()
        logger.info("Nutrition task %s added for user %s on %s", task.id, user_id, task.date)
        return NutritionTaskResponse.model_validate(task)

    @translate_db_errors("update the nutrition task")
    async def update_task(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        task_id: uuid.UUID,
        data: NutritionTaskUpdate,
    ) -> NutritionTaskResponse:
        task = await self.get_owned(db, user_id, task_id)
        changes = data.model_dump(exclude_unset=True)
        if changes.get("completed") is True and changes.get("completed_at") is None:
            changes["completed_at"] = datetime.now(timezone.utc)
        elif changes.get("completed") is False:
            changes["completed_at"] = None
        self.apply_changes(task, changes)
        await db.flush()
        return NutritionTaskResponse.model_validate(task)

    @translate_db_errors("delete the nutrition task")
    async def delete_task(
        self, db: AsyncSession, user_id: uuid.UUID, task_id: uuid.UUID
    ) -> None:
        await self.delete_owned(db, user_id, task_id)


nutrition_service = NutritionService()
