"""Nutrition task routes: /api/nutrition/tasks?date, POST, PUT/DELETE by ID."""

from datetime import date
from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_user
from livdaily.models.user import User
from livdaily.routes import OWNED_RECORD_ERRORS
from livdaily.schemas.common import SuccessResponse
from livdaily.schemas.wellness import (
    NutritionTaskCreate,
    NutritionTaskResponse,
    NutritionTaskUpdate,
)
from livdaily.services.nutrition_service import nutrition_service

router = APIRouter(prefix="/api/nutrition", tags=["Nutrition"])


@router.get("/tasks", response_model=List[NutritionTaskResponse])
async def list_tasks(
    on_date: date = Query(alias="date"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[NutritionTaskResponse]:
    return await nutrition_service.list_tasks(db, user.id, on_date)


@router.post(
    "/tasks", response_model=NutritionTaskResponse, status_code=status.HTTP_201_CREATED
)
async def create_task(
    body: NutritionTaskCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NutritionTaskResponse:
    return await nutrition_service.create_task(db, user.id, body)


@router.put(
    "/tasks/{task_id}", response_model=NutritionTaskResponse, responses=OWNED_RECORD_ERRORS
)
async def update_task(
    task_id: UUID,
    body: NutritionTaskUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> NutritionTaskResponse:
    return await nutrition_service.update_task(db, user.id, task_id, body)


@router.delete(
    "/tasks/{task_id}", response_model=SuccessResponse, responses=OWNED_RECORD_ERRORS
)
async def delete_task(
    task_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await nutrition_service.delete_task(db, user.id, task_id)
    return SuccessResponse()
