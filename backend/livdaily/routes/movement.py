"""
LivDaily Backend — Movement Route Handlers
============================================

What:  Movement session log plus GET /api/movement/stats?period=week|month.
Note:  /movement/stats is declared before /movement/{log_id}.
"""

from datetime import date
from typing import List, Literal, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_user
from livdaily.models.user import User
from livdaily.routes import OWNED_RECORD_ERRORS
from livdaily.schemas.common import SuccessResponse
from livdaily.schemas.wellness import (
    MovementLogCreate,
    MovementLogResponse,
    MovementLogUpdate,
    MovementStatsResponse,
)
from livdaily.services.movement_service import movement_service

router = APIRouter(prefix="/api", tags=["Movement"])


@router.get("/movement", response_model=List[MovementLogResponse])
async def list_logs(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[MovementLogResponse]:
    return await movement_service.list_logs(db, user.id, start_date, end_date)


@router.get(
    "/movement/stats",
    response_model=MovementStatsResponse,
    summary="Movement totals over the last week or month",
)
async def get_stats(
    period: Literal["week", "month"] = Query(default="week"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MovementStatsResponse:
    return await movement_service.get_stats(db, user.id, period)


@router.post(
    "/movement", response_model=MovementLogResponse, status_code=status.HTTP_201_CREATED
)
async def create_log(
    body: MovementLogCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MovementLogResponse:
    return await movement_service.create_log(db, user.id, body)


@router.put(
    "/movement/{log_id}", response_model=MovementLogResponse, responses=OWNED_RECORD_ERRORS
)
async def update_log(
    log_id: UUID,
    body: MovementLogUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MovementLogResponse:
    return await movement_service.update_log(db, user.id, log_id, body)


@router.delete(
    "/movement/{log_id}", response_model=SuccessResponse, responses=OWNED_RECORD_ERRORS
)
async def delete_log(
    log_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await movement_service.delete_log(db, user.id, log_id)
    return SuccessResponse()
