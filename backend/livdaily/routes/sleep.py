"""
LivDaily Backend — Sleep Route Handlers
=========================================

What:  Sleep log CRUD plus GET /api/sleep/stats?period=week|month.
Note:  /sleep/stats is declared before /sleep/{log_id} so "stats" is never
       parsed as an ID.
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
    SleepLogCreate,
    SleepLogResponse,
    SleepLogUpdate,
    SleepStatsResponse,
)
from livdaily.services.sleep_service import sleep_service

router = APIRouter(prefix="/api", tags=["Sleep"])


@router.get("/sleep", response_model=List[SleepLogResponse])
async def list_logs(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[SleepLogResponse]:
    return await sleep_service.list_logs(db, user.id, start_date, end_date)


@router.get(
    "/sleep/stats",
    response_model=SleepStatsResponse,
    summary="Sleep averages over the last week or month",
)
async def get_stats(
    period: Literal["week", "month"] = Query(default="week"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SleepStatsResponse:
    return await sleep_service.get_stats(db, user.id, period)


@router.post("/sleep", response_model=SleepLogResponse, status_code=status.HTTP_201_CREATED)
async def create_log(
    body: SleepLogCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SleepLogResponse:
    return await sleep_service.create_log(db, user.id, body)


@router.put("/sleep/{log_id}", response_model=SleepLogResponse, responses=OWNED_RECORD_ERRORS)
async def update_log(
    log_id: UUID,
    body: SleepLogUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SleepLogResponse:
    return await sleep_service.update_log(db, user.id, log_id, body)


@router.delete("/sleep/{log_id}", response_model=SuccessResponse, responses=OWNED_RECORD_ERRORS)
async def delete_log(
    log_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await sleep_service.delete_log(db, user.id, log_id)
    return SuccessResponse()
