"""Daily rhythm routes: check-in CRUD and the current rhythm phase."""

from datetime import date, datetime
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_user
from livdaily.models.user import User
from livdaily.routes import OWNED_RECORD_ERRORS
from livdaily.schemas.common import SuccessResponse
from livdaily.schemas.wellness import (
    CurrentPhaseResponse,
    DailyRhythmCreate,
    DailyRhythmResponse,
    DailyRhythmUpdate,
)
from livdaily.services.rhythm_service import rhythm_phase_for_hour, rhythm_service

router = APIRouter(prefix="/api", tags=["Rhythms"])


@router.get("/rhythms", response_model=List[DailyRhythmResponse])
async def list_rhythms(
    on_date: Optional[date] = Query(default=None, alias="date"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[DailyRhythmResponse]:
    return await rhythm_service.list_rhythms(db, user.id, on_date)


@router.get(
    "/rhythms/phase",
    response_model=CurrentPhaseResponse,
    summary="Rhythm phase for an hour (defaults to the server's current hour)",
)
async def current_phase(
    hour: Optional[int] = Query(default=None, ge=0, le=23),
    user: User = Depends(get_current_user),
) -> CurrentPhaseResponse:
    hour = datetime.now().hour if hour is None else hour
    return CurrentPhaseResponse(phase=rhythm_phase_for_hour(hour), hour=hour)


@router.post("/rhythms", response_model=DailyRhythmResponse, status_code=status.HTTP_201_CREATED)
async def create_rhythm(
    body: DailyRhythmCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> DailyRhythmResponse:
    return await rhythm_service.create_rhythm(db, user.id, body)


@router.put(
    "/rhythms/{rhythm_id}", response_model=DailyRhythmResponse, responses=OWNED_RECORD_ERRORS
)
async def update_rhythm(
    rhythm_id: UUID,
    body: DailyRhythmUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> DailyRhythmResponse:
    return await rhythm_service.update_rhythm(db, user.id, rhythm_id, body)


@router.delete(
    "/rhythms/{rhythm_id}", response_model=SuccessResponse, responses=OWNED_RECORD_ERRORS
)
async def delete_rhythm(
    rhythm_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await rhythm_service.delete_rhythm(db, user.id, rhythm_id)
    return SuccessResponse()
