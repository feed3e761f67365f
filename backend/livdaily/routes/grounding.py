"""Grounding session routes: GET/POST /api/grounding, DELETE /api/grounding/{id}."""

from datetime import date
from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_user
from livdaily.models.user import User
from livdaily.routes import OWNED_RECORD_ERRORS
from livdaily.schemas.common import SuccessResponse
from livdaily.schemas.wellness import GroundingSessionCreate, GroundingSessionResponse
from livdaily.services.grounding_service import grounding_service

router = APIRouter(prefix="/api", tags=["Grounding"])


@router.get("/grounding", response_model=List[GroundingSessionResponse])
async def list_sessions(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[GroundingSessionResponse]:
    return await grounding_service.list_sessions(db, user.id, start_date, end_date)


@router.post(
    "/grounding",
    response_model=GroundingSessionResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_session(
    body: GroundingSessionCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> GroundingSessionResponse:
    return await grounding_service.create_session(db, user.id, body)


@router.delete(
    "/grounding/{session_id}",
    response_model=SuccessResponse,
    responses=OWNED_RECORD_ERRORS,
)
async def delete_session(
    session_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await grounding_service.delete_session(db, user.id, session_id)
    return SuccessResponse()
