"""Weekly motivation routes: current week and history."""

from typing import List

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_user
from livdaily.models.user import User
from livdaily.schemas.common import ErrorResponse
from livdaily.schemas.mindfulness import MotivationResponse
from livdaily.services.motivation_service import DEFAULT_HISTORY_LIMIT, motivation_service

router = APIRouter(prefix="/api/motivation", tags=["Motivation"])


@router.get(
    "/current",
    response_model=MotivationResponse,
    responses={404: {"description": "Nothing published for this week", "model": ErrorResponse}},
)
async def get_current(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MotivationResponse:
    return await motivation_service.get_current(db)


@router.get("/history", response_model=List[MotivationResponse])
async def get_history(
    limit: int = Query(default=DEFAULT_HISTORY_LIMIT, ge=1, le=100),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[MotivationResponse]:
    return await motivation_service.get_history(db, limit)
