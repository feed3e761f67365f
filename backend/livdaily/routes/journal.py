"""
LivDaily Backend — Journal Route Handlers
===========================================

What:  GET/POST /api/journal, PUT/DELETE /api/journal/{id}.
How:   Thin handlers: the session gate supplies the user, JournalService
       scopes every query to that user and enforces ownership on writes.
"""

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
from livdaily.schemas.wellness import JournalEntryCreate, JournalEntryResponse, JournalEntryUpdate
from livdaily.services.journal_service import journal_service

router = APIRouter(prefix="/api", tags=["Journal"])


@router.get(
    "/journal",
    response_model=List[JournalEntryResponse],
    responses={401: OWNED_RECORD_ERRORS[401]},
    summary="List journal entries, most recent first",
)
async def list_entries(
    start_date: Optional[date] = Query(default=None, alias="startDate"),
    end_date: Optional[date] = Query(default=None, alias="endDate"),
    limit: Optional[int] = Query(default=None, ge=1, le=500),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[JournalEntryResponse]:
    return await journal_service.list_entries(
        db, user.id, start_date=start_date, end_date=end_date, limit=limit
    )


@router.post(
    "/journal",
    response_model=JournalEntryResponse,
    status_code=status.HTTP_201_CREATED,
    responses={401: OWNED_RECORD_ERRORS[401]},
    summary="Create a journal entry",
)
async def create_entry(
    body: JournalEntryCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> JournalEntryResponse:
    return await journal_service.create_entry(db, user.id, body)


@router.put(
    "/journal/{entry_id}",
    response_model=JournalEntryResponse,
    responses=OWNED_RECORD_ERRORS,
    summary="Update one of your journal entries",
)
async def update_entry(
    entry_id: UUID,
    body: JournalEntryUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> JournalEntryResponse:
    return await journal_service.update_entry(db, user.id, entry_id, body)


@router.delete(
    "/journal/{entry_id}",
    response_model=SuccessResponse,
    responses=OWNED_RECORD_ERRORS,
    summary="Delete one of your journal entries",
)
async def delete_entry(
    entry_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await journal_service.delete_entry(db, user.id, entry_id)
    return SuccessResponse()
