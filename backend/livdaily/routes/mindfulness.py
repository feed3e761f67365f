"""
LivDaily Backend — Mindfulness Route Handlers
===============================================

What:
    GET    /api/mindfulness/content          gated list of active content
    GET    /api/mindfulness/content/{id}     gated single item
    GET    /api/mindfulness/subscription     caller's subscription (lazy create)
    GET    /api/mindfulness/journal          caller's mindfulness journal
    POST   /api/mindfulness/journal
    DELETE /api/mindfulness/journal/{id}

Free callers receive the first 100 characters of each body plus "...";
premium callers receive the full body.
"""

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_user
from livdaily.models.user import User
from livdaily.routes import OWNED_RECORD_ERRORS
from livdaily.schemas.common import ErrorResponse, SuccessResponse
from livdaily.schemas.mindfulness import (
    ContentItemResponse,
    MindfulnessJournalCreate,
    MindfulnessJournalResponse,
    SubscriptionResponse,
)
from livdaily.services.mindfulness_service import mindfulness_service
from livdaily.services.subscription_service import subscription_service, to_response

router = APIRouter(prefix="/api/mindfulness", tags=["Mindfulness"])


@router.get(
    "/content",
    response_model=List[ContentItemResponse],
    summary="List mindfulness content (truncated for free users)",
)
async def list_content(
    module: Optional[str] = Query(default=None),
    category: Optional[str] = Query(default=None),
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[ContentItemResponse]:
    return await mindfulness_service.list_content(db, user.id, module=module, category=category)


@router.get(
    "/content/{item_id}",
    response_model=ContentItemResponse,
    responses={404: {"description": "Content not found or inactive", "model": ErrorResponse}},
)
async def get_content(
    item_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> ContentItemResponse:
    return await mindfulness_service.get_content(db, user.id, item_id)


@router.get("/subscription", response_model=SubscriptionResponse)
async def get_subscription(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SubscriptionResponse:
    return to_response(await subscription_service.resolve(db, user.id))


@router.get("/journal", response_model=List[MindfulnessJournalResponse])
async def list_journal(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> List[MindfulnessJournalResponse]:
    return await mindfulness_service.list_journal(db, user.id)


@router.post(
    "/journal",
    response_model=MindfulnessJournalResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_journal(
    body: MindfulnessJournalCreate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> MindfulnessJournalResponse:
    return await mindfulness_service.create_journal(db, user.id, body)


@router.delete(
    "/journal/{entry_id}", response_model=SuccessResponse, responses=OWNED_RECORD_ERRORS
)
async def delete_journal(
    entry_id: UUID,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await mindfulness_service.delete_journal(db, user.id, entry_id)
    return SuccessResponse()
