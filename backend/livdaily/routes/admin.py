"""
LivDaily Backend — Admin Route Handlers
=========================================

What:  Admin panel API. Every route depends on require_admin, so
       non-admins get 403 and anonymous callers 401 before any query runs.

    GET    /api/admin/users
    PUT    /api/admin/users/{id}/role
    GET    /api/admin/stats
    POST   /api/admin/subscription/grant
    GET    /api/admin/subscriptions
    POST   /api/admin/mindfulness/content
    POST   /api/admin/mindfulness/generate
    PUT    /api/admin/mindfulness/content/{id}
    DELETE /api/admin/mindfulness/content/{id}
    POST   /api/admin/motivation
    PUT    /api/admin/motivation/{id}
    DELETE /api/admin/motivation/{id}
"""

from typing import List
from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import require_admin
from livdaily.schemas.admin import (
    AdminUserResponse,
    AppStatsResponse,
    GrantSubscriptionRequest,
    RoleUpdateRequest,
)
from livdaily.schemas.common import ErrorResponse, SuccessResponse
from livdaily.schemas.mindfulness import (
    ContentGenerateRequest,
    ContentItemCreate,
    ContentItemResponse,
    ContentItemUpdate,
    MotivationCreate,
    MotivationResponse,
    MotivationUpdate,
    SubscriptionResponse,
)
from livdaily.services.admin_service import admin_service
from livdaily.services.mindfulness_service import mindfulness_service
from livdaily.services.motivation_service import motivation_service
from livdaily.services.subscription_service import subscription_service, to_response

router = APIRouter(
    prefix="/api/admin",
    tags=["Admin"],
    dependencies=[Depends(require_admin)],
    responses={
        401: {"description": "Missing or invalid session", "model": ErrorResponse},
        403: {"description": "Admin access required", "model": ErrorResponse},
    },
)


# ── Users ─────────────────────────────────────────────────────────────────

@router.get("/users", response_model=List[AdminUserResponse])
async def list_users(db: AsyncSession = Depends(get_db_session)) -> List[AdminUserResponse]:
    return await admin_service.list_users(db)


@router.put(
    "/users/{user_id}/role",
    response_model=AdminUserResponse,
    responses={
        400: {"description": "Role must be 'user' or 'admin'", "model": ErrorResponse},
        404: {"description": "User not found", "model": ErrorResponse},
    },
)
async def update_role(
    user_id: UUID,
    body: RoleUpdateRequest,
    db: AsyncSession = Depends(get_db_session),
) -> AdminUserResponse:
    return await admin_service.update_role(db, user_id, body.role)


@router.get("/stats", response_model=AppStatsResponse)
async def get_stats(db: AsyncSession = Depends(get_db_session)) -> AppStatsResponse:
    return await admin_service.get_stats(db)


# ── Subscriptions ─────────────────────────────────────────────────────────

@router.post(
    "/subscription/grant",
    response_model=SubscriptionResponse,
    responses={404: {"description": "User not found", "model": ErrorResponse}},
)
async def grant_subscription(
    body: GrantSubscriptionRequest,
    db: AsyncSession = Depends(get_db_session),
) -> SubscriptionResponse:
    subscription = await subscription_service.grant(
        db, body.user_id, body.subscription_type, body.duration_days
    )
    return to_response(subscription)


@router.get("/subscriptions", response_model=List[SubscriptionResponse])
async def list_subscriptions(
    db: AsyncSession = Depends(get_db_session),
) -> List[SubscriptionResponse]:
    return [to_response(s) for s in await subscription_service.list_all(db)]


# ── Mindfulness content ───────────────────────────────────────────────────

@router.post(
    "/mindfulness/content",
    response_model=ContentItemResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_content(
    body: ContentItemCreate, db: AsyncSession = Depends(get_db_session)
) -> ContentItemResponse:
    return await mindfulness_service.create_content(db, body)


@router.post(
    "/mindfulness/generate",
    response_model=ContentItemResponse,
    status_code=status.HTTP_201_CREATED,
    responses={503: {"description": "AI generation unavailable", "model": ErrorResponse}},
)
async def generate_content(
    body: ContentGenerateRequest, db: AsyncSession = Depends(get_db_session)
) -> ContentItemResponse:
    return await mindfulness_service.generate_content(db, body)


@router.put("/mindfulness/content/{item_id}", response_model=ContentItemResponse)
async def update_content(
    item_id: UUID, body: ContentItemUpdate, db: AsyncSession = Depends(get_db_session)
) -> ContentItemResponse:
    return await mindfulness_service.update_content(db, item_id, body)


@router.delete("/mindfulness/content/{item_id}", response_model=SuccessResponse)
async def delete_content(
    item_id: UUID, db: AsyncSession = Depends(get_db_session)
) -> SuccessResponse:
    await mindfulness_service.delete_content(db, item_id)
    return SuccessResponse()


# ── Weekly motivation ─────────────────────────────────────────────────────

@router.post(
    "/motivation", response_model=MotivationResponse, status_code=status.HTTP_201_CREATED
)
async def create_motivation(
    body: MotivationCreate, db: AsyncSession = Depends(get_db_session)
) -> MotivationResponse:
    return await motivation_service.create(db, body)


@router.put("/motivation/{motivation_id}", response_model=MotivationResponse)
async def update_motivation(
    motivation_id: UUID, body: MotivationUpdate, db: AsyncSession = Depends(get_db_session)
) -> MotivationResponse:
    return await motivation_service.update(db, motivation_id, body)


@router.delete("/motivation/{motivation_id}", response_model=SuccessResponse)
async def delete_motivation(
    motivation_id: UUID, db: AsyncSession = Depends(get_db_session)
) -> SuccessResponse:
    await motivation_service.delete(db, motivation_id)
    return SuccessResponse()
