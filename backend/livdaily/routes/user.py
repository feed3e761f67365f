"""User routes: /api/user/profile and /api/user/patterns, each created on first read."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_user
from livdaily.models.user import User
from livdaily.schemas.wellness import (
    UserPatternsResponse,
    UserPatternsUpdate,
    UserProfileResponse,
    UserProfileUpdate,
)
from livdaily.services.profile_service import profile_service

router = APIRouter(prefix="/api/user", tags=["User"])


@router.get("/profile", response_model=UserProfileResponse)
async def get_profile(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserProfileResponse:
    return await profile_service.get_profile(db, user.id)


@router.put("/profile", response_model=UserProfileResponse)
async def update_profile(
    body: UserProfileUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserProfileResponse:
    return await profile_service.update_profile(db, user.id, body)


@router.get("/patterns", response_model=UserPatternsResponse)
async def get_patterns(
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserPatternsResponse:
    return await profile_service.get_patterns(db, user.id)


@router.put("/patterns", response_model=UserPatternsResponse)
async def update_patterns(
    body: UserPatternsUpdate,
    user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db_session),
) -> UserPatternsResponse:
    return await profile_service.update_patterns(db, user.id, body)
