"""
LivDaily Backend — Auth Route Handlers
========================================

What:  Session issuance and revocation.
    POST /v1/auth/anonymous   anonymous session for first launch
    POST /api/auth/sign-up    email account + session
    POST /api/auth/sign-in    session for an existing email account
    POST /api/auth/sign-out   revoke the caller's token
    GET  /api/auth/me         the caller's user record
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.dependencies import get_current_session, get_current_user
from livdaily.models.user import AuthSession, User
from livdaily.schemas.auth import SessionResponse, SignInRequest, SignUpRequest, UserResponse
from livdaily.schemas.common import ErrorResponse, SuccessResponse
from livdaily.services.auth_service import auth_service

router = APIRouter(tags=["Auth"])


@router.post(
    "/v1/auth/anonymous",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Start an anonymous session",
)
async def sign_in_anonymous(db: AsyncSession = Depends(get_db_session)) -> SessionResponse:
    return await auth_service.sign_in_anonymous(db)


@router.post(
    "/api/auth/sign-up",
    response_model=SessionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={409: {"description": "Email already registered", "model": ErrorResponse}},
    summary="Create an email account",
)
async def sign_up(
    body: SignUpRequest, db: AsyncSession = Depends(get_db_session)
) -> SessionResponse:
    return await auth_service.sign_up(db, body)


@router.post(
    "/api/auth/sign-in",
    response_model=SessionResponse,
    responses={401: {"description": "Invalid credentials", "model": ErrorResponse}},
    summary="Sign in with email and password",
)
async def sign_in(
    body: SignInRequest, db: AsyncSession = Depends(get_db_session)
) -> SessionResponse:
    return await auth_service.sign_in(db, body)


@router.post(
    "/api/auth/sign-out",
    response_model=SuccessResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Revoke the current bearer token",
)
async def sign_out(
    session: AuthSession = Depends(get_current_session),
    db: AsyncSession = Depends(get_db_session),
) -> SuccessResponse:
    await auth_service.sign_out(db, session)
    return SuccessResponse()


@router.get(
    "/api/auth/me",
    response_model=UserResponse,
    responses={401: {"model": ErrorResponse}},
    summary="Current user",
)
async def me(user: User = Depends(get_current_user)) -> UserResponse:
    return UserResponse.model_validate(user)
