"""
LivDaily Backend — Session Gate Dependencies
==============================================

What:  FastAPI dependencies that authenticate the caller.
How:   `Authorization: Bearer <token>` → auth_service.resolve_token →
       (AuthSession, User). Missing, malformed, unknown or expired tokens
       raise UnauthorizedError (401); non-admins on admin routes raise
       ForbiddenError (403).

Usage:
    @router.get("/journal")
    async def list_entries(user: User = Depends(get_current_user), ...):
        ...
"""

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.database import get_db_session
from livdaily.exceptions import ForbiddenError, UnauthorizedError
from livdaily.models.user import AuthSession, User
from livdaily.services.auth_service import auth_service

# auto_error=False: the missing-header case goes through our own 401 handler
bearer_scheme = HTTPBearer(auto_error=False)


async def get_current_session(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    db: AsyncSession = Depends(get_db_session),
) -> AuthSession:
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError(message="Missing bearer token")
    session, user = await auth_service.resolve_token(db, credentials.credentials)
    request.state.user = user
    return session


async def get_current_user(
    request: Request,
    session: AuthSession = Depends(get_current_session),
) -> User:
    return request.state.user


async def require_admin(user: User = Depends(get_current_user)) -> User:
    if not user.is_admin:
        raise ForbiddenError(message="Admin access required")
    return user
