"""
LivDaily Backend — Auth & Session Service
===========================================

What:  Issues, resolves and revokes bearer-token sessions.
How:   Tokens are random opaque strings (secrets.token_urlsafe) stored in
       auth_sessions with an expiry. Passwords are hashed with bcrypt.
Who:   The auth routes (issue/revoke) and livdaily.dependencies (resolve).

Session gate contract:
    resolve_token(token) → (AuthSession, User) for a known, unexpired token,
    otherwise UnauthorizedError (401). No refresh, no retry.

Sign-in flows:
    anonymous  → new User(is_anonymous=True) + session
    sign-up    → new email user (bcrypt hash) + session; duplicate email → 409
    sign-in    → email + password check; any mismatch → 401
"""

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import bcrypt
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.config import settings
from livdaily.exceptions import ConflictError, UnauthorizedError
from livdaily.models.user import AuthSession, User
from livdaily.schemas.auth import SessionResponse, SignInRequest, SignUpRequest
from livdaily.services.base import translate_db_errors

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: Optional[str]) -> bool:
    if not password_hash:
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        logger.warning("Stored password hash could not be parsed")
        return False


class AuthService:
    """Session issuance and resolution. Stateless; one instance per process."""

    # ── Issuance ──────────────────────────────────────────────────────────

    async def _issue_session(self, db: AsyncSession, user: User) -> SessionResponse:
        session = AuthSession(
            user_id=user.id,
            token=secrets.token_urlsafe(32),
            expires_at=datetime.now(timezone.utc) + timedelta(days=settings.session_ttl_days),
        )
        db.add(session)
        await db.flush()
        return SessionResponse(
            user_id=user.id, token=session.token, expires_at=session.expires_at
        )

    @translate_db_errors("create an anonymous session")
    async def sign_in_anonymous(self, db: AsyncSession) -> SessionResponse:
        user = User(id=uuid.uuid4(), is_anonymous=True, role="user")
        db.add(user)
        await db.flush()
        logger.info("Anonymous user created: %s", user.id)
        return await self._issue_session(db, user)

    @translate_db_errors("create the account")
    async def sign_up(self, db: AsyncSession, request: SignUpRequest) -> SessionResponse:
        existing = await db.execute(select(User).where(User.email == request.email))
        if existing.scalar_one_or_none() is not None:
            raise ConflictError(
                message="An account with this email already exists",
                context={"field": "email"},
            )

        user = User(
            id=uuid.uuid4(),
            email=request.email,
            password_hash=hash_password(request.password),
            name=request.name,
            is_anonymous=False,
            role="user",
        )
        db.add(user)
        await db.flush()
        logger.info("User signed up: %s", user.id)
        return await self._issue_session(db, user)

    @translate_db_errors("sign in")
    async def sign_in(self, db: AsyncSession, request: SignInRequest) -> SessionResponse:
        result = await db.execute(select(User).where(User.email == request.email))
        user = result.scalar_one_or_none()
        if user is None or not verify_password(request.password, user.password_hash):
            # Same error for unknown email and wrong password
            raise UnauthorizedError(message="Invalid email or password")
        logger.info("User signed in: %s", user.id)
        return await self._issue_session(db, user)

    # ── Resolution ────────────────────────────────────────────────────────

    @translate_db_errors("verify the session")
    async def resolve_token(self, db: AsyncSession, token: str) -> Tuple[AuthSession, User]:
        """
        Resolve a bearer token to its session and user.

        Expiry is compared in SQL so the check behaves the same on PostgreSQL
        and SQLite (which returns naive datetimes).
        """
        result = await db.execute(
            select(AuthSession, User)
            .join(User, User.id == AuthSession.user_id)
            .where(
                AuthSession.token == token,
                AuthSession.expires_at > datetime.now(timezone.utc),
            )
        )
        row = result.first()
        if row is None:
            raise UnauthorizedError(message="Invalid or expired session")
        session, user = row
        return session, user

    # ── Revocation ────────────────────────────────────────────────────────

    @translate_db_errors("sign out")
    async def sign_out(self, db: AsyncSession, session: AuthSession) -> None:
        await db.execute(delete(AuthSession).where(AuthSession.id == session.id))
        logger.info("Session revoked for user %s", session.user_id)


auth_service = AuthService()
