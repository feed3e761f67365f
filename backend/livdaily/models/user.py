"""
LivDaily Backend — Account Models
===================================

What:  ORM models for accounts: users, bearer-token sessions, subscriptions,
       the per-user profile and stored habit patterns.
Who:   Used by the auth, subscription, profile and admin services; read by
       Alembic through `livdaily.models`.

Table Design:
    - UUID primary keys generated in Python (portable between PostgreSQL and
      the SQLite test database)
    - Every user-owned row references users.id with ON DELETE CASCADE
    - subscriptions, user_profiles and user_patterns have a UNIQUE user_id:
      one row per user, created lazily on first access
"""

import uuid
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, String, Uuid, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from livdaily.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# JSONB on PostgreSQL, plain JSON elsewhere
JSONType = JSON().with_variant(JSONB(), "postgresql")


class User(Base):
    """
    An account. Anonymous users have no email or password and only hold a
    session token; email users sign in with a bcrypt-hashed password.
    """

    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    email: Mapped[Optional[str]] = mapped_column(String(320), unique=True, nullable=True)
    password_hash: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    is_anonymous: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)

    # Values: 'user' | 'admin'
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="user", server_default="user"
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
        server_default=func.now(),
    )

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"

    def __repr__(self) -> str:
        return f"<User(id={self.id}, role='{self.role}', anonymous={self.is_anonymous})>"


class AuthSession(Base):
    """
    An opaque bearer token issued at sign-in. The session gate resolves
    `Authorization: Bearer <token>` to the owning user while expires_at is
    in the future.
    """

    __tablename__ = "auth_sessions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    token: Mapped[str] = mapped_column(String(128), nullable=False, unique=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)


class Subscription(Base):
    """
    Subscription state per user.

    subscription_type: 'free' | 'premium'
    status:            'active' | 'inactive'
    end_date:          NULL for open-ended subscriptions
    """

    __tablename__ = "subscriptions"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    subscription_type: Mapped[str] = mapped_column(
        String(20), nullable=False, default="free", server_default="free"
    )
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="active", server_default="active"
    )
    start_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    end_date: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )

    def __repr__(self) -> str:
        return (
            f"<Subscription(user_id={self.user_id}, type='{self.subscription_type}', "
            f"status='{self.status}')>"
        )


class UserProfile(Base):
    """Display preferences for the mobile client. Created on first GET."""

    __tablename__ = "user_profiles"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    theme_preference: Mapped[str] = mapped_column(
        String(50), nullable=False, default="earth_tones", server_default="earth_tones"
    )
    notification_settings: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSONType, nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )


class UserPattern(Base):
    """
    Free-form observations about a user's habits (preferred rhythm phase,
    favourite wind-down, ...) fed into the AI prompts. One row per user,
    created empty on first read.
    """

    __tablename__ = "user_patterns"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    pattern_data: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    last_updated: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
        server_default=func.now(),
    )
