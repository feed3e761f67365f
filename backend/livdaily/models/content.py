"""
LivDaily Backend — Curated Content Models
===========================================

What:  Admin-curated mindfulness content and weekly motivation, plus the
       user-owned mindfulness journal that can reference a content item.
Who:   Mindfulness, motivation and admin services.

Premium gating:
    ContentItem.content is stored in full. The free/premium truncation is
    applied when the item is serialized for a caller, never on write.
"""

import uuid
from datetime import date, datetime
from typing import Any, Dict, Optional

from sqlalchemy import Boolean, Date, DateTime, ForeignKey, Integer, String, Text, Uuid, func
from sqlalchemy.orm import Mapped, mapped_column

from livdaily.database import Base
from livdaily.models.user import JSONType, utcnow


class ContentItem(Base):
    """
    A piece of mindfulness content.

    module:       mindfulness | breathwork | movement | nutrition | focus |
                  calm | sleep | grounding | motivation
    content_type: free-form label used by the client (e.g. 'meditation')
    payload:      optional structured body (steps, audio cues) for the module
    """

    __tablename__ = "content_items"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    module: Mapped[str] = mapped_column(
        String(30), nullable=False, default="mindfulness", server_default="mindfulness"
    )
    title: Mapped[str] = mapped_column(String(255), nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    payload: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSONType, nullable=True)
    content_type: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    # Minutes
    duration: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)

    is_premium: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    ai_generated: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow,
        server_default=func.now(),
    )

    def __repr__(self) -> str:
        return f"<ContentItem(id={self.id}, title='{self.title}', premium={self.is_premium})>"


class MindfulnessJournalEntry(Base):
    __tablename__ = "mindfulness_journal_entries"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    content_item_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        Uuid, ForeignKey("content_items.id", ondelete="SET NULL"), nullable=True
    )
    content: Mapped[str] = mapped_column(Text, nullable=False)
    mood: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )


class WeeklyMotivation(Base):
    """Motivational copy shown for the week starting on week_start_date (a Monday)."""

    __tablename__ = "weekly_motivations"

    id: Mapped[uuid.UUID] = mapped_column(Uuid, primary_key=True, default=uuid.uuid4)
    week_start_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    author: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow, server_default=func.now()
    )
