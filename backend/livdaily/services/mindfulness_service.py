"""
LivDaily Backend — Mindfulness Service
========================================

What:  Serves curated mindfulness content through the premium gate, manages
       the content catalogue for admins (hand-written or model-generated) and
       the user's mindfulness journal.
Who:   /api/mindfulness routes and /api/admin/mindfulness routes.

Content access flow:
    ┌──────────┐    ┌──────────────────┐    ┌───────────────┐    ┌──────────┐
    │ Session  │───▶│ Subscription     │───▶│ Query active  │───▶│ Gate     │
    │ user_id  │    │ resolve (lazy)   │    │ content       │    │ per item │
    └──────────┘    └──────────────────┘    └───────────────┘    └──────────┘

Inactive items are invisible to callers: omitted from lists, 404 on detail.
"""

import logging
import uuid
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.exceptions import NotFoundError
from livdaily.models.content import ContentItem, MindfulnessJournalEntry
from livdaily.schemas.ai import GeneratedContent
from livdaily.schemas.mindfulness import (
    ContentGenerateRequest,
    ContentItemCreate,
    ContentItemResponse,
    ContentItemUpdate,
    MindfulnessJournalCreate,
    MindfulnessJournalResponse,
)
from livdaily.services.ai_service import ai_service
from livdaily.services.base import OwnedRecordService, translate_db_errors
from livdaily.services.subscription_service import gate_content, subscription_service

logger = logging.getLogger(__name__)


def to_gated_response(item: ContentItem, premium: bool) -> ContentItemResponse:
    body, truncated = gate_content(item.content, premium)
    response = ContentItemResponse.model_validate(item)
    response.content = body
    response.is_truncated = truncated
    return response


class MindfulnessService(OwnedRecordService[MindfulnessJournalEntry]):
    model = MindfulnessJournalEntry
    resource = "mindfulness journal entry"
    required_fields = ("content",)

    # ── Content (caller view) ─────────────────────────────────────────────

    @translate_db_errors("load mindfulness content")
    async def list_content(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        module: Optional[str] = None,
        category: Optional[str] = None,
    ) -> List[ContentItemResponse]:
        premium = await subscription_service.is_premium(db, user_id)

        query = select(ContentItem).where(ContentItem.is_active.is_(True))
        if module:
            query = query.where(ContentItem.module == module)
        if category:
            query = query.where(ContentItem.category == category)
        query = query.order_by(desc(ContentItem.created_at))

        result = await db.execute(query)
        items = result.scalars().all()
        logger.info(
            "Mindfulness content retrieved for user %s: %d items (premium=%s)",
            user_id, len(items), premium,
        )
        return [to_gated_response(item, premium) for item in items]

    @translate_db_errors("load mindfulness content")
    async def get_content(
        self, db: AsyncSession, user_id: uuid.UUID, item_id: uuid.UUID
    ) -> ContentItemResponse:
        item = await db.get(ContentItem, item_id)
        if item is None or not item.is_active:
            raise NotFoundError(resource="content", resource_id=str(item_id))
        premium = await subscription_service.is_premium(db, user_id)
        return to_gated_response(item, premium)

    # ── Content (admin catalogue) ─────────────────────────────────────────

    @translate_db_errors("create content")
    async def create_content(self, db: AsyncSession, data: ContentItemCreate) -> ContentItemResponse:
        item = ContentItem(**data.model_dump(), is_active=True)
        db.add(item)
        await db.flush()
        logger.info("Content item %s created (module=%s)", item.id, item.module)
        return ContentItemResponse.model_validate(item)

    async def generate_content(
        self, db: AsyncSession, data: ContentGenerateRequest
    ) -> ContentItemResponse:
        """Have the model write a title and body, then save it as an AI-generated item."""
        generated = await ai_service.content_item(data.content_type, data.category, data.duration)
        return await self._save_generated(db, data, generated)

    @translate_db_errors("save generated content")
    async def _save_generated(
        self, db: AsyncSession, data: ContentGenerateRequest, generated: GeneratedContent
    ) -> ContentItemResponse:
        item = ContentItem(
            title=generated.title,
            content=generated.content,
            ai_generated=True,
            is_active=True,
            **data.model_dump(),
        )
        db.add(item)
        await db.flush()
        logger.info("Generated content item %s saved (category=%s)", item.id, item.category)
        return ContentItemResponse.model_validate(item)

    @translate_db_errors("update content")
    async def update_content(
        self, db: AsyncSession, item_id: uuid.UUID, data: ContentItemUpdate
    ) -> ContentItemResponse:
        item = await db.get(ContentItem, item_id)
        if item is None:
            raise NotFoundError(resource="content", resource_id=str(item_id))
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is None and field in ("module", "title", "content", "is_premium", "is_active"):
                continue
            setattr(item, field, value)
        await db.flush()
        return ContentItemResponse.model_validate(item)

    @translate_db_errors("delete content")
    async def delete_content(self, db: AsyncSession, item_id: uuid.UUID) -> None:
        item = await db.get(ContentItem, item_id)
        if item is None:
            raise NotFoundError(resource="content", resource_id=str(item_id))
        await db.delete(item)
        await db.flush()
        logger.info("Content item %s deleted", item_id)

    # ── Mindfulness journal ───────────────────────────────────────────────

    @translate_db_errors("list mindfulness journal entries")
    async def list_journal(
        self, db: AsyncSession, user_id: uuid.UUID
    ) -> List[MindfulnessJournalResponse]:
        result = await db.execute(
            select(MindfulnessJournalEntry)
            .where(MindfulnessJournalEntry.user_id == user_id)
            .order_by(desc(MindfulnessJournalEntry.created_at))
        )
        return [MindfulnessJournalResponse.model_validate(e) for e in result.scalars().all()]

    @translate_db_errors("save the mindfulness journal entry")
    async def create_journal(
        self, db: AsyncSession, user_id: uuid.UUID, data: MindfulnessJournalCreate
    ) -> MindfulnessJournalResponse:
        if data.content_item_id is not None:
            item = await db.get(ContentItem, data.content_item_id)
            if item is None or not item.is_active:
                raise NotFoundError(resource="content", resource_id=str(data.content_item_id))

        entry = MindfulnessJournalEntry(user_id=user_id, **data.model_dump())
        db.add(entry)
        await db.flush()
        return MindfulnessJournalResponse.model_validate(entry)

    @translate_db_errors("delete the mindfulness journal entry")
    async def delete_journal(
        self, db: AsyncSession, user_id: uuid.UUID, entry_id: uuid.UUID
    ) -> None:
        await self.delete_owned(db, user_id, entry_id)


mindfulness_service = MindfulnessService()
