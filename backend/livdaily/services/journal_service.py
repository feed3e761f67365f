"""
LivDaily Backend — Journal Service
====================================

What:  List/create/update/delete journal entries for the authenticated user.
Who:   /api/journal routes.

Query plan (list):
    SELECT ... FROM journal_entries
    WHERE user_id = :uid [AND created_at >= :start] [AND created_at < :end + 1 day]
    ORDER BY created_at DESC LIMIT :limit
    → idx_journal_entries_user_created
"""

import logging
import uuid
from datetime import date
from typing import List, Optional

from sqlalchemy import desc, select
from sqlalchemy.ext.asyncio import AsyncSession

from livdaily.models.wellness import JournalEntry
from livdaily.schemas.wellness import (
    JournalEntryCreate,
    JournalEntryResponse,
    JournalEntryUpdate,
)
from livdaily.services.base import OwnedRecordService, optional_range, translate_db_errors
from livdaily.services.rhythm_service import current_rhythm_phase

logger = logging.getLogger(__name__)


class JournalService(OwnedRecordService[JournalEntry]):
    model = JournalEntry
    resource = "journal entry"
    required_fields = ("content",)

    @translate_db_errors("list journal entries")
    async def list_entries(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        limit: Optional[int] = None,
    ) -> List[JournalEntryResponse]:
        """Most-recent-first entries owned by `user_id`, optionally bounded by date."""
        start, end = optional_range(start_date, end_date)
        query = select(JournalEntry).where(JournalEntry.user_id == user_id)
        if start is not None:
            query = query.where(JournalEntry.created_at >= start)
        if end is not None:
            query = query.where(JournalEntry.created_at < end)
        query = query.order_by(desc(JournalEntry.created_at))
        if limit:
            query = query.limit(limit)

        result = await db.execute(query)
        entries = result.scalars().all()
        logger.debug("Fetched %d journal entries for user %s", len(entries), user_id)
        return [JournalEntryResponse.model_validate(e) for e in entries]

    @translate_db_errors("save the journal entry")
    async def create_entry(
        self, db: AsyncSession, user_id: uuid.UUID, data: JournalEntryCreate
    ) -> JournalEntryResponse:
        fields = data.model_dump()
        if not fields.get("rhythm_phase"):
            fields["rhythm_phase"] = current_rhythm_phase()

        entry = JournalEntry(user_id=user_id, **fields)
        db.add(entry)
        await db.flush()
        logger.info("Journal entry %s created for user %s", entry.id, user_id)
        return JournalEntryResponse.model_validate(entry)

    @translate_db_errors("update the journal entry")
    async def update_entry(
        self,
        db: AsyncSession,
        user_id: uuid.UUID,
        entry_id: uuid.UUID,
        data: JournalEntryUpdate,
    ) -> JournalEntryResponse:
        entry = await self.get_owned(db, user_id, entry_id)
        self.apply_changes(entry, data.model_dump(exclude_unset=True))
        await db.flush()
        return JournalEntryResponse.model_validate(entry)

    @translate_db_errors("delete the journal entry")
    async def delete_entry(
        self, db: AsyncSession, user_id: uuid.UUID, entry_id: uuid.UUID
    ) -> None:
        await self.delete_owned(db, user_id, entry_id)


journal_service = JournalService()
