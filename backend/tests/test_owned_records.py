"""
LivDaily Backend — Ownership & CRUD Service Tests
===================================================

What we test:
    ✅ Missing record → NotFoundError; another user's record → ForbiddenError
    ✅ Updates only touch sent fields and never null out required columns
    ✅ Unexpected errors inside a service become DatabaseError
    ✅ Journal entries default their rhythm phase to the current one
    ✅ Racing first reads of a per-user row settle on the stored row
    ✅ Ticking a nutrition task stamps completed_at; un-ticking clears it
"""

import uuid
from datetime import date, datetime, timezone
from unittest.mock import MagicMock, patch

import pytest
from sqlalchemy.exc import IntegrityError

from livdaily.exceptions import DatabaseError, ForbiddenError, NotFoundError
from livdaily.models.user import UserProfile
from livdaily.models.wellness import JournalEntry, NutritionTask
from livdaily.schemas.wellness import (
    JournalEntryCreate,
    JournalEntryUpdate,
    NutritionTaskUpdate,
)
from livdaily.services.base import translate_db_errors
from livdaily.services.journal_service import JournalService
from livdaily.services.nutrition_service import NutritionService
from livdaily.services.profile_service import profile_service


def _assign_defaults_on_flush(session):
    """Mimic the INSERT populating primary key and timestamp defaults."""
    async def flush():
        record = session.add.call_args[0][0]
        record.id = record.id or uuid.uuid4()
        record.created_at = record.created_at or datetime.now(timezone.utc)
    session.flush.side_effect = flush


def _entry(user_id: uuid.UUID, **fields) -> JournalEntry:
    values = {
        "id": uuid.uuid4(),
        "user_id": user_id,
        "content": "Slow morning, good coffee.",
        "mood": "calm",
        "created_at": datetime.now(timezone.utc),
    }
    values.update(fields)
    return JournalEntry(**values)


class TestOwnership:

    def setup_method(self):
        self.service = JournalService()
        self.owner = uuid.uuid4()

    @pytest.mark.asyncio
    async def test_missing_record_is_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.delete_entry(mock_db_session, self.owner, uuid.uuid4())
        mock_db_session.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_other_users_record_is_forbidden(self, mock_db_session):
        """A valid ID owned by someone else must be refused, never modified."""
        entry = _entry(uuid.uuid4())
        mock_db_session.get.return_value = entry

        with pytest.raises(ForbiddenError):
            await self.service.update_entry(
                mock_db_session, self.owner, entry.id, JournalEntryUpdate(content="hijack")
            )
        assert entry.content == "Slow morning, good coffee."

    @pytest.mark.asyncio
    async def test_owner_can_delete(self, mock_db_session):
        entry = _entry(self.owner)
        mock_db_session.get.return_value = entry

        await self.service.delete_entry(mock_db_session, self.owner, entry.id)

        mock_db_session.delete.assert_awaited_once_with(entry)
        mock_db_session.flush.assert_awaited()


class TestUpdates:

    def setup_method(self):
        self.service = JournalService()
        self.owner = uuid.uuid4()

    @pytest.mark.asyncio
    async def test_only_sent_fields_change(self, mock_db_session):
        entry = _entry(self.owner)
        mock_db_session.get.return_value = entry

        result = await self.service.update_entry(
            mock_db_session, self.owner, entry.id, JournalEntryUpdate(mood="tired")
        )

        assert result.mood == "tired"
        assert result.content == "Slow morning, good coffee."

    @pytest.mark.asyncio
    async def test_explicit_null_does_not_clear_required_content(self, mock_db_session):
        entry = _entry(self.owner)
        mock_db_session.get.return_value = entry

        await self.service.update_entry(
            mock_db_session,
            self.owner,
            entry.id,
            JournalEntryUpdate.model_validate({"content": None, "mood": None}),
        )

        assert entry.content == "Slow morning, good coffee."
        assert entry.mood is None


class TestJournalCreate:

    @pytest.mark.asyncio
    async def test_rhythm_phase_defaults_to_current(self, mock_db_session):
        service = JournalService()
        _assign_defaults_on_flush(mock_db_session)
        with patch(
            "livdaily.services.journal_service.current_rhythm_phase", return_value="evening"
        ):
            result = await service.create_entry(
                mock_db_session, uuid.uuid4(), JournalEntryCreate(content="Wind down.")
            )

        assert result.rhythm_phase == "evening"
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_explicit_rhythm_phase_is_kept(self, mock_db_session):
        service = JournalService()
        _assign_defaults_on_flush(mock_db_session)
        result = await service.create_entry(
            mock_db_session,
            uuid.uuid4(),
            JournalEntryCreate(content="Sunrise walk.", rhythm_phase="morning"),
        )
        assert result.rhythm_phase == "morning"


class TestTranslateDbErrors:

    @pytest.mark.asyncio
    async def test_unexpected_error_becomes_database_error(self):
        @translate_db_errors("load things")
        async def broken():
            raise RuntimeError("disk full")

        with pytest.raises(DatabaseError) as exc_info:
            await broken()
        assert exc_info.value.message == "Could not load things. Please try again."

    @pytest.mark.asyncio
    async def test_application_errors_pass_through(self):
        @translate_db_errors("load things")
        async def missing():
            raise NotFoundError(resource="thing")

        with pytest.raises(NotFoundError):
            await missing()


class TestLazyRowRace:

    @pytest.mark.asyncio
    async def test_profile_insert_race_returns_existing_row(self, mock_db_session):
        """A unique-key clash on first GET reloads the concurrent request's profile."""
        owner = uuid.uuid4()
        winner = UserProfile(
            id=uuid.uuid4(),
            user_id=owner,
            theme_preference="ocean",
            created_at=datetime.now(timezone.utc),
        )
        missing = MagicMock()
        missing.scalar_one_or_none.return_value = None
        reloaded = MagicMock()
        reloaded.scalar_one.return_value = winner
        mock_db_session.execute.side_effect = [missing, reloaded]
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT INTO user_profiles", {}, Exception("UNIQUE constraint failed")
        )

        profile = await profile_service.get_profile(mock_db_session, owner)

        assert profile.id == winner.id
        assert profile.theme_preference == "ocean"
        mock_db_session.begin_nested.assert_called_once()


class TestNutritionCompletion:

    def setup_method(self):
        self.service = NutritionService()
        self.owner = uuid.uuid4()

    def _task(self, **fields) -> NutritionTask:
        values = {
            "id": uuid.uuid4(),
            "user_id": self.owner,
            "task_description": "Drink a glass of water",
            "completed": False,
            "completed_at": None,
            "date": date(2024, 3, 4),
        }
        values.update(fields)
        return NutritionTask(**values)

    @pytest.mark.asyncio
    async def test_completing_stamps_completed_at(self, mock_db_session):
        task = self._task()
        mock_db_session.get.return_value = task

        result = await self.service.update_task(
            mock_db_session, self.owner, task.id, NutritionTaskUpdate(completed=True)
        )

        assert result.completed is True
        assert result.completed_at is not None

    @pytest.mark.asyncio
    async def test_reopening_clears_completed_at(self, mock_db_session):
        task = self._task(completed=True, completed_at=datetime.now(timezone.utc))
        mock_db_session.get.return_value = task

        result = await self.service.update_task(
            mock_db_session, self.owner, task.id, NutritionTaskUpdate(completed=False)
        )

        assert result.completed is False
        assert result.completed_at is None
