"""
LivDaily Backend — Subscription Resolver & Content Gate Tests
===============================================================

What we test:
    ✅ Free callers get at most 100 chars + "..." (short bodies included)
    ✅ Premium callers get the full body, untouched
    ✅ Premium eligibility needs type=premium AND status=active
    ✅ First lookup creates a free/active subscription; later lookups reuse it
    ✅ Two concurrent first lookups both end up with the single stored row
    ✅ Database failures surface as DatabaseError
"""

import uuid
from unittest.mock import MagicMock

import pytest
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError

from livdaily.config import Settings
from livdaily.exceptions import DatabaseError, NotFoundError
from livdaily.models.user import Subscription
from livdaily.services.subscription_service import (
    ACTIVE,
    FREE,
    INACTIVE,
    PREMIUM,
    SubscriptionService,
    gate_content,
    is_premium_eligible,
)


def _subscription(subscription_type: str, status: str) -> Subscription:
    return Subscription(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        subscription_type=subscription_type,
        status=status,
    )


class TestGateContent:

    def test_free_long_body_is_cut_to_preview(self):
        """A 250-char body becomes its first 100 chars followed by '...'."""
        body = "a" * 250
        visible, truncated = gate_content(body, premium=False)
        assert visible == "a" * 100 + "..."
        assert len(visible) == 103
        assert truncated is True

    def test_free_short_body_still_gets_ellipsis(self):
        """Bodies under the preview length are returned whole plus '...'."""
        visible, truncated = gate_content("Breathe in.", premium=False)
        assert visible == "Breathe in...."
        assert truncated is True

    def test_premium_gets_full_body(self):
        """Premium callers see the stored body unchanged."""
        body = "b" * 500
        visible, truncated = gate_content(body, premium=True)
        assert visible == body
        assert truncated is False

    def test_free_output_never_exceeds_103_chars(self):
        for length in (0, 1, 99, 100, 101, 5000):
            visible, _ = gate_content("x" * length, premium=False)
            assert len(visible) <= 103

    def test_custom_preview_length(self):
        visible, _ = gate_content("abcdefgh", premium=False, preview_chars=3)
        assert visible == "abc..."

    def test_preview_setting_cannot_exceed_100_chars(self):
        with pytest.raises(ValidationError):
            Settings(free_preview_chars=500)

    def test_preview_setting_accepts_shorter_previews(self):
        assert Settings(free_preview_chars=40).free_preview_chars == 40


class TestPremiumEligibility:

    def test_active_premium_is_eligible(self):
        assert is_premium_eligible(_subscription(PREMIUM, ACTIVE)) is True

    def test_inactive_premium_is_not_eligible(self):
        assert is_premium_eligible(_subscription(PREMIUM, INACTIVE)) is False

    def test_active_free_is_not_eligible(self):
        assert is_premium_eligible(_subscription(FREE, ACTIVE)) is False

    def test_missing_subscription_is_not_eligible(self):
        assert is_premium_eligible(None) is False


class TestSubscriptionResolve:

    def setup_method(self):
        self.service = SubscriptionService()

    @pytest.mark.asyncio
    async def test_creates_free_active_on_first_lookup(self, mock_db_session):
        """No row yet → a free/active subscription is added and flushed."""
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = None
        mock_db_session.execute.return_value = mock_result
        user_id = uuid.uuid4()

        subscription = await self.service.resolve(mock_db_session, user_id)

        assert subscription.user_id == user_id
        assert subscription.subscription_type == FREE
        assert subscription.status == ACTIVE
        assert subscription.start_date is not None
        mock_db_session.add.assert_called_once_with(subscription)
        mock_db_session.flush.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_returns_existing_row_without_writing(self, mock_db_session):
        existing = _subscription(PREMIUM, ACTIVE)
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = existing
        mock_db_session.execute.return_value = mock_result

        subscription = await self.service.resolve(mock_db_session, existing.user_id)

        assert subscription is existing
        mock_db_session.add.assert_not_called()

    @pytest.mark.asyncio
    async def test_concurrent_first_lookup_reloads_winning_row(self, mock_db_session):
        """Losing the insert race to another request returns that request's row."""
        winner = _subscription(FREE, ACTIVE)
        missing = MagicMock()
        missing.scalar_one_or_none.return_value = None
        reloaded = MagicMock()
        reloaded.scalar_one.return_value = winner
        mock_db_session.execute.side_effect = [missing, reloaded]
        mock_db_session.flush.side_effect = IntegrityError(
            "INSERT INTO subscriptions", {}, Exception("UNIQUE constraint failed")
        )

        subscription = await self.service.resolve(mock_db_session, winner.user_id)

        assert subscription is winner
        mock_db_session.begin_nested.assert_called_once()
        assert mock_db_session.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_database_failure_raises_database_error(self, mock_db_session):
        mock_db_session.execute.side_effect = RuntimeError("connection reset")

        with pytest.raises(DatabaseError):
            await self.service.resolve(mock_db_session, uuid.uuid4())

    @pytest.mark.asyncio
    async def test_is_premium_follows_resolved_row(self, mock_db_session):
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = _subscription(PREMIUM, ACTIVE)
        mock_db_session.execute.return_value = mock_result

        assert await self.service.is_premium(mock_db_session, uuid.uuid4()) is True


class TestSubscriptionGrant:

    def setup_method(self):
        self.service = SubscriptionService()

    @pytest.mark.asyncio
    async def test_grant_unknown_user_is_not_found(self, mock_db_session):
        mock_db_session.get.return_value = None

        with pytest.raises(NotFoundError):
            await self.service.grant(mock_db_session, uuid.uuid4(), PREMIUM, 30)

    @pytest.mark.asyncio
    async def test_grant_upgrades_existing_subscription(self, mock_db_session):
        existing = _subscription(FREE, INACTIVE)
        mock_db_session.get.return_value = MagicMock()
        mock_result = MagicMock()
        mock_result.scalar_one_or_none.return_value = existing
        mock_db_session.execute.return_value = mock_result

        subscription = await self.service.grant(mock_db_session, existing.user_id, PREMIUM, 30)

        assert subscription.subscription_type == PREMIUM
        assert subscription.status == ACTIVE
        assert (subscription.end_date - subscription.start_date).days == 30
        assert is_premium_eligible(subscription) is True
