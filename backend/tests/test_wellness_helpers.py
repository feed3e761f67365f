"""
LivDaily Backend — Pure Helper Tests
======================================

Sleep and movement statistics, rhythm phase mapping, motivation week keys
and password hashing. None of these touch the database.
"""

import uuid
from datetime import date, datetime, timedelta, timezone

import pytest

from livdaily.models.wellness import MovementLog, SleepLog
from livdaily.services.auth_service import hash_password, verify_password
from livdaily.services.motivation_service import week_start
from livdaily.services.movement_service import summarize_movement
from livdaily.services.rhythm_service import current_rhythm_phase, rhythm_phase_for_hour
from livdaily.services.sleep_service import summarize_sleep


def _sleep(quality=None, hours=None, wind_down=None) -> SleepLog:
    bedtime = wake_time = None
    if hours is not None:
        bedtime = datetime(2024, 6, 3, 22, 30, tzinfo=timezone.utc)
        wake_time = bedtime + timedelta(hours=hours)
    return SleepLog(
        id=uuid.uuid4(),
        user_id=uuid.uuid4(),
        date=date(2024, 6, 4),
        quality_rating=quality,
        bedtime=bedtime,
        wake_time=wake_time,
        wind_down_activity=wind_down,
    )


class TestSleepStats:

    def test_empty_window_reports_zero_averages(self):
        stats = summarize_sleep([], "week")
        assert stats.patterns.log_count == 0
        assert stats.avg_quality == 0.0
        assert stats.avg_duration == 0.0
        assert stats.patterns.most_common_wind_down is None

    def test_averages_round_to_one_decimal(self):
        logs = [
            _sleep(quality=7, hours=8, wind_down="reading"),
            _sleep(quality=8, hours=6.5, wind_down="reading"),
            _sleep(quality=6, wind_down="stretching"),
        ]
        stats = summarize_sleep(logs, "month")

        assert stats.period == "month"
        assert stats.patterns.log_count == 3
        assert stats.avg_quality == 7.0
        assert stats.avg_duration == 7.2
        assert stats.patterns.most_common_wind_down == "reading"

    def test_logs_without_ratings_are_skipped_in_quality_average(self):
        stats = summarize_sleep([_sleep(quality=9), _sleep()], "week")
        assert stats.avg_quality == 9.0
        assert stats.patterns.log_count == 2


class TestMovementStats:

    @staticmethod
    def _log(activity, minutes=None) -> MovementLog:
        return MovementLog(
            id=uuid.uuid4(),
            user_id=uuid.uuid4(),
            activity_type=activity,
            duration_minutes=minutes,
            completed_at=datetime(2024, 6, 4, 7, 0, tzinfo=timezone.utc),
        )

    def test_totals_and_favorites_most_frequent_first(self):
        logs = [self._log("walk", 15), self._log("yoga", 20), self._log("yoga", 30)]
        stats = summarize_movement(logs, "week")

        assert stats.total_minutes == 65
        assert stats.sessions_count == 3
        assert [(a.activity, a.count) for a in stats.favorite_activities] == [
            ("yoga", 2),
            ("walk", 1),
        ]

    def test_missing_duration_counts_as_zero_minutes(self):
        stats = summarize_movement([self._log("dance"), self._log("dance", 10)], "month")
        assert stats.total_minutes == 10
        assert stats.sessions_count == 2
        assert stats.period == "month"


class TestRhythmPhase:

    @pytest.mark.parametrize(
        "hour, phase",
        [
            (6, "morning"),
            (9, "morning"),
            (10, "midday"),
            (13, "midday"),
            (14, "afternoon"),
            (18, "evening"),
            (21, "evening"),
            (22, "night"),
            (0, "night"),
            (5, "night"),
        ],
    )
    def test_hour_boundaries(self, hour, phase):
        assert rhythm_phase_for_hour(hour) == phase

    def test_current_phase_uses_given_clock(self):
        assert current_rhythm_phase(datetime(2024, 6, 3, 19, 15)) == "evening"


class TestWeekStart:

    def test_monday_maps_to_itself(self):
        assert week_start(date(2024, 6, 3)) == date(2024, 6, 3)

    def test_sunday_maps_to_previous_monday(self):
        assert week_start(date(2024, 6, 9)) == date(2024, 6, 3)


class TestPasswordHashing:

    def test_hash_round_trip(self):
        hashed = hash_password("correct horse battery")
        assert hashed != "correct horse battery"
        assert verify_password("correct horse battery", hashed) is True
        assert verify_password("wrong password", hashed) is False

    def test_missing_or_malformed_hash_never_verifies(self):
        assert verify_password("anything", None) is False
        assert verify_password("anything", "not-a-bcrypt-hash") is False
