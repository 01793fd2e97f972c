"""
Tests for daily counters, quotas and streak tracking
"""

from datetime import date, timedelta

import pytest

from vocab_srs.core.models import DailyStats, StreakState
from vocab_srs.core.tracking.daily_tracker import DailyTracker


class TestDayBoundary:
    """Test calendar day detection and counter roll over"""

    @pytest.fixture
    def tracker(self):
        return DailyTracker()

    def test_is_new_calendar_day(self, tracker):
        """Test date-only day comparison"""
        today = date(2024, 6, 10)
        assert tracker.is_new_calendar_day(None, today) is True
        assert tracker.is_new_calendar_day(today, today) is False
        assert tracker.is_new_calendar_day(date(2024, 6, 9), today) is True

    def test_clock_skew_is_not_a_new_day(self, tracker):
        """Test a today before the stored date is treated as the same day"""
        assert tracker.is_new_calendar_day(date(2024, 6, 12), date(2024, 6, 10)) is False

    def test_roll_over_resets_previous_day(self, tracker):
        """Test counters are zeroed on a new day"""
        stats = DailyStats(stat_date=date(2024, 6, 9), new_words_learned=7, reviews_completed=30)

        rolled = tracker.roll_over(stats, date(2024, 6, 10))

        assert rolled.stat_date == date(2024, 6, 10)
        assert rolled.new_words_learned == 0
        assert rolled.reviews_completed == 0
        assert stats.new_words_learned == 7  # Input not mutated

    def test_roll_over_keeps_same_day(self, tracker):
        """Test counters survive within the same day"""
        stats = DailyStats(stat_date=date(2024, 6, 10), new_words_learned=3, reviews_completed=4)

        rolled = tracker.roll_over(stats, date(2024, 6, 10))

        assert rolled == stats
        assert rolled is not stats

    def test_daily_stats_defaults(self):
        """Test an empty counter row has no date and zero counts"""
        stats = DailyStats()
        assert stats.stat_date is None
        assert (stats.new_words_learned, stats.reviews_completed) == (0, 0)

    def test_roll_over_without_stats(self, tracker):
        """Test first study day creates a fresh row"""
        rolled = tracker.roll_over(None, date(2024, 6, 10))
        assert rolled == DailyStats(stat_date=date(2024, 6, 10))


class TestQuotas:
    """Test remaining quota getters"""

    @pytest.fixture
    def tracker(self):
        return DailyTracker()

    def test_remaining_learning_quota(self, tracker):
        """Test remaining new word quota"""
        today = date(2024, 6, 10)
        stats = DailyStats(stat_date=today, new_words_learned=3)
        assert tracker.remaining_learning_quota(stats, 10, today) == 7
        assert tracker.is_daily_learning_goal_reached(stats, 10, today) is False

    @pytest.mark.parametrize("learned", [5, 6, 50, 1000])
    def test_quota_never_negative(self, tracker, learned):
        """Test quota stays at zero however far the goal is exceeded"""
        today = date(2024, 6, 10)
        stats = DailyStats(stat_date=today, new_words_learned=learned, reviews_completed=learned)
        assert tracker.remaining_learning_quota(stats, 5, today) == 0
        assert tracker.remaining_review_quota(stats, 5, today) == 0
        assert tracker.is_daily_learning_goal_reached(stats, 5, today) is True
        assert tracker.is_daily_review_goal_reached(stats, 5, today) is True

    def test_stale_counters_do_not_use_quota(self, tracker):
        """Test yesterday's counts do not reduce today's quota"""
        stats = DailyStats(stat_date=date(2024, 6, 9), new_words_learned=10, reviews_completed=50)
        today = date(2024, 6, 10)
        assert tracker.remaining_learning_quota(stats, 10, today) == 10
        assert tracker.remaining_review_quota(stats, 50, today) == 50

    def test_zero_goal_is_reached(self, tracker):
        """Test a zero goal is immediately reached"""
        today = date(2024, 6, 10)
        assert tracker.is_daily_learning_goal_reached(None, 0, today) is True
        assert tracker.remaining_review_quota(None, 0, today) == 0


class TestStreak:
    """Test consecutive day streak"""

    @pytest.fixture
    def tracker(self):
        return DailyTracker()

    @pytest.fixture
    def today(self):
        return date(2024, 6, 10)

    def test_first_activity_starts_streak(self, tracker, today):
        """Test no previous activity gives a streak of one"""
        streak = tracker.advance_streak(None, today)
        assert streak == StreakState(current_streak=1, longest_streak=1, last_activity_date=today)

        empty = tracker.advance_streak(StreakState(), today)
        assert empty.current_streak == 1

    def test_same_day_is_idempotent(self, tracker, today):
        """Test a second activity on the same day does not increment"""
        first = tracker.advance_streak(
            StreakState(current_streak=4, longest_streak=6, last_activity_date=today - timedelta(days=1)),
            today,
        )
        second = tracker.advance_streak(first, today)

        assert first.current_streak == 5
        assert second.current_streak == 5
        assert second.longest_streak == 6

    def test_consecutive_day_increments(self, tracker, today):
        """Test activity on the day after increments the streak"""
        streak = tracker.advance_streak(
            StreakState(current_streak=6, longest_streak=6, last_activity_date=today - timedelta(days=1)),
            today,
        )
        assert streak.current_streak == 7
        assert streak.longest_streak == 7
        assert streak.last_activity_date == today

    def test_gap_breaks_streak(self, tracker, today):
        """Test a gap of three days resets the streak to one"""
        streak = tracker.advance_streak(
            StreakState(current_streak=10, longest_streak=10, last_activity_date=today - timedelta(days=3)),
            today,
        )
        assert streak.current_streak == 1
        assert streak.longest_streak == 10

    def test_future_activity_date_resets_streak(self, tracker, today):
        """Test a stored date after today restarts the streak at one"""
        stored = StreakState(current_streak=4, longest_streak=5, last_activity_date=today + timedelta(days=4))

        streak = tracker.advance_streak(stored, today)

        assert streak == StreakState(current_streak=1, longest_streak=5, last_activity_date=today)
        assert stored.current_streak == 4

    def test_effective_streak(self, tracker, today):
        """Test displayed streak drops to zero after a missed day"""
        assert tracker.effective_streak(None, today) == 0
        active = StreakState(current_streak=4, longest_streak=4, last_activity_date=today - timedelta(days=1))
        assert tracker.effective_streak(active, today) == 4
        broken = StreakState(current_streak=4, longest_streak=4, last_activity_date=today - timedelta(days=2))
        assert tracker.effective_streak(broken, today) == 0
