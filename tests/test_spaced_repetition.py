"""
Unit tests for the interval ladder
"""

from datetime import date, datetime

import pytest

from vocab_srs.config import Settings
from vocab_srs.core.models import WordProgress, WordStatus
from vocab_srs.spaced_repetition import (
    DEFAULT_INTERVALS,
    IntervalLadder,
    ScheduleResult,
)


class TestIntervalLadder:
    """Test IntervalLadder transitions"""

    @pytest.fixture
    def ladder(self):
        """Default Fibonacci-like ladder"""
        return IntervalLadder()

    @pytest.fixture
    def short_ladder(self):
        """Short ladder used in the scheduling scenarios"""
        return IntervalLadder([1, 2, 3, 5, 8])

    def test_default_intervals(self, ladder):
        """Test default ladder values"""
        assert ladder.intervals == (1, 2, 3, 5, 8, 13, 21, 34, 55)
        assert ladder.intervals == DEFAULT_INTERVALS
        assert ladder.max_index == 8

    def test_correct_answer_never_moves_down(self, ladder):
        """Test correct answers advance by one and stay within the ladder"""
        for index in range(ladder.max_index + 1):
            new_index = ladder.next_index(index, True)
            assert new_index >= index
            assert new_index <= ladder.max_index
            assert new_index == min(index + 1, ladder.max_index)

    def test_wrong_answer_resets_to_zero(self, ladder):
        """Test one wrong answer returns to the first interval"""
        for index in range(ladder.max_index + 1):
            assert ladder.next_index(index, False) == 0

    def test_next_index_clamps_out_of_range_input(self, ladder):
        """Test corrupt indexes are clamped before advancing"""
        assert ladder.next_index(50, True) == ladder.max_index
        assert ladder.next_index(-3, True) == 1

    def test_mastery_boundary(self, ladder):
        """Test only the last rung counts as mastered"""
        assert ladder.is_mastered(ladder.max_index) is True
        assert ladder.is_mastered(ladder.max_index - 1) is False
        assert ladder.is_mastered(0) is False

    def test_next_review_date_is_deterministic(self, ladder):
        """Test the same index and day always give the same date"""
        today = date(2024, 3, 1)
        first = ladder.next_review_date(4, today)
        second = ladder.next_review_date(4, today)
        assert first == second == date(2024, 3, 9)

    def test_next_review_date_crosses_month_end(self, ladder):
        """Test day arithmetic across month and year ends"""
        assert ladder.next_review_date(0, date(2024, 12, 31)) == date(2025, 1, 1)
        assert ladder.next_review_date(2, date(2024, 2, 28)) == date(2024, 3, 2)

    def test_correct_answer_scenario(self, short_ladder):
        """Test index 2 answered correctly on day 10"""
        result = short_ladder.schedule(2, True, date(2024, 1, 10), ever_answered_correctly=True)

        assert isinstance(result, ScheduleResult)
        assert result.new_index == 3
        assert result.next_review_date == date(2024, 1, 15)
        assert result.status == WordStatus.REVIEWING

    def test_wrong_answer_scenario(self, short_ladder):
        """Test index 2 answered incorrectly on day 10"""
        result = short_ladder.schedule(2, False, date(2024, 1, 10), ever_answered_correctly=True)

        assert result.new_index == 0
        assert result.next_review_date == date(2024, 1, 11)
        assert result.status == WordStatus.REVIEWING

    def test_reaching_last_rung_masters(self, short_ladder):
        """Test a correct answer on the second to last rung masters the word"""
        result = short_ladder.schedule(3, True, date(2024, 1, 10), ever_answered_correctly=True)

        assert result.new_index == 4
        assert result.status == WordStatus.MASTERED
        assert result.next_review_date == date(2024, 1, 18)

    def test_state_of(self, ladder):
        """Test state derivation from index and history"""
        assert ladder.state_of(0, False) == WordStatus.LEARNING
        assert ladder.state_of(0, True) == WordStatus.REVIEWING
        assert ladder.state_of(3, True) == WordStatus.REVIEWING
        assert ladder.state_of(ladder.max_index, True) == WordStatus.MASTERED
        # A top index without any correct answer is not mastered
        assert ladder.state_of(ladder.max_index, False) == WordStatus.REVIEWING

    def test_is_due(self, ladder):
        """Test due check at day granularity"""
        today = date(2024, 5, 5)
        assert ladder.is_due(None, today) is False
        assert ladder.is_due(date(2024, 5, 5), today) is True
        assert ladder.is_due(date(2024, 5, 1), today) is True
        assert ladder.is_due(date(2024, 5, 6), today) is False

    def test_clamp_progress(self, ladder):
        """Test corrupt records are clamped instead of rejected"""
        progress = WordProgress(
            word_id="word_x",
            status=WordStatus.LEARNING,
            interval_index=42,
            correct_count=9,
            last_reviewed_at=datetime(2024, 1, 1, 12, 0),
        )

        repaired = ladder.clamp_progress(progress)

        assert repaired.interval_index == ladder.max_index
        assert repaired.status == WordStatus.MASTERED
        assert progress.interval_index == 42  # Original untouched

    def test_clamp_progress_negative_index(self, ladder):
        """Test negative indexes clamp to zero"""
        repaired = ladder.clamp_progress(WordProgress(word_id="word_y", interval_index=-2))
        assert repaired.interval_index == 0
        assert repaired.status == WordStatus.LEARNING

    @pytest.mark.parametrize(
        "intervals",
        [[], [1, 1, 2], [3, 2, 1], [0, 1, 2], [-1, 2]],
    )
    def test_invalid_ladders_rejected(self, intervals):
        """Test ladders must be non-empty, positive and increasing"""
        with pytest.raises(ValueError):
            IntervalLadder(intervals)

    def test_from_settings(self):
        """Test ladder built from configured intervals"""
        ladder = IntervalLadder.from_settings(Settings(interval_ladder=[1, 3, 4, 7, 11, 18, 29]))
        assert ladder.max_index == 6
        assert ladder.interval_days(6) == 29
        assert ladder.interval_days(99) == 29
