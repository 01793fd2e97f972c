"""
Spaced repetition scheduling using a fixed interval ladder

Intervals (in days): [1, 2, 3, 5, 8, 13, 21, 34, 55]

A correct answer moves a word one rung up the ladder, a wrong answer sends it
back to the first rung. A word on the last rung is mastered.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, replace
from datetime import date, timedelta

from .config import DEFAULT_INTERVAL_LADDER, Settings
from .core.models import WordProgress, WordStatus

logger = logging.getLogger(__name__)

DEFAULT_INTERVALS: tuple[int, ...] = tuple(DEFAULT_INTERVAL_LADDER)


@dataclass(frozen=True)
class ScheduleResult:
    """Result of applying one answer to an interval index"""

    new_index: int
    next_review_date: date
    status: WordStatus


class IntervalLadder:
    """Fixed sequence of review gaps and the rules for moving along it"""

    def __init__(self, intervals: Sequence[int] = DEFAULT_INTERVALS):
        if not intervals:
            raise ValueError("Interval ladder must not be empty")
        if any(later <= earlier for earlier, later in zip(intervals, intervals[1:])):
            raise ValueError(f"Interval ladder must be strictly increasing: {intervals}")
        if intervals[0] <= 0:
            raise ValueError(f"Interval ladder must be positive: {intervals}")
        self.intervals = tuple(intervals)

    @classmethod
    def from_settings(cls, settings: Settings) -> "IntervalLadder":
        return cls(settings.interval_ladder)

    @property
    def max_index(self) -> int:
        return len(self.intervals) - 1

    def clamp_index(self, index: int) -> int:
        """Clamp an index into [0, max_index]"""
        return max(0, min(index, self.max_index))

    def interval_days(self, index: int) -> int:
        """Get the gap in days for a ladder position"""
        return self.intervals[self.clamp_index(index)]

    def next_index(self, current: int, was_correct: bool) -> int:
        """
        Get the next interval index for an answer

        Args:
            current: Current interval index
            was_correct: Whether the word was recalled

        Returns:
            One rung up (capped at the top) when correct, 0 otherwise
        """
        if not was_correct:
            return 0
        return min(self.clamp_index(current) + 1, self.max_index)

    def next_review_date(self, index: int, today: date) -> date:
        """Review date for a ladder position, counted from today"""
        return today + timedelta(days=self.interval_days(index))

    def is_mastered(self, index: int) -> bool:
        return self.clamp_index(index) == self.max_index

    def state_of(self, index: int, ever_answered_correctly: bool) -> WordStatus:
        """Derive the study state from the ladder position and answer history"""
        index = self.clamp_index(index)
        if not ever_answered_correctly:
            return WordStatus.LEARNING if index == 0 else WordStatus.REVIEWING
        if index == self.max_index:
            return WordStatus.MASTERED
        return WordStatus.REVIEWING

    def clamp_progress(self, progress: WordProgress) -> WordProgress:
        """Bring a loaded record back into range instead of rejecting it"""
        index = self.clamp_index(progress.interval_index)
        if index != progress.interval_index:
            logger.warning(
                f"Progress for {progress.word_id} has interval index "
                f"{progress.interval_index} outside 0..{self.max_index}, clamped to {index}"
            )
            progress = replace(progress, interval_index=index)
        status = self.state_of(index, progress.ever_answered_correctly)
        if status != progress.status:
            progress = replace(progress, status=status)
        return progress

    def is_due(self, next_review_date: date | None, today: date) -> bool:
        """Check if a word is due today or overdue"""
        if next_review_date is None:
            return False
        return next_review_date <= today

    def schedule(
        self,
        current: int,
        was_correct: bool,
        today: date,
        ever_answered_correctly: bool = False,
    ) -> ScheduleResult:
        """Apply one answer and compute the new index, date and state"""
        new_index = self.next_index(current, was_correct)
        result = ScheduleResult(
            new_index=new_index,
            next_review_date=self.next_review_date(new_index, today),
            status=self.state_of(new_index, ever_answered_correctly or was_correct),
        )
        logger.debug(
            f"Scheduled: index {current} -> {result.new_index}, "
            f"correct={was_correct}, next={result.next_review_date}"
        )
        return result
