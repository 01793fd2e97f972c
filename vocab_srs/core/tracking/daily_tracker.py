"""
Day boundary bookkeeping: daily counters, quotas and the study streak
"""

import logging
from dataclasses import replace
from datetime import date

from ..models import DailyStats, StreakState

logger = logging.getLogger(__name__)


class DailyTracker:
    """Pure helpers over DailyStats and StreakState.

    Every method takes ``today`` explicitly so the caller owns the clock.
    A ``today`` earlier than a stored date is treated as the same day, which
    keeps a skewed clock from resetting counters or awarding a streak.
    """

    @staticmethod
    def is_new_calendar_day(last_study_date: date | None, today: date) -> bool:
        if last_study_date is None:
            return True
        if today < last_study_date:
            logger.warning(
                f"Clock skew: today {today} is before last study date {last_study_date}"
            )
            return False
        return today > last_study_date

    def roll_over(self, stats: DailyStats | None, today: date) -> DailyStats:
        """Return the counters for today, zeroed if the day has changed"""
        if stats is None or self.is_new_calendar_day(stats.stat_date, today):
            return DailyStats(stat_date=today)
        return replace(stats)

    def _done_today(self, stats: DailyStats | None, today: date) -> DailyStats:
        if stats is None or stats.stat_date is None:
            return DailyStats(stat_date=today)
        if stats.stat_date < today:
            return DailyStats(stat_date=today)
        return stats

    def remaining_learning_quota(
        self, stats: DailyStats | None, daily_goal: int, today: date
    ) -> int:
        done = self._done_today(stats, today).new_words_learned
        return max(0, daily_goal - done)

    def remaining_review_quota(
        self, stats: DailyStats | None, review_limit: int, today: date
    ) -> int:
        done = self._done_today(stats, today).reviews_completed
        return max(0, review_limit - done)

    def is_daily_learning_goal_reached(
        self, stats: DailyStats | None, daily_goal: int, today: date
    ) -> bool:
        return self.remaining_learning_quota(stats, daily_goal, today) == 0

    def is_daily_review_goal_reached(
        self, stats: DailyStats | None, review_limit: int, today: date
    ) -> bool:
        return self.remaining_review_quota(stats, review_limit, today) == 0

    def advance_streak(self, streak: StreakState | None, today: date) -> StreakState:
        """
        Record a study action today

        Args:
            streak: Stored streak, or None if the user never studied
            today: Calendar date of the study action

        Returns:
            Updated streak; calling this twice on the same day is a no-op
        """
        if streak is None or streak.last_activity_date is None:
            current = 1
        else:
            gap = (today - streak.last_activity_date).days
            if gap == 0:
                return replace(streak)
            if gap < 0:
                logger.warning(
                    f"Last activity {streak.last_activity_date} is after {today}, "
                    "streak reset"
                )
            current = streak.current_streak + 1 if gap == 1 else 1

        longest = max(streak.longest_streak if streak else 0, current)
        return StreakState(
            current_streak=current,
            longest_streak=longest,
            last_activity_date=today,
        )

    @staticmethod
    def effective_streak(streak: StreakState | None, today: date) -> int:
        """Streak as shown today: zero once a full day has been missed"""
        if streak is None or streak.last_activity_date is None:
            return 0
        gap = (today - streak.last_activity_date).days
        if gap > 1:
            return 0
        return streak.current_streak
