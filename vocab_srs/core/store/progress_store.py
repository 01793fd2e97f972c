"""
Word progress store contract and an in-memory implementation
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import replace

from ..models import (
    DailyBatch,
    DailyStats,
    StreakState,
    StudyGoals,
    StudyMode,
    WordProgress,
)

logger = logging.getLogger(__name__)


class ProgressStore(ABC):
    """Keyed collection of one user's study records.

    The engine hands records in and out as copies; a store never shares a
    mutable record with its caller.
    """

    @abstractmethod
    def get(self, word_id: str) -> WordProgress | None:
        """Get progress for a word, or None if the word was never studied"""

    @abstractmethod
    def upsert(self, progress: WordProgress) -> None:
        """Insert or replace progress for a word"""

    @abstractmethod
    def upsert_many(self, records: list[WordProgress]) -> None:
        """Insert or replace several records, all or none"""

    @abstractmethod
    def all_for_user(self) -> list[WordProgress]:
        """Get every progress record of the user"""

    @abstractmethod
    def delete(self, word_id: str) -> bool:
        """Delete progress for a word, returning whether it existed"""

    @abstractmethod
    def get_daily_stats(self) -> DailyStats | None:
        """Get the most recent day's counters"""

    @abstractmethod
    def save_daily_stats(self, stats: DailyStats) -> None:
        """Store the counters for stats.stat_date"""

    @abstractmethod
    def get_streak(self) -> StreakState | None:
        """Get the streak record"""

    @abstractmethod
    def save_streak(self, streak: StreakState) -> None:
        """Replace the streak record"""

    def save_session(
        self, records: list[WordProgress], stats: DailyStats, streak: StreakState
    ) -> None:
        """Store the results of one study session together"""
        self.upsert_many(records)
        self.save_daily_stats(stats)
        self.save_streak(streak)

    @abstractmethod
    def get_batch(self, mode: StudyMode) -> DailyBatch | None:
        """Get the cached batch for a mode"""

    @abstractmethod
    def save_batch(self, batch: DailyBatch) -> None:
        """Replace the cached batch for batch.mode in a single write"""

    @abstractmethod
    def get_goals(self) -> StudyGoals | None:
        """Get the user's daily goals, or None to use the defaults"""

    @abstractmethod
    def save_goals(self, goals: StudyGoals) -> None:
        """Replace the user's daily goals"""

    @abstractmethod
    def clear(self) -> None:
        """Remove every record of the user"""


class InMemoryProgressStore(ProgressStore):
    """Dictionary-backed store, used by tests and short-lived sessions"""

    def __init__(self):
        self._progress: dict[str, WordProgress] = {}
        self._daily_stats: DailyStats | None = None
        self._streak: StreakState | None = None
        self._batches: dict[StudyMode, DailyBatch] = {}
        self._goals: StudyGoals | None = None

    def get(self, word_id: str) -> WordProgress | None:
        progress = self._progress.get(word_id)
        return progress.copy() if progress else None

    def upsert(self, progress: WordProgress) -> None:
        self._progress[progress.word_id] = progress.copy()

    def upsert_many(self, records: list[WordProgress]) -> None:
        self._progress.update({progress.word_id: progress.copy() for progress in records})

    def all_for_user(self) -> list[WordProgress]:
        return [progress.copy() for progress in self._progress.values()]

    def delete(self, word_id: str) -> bool:
        return self._progress.pop(word_id, None) is not None

    def get_daily_stats(self) -> DailyStats | None:
        return replace(self._daily_stats) if self._daily_stats else None

    def save_daily_stats(self, stats: DailyStats) -> None:
        self._daily_stats = replace(stats)

    def get_streak(self) -> StreakState | None:
        return replace(self._streak) if self._streak else None

    def save_streak(self, streak: StreakState) -> None:
        self._streak = replace(streak)

    def get_batch(self, mode: StudyMode) -> DailyBatch | None:
        return self._batches.get(mode)

    def save_batch(self, batch: DailyBatch) -> None:
        self._batches[batch.mode] = batch

    def get_goals(self) -> StudyGoals | None:
        return replace(self._goals) if self._goals else None

    def save_goals(self, goals: StudyGoals) -> None:
        self._goals = replace(goals)

    def clear(self) -> None:
        logger.info(f"Clearing {len(self._progress)} in-memory progress records")
        self._progress.clear()
        self._daily_stats = None
        self._streak = None
        self._batches.clear()
        self._goals = None
