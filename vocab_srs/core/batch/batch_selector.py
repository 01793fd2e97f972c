"""
Selection of the words to present in a study session
"""

import logging
import random
from datetime import date

from ...spaced_repetition import IntervalLadder
from ...utils import seed_for
from ..models import (
    DailyBatch,
    FilterSettings,
    StudyMode,
    VocabularyWord,
    WordProgress,
    WordStatus,
)
from ..store.progress_store import ProgressStore
from ..vocabulary.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class BatchSelector:
    """Computes new and due word sets with a per-day stable order.

    The first selection of a day is cached in the store as a DailyBatch per
    mode. It stays valid while the day, the filters and the quota setting stay
    the same.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        store: ProgressStore,
        ladder: IntervalLadder,
    ):
        self.vocabulary = vocabulary
        self.store = store
        self.ladder = ladder

    def _load_progress(self) -> dict[str, WordProgress]:
        return {
            progress.word_id: self.ladder.clamp_progress(progress)
            for progress in self.store.all_for_user()
        }

    @staticmethod
    def is_new_word(progress: WordProgress | None) -> bool:
        """A word never answered correctly and still on the first rung is new"""
        if progress is None:
            return True
        return progress.interval_index == 0 and progress.correct_count == 0

    def is_due(self, progress: WordProgress | None, today: date) -> bool:
        if progress is None or progress.status == WordStatus.MASTERED:
            return False
        return self.ladder.is_due(progress.next_review_date, today)

    @staticmethod
    def shuffle(word_ids: list[str], seed: int | None) -> list[str]:
        """Seeded Fisher-Yates shuffle, independent of the input order"""
        shuffled = sorted(word_ids)
        random.Random(seed).shuffle(shuffled)
        return shuffled

    def learning_pool(
        self, filters: FilterSettings, progress: dict[str, WordProgress] | None = None
    ) -> list[VocabularyWord]:
        """Filtered words that are still eligible as new"""
        progress = self._load_progress() if progress is None else progress
        return [
            word
            for word in self.vocabulary.filter(filters)
            if self.is_new_word(progress.get(word.id))
        ]

    def review_pool(
        self,
        filters: FilterSettings,
        today: date,
        progress: dict[str, WordProgress] | None = None,
    ) -> list[VocabularyWord]:
        """Filtered words due today or earlier, excluding mastered ones"""
        progress = self._load_progress() if progress is None else progress
        return [
            word
            for word in self.vocabulary.filter(filters)
            if self.is_due(progress.get(word.id), today)
        ]

    def _words(self, word_ids: list[str] | tuple[str, ...]) -> list[VocabularyWord]:
        words = []
        for word_id in word_ids:
            word = self.vocabulary.get(word_id)
            if word is not None:
                words.append(word)
        return words

    def _cached_batch(
        self, mode: StudyMode, filters: FilterSettings, quota: int, today: date
    ) -> DailyBatch | None:
        batch = self.store.get_batch(mode)
        if batch is not None and batch.is_valid_for(today, filters, quota):
            return batch
        if batch is not None:
            logger.debug(f"Cached {mode.value} batch from {batch.batch_date} invalidated")
        return None

    def _save_batch(
        self,
        mode: StudyMode,
        word_ids: list[str],
        filters: FilterSettings,
        quota: int,
        today: date,
    ) -> None:
        self.store.save_batch(
            DailyBatch(
                mode=mode,
                batch_date=today,
                word_ids=tuple(word_ids),
                filters=filters,
                quota=quota,
            )
        )

    def select_for_learning(
        self,
        filters: FilterSettings,
        daily_goal: int,
        today: date,
        learned_today: int = 0,
    ) -> list[VocabularyWord]:
        """
        Get today's new words

        Args:
            filters: Level and category filters
            daily_goal: New word goal in effect
            today: Calendar date of the request
            learned_today: New words already counted today

        Returns:
            Words in today's stable order, at most the remaining quota
        """
        remaining = max(0, daily_goal - learned_today)
        progress = self._load_progress()

        batch = self._cached_batch(StudyMode.LEARN, filters, daily_goal, today)
        if batch is not None:
            word_ids = [
                word_id
                for word_id in batch.word_ids
                if self.is_new_word(progress.get(word_id))
            ]
            logger.debug(f"Learning batch cache hit: {len(word_ids)} words still new")
            return self._words(word_ids[:remaining])

        pool = [word.id for word in self.learning_pool(filters, progress)]
        ordered = self.shuffle(pool, seed_for(today, StudyMode.LEARN.value))
        selected = ordered[: min(remaining, len(ordered))]
        self._save_batch(StudyMode.LEARN, selected, filters, daily_goal, today)

        logger.info(
            f"Selected {len(selected)} new words from a pool of {len(pool)} "
            f"(goal {daily_goal}, learned today {learned_today})"
        )
        return self._words(selected)

    def select_for_review(
        self,
        filters: FilterSettings,
        review_limit: int,
        today: date,
        reviewed_today: int = 0,
    ) -> list[VocabularyWord]:
        """
        Get today's due words, most overdue first

        Args:
            filters: Level and category filters
            review_limit: Daily review limit in effect
            today: Calendar date of the request
            reviewed_today: Reviews already counted today

        Returns:
            Due words ordered by review date, ties in today's seeded order
        """
        remaining = max(0, review_limit - reviewed_today)
        progress = self._load_progress()

        batch = self._cached_batch(StudyMode.REVIEW, filters, review_limit, today)
        if batch is not None:
            word_ids = [
                word_id
                for word_id in batch.word_ids
                if self.is_due(progress.get(word_id), today)
            ]
            logger.debug(f"Review batch cache hit: {len(word_ids)} words still due")
            return self._words(word_ids[:remaining])

        pool = [word.id for word in self.review_pool(filters, today, progress)]
        tie_order = {
            word_id: position
            for position, word_id in enumerate(
                self.shuffle(pool, seed_for(today, StudyMode.REVIEW.value))
            )
        }
        ordered = sorted(
            pool,
            key=lambda word_id: (progress[word_id].next_review_date, tie_order[word_id]),
        )
        selected = ordered[: min(remaining, len(ordered))]
        self._save_batch(StudyMode.REVIEW, selected, filters, review_limit, today)

        logger.info(
            f"Selected {len(selected)} due words from a pool of {len(pool)} "
            f"(limit {review_limit}, reviewed today {reviewed_today})"
        )
        return self._words(selected)

    def todays_batch(
        self,
        mode: StudyMode,
        filters: FilterSettings,
        quota: int,
        today: date,
        done_today: int = 0,
        session_seed: int | None = None,
    ) -> list[VocabularyWord]:
        """
        Get every word of today's batch again for a re-study session

        The cached members are returned regardless of the remaining quota,
        the goal the batch was selected with and answers given since,
        re-shuffled with the session seed (a fresh random order when no seed
        is given). Without a batch from today for these filters one is
        selected first with ``quota``.
        """
        batch = self.store.get_batch(mode)
        if batch is None or not batch.is_for_day(today, filters):
            if mode == StudyMode.LEARN:
                self.select_for_learning(filters, quota, today, done_today)
            else:
                self.select_for_review(filters, quota, today, done_today)
            batch = self._cached_batch(mode, filters, quota, today)

        word_ids = list(batch.word_ids) if batch is not None else []
        reshuffled = self.shuffle(word_ids, session_seed)
        logger.info(f"Re-study of today's {mode.value} batch: {len(reshuffled)} words")
        return self._words(reshuffled)
