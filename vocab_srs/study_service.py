"""
Study service: the operations the surrounding application calls
"""

import logging
from collections.abc import Callable, Iterable
from datetime import date, datetime
from typing import Any

from .config import Settings, get_settings
from .core.batch.batch_selector import BatchSelector
from .core.exceptions import UnknownWordError
from .core.models import (
    DailyStats,
    FilterSettings,
    ProgressStats,
    SessionSummary,
    StudyGoals,
    StudyMode,
    StudyResult,
    VocabularyWord,
    WordProgress,
    WordStatus,
)
from .core.session.outcome_processor import SessionOutcomeProcessor
from .core.store.progress_store import ProgressStore
from .core.tracking.daily_tracker import DailyTracker
from .core.vocabulary.vocabulary import ReconciliationReport, Vocabulary
from .spaced_repetition import IntervalLadder
from .utils import calculate_success_rate, log_execution_time, today_in

logger = logging.getLogger(__name__)


def coerce_result(result: StudyResult | dict[str, Any]) -> StudyResult:
    """Accept outcomes as StudyResult or as plain dicts from the UI layer"""
    if isinstance(result, StudyResult):
        return result
    return StudyResult(
        word_id=str(result["word_id"]),
        was_correct=bool(result.get("was_correct", False)),
        was_skipped=bool(result.get("was_skipped", False)),
    )


class StudyService:
    """Context object for one user's study state.

    The caller builds it with the loaded vocabulary and a ProgressStore and
    passes it around; nothing is kept at module level.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        store: ProgressStore,
        settings: Settings | None = None,
        clock: Callable[[], date] | None = None,
        ladder: IntervalLadder | None = None,
    ):
        self.settings = settings or get_settings()
        self.vocabulary = vocabulary
        self.store = store
        self.clock = clock or (lambda: today_in(self.settings.timezone))
        self.ladder = ladder or IntervalLadder.from_settings(self.settings)
        self.tracker = DailyTracker()
        self.selector = BatchSelector(vocabulary, store, self.ladder)
        self.processor = SessionOutcomeProcessor(vocabulary, store, self.ladder, self.tracker)
        self.last_summary: SessionSummary | None = None

    def today(self) -> date:
        return self.clock()

    # Goals

    def get_goals(self) -> StudyGoals:
        """Get the user's goals, falling back to the configured defaults"""
        goals = self.store.get_goals()
        if goals is None:
            goals = StudyGoals(
                daily_new_word_goal=self.settings.daily_new_word_goal,
                daily_review_limit=self.settings.daily_review_limit,
            )
        return goals

    def update_goals(
        self,
        daily_new_word_goal: int | None = None,
        daily_review_limit: int | None = None,
    ) -> StudyGoals:
        """Change the daily goals; a changed goal invalidates today's batch"""
        goals = self.get_goals()
        if daily_new_word_goal is not None:
            if daily_new_word_goal < 0:
                raise ValueError("daily_new_word_goal must not be negative")
            goals.daily_new_word_goal = daily_new_word_goal
        if daily_review_limit is not None:
            if daily_review_limit < 0:
                raise ValueError("daily_review_limit must not be negative")
            goals.daily_review_limit = daily_review_limit
        self.store.save_goals(goals)
        logger.info(
            f"Goals updated: {goals.daily_new_word_goal} new words, "
            f"{goals.daily_review_limit} reviews per day"
        )
        return goals

    # Daily quota

    def _stats_today(self) -> DailyStats:
        return self.tracker.roll_over(self.store.get_daily_stats(), self.today())

    def remaining_learning_quota(self, daily_goal: int | None = None) -> int:
        goal = self.get_goals().daily_new_word_goal if daily_goal is None else daily_goal
        return self.tracker.remaining_learning_quota(
            self.store.get_daily_stats(), goal, self.today()
        )

    def remaining_review_quota(self, review_limit: int | None = None) -> int:
        limit = self.get_goals().daily_review_limit if review_limit is None else review_limit
        return self.tracker.remaining_review_quota(
            self.store.get_daily_stats(), limit, self.today()
        )

    def is_daily_learning_goal_reached(self) -> bool:
        return self.tracker.is_daily_learning_goal_reached(
            self.store.get_daily_stats(), self.get_goals().daily_new_word_goal, self.today()
        )

    def is_daily_review_goal_reached(self) -> bool:
        return self.tracker.is_daily_review_goal_reached(
            self.store.get_daily_stats(), self.get_goals().daily_review_limit, self.today()
        )

    # Batch selection

    def get_words_for_learning(
        self, filters: FilterSettings | None = None, daily_goal: int | None = None
    ) -> list[VocabularyWord]:
        """Get today's new words, limited by the remaining daily goal"""
        filters = filters or FilterSettings()
        goal = self.get_goals().daily_new_word_goal if daily_goal is None else daily_goal
        stats = self._stats_today()
        return self.selector.select_for_learning(
            filters, goal, self.today(), stats.new_words_learned
        )

    def get_words_for_review(
        self, filters: FilterSettings | None = None, review_limit: int | None = None
    ) -> list[VocabularyWord]:
        """Get words due today, most overdue first, limited by the review limit"""
        filters = filters or FilterSettings()
        limit = self.get_goals().daily_review_limit if review_limit is None else review_limit
        stats = self._stats_today()
        return self.selector.select_for_review(
            filters, limit, self.today(), stats.reviews_completed
        )

    def get_todays_batch_for_learning(
        self, filters: FilterSettings | None = None, session_seed: int | None = None
    ) -> list[VocabularyWord]:
        """Get today's whole learning batch again, ignoring the quota"""
        stats = self._stats_today()
        return self.selector.todays_batch(
            StudyMode.LEARN,
            filters or FilterSettings(),
            self.get_goals().daily_new_word_goal,
            self.today(),
            done_today=stats.new_words_learned,
            session_seed=session_seed,
        )

    def get_todays_batch_for_review(
        self, filters: FilterSettings | None = None, session_seed: int | None = None
    ) -> list[VocabularyWord]:
        """Get today's whole review batch again, ignoring the quota"""
        stats = self._stats_today()
        return self.selector.todays_batch(
            StudyMode.REVIEW,
            filters or FilterSettings(),
            self.get_goals().daily_review_limit,
            self.today(),
            done_today=stats.reviews_completed,
            session_seed=session_seed,
        )

    # Session results

    @log_execution_time
    def process_study_results(
        self, results: Iterable[StudyResult | dict[str, Any]]
    ) -> ProgressStats:
        """
        Apply a finished session and return the updated stats

        The caller submits each completed session once; resubmitting the
        same list counts its outcomes again. A session whose write fails
        with StoreError stores nothing and can be submitted again.

        Args:
            results: Outcomes in the order they were answered

        Returns:
            ProgressStats after the session; the detailed SessionSummary is
            kept on last_summary
        """
        outcomes = [coerce_result(result) for result in results]
        self.last_summary = self.processor.process(outcomes, self.today(), datetime.now())
        if self.last_summary.unknown_word_ids:
            logger.warning(
                f"{len(self.last_summary.unknown_word_ids)} outcomes referenced unknown words"
            )
        return self.get_progress_stats()

    # Bookmarks and progress

    def toggle_bookmark(self, word_id: str) -> bool:
        """Flip the bookmark flag of a word and return the new state"""
        if word_id not in self.vocabulary:
            raise UnknownWordError(word_id)

        progress = self.store.get(word_id) or WordProgress(word_id=word_id)
        progress.is_bookmarked = not progress.is_bookmarked
        self.store.upsert(progress)
        logger.info(f"Bookmark for {word_id} set to {progress.is_bookmarked}")
        return progress.is_bookmarked

    def get_bookmarked_words(self) -> list[VocabularyWord]:
        """Bookmarked words in dictionary order"""
        bookmarked = {
            progress.word_id
            for progress in self.store.all_for_user()
            if progress.is_bookmarked
        }
        return [word for word in self.vocabulary if word.id in bookmarked]

    def get_word_progress(self, word_id: str) -> WordProgress | None:
        if word_id not in self.vocabulary:
            raise UnknownWordError(word_id)
        progress = self.store.get(word_id)
        return self.ladder.clamp_progress(progress) if progress else None

    def get_progress_stats(self) -> ProgressStats:
        """Snapshot of today's counters, streak and the word state totals"""
        today = self.today()
        goals = self.get_goals()
        stats = self._stats_today()
        streak = self.store.get_streak()

        due_count = overdue_count = mastered_count = 0
        total_learned = bookmarked = 0
        correct = answered = 0
        for progress in self.store.all_for_user():
            if progress.word_id not in self.vocabulary:
                continue
            progress = self.ladder.clamp_progress(progress)
            if progress.is_bookmarked:
                bookmarked += 1
            if not progress.has_interaction:
                continue
            total_learned += 1
            correct += progress.correct_count
            answered += progress.correct_count + progress.incorrect_count
            if progress.status == WordStatus.MASTERED:
                mastered_count += 1
            elif self.selector.is_due(progress, today):
                due_count += 1
                if progress.next_review_date < today:
                    overdue_count += 1

        return ProgressStats(
            words_learned_today=stats.new_words_learned,
            words_reviewed_today=stats.reviews_completed,
            current_streak=self.tracker.effective_streak(streak, today),
            longest_streak=streak.longest_streak if streak else 0,
            due_count=due_count,
            overdue_count=overdue_count,
            mastered_count=mastered_count,
            total_words_learned=total_learned,
            bookmarked_count=bookmarked,
            accuracy=round(calculate_success_rate(correct, answered), 1),
            daily_goal=goals.daily_new_word_goal,
            review_limit=goals.daily_review_limit,
        )

    # Vocabulary

    def get_available_levels(self) -> list[str]:
        return self.vocabulary.available_levels()

    def get_available_categories(self) -> list[str]:
        return self.vocabulary.available_categories()

    def reconcile_vocabulary(self) -> ReconciliationReport:
        """Drop progress for words that left the dictionary"""
        return self.vocabulary.reconcile(self.store)

    def replace_vocabulary(self, vocabulary: Vocabulary) -> ReconciliationReport:
        """Swap in a reloaded dictionary and reconcile stored progress"""
        self.vocabulary = vocabulary
        self.selector.vocabulary = vocabulary
        self.processor.vocabulary = vocabulary
        return self.reconcile_vocabulary()

    def clear_all_data(self) -> None:
        """Forget all progress, counters, streak, batches and goals"""
        self.store.clear()
        self.last_summary = None
        logger.info("All study data cleared")


def build_filters(
    levels: Iterable[str] | None = None, categories: Iterable[str] | None = None
) -> FilterSettings:
    """Build FilterSettings from UI selections"""
    return FilterSettings(levels=tuple(levels or ()), categories=tuple(categories or ()))


__all__ = ["StudyService", "build_filters", "coerce_result"]
