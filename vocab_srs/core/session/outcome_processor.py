"""
Application of study session outcomes to progress records
"""

import logging
from datetime import date, datetime

from ...spaced_repetition import IntervalLadder
from ..models import SessionSummary, StudyResult, WordProgress
from ..store.progress_store import ProgressStore
from ..tracking.daily_tracker import DailyTracker
from ..vocabulary.vocabulary import Vocabulary

logger = logging.getLogger(__name__)


class SessionOutcomeProcessor:
    """Applies one session's outcomes in input order and stores them together.

    A word with no prior interaction counts as a new word learned; any other word
    counts as a review, whatever mode the session was started in. Skipped
    cards create a record without scheduling it and still use up quota.
    """

    def __init__(
        self,
        vocabulary: Vocabulary,
        store: ProgressStore,
        ladder: IntervalLadder,
        tracker: DailyTracker | None = None,
    ):
        self.vocabulary = vocabulary
        self.store = store
        self.ladder = ladder
        self.tracker = tracker or DailyTracker()

    def apply_outcome(
        self, progress: WordProgress | None, result: StudyResult, today: date, now: datetime
    ) -> WordProgress:
        """Compute the updated record for one outcome, leaving the input untouched"""
        if progress is None:
            progress = WordProgress(word_id=result.word_id)
        else:
            progress = self.ladder.clamp_progress(progress.copy())

        if result.was_skipped:
            progress.last_reviewed_at = now
            return progress

        schedule = self.ladder.schedule(
            progress.interval_index,
            result.was_correct,
            today,
            ever_answered_correctly=progress.ever_answered_correctly,
        )
        if result.was_correct:
            progress.correct_count += 1
        else:
            progress.incorrect_count += 1
        progress.review_count += 1
        progress.interval_index = schedule.new_index
        progress.next_review_date = schedule.next_review_date
        progress.status = schedule.status
        progress.last_reviewed_at = now
        return progress

    def process(
        self,
        results: list[StudyResult],
        today: date,
        now: datetime | None = None,
    ) -> SessionSummary:
        """
        Apply a session's outcomes and update daily counters and streak

        Args:
            results: Outcomes in the order they were answered
            today: Calendar date the session is credited to
            now: Timestamp stored as last_reviewed_at

        Returns:
            SessionSummary with counts and the updated records
        """
        now = now or datetime.now()
        summary = SessionSummary()
        pending: dict[str, WordProgress] = {}

        for result in results:
            if result.word_id not in self.vocabulary:
                logger.warning(f"Skipping outcome for unknown word id {result.word_id}")
                summary.unknown_word_ids.append(result.word_id)
                continue

            if result.word_id in pending:
                existing = pending[result.word_id]
            else:
                existing = self.store.get(result.word_id)
            is_first = existing is None or not existing.has_interaction

            updated = self.apply_outcome(existing, result, today, now)
            pending[result.word_id] = updated
            summary.updated.append(updated)

            if result.was_skipped:
                summary.skipped += 1
            if is_first:
                summary.new_words_learned += 1
            else:
                summary.reviews_completed += 1

        if not summary.updated:
            logger.info("No known words in session results, stats unchanged")
            return summary

        stats = self.tracker.roll_over(self.store.get_daily_stats(), today)
        stats.new_words_learned += summary.new_words_learned
        stats.reviews_completed += summary.reviews_completed

        streak = self.tracker.advance_streak(self.store.get_streak(), today)
        # Nothing is written until every outcome has been applied
        self.store.save_session(list(pending.values()), stats, streak)

        summary.daily_stats = stats
        summary.streak = streak
        logger.info(
            f"Applied {summary.applied} outcomes: {summary.new_words_learned} new, "
            f"{summary.reviews_completed} reviews, {summary.skipped} skipped, "
            f"{len(summary.unknown_word_ids)} unknown; streak {streak.current_streak}"
        )
        return summary
