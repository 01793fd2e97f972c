"""
Data models for the vocabulary flashcard engine
"""

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any


class WordStatus(str, Enum):
    """Study state of a word, derived from its interval index"""

    LEARNING = "learning"
    REVIEWING = "reviewing"
    MASTERED = "mastered"


class StudyMode(str, Enum):
    """Study mode a batch is selected for"""

    LEARN = "learn"
    REVIEW = "review"


@dataclass(frozen=True)
class VocabularyWord:
    """Dictionary entry, loaded once and never mutated"""

    id: str
    character: str
    pinyin: str
    definition: str
    level: str
    category: str


@dataclass
class WordProgress:
    """Per-user study progress for one word"""

    word_id: str
    status: WordStatus = WordStatus.LEARNING
    interval_index: int = 0
    next_review_date: date | None = None
    correct_count: int = 0
    incorrect_count: int = 0
    review_count: int = 0
    is_bookmarked: bool = False
    last_reviewed_at: datetime | None = None

    def copy(self) -> "WordProgress":
        return replace(self)

    @property
    def ever_answered_correctly(self) -> bool:
        return self.correct_count > 0

    @property
    def has_interaction(self) -> bool:
        """Whether any outcome (answer or skip) was ever applied.

        A record created only to hold a bookmark has no interaction yet.
        """
        return self.last_reviewed_at is not None or self.review_count > 0


@dataclass
class DailyStats:
    """Counters for a single calendar day"""

    stat_date: date | None = None
    new_words_learned: int = 0
    reviews_completed: int = 0


@dataclass
class StreakState:
    """Consecutive study day tracking"""

    current_streak: int = 0
    longest_streak: int = 0
    last_activity_date: date | None = None


@dataclass(frozen=True)
class FilterSettings:
    """Level and category restrictions; an empty tuple means no restriction.

    Values are stored sorted and de-duplicated so that two filter selections
    made in a different order compare equal for batch caching.
    """

    levels: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "levels", tuple(sorted(set(self.levels or ()))))
        object.__setattr__(
            self, "categories", tuple(sorted(set(self.categories or ())))
        )

    def matches(self, word: VocabularyWord) -> bool:
        level_match = not self.levels or word.level in self.levels
        category_match = not self.categories or word.category in self.categories
        return level_match and category_match

    def to_dict(self) -> dict[str, list[str]]:
        return {"levels": list(self.levels), "categories": list(self.categories)}

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "FilterSettings":
        data = data or {}
        return cls(
            levels=tuple(data.get("levels") or ()),
            categories=tuple(data.get("categories") or ()),
        )


@dataclass(frozen=True)
class DailyBatch:
    """Word ids selected for one mode on one day"""

    mode: StudyMode
    batch_date: date
    word_ids: tuple[str, ...]
    filters: FilterSettings
    quota: int

    def is_valid_for(
        self, batch_date: date, filters: FilterSettings, quota: int
    ) -> bool:
        """Check whether this cached batch can serve a request"""
        return (
            self.batch_date == batch_date
            and self.filters == filters
            and self.quota == quota
        )

    def is_for_day(self, batch_date: date, filters: FilterSettings) -> bool:
        """Check whether this batch was selected today for these filters"""
        return self.batch_date == batch_date and self.filters == filters


@dataclass(frozen=True)
class StudyResult:
    """Outcome of one flashcard in a study session"""

    word_id: str
    was_correct: bool = False
    was_skipped: bool = False


@dataclass
class StudyGoals:
    """User-adjustable daily targets"""

    daily_new_word_goal: int
    daily_review_limit: int


@dataclass
class SessionSummary:
    """Result of applying one session's outcomes"""

    new_words_learned: int = 0
    reviews_completed: int = 0
    skipped: int = 0
    unknown_word_ids: list[str] = field(default_factory=list)
    updated: list[WordProgress] = field(default_factory=list)
    daily_stats: DailyStats | None = None
    streak: StreakState | None = None

    @property
    def applied(self) -> int:
        return len(self.updated)


@dataclass
class ProgressStats:
    """Snapshot of a user's progress"""

    words_learned_today: int = 0
    words_reviewed_today: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    due_count: int = 0
    overdue_count: int = 0
    mastered_count: int = 0
    total_words_learned: int = 0
    bookmarked_count: int = 0
    accuracy: float = 0.0
    daily_goal: int = 0
    review_limit: int = 0
