"""
Static vocabulary dictionary with stable word identifiers
"""

import hashlib
import logging
import unicodedata
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from typing import Any

from ..models import FilterSettings, VocabularyWord
from ..store.progress_store import ProgressStore

logger = logging.getLogger(__name__)


def _normalize(value: Any) -> str:
    return unicodedata.normalize("NFC", str(value or "")).strip()


def stable_word_id(character: str, pinyin: str, definition: str) -> str:
    """Identifier derived from the immutable fields of a dictionary entry.

    The same entry maps to the same id across reloads of the dictionary, so
    progress can be reconciled when the dictionary changes.
    """
    combined = "|".join(_normalize(part) for part in (character, pinyin, definition))
    return "word_" + hashlib.sha256(combined.encode("utf-8")).hexdigest()[:16]


@dataclass
class ReconciliationReport:
    """Outcome of matching stored progress against a dictionary"""

    removed_word_ids: list[str] = field(default_factory=list)
    preserved: int = 0


class Vocabulary:
    """Read-only collection of dictionary entries"""

    def __init__(self, words: Iterable[VocabularyWord] = ()):
        self._words: dict[str, VocabularyWord] = {}
        for word in words:
            if word.id in self._words:
                logger.warning(f"Duplicate word id {word.id} ({word.character}), keeping first")
                continue
            self._words[word.id] = word

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> "Vocabulary":
        """
        Build a vocabulary from plain dictionary rows

        Args:
            records: Rows with character, pinyin, definition, level, category
                and an optional id

        Returns:
            Vocabulary; rows without a character or definition are skipped
        """
        words = []
        skipped = 0
        for record in records:
            character = _normalize(record.get("character"))
            definition = _normalize(record.get("definition"))
            if not character or not definition:
                skipped += 1
                continue
            pinyin = _normalize(record.get("pinyin"))
            words.append(
                VocabularyWord(
                    id=_normalize(record.get("id"))
                    or stable_word_id(character, pinyin, definition),
                    character=character,
                    pinyin=pinyin,
                    definition=definition,
                    level=_normalize(record.get("level")),
                    category=_normalize(record.get("category")),
                )
            )

        if skipped:
            logger.warning(f"Skipped {skipped} vocabulary rows without character or definition")

        vocabulary = cls(words)
        logger.info(f"Loaded vocabulary with {len(vocabulary)} words")
        return vocabulary

    def __len__(self) -> int:
        return len(self._words)

    def __iter__(self) -> Iterator[VocabularyWord]:
        return iter(self._words.values())

    def __contains__(self, word_id: object) -> bool:
        return word_id in self._words

    @property
    def words(self) -> list[VocabularyWord]:
        return list(self._words.values())

    def get(self, word_id: str) -> VocabularyWord | None:
        return self._words.get(word_id)

    def filter(self, filters: FilterSettings | None = None) -> list[VocabularyWord]:
        """Words matching the level and category filters, in dictionary order"""
        if filters is None:
            return self.words
        return [word for word in self._words.values() if filters.matches(word)]

    def available_levels(self) -> list[str]:
        return sorted({word.level for word in self._words.values()})

    def available_categories(self) -> list[str]:
        return sorted({word.category for word in self._words.values()})

    def reconcile(self, store: ProgressStore) -> ReconciliationReport:
        """Drop stored progress for words that are no longer in the dictionary"""
        report = ReconciliationReport()
        for progress in store.all_for_user():
            if progress.word_id in self._words:
                report.preserved += 1
                continue
            store.delete(progress.word_id)
            report.removed_word_ids.append(progress.word_id)

        logger.info(
            f"Vocabulary reconciliation: {report.preserved} progress entries preserved, "
            f"{len(report.removed_word_ids)} orphaned entries cleaned up"
        )
        return report
