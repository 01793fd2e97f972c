"""
Batch repository for the per-day cached study batches
"""

import json
import logging

from ...models import DailyBatch, FilterSettings, StudyMode
from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)


class BatchRepository:
    """Repository for cached daily batches, one row per user and mode"""

    def __init__(self, db_connection: DatabaseConnection):
        self.db_connection = db_connection

    def get_batch(self, user_id: str, mode: StudyMode) -> DailyBatch | None:
        """Get the cached batch; an unreadable row counts as no batch"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT batch_date, word_ids, filters, quota
                FROM daily_batches
                WHERE user_id = ? AND mode = ?
                """,
                (user_id, mode.value),
            )
            row = cursor.fetchone()

        if not row:
            return None

        try:
            word_ids = json.loads(row["word_ids"])
            filters = FilterSettings.from_dict(json.loads(row["filters"]))
        except (json.JSONDecodeError, TypeError, AttributeError) as e:
            logger.warning(f"Discarding unreadable {mode.value} batch for user {user_id}: {e}")
            return None

        return DailyBatch(
            mode=mode,
            batch_date=row["batch_date"],
            word_ids=tuple(word_ids),
            filters=filters,
            quota=row["quota"],
        )

    def save_batch(self, user_id: str, batch: DailyBatch) -> None:
        """Replace the cached batch in a single statement"""
        with self.db_connection.get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO daily_batches (
                    user_id, mode, batch_date, word_ids, filters, quota
                )
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    user_id,
                    batch.mode.value,
                    batch.batch_date,
                    json.dumps(list(batch.word_ids), ensure_ascii=False),
                    json.dumps(batch.filters.to_dict(), ensure_ascii=False),
                    batch.quota,
                ),
            )
            conn.commit()

    def delete_batches(self, user_id: str) -> None:
        with self.db_connection.get_connection() as conn:
            conn.execute("DELETE FROM daily_batches WHERE user_id = ?", (user_id,))
            conn.commit()
