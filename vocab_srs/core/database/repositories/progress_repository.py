"""
Progress repository for word progress records
"""

import logging
import sqlite3
from datetime import datetime

from ...models import WordProgress, WordStatus
from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)


def row_to_progress(row: sqlite3.Row) -> WordProgress:
    """Convert a word_progress row to a WordProgress record"""
    try:
        status = WordStatus(row["status"])
    except ValueError:
        logger.warning(f"Unknown status {row['status']!r} for word {row['word_id']}")
        status = WordStatus.LEARNING

    return WordProgress(
        word_id=row["word_id"],
        status=status,
        interval_index=row["interval_index"] or 0,
        next_review_date=row["next_review_date"],
        correct_count=row["correct_count"] or 0,
        incorrect_count=row["incorrect_count"] or 0,
        review_count=row["review_count"] or 0,
        is_bookmarked=bool(row["is_bookmarked"]),
        last_reviewed_at=row["last_reviewed_at"],
    )


class ProgressRepository:
    """Repository for word progress operations"""

    def __init__(self, db_connection: DatabaseConnection):
        self.db_connection = db_connection

    def get_progress(self, user_id: str, word_id: str) -> WordProgress | None:
        """Get progress for a specific word"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM word_progress
                WHERE user_id = ? AND word_id = ?
                """,
                (user_id, word_id),
            )
            row = cursor.fetchone()
            return row_to_progress(row) if row else None

    def get_all_progress(self, user_id: str) -> list[WordProgress]:
        """Get every progress record of a user"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT * FROM word_progress
                WHERE user_id = ?
                ORDER BY created_at, word_id
                """,
                (user_id,),
            )
            return [row_to_progress(row) for row in cursor.fetchall()]

    def upsert_progress(self, user_id: str, progress: WordProgress) -> None:
        """Insert or replace progress for a word"""
        with self.db_connection.get_connection() as conn:
            self.write_progress(conn, user_id, progress)
            conn.commit()

    def upsert_many(self, user_id: str, records: list[WordProgress]) -> None:
        """Insert or replace several records in one transaction"""
        with self.db_connection.get_connection() as conn:
            for progress in records:
                self.write_progress(conn, user_id, progress)
            conn.commit()

    def write_progress(
        self, conn: sqlite3.Connection, user_id: str, progress: WordProgress
    ) -> None:
        """Upsert one record on an open connection without committing"""
        conn.execute(
            """
            INSERT INTO word_progress (
                user_id, word_id, status, interval_index, next_review_date,
                correct_count, incorrect_count, review_count, is_bookmarked,
                last_reviewed_at, updated_at
            )
            VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT (user_id, word_id) DO UPDATE SET
                status = excluded.status,
                interval_index = excluded.interval_index,
                next_review_date = excluded.next_review_date,
                correct_count = excluded.correct_count,
                incorrect_count = excluded.incorrect_count,
                review_count = excluded.review_count,
                is_bookmarked = excluded.is_bookmarked,
                last_reviewed_at = excluded.last_reviewed_at,
                updated_at = excluded.updated_at
            """,
            (
                user_id,
                progress.word_id,
                progress.status.value,
                progress.interval_index,
                progress.next_review_date,
                progress.correct_count,
                progress.incorrect_count,
                progress.review_count,
                int(progress.is_bookmarked),
                progress.last_reviewed_at,
                datetime.now(),
            ),
        )

    def delete_progress(self, user_id: str, word_id: str) -> bool:
        """Delete progress for a word"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM word_progress WHERE user_id = ? AND word_id = ?",
                (user_id, word_id),
            )
            conn.commit()
            return cursor.rowcount > 0

    def delete_all_progress(self, user_id: str) -> int:
        """Delete every progress record of a user"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                "DELETE FROM word_progress WHERE user_id = ?", (user_id,)
            )
            conn.commit()
            logger.info(f"Deleted {cursor.rowcount} progress records for user {user_id}")
            return cursor.rowcount
