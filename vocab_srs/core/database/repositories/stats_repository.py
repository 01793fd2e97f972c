"""
Stats repository for daily counters, streaks and daily goals
"""

import logging
import sqlite3
from datetime import datetime

from ...models import DailyStats, StreakState, StudyGoals
from ..connection import DatabaseConnection

logger = logging.getLogger(__name__)


class StatsRepository:
    """Repository for per-day and per-user counters"""

    def __init__(self, db_connection: DatabaseConnection):
        self.db_connection = db_connection

    def get_latest_daily_stats(self, user_id: str) -> DailyStats | None:
        """Get the counters of the most recent study day"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT stat_date, new_words_learned, reviews_completed
                FROM daily_stats
                WHERE user_id = ?
                ORDER BY stat_date DESC
                LIMIT 1
                """,
                (user_id,),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return DailyStats(
                stat_date=row["stat_date"],
                new_words_learned=row["new_words_learned"],
                reviews_completed=row["reviews_completed"],
            )

    def save_daily_stats(self, user_id: str, stats: DailyStats) -> None:
        """Store the counters for one day, replacing earlier values"""
        with self.db_connection.get_connection() as conn:
            self.write_daily_stats(conn, user_id, stats)
            conn.commit()

    def write_daily_stats(
        self, conn: sqlite3.Connection, user_id: str, stats: DailyStats
    ) -> None:
        conn.execute(
            """
            INSERT OR REPLACE INTO daily_stats (
                user_id, stat_date, new_words_learned, reviews_completed
            )
            VALUES (?, ?, ?, ?)
            """,
            (user_id, stats.stat_date, stats.new_words_learned, stats.reviews_completed),
        )

    def get_daily_history(self, user_id: str, days: int = 30) -> list[DailyStats]:
        """Get the counters of recent study days, newest first"""
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT stat_date, new_words_learned, reviews_completed
                FROM daily_stats
                WHERE user_id = ?
                ORDER BY stat_date DESC
                LIMIT ?
                """,
                (user_id, days),
            )
            return [
                DailyStats(
                    stat_date=row["stat_date"],
                    new_words_learned=row["new_words_learned"],
                    reviews_completed=row["reviews_completed"],
                )
                for row in cursor.fetchall()
            ]

    def get_streak(self, user_id: str) -> StreakState | None:
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT current_streak, longest_streak, last_activity_date
                FROM streaks
                WHERE user_id = ?
                """,
                (user_id,),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return StreakState(
                current_streak=row["current_streak"],
                longest_streak=row["longest_streak"],
                last_activity_date=row["last_activity_date"],
            )

    def save_streak(self, user_id: str, streak: StreakState) -> None:
        with self.db_connection.get_connection() as conn:
            self.write_streak(conn, user_id, streak)
            conn.commit()

    def write_streak(
        self, conn: sqlite3.Connection, user_id: str, streak: StreakState
    ) -> None:
        conn.execute(
            """
            INSERT OR REPLACE INTO streaks (
                user_id, current_streak, longest_streak, last_activity_date, updated_at
            )
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                user_id,
                streak.current_streak,
                streak.longest_streak,
                streak.last_activity_date,
                datetime.now(),
            ),
        )

    def get_goals(self, user_id: str) -> StudyGoals | None:
        with self.db_connection.get_connection() as conn:
            cursor = conn.execute(
                """
                SELECT daily_new_word_goal, daily_review_limit
                FROM user_settings
                WHERE user_id = ?
                """,
                (user_id,),
            )
            row = cursor.fetchone()
            if not row:
                return None
            return StudyGoals(
                daily_new_word_goal=row["daily_new_word_goal"],
                daily_review_limit=row["daily_review_limit"],
            )

    def save_goals(self, user_id: str, goals: StudyGoals) -> None:
        with self.db_connection.get_connection() as conn:
            conn.execute(
                """
                INSERT OR REPLACE INTO user_settings (
                    user_id, daily_new_word_goal, daily_review_limit, updated_at
                )
                VALUES (?, ?, ?, ?)
                """,
                (
                    user_id,
                    goals.daily_new_word_goal,
                    goals.daily_review_limit,
                    datetime.now(),
                ),
            )
            conn.commit()

    def delete_user_stats(self, user_id: str) -> None:
        """Delete daily counters, streak and goals of a user"""
        with self.db_connection.get_connection() as conn:
            conn.execute("DELETE FROM daily_stats WHERE user_id = ?", (user_id,))
            conn.execute("DELETE FROM streaks WHERE user_id = ?", (user_id,))
            conn.execute("DELETE FROM user_settings WHERE user_id = ?", (user_id,))
            conn.commit()
