"""
Unified database manager that coordinates all repositories
"""

import logging

from ..models import (
    DailyBatch,
    DailyStats,
    StreakState,
    StudyGoals,
    StudyMode,
    WordProgress,
)
from ..store.progress_store import ProgressStore
from .connection import DatabaseConnection
from .repositories.batch_repository import BatchRepository
from .repositories.progress_repository import ProgressRepository
from .repositories.stats_repository import StatsRepository

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Unified database manager that coordinates all repositories"""

    def __init__(self, db_path: str | None = None):
        self.db_connection = DatabaseConnection(db_path)
        self.progress_repo = ProgressRepository(self.db_connection)
        self.stats_repo = StatsRepository(self.db_connection)
        self.batch_repo = BatchRepository(self.db_connection)

    def init_database(self) -> None:
        """Initialize database tables and indexes"""
        self.db_connection.init_database()

    def get_store(self, user_id: str) -> "SqliteProgressStore":
        """Get a progress store bound to one user"""
        return SqliteProgressStore(self, user_id)

    def get_daily_history(self, user_id: str, days: int = 30) -> list[DailyStats]:
        """Get the counters of recent study days"""
        return self.stats_repo.get_daily_history(user_id, days)

    def get_connection(self):
        """Get database connection for direct SQL access in tests"""
        return self.db_connection.get_connection()


class SqliteProgressStore(ProgressStore):
    """ProgressStore for a single user backed by the SQLite repositories"""

    def __init__(self, db_manager: DatabaseManager, user_id: str):
        self.db_manager = db_manager
        self.user_id = user_id

    def get(self, word_id: str) -> WordProgress | None:
        return self.db_manager.progress_repo.get_progress(self.user_id, word_id)

    def upsert(self, progress: WordProgress) -> None:
        self.db_manager.progress_repo.upsert_progress(self.user_id, progress)

    def upsert_many(self, records: list[WordProgress]) -> None:
        self.db_manager.progress_repo.upsert_many(self.user_id, records)

    def all_for_user(self) -> list[WordProgress]:
        return self.db_manager.progress_repo.get_all_progress(self.user_id)

    def delete(self, word_id: str) -> bool:
        return self.db_manager.progress_repo.delete_progress(self.user_id, word_id)

    def get_daily_stats(self) -> DailyStats | None:
        return self.db_manager.stats_repo.get_latest_daily_stats(self.user_id)

    def save_daily_stats(self, stats: DailyStats) -> None:
        self.db_manager.stats_repo.save_daily_stats(self.user_id, stats)

    def get_streak(self) -> StreakState | None:
        return self.db_manager.stats_repo.get_streak(self.user_id)

    def save_streak(self, streak: StreakState) -> None:
        self.db_manager.stats_repo.save_streak(self.user_id, streak)

    def save_session(
        self, records: list[WordProgress], stats: DailyStats, streak: StreakState
    ) -> None:
        """Write records, counters and streak in a single transaction"""
        manager = self.db_manager
        with manager.db_connection.get_connection() as conn:
            for progress in records:
                manager.progress_repo.write_progress(conn, self.user_id, progress)
            manager.stats_repo.write_daily_stats(conn, self.user_id, stats)
            manager.stats_repo.write_streak(conn, self.user_id, streak)
            conn.commit()

    def get_batch(self, mode: StudyMode) -> DailyBatch | None:
        return self.db_manager.batch_repo.get_batch(self.user_id, mode)

    def save_batch(self, batch: DailyBatch) -> None:
        self.db_manager.batch_repo.save_batch(self.user_id, batch)

    def get_goals(self) -> StudyGoals | None:
        return self.db_manager.stats_repo.get_goals(self.user_id)

    def save_goals(self, goals: StudyGoals) -> None:
        self.db_manager.stats_repo.save_goals(self.user_id, goals)

    def clear(self) -> None:
        logger.info(f"Clearing all study data for user {self.user_id}")
        self.db_manager.progress_repo.delete_all_progress(self.user_id)
        self.db_manager.stats_repo.delete_user_stats(self.user_id)
        self.db_manager.batch_repo.delete_batches(self.user_id)
