"""
Database connection manager for the vocabulary flashcard engine
"""

import logging
import sqlite3
from contextlib import contextmanager
from datetime import date, datetime
from pathlib import Path

from ...config import get_database_path
from ..exceptions import StoreError

logger = logging.getLogger(__name__)


def adapt_date(val: date) -> str:
    return val.isoformat()


def adapt_datetime(val: datetime) -> str:
    return val.isoformat()


def convert_date(val: bytes) -> date:
    try:
        return date.fromisoformat(val.decode())
    except ValueError:
        # Try alternative formats
        date_str = val.decode()
        for fmt in ["%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S"]:
            try:
                return datetime.strptime(date_str, fmt).date()
            except ValueError:
                continue
        raise ValueError(f"Invalid date format: {date_str}") from None


def convert_datetime(val: bytes) -> datetime:
    try:
        return datetime.fromisoformat(val.decode())
    except ValueError:
        # Try alternative formats
        datetime_str = val.decode()
        for fmt in [
            "%Y-%m-%d %H:%M:%S",
            "%Y-%m-%d %H:%M:%S.%f",
            "%Y-%m-%d",
        ]:
            try:
                return datetime.strptime(datetime_str, fmt)
            except ValueError:
                continue
        raise ValueError(f"Invalid datetime format: {datetime_str}") from None


sqlite3.register_adapter(date, adapt_date)
sqlite3.register_adapter(datetime, adapt_datetime)
sqlite3.register_converter("date", convert_date)
sqlite3.register_converter("datetime", convert_datetime)
sqlite3.register_converter("timestamp", convert_datetime)


class DatabaseConnection:
    """Manages SQLite database connections and settings"""

    def __init__(self, db_path: str | None = None):
        self.db_path = db_path or get_database_path()
        self._ensure_database_directory()
        self._init_connection_settings()

    def _ensure_database_directory(self) -> None:
        """Ensure the database directory exists"""
        db_dir = Path(self.db_path).parent
        db_dir.mkdir(parents=True, exist_ok=True)

    def _init_connection_settings(self) -> None:
        """Initialize database connection settings"""
        with self.get_connection() as conn:
            # Enable WAL mode for better concurrency
            conn.execute("PRAGMA journal_mode=WAL")
            # Set timeout for busy database
            conn.execute("PRAGMA busy_timeout=30000")

    @contextmanager
    def get_connection(self):
        """Get database connection with proper cleanup.

        sqlite3 errors are rolled back, logged and re-raised as StoreError.
        """
        conn = None
        try:
            conn = sqlite3.connect(self.db_path, detect_types=sqlite3.PARSE_DECLTYPES)
            conn.row_factory = sqlite3.Row  # Enable dict-like access
            yield conn
        except sqlite3.Error as e:
            if conn:
                conn.rollback()
            logger.error(f"Database error: {e}")
            raise StoreError(f"Database error: {e}") from e
        finally:
            if conn:
                conn.close()

    def init_database(self) -> None:
        """Initialize database tables"""
        with self.get_connection() as conn:
            # Create tables
            self._create_tables(conn)
            # Create indexes
            self._create_indexes(conn)
            conn.commit()

    def _create_tables(self, conn: sqlite3.Connection) -> None:
        """Create database tables"""
        tables = [
            """
            CREATE TABLE IF NOT EXISTS word_progress (
                user_id TEXT NOT NULL,
                word_id TEXT NOT NULL,
                status TEXT NOT NULL DEFAULT 'learning',
                interval_index INTEGER NOT NULL DEFAULT 0,
                next_review_date DATE,
                correct_count INTEGER NOT NULL DEFAULT 0,
                incorrect_count INTEGER NOT NULL DEFAULT 0,
                review_count INTEGER NOT NULL DEFAULT 0,
                is_bookmarked BOOLEAN NOT NULL DEFAULT 0,
                last_reviewed_at TIMESTAMP,
                created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
                PRIMARY KEY (user_id, word_id)
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS daily_stats (
                user_id TEXT NOT NULL,
                stat_date DATE NOT NULL,
                new_words_learned INTEGER NOT NULL DEFAULT 0,
                reviews_completed INTEGER NOT NULL DEFAULT 0,
                PRIMARY KEY (user_id, stat_date)
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS streaks (
                user_id TEXT PRIMARY KEY,
                current_streak INTEGER NOT NULL DEFAULT 0,
                longest_streak INTEGER NOT NULL DEFAULT 0,
                last_activity_date DATE,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS daily_batches (
                user_id TEXT NOT NULL,
                mode TEXT NOT NULL,
                batch_date DATE NOT NULL,
                word_ids TEXT NOT NULL,
                filters TEXT NOT NULL,
                quota INTEGER NOT NULL,
                PRIMARY KEY (user_id, mode)
            )
            """,
            """
            CREATE TABLE IF NOT EXISTS user_settings (
                user_id TEXT PRIMARY KEY,
                daily_new_word_goal INTEGER NOT NULL,
                daily_review_limit INTEGER NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
            """,
        ]

        for table_sql in tables:
            conn.execute(table_sql)

    def _create_indexes(self, conn: sqlite3.Connection) -> None:
        """Create database indexes for performance"""
        indexes = [
            (
                "CREATE INDEX IF NOT EXISTS idx_word_progress_next_review "
                "ON word_progress(user_id, next_review_date)"
            ),
            (
                "CREATE INDEX IF NOT EXISTS idx_daily_stats_date "
                "ON daily_stats(user_id, stat_date)"
            ),
        ]

        for index_sql in indexes:
            try:
                conn.execute(index_sql)
            except sqlite3.OperationalError as e:
                logger.warning(f"Failed to create index: {index_sql}, error: {e}")
                # Continue with other indexes

