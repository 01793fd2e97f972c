"""
Database operations for the vocabulary flashcard engine
"""

# Direct import from the modular structure
from .config import get_database_path
from .core.database.database_manager import DatabaseManager, SqliteProgressStore


# Simple init function
def init_db(db_path=None):
    """Initialize database"""
    db_manager = DatabaseManager(db_path)
    db_manager.init_database()
    return db_manager

# Clean exports
__all__ = ['DatabaseManager', 'SqliteProgressStore', 'get_database_path', 'init_db']
