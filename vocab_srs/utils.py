"""
Utility functions for the vocabulary flashcard engine
"""

import hashlib
import logging
import time
from datetime import date, datetime
from functools import wraps
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

logger = logging.getLogger(__name__)


def today_in(timezone: str = "") -> date:
    """Get today's calendar date, local unless a timezone name is given"""
    if not timezone:
        return date.today()
    try:
        return datetime.now(ZoneInfo(timezone)).date()
    except ZoneInfoNotFoundError:
        logger.warning(f"Unknown timezone {timezone!r}, using local date")
        return date.today()


def seed_for(day: date, purpose: str) -> int:
    """Derive a stable 64-bit seed from a calendar day and a purpose tag"""
    digest = hashlib.sha256(f"{day.isoformat()}:{purpose}".encode()).digest()
    return int.from_bytes(digest[:8], "big")


def format_progress_stats(stats: dict[str, Any]) -> str:
    """Format user progress statistics"""
    result = "Your progress:\n\n"
    result += (
        f"New words today: {stats.get('words_learned_today', 0)}"
        f"/{stats.get('daily_goal', 0)}\n"
    )
    result += (
        f"Reviews today: {stats.get('words_reviewed_today', 0)}"
        f"/{stats.get('review_limit', 0)}\n"
    )
    result += f"Due for review: {stats.get('due_count', 0)}\n"
    result += f"Mastered: {stats.get('mastered_count', 0)}\n"
    result += f"Words studied: {stats.get('total_words_learned', 0)}\n"
    result += (
        f"Streak: {stats.get('current_streak', 0)} days "
        f"(best {stats.get('longest_streak', 0)})\n"
    )

    return result.strip()


def calculate_success_rate(correct: int, total: int) -> float:
    """Calculate success rate percentage"""
    if total == 0:
        return 0.0
    return (correct / total) * 100


class Timer:
    """Simple timer for measuring duration"""

    def __init__(self):
        self.start_time = None
        self.end_time = None

    def start(self):
        """Start the timer"""
        self.start_time = time.perf_counter()
        self.end_time = None

    def stop(self):
        """Stop the timer"""
        if self.start_time is not None:
            self.end_time = time.perf_counter()

    def elapsed(self) -> float | None:
        """Get elapsed time in seconds"""
        if self.start_time is None:
            return None

        end = self.end_time or time.perf_counter()
        return end - self.start_time


def log_execution_time(func):
    """Decorator to log function execution time"""

    @wraps(func)
    def wrapper(*args, **kwargs):
        timer = Timer()
        timer.start()
        try:
            result = func(*args, **kwargs)
            timer.stop()
            logger.debug(f"{func.__name__} executed in {timer.elapsed():.3f}s")
            return result
        except Exception as e:
            timer.stop()
            logger.error(f"{func.__name__} failed after {timer.elapsed():.3f}s: {e}")
            raise

    return wrapper
