#!/usr/bin/env python3
"""
Vocabulary flashcard engine
Main application entry point: prints today's study plan for the default user
"""

import json
import logging
import sys
from dataclasses import asdict
from pathlib import Path

from vocab_srs.config import get_settings
from vocab_srs.core.vocabulary.vocabulary import Vocabulary
from vocab_srs.database import init_db
from vocab_srs.study_service import StudyService
from vocab_srs.utils import format_progress_stats


def load_vocabulary(path: str) -> Vocabulary:
    """Load the dictionary rows prepared by the application"""
    vocab_file = Path(path)
    if not vocab_file.exists():
        logging.getLogger(__name__).warning(f"Vocabulary file {path} not found")
        return Vocabulary()
    with vocab_file.open(encoding="utf-8") as f:
        return Vocabulary.from_records(json.load(f))


def main() -> int:
    """Main application entry point"""
    # Load configuration
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    logger = logging.getLogger(__name__)
    logger.info("Starting vocabulary flashcard engine...")

    db_manager = init_db()
    service = StudyService(
        load_vocabulary(settings.vocabulary_path),
        db_manager.get_store(settings.default_user_id),
        settings=settings,
    )
    service.reconcile_vocabulary()

    new_words = service.get_words_for_learning()
    due_words = service.get_words_for_review()
    print(format_progress_stats(asdict(service.get_progress_stats())))
    print(f"\nNew words ready: {len(new_words)}")
    print(f"Reviews ready: {len(due_words)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
