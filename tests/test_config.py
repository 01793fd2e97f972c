"""
Tests for configuration management
"""

import pytest
from pydantic import ValidationError

from vocab_srs.config import DEFAULT_INTERVAL_LADDER, Settings, get_database_path


class TestSettings:
    """Test Settings validation and environment overrides"""

    def test_defaults(self):
        """Test default values"""
        settings = Settings(_env_file=None)

        assert settings.interval_ladder == DEFAULT_INTERVAL_LADDER
        assert settings.daily_new_word_goal == 10
        assert settings.daily_review_limit == 50
        assert settings.log_level == "INFO"
        assert settings.timezone == ""

    def test_environment_override(self, monkeypatch):
        """Test values read from the environment"""
        monkeypatch.setenv("DAILY_NEW_WORD_GOAL", "20")
        monkeypatch.setenv("INTERVAL_LADDER", "[1, 3, 7, 14]")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        settings = Settings(_env_file=None)

        assert settings.daily_new_word_goal == 20
        assert settings.interval_ladder == [1, 3, 7, 14]
        assert settings.log_level == "DEBUG"

    @pytest.mark.parametrize("ladder", [[], [1, 1], [5, 3], [0, 2]])
    def test_invalid_ladder(self, ladder):
        """Test malformed ladders are rejected"""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, interval_ladder=ladder)

    def test_negative_goal(self):
        """Test goals must not be negative"""
        with pytest.raises(ValidationError):
            Settings(_env_file=None, daily_new_word_goal=-1)

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, log_level="LOUD")

    def test_database_path(self):
        """Test path extracted from the database URL"""
        assert get_database_path(Settings(_env_file=None, database_url="sqlite:///tmp/test.db")) == "tmp/test.db"
        assert get_database_path(Settings(_env_file=None, database_url="postgres://x")) == "data/vocab.db"
