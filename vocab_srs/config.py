"""
Configuration management for the vocabulary flashcard engine
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_INTERVAL_LADDER = [1, 2, 3, 5, 8, 13, 21, 34, 55]


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # Storage Configuration
    database_url: str = Field(default="sqlite:///data/vocab.db")
    vocabulary_path: str = Field(default="data/vocabulary.json")

    # Application Configuration
    log_level: str = Field(default="INFO")
    debug: bool = Field(default=False)
    default_user_id: str = Field(default="local_user")

    # Spaced Repetition Configuration
    interval_ladder: list[int] = Field(
        default_factory=lambda: list(DEFAULT_INTERVAL_LADDER)
    )
    daily_new_word_goal: int = Field(default=10, ge=0)
    daily_review_limit: int = Field(default=50, ge=0)

    # Empty timezone means the local calendar day of the machine
    timezone: str = Field(default="")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        env_nested_delimiter="__",
        extra="ignore"
    )

    @field_validator("interval_ladder")
    @classmethod
    def validate_interval_ladder(cls, value: list[int]) -> list[int]:
        """Ladder must be non-empty, positive and strictly increasing"""
        if not value:
            raise ValueError("interval_ladder must not be empty")
        if any(days <= 0 for days in value):
            raise ValueError("interval_ladder values must be positive")
        if any(later <= earlier for earlier, later in zip(value, value[1:])):
            raise ValueError("interval_ladder must be strictly increasing")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()


def get_database_path(settings: Settings | None = None) -> str:
    """Get the database file path from URL"""
    settings = settings or get_settings()
    if settings.database_url.startswith("sqlite:///"):
        return settings.database_url.replace("sqlite:///", "")
    return "data/vocab.db"
