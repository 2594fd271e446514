"""
Configuration settings for speakflow-core.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SPEAKFLOW_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Storage
    # ========================================
    data_dir: Path = Field(
        default=Path.home() / ".speakflow",
        description="Directory holding one JSON snapshot per item repository",
    )

    # ========================================
    # Sessions
    # ========================================
    quiz_question_count: int = Field(
        default=10,
        ge=1,
        description="Questions per multiple-choice session",
    )
    flashcard_daily_limit: int = Field(
        default=20,
        ge=1,
        description="Maximum due cards queued in one flashcard session",
    )
    min_pool_size: int = Field(
        default=4,
        ge=4,
        description="Minimum filtered items before a quiz can be built (1 answer + 3 distractors)",
    )

    # ========================================
    # Rewards
    # ========================================
    xp_per_correct_answer: int = Field(
        default=5,
        ge=0,
        description="XP granted for a correct quiz answer",
    )
    xp_per_flashcard_pass: int = Field(
        default=3,
        ge=0,
        description="XP granted for a flashcard rated Good or Easy",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="INFO",
        description="Minimum loguru level for the CLI sink",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
