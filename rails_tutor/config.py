"""
Configuration settings for rails-tutor.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="RAILS_TUTOR_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Knowledge Base Layout
    # ========================================
    tutorials_dir: Path = Field(
        default=Path("tutorials"),
        description="Directory holding tutorial markdown files",
    )
    profile_path: Path = Field(
        default=Path("learner_profile.md"),
        description="Learner profile document (interview transcripts)",
    )
    index_path: Path = Field(
        default=Path("README.md"),
        description="Index README regenerated by `rails-tutor index`",
    )

    # ========================================
    # Scoring & Review
    # ========================================
    score_min: int = Field(
        default=0,
        description="Lowest allowed understanding score",
    )
    score_max: int = Field(
        default=10,
        description="Highest allowed understanding score",
    )
    review_base_days: int = Field(
        default=1,
        ge=1,
        description="Review interval for a score of 0 or 1 (doubles every two points)",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="WARNING",
        description="Logging verbosity level",
    )
    log_file: str | None = Field(
        default=None,
        description="Log file path (None for stderr only)",
    )

    @model_validator(mode="after")
    def _check_score_range(self) -> Settings:
        if self.score_min > self.score_max:
            raise ValueError(
                f"score_min ({self.score_min}) must not exceed score_max ({self.score_max})"
            )
        return self


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
