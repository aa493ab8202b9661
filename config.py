"""
Configuration settings for the adaptive sequencing engine.

Uses Pydantic Settings for environment variable management with .env file support.
"""
from __future__ import annotations

from functools import lru_cache
from typing import Any, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ASVAB_CATEGORIES = (
    "GENERAL_SCIENCE",
    "ARITHMETIC_REASONING",
    "WORD_KNOWLEDGE",
    "PARAGRAPH_COMPREHENSION",
    "MATHEMATICS_KNOWLEDGE",
    "ELECTRONICS_INFORMATION",
    "AUTO_SHOP",
    "MECHANICAL_COMPREHENSION",
    "ASSEMBLING_OBJECTS",
)


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="ADAPTIVE_",
        case_sensitive=False,
        extra="ignore",
    )

    # ========================================
    # Proficiency Estimation
    # ========================================
    history_window_size: int = Field(
        default=20,
        description="Most recent attempts used for a proficiency estimate",
    )
    neutral_proficiency: float = Field(
        default=5.0,
        description="Level assigned to a learner with no history in a topic",
    )

    # ========================================
    # Sequencing
    # ========================================
    target_window: float = Field(
        default=2.0,
        description="Candidates within target ± window are preferred",
    )
    pool_size_multiplier: int = Field(
        default=2,
        description="Candidate pool requested as max_items × multiplier",
    )
    correct_streak_threshold: int = Field(
        default=3,
        description="Predicted-correct streak that raises the difficulty target",
    )
    incorrect_streak_threshold: int = Field(
        default=2,
        description="Predicted-incorrect streak that lowers the difficulty target",
    )
    lookahead_strategy: Literal["simulated", "deterministic"] = Field(
        default="simulated",
        description="How outcomes are predicted while pacing a generation pass",
    )
    lookahead_seed: int | None = Field(
        default=None,
        description="Seed for the simulated look-ahead (None = unseeded)",
    )

    # ========================================
    # Topic Planning
    # ========================================
    known_topics: str = Field(
        default=",".join(ASVAB_CATEGORIES),
        description="Comma-separated topics accepted by the engine",
    )
    planning_window_size: int | None = Field(
        default=None,
        description="Attempts per topic fetched for prioritization and path planning (None = full history)",
    )
    needs_work_accuracy: float = Field(
        default=0.7,
        description="Topics below this accuracy are flagged as needing work",
    )
    beginner_priority_topics: str = Field(
        default="ARITHMETIC_REASONING,MATHEMATICS_KNOWLEDGE,WORD_KNOWLEDGE,PARAGRAPH_COMPREHENSION",
        description="Fundamentals moved to the front of a beginner's learning path",
    )

    # ========================================
    # Logging
    # ========================================
    log_level: str = Field(
        default="INFO",
        description="Loguru level for the CLI sink",
    )

    def get_known_topics(self) -> list[str]:
        """Get accepted topics as a list."""
        return [t.strip() for t in self.known_topics.split(",") if t.strip()]

    def get_beginner_priority_topics(self) -> list[str]:
        """Get the beginner fundamentals ordering as a list."""
        return [t.strip() for t in self.beginner_priority_topics.split(",") if t.strip()]

    def get_adaptive_config(self) -> dict[str, Any]:
        """Get sequencing configuration as a dictionary."""
        return {
            "window_size": self.history_window_size,
            "neutral_proficiency": self.neutral_proficiency,
            "target_window": self.target_window,
            "pool_size_multiplier": self.pool_size_multiplier,
            "streaks": {
                "correct": self.correct_streak_threshold,
                "incorrect": self.incorrect_streak_threshold,
            },
            "lookahead": {
                "strategy": self.lookahead_strategy,
                "seed": self.lookahead_seed,
            },
            "planning": {
                "window_size": self.planning_window_size,
                "needs_work_accuracy": self.needs_work_accuracy,
            },
        }


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
