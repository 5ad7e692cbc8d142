"""Tandem Configuration Module.

This module provides centralized configuration for all Tandem components.
All settings support environment variable overrides with TANDEM_ prefix.

Usage:
    from tandem.config import settings

    # Dedup window size for completion feedback
    print(settings.feedback.dedup_capacity)

    # Ranking weights
    print(settings.ranking.semantic_weight)
"""

from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = [
    "Settings",
    "FeedbackSettings",
    "InteractionSettings",
    "RankingSettings",
    "PathSettings",
    "LoggingSettings",
    "settings",
]


class FeedbackSettings(BaseSettings):
    """Configuration for completion feedback recording.

    The dedup capacity bounds memory, not correctness: the persisted log is
    the source of truth for the full history.
    """

    model_config = SettingsConfigDict(env_prefix="TANDEM_FEEDBACK__")

    dedup_capacity: int = Field(
        default=10,
        description="Number of recent completion ids remembered for dedup",
    )
    acceptance_reset_delay: float = Field(
        default=0.2,
        description="Seconds after a selection change before the accepted flag resets",
    )
    persist_retries: int = Field(
        default=1,
        description="Retries after a failed feedback append before dropping it",
    )


class InteractionSettings(BaseSettings):
    """Configuration for per-file interaction tracking and scoring."""

    model_config = SettingsConfigDict(env_prefix="TANDEM_INTERACTIONS__")

    recent_stroke_limit: int = Field(
        default=10,
        description="Recent stroke positions kept per file (active lines)",
    )
    inactivity_threshold: float = Field(
        default=300.0,
        description="Gap in seconds after which dwell time stops accruing",
    )

    stroke_weight: float = Field(default=2.0)
    visit_weight: float = Field(default=0.5)
    session_time_weight: float = Field(default=0.5)
    recency_half_life: float = Field(
        default=3600.0,
        description="Seconds for the recency factor to decay by half",
    )


class RankingSettings(BaseSettings):
    """Configuration for blending semantic similarity with interaction signal."""

    model_config = SettingsConfigDict(env_prefix="TANDEM_RANKING__")

    semantic_weight: float = Field(default=0.7)
    interaction_weight: float = Field(default=0.3)
    default_limit: int = Field(default=10)
    candidate_multiplier: int = Field(
        default=2,
        description="Over-fetch factor for vector queries before blending",
    )


class PathSettings(BaseSettings):
    """Configuration for file and directory paths."""

    model_config = SettingsConfigDict(env_prefix="TANDEM_PATHS__")

    tandem_dir: Path = Field(
        default_factory=lambda: Path.home() / ".tandem",
        description="Base directory for Tandem data",
    )
    embeddings_dir: Path = Field(
        default_factory=lambda: Path.home() / ".tandem" / "embeddings",
        description="Parent directory of the per-workspace vector stores",
    )
    completions_log: Path = Field(
        default_factory=lambda: Path.home() / ".tandem" / "completions.jsonl",
        description="Append-only log of completion feedback records",
    )


class LoggingSettings(BaseSettings):
    """Logging output configuration."""

    model_config = SettingsConfigDict(env_prefix="TANDEM_")

    log_level: str = Field(default="INFO")
    log_format: str = Field(
        default="json",
        description='"json" for JSON lines, "console" for human-readable',
    )


class Settings(BaseSettings):
    """Root settings class that composes all configuration sections.

    Example:
        from tandem.config import settings

        settings.feedback.dedup_capacity
        settings.interactions.inactivity_threshold
        settings.paths.completions_log
    """

    model_config = SettingsConfigDict(env_prefix="TANDEM_")

    feedback: FeedbackSettings = Field(default_factory=FeedbackSettings)
    interactions: InteractionSettings = Field(default_factory=InteractionSettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    paths: PathSettings = Field(default_factory=PathSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    def model_post_init(self, context: Any) -> None:
        """Validate settings after initialization."""
        if self.feedback.dedup_capacity < 1:
            raise ValueError(
                f"dedup_capacity must be at least 1, "
                f"got {self.feedback.dedup_capacity}"
            )
        if self.feedback.persist_retries < 0:
            raise ValueError(
                f"persist_retries must be non-negative, "
                f"got {self.feedback.persist_retries}"
            )
        for name in ("semantic_weight", "interaction_weight"):
            value = getattr(self.ranking, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be between 0 and 1, got {value}")


# Module-level singleton instance
settings = Settings()
