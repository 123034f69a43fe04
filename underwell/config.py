"""
Configuration management for Underwell Pit.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from underwell.gameplay.constants import MAX_CATCHUP_TICKS, TICK_RATE


class Settings(BaseSettings):
    """Settings loaded from UNDERWELL_* environment variables or .env."""

    model_config = SettingsConfigDict(
        env_prefix="UNDERWELL_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Pit size
    world_width: int = Field(default=960, description="Pit width in pixels")
    world_height: int = Field(default=640, description="Pit height in pixels")

    # Frame driver
    tick_rate: int = Field(default=TICK_RATE, description="Simulation ticks per second")
    max_catchup_ticks: int = Field(
        default=MAX_CATCHUP_TICKS,
        ge=1,
        description="Most ticks run in a single frame; extra backlog is dropped"
    )

    # Persistence
    highscore_path: str = Field(
        default="underwell_highscore.json",
        description="JSON file holding the best survival time"
    )

    # Logging
    log_level: str = Field(default="INFO")

    # Determinism
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for spawn and steering randomness. None means unseeded"
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
