"""
Runtime configuration for the mission server.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Settings loaded from SIGNAL_LOST_* environment variables."""

    seed: int = Field(
        default=42,
        description="Seed for combat variance"
    )

    # Clock
    tick_seconds: float = Field(
        default=1.0,
        description="Real seconds per game minute at 1x compression"
    )
    time_compression: float = Field(
        default=1.0,
        description="Clock speed multiplier"
    )
    autorun: bool = Field(
        default=True,
        description="Start the clock as soon as a mission starts"
    )

    log_level: str = Field(default="INFO")

    model_config = SettingsConfigDict(
        env_prefix="SIGNAL_LOST_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
