"""
Runtime configuration.

Defaults can be overridden with YARD_* environment variables or a .env file,
e.g. YARD_LOCK_WINDOW_MS=90000 or YARD_EWMA_ALPHA=0.4.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain import ScheduleWeights


class Settings(BaseSettings):
    """Optimization core settings loaded from the environment."""

    # Scheduling
    weight_wait: float = 1.0
    weight_move: float = 0.2
    weight_rehandle: float = 5.0
    weight_priority: float = -2.0
    move_seconds_per_unit: float = Field(default=2.0, gt=0)
    lock_window_ms: float = Field(default=60_000.0, ge=0)

    # Slot risk
    risk_half_life_days: float = Field(default=14.0, gt=0)

    # Routing
    ewma_alpha: float = Field(default=0.25, gt=0, le=1)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="YARD_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    @property
    def schedule_weights(self) -> ScheduleWeights:
        return ScheduleWeights(
            wait=self.weight_wait,
            move=self.weight_move,
            rehandle=self.weight_rehandle,
            priority=self.weight_priority,
        )


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
