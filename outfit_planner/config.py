"""
Settings and logging setup.

Values come from environment variables prefixed with ``OUTFIT_`` or from a
local ``.env`` file. Use get_settings() to access the cached instance.
"""

import logging
from functools import lru_cache
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from rich.logging import RichHandler

from outfit_planner.schemas import ActivityType


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Optional environment variables:
        - OUTFIT_LOG_LEVEL: Logging level (default: INFO)
        - OUTFIT_TRACE_DIR: Directory for saved recommendation traces
        - OUTFIT_DEFAULT_ACTIVITY: Activity used when none is given
        - OUTFIT_DEFAULT_DURATION_MINUTES: Ride duration used when none is given
    """

    model_config = SettingsConfigDict(
        env_prefix="OUTFIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: str = Field(default="INFO", description="Logging level")
    trace_dir: Path = Field(
        default=Path("reasoning_logs"),
        description="Where recommendation traces are saved"
    )
    default_activity: ActivityType = Field(
        default=ActivityType.EASY,
        description="Activity used when the caller gives none"
    )
    default_duration_minutes: int = Field(
        default=90,
        gt=0,
        description="Ride duration used when the caller gives none"
    )

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
            raise ValueError(f"Unknown log level: {v}")
        return level


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def configure_logging(level: str = "INFO") -> None:
    """Route log records through rich, replacing any earlier handlers."""
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
