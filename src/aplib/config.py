"""
aplib configuration and logging setup.

Settings are loaded from environment variables prefixed with APLIB_:
- APLIB_RANDOM_SEED: Seed for the shared tie-break random source (unset = entropy)
- APLIB_DEFAULT_EPSILON: Distance below which a heuristic goal counts as achieved
- APLIB_MAX_CYCLES: Default cycle bound for BdiAgent.run()
- APLIB_LOG_LEVEL: Level applied by configure_logging()
- APLIB_LOG_FORMAT: Format applied by configure_logging()

Library modules only create loggers; configure_logging() is meant to be
called once by the program embedding the agents.
"""

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG", "NOTSET"}


class Settings(BaseSettings):
    """Runtime configuration for the tactic and goal engines."""

    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for the shared tie-break random source (None = OS entropy)",
    )
    default_epsilon: float = Field(
        default=0.005,
        gt=0.0,
        description="Heuristic distance below which a goal is considered achieved",
    )
    max_cycles: int = Field(
        default=1000,
        ge=1,
        description="Default upper bound on cycles for BdiAgent.run()",
    )
    log_level: str = Field(
        default="WARNING",
        description="Logging level name applied by configure_logging()",
    )
    log_format: str = Field(
        default=DEFAULT_LOG_FORMAT,
        description="Logging format applied by configure_logging()",
    )

    model_config = SettingsConfigDict(
        env_prefix="APLIB_",
        extra="ignore",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value: Optional[str]) -> str:
        """Accept level names case-insensitively."""
        if value is None:
            return "WARNING"
        level = str(value).strip().upper()
        if level not in _LOG_LEVELS:
            raise ValueError(
                f"APLIB_LOG_LEVEL must be one of {sorted(_LOG_LEVELS)}, got: {value!r}"
            )
        return level


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Load and cache settings from the environment."""
    return Settings()


def configure_logging(settings: Optional[Settings] = None) -> None:
    """Apply level and format from settings to the root logger."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=getattr(logging, settings.log_level),
        format=settings.log_format,
    )


__all__ = [
    "DEFAULT_LOG_FORMAT",
    "Settings",
    "get_settings",
    "configure_logging",
]
