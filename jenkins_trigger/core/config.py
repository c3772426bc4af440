"""
Application configuration using pydantic-settings.
All environment variables are validated and typed.
"""

import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment variables."""

    # Required connection details
    jenkins_url: str
    jenkins_user: str
    jenkins_token: str

    # Transport
    connect_timeout: float = 3.0

    # Queue polling; no bound unless one of the limits is set
    poll_interval: float = 3.0
    poll_max_attempts: int | None = None
    poll_timeout: float | None = None

    log_level: str = "INFO"

    @field_validator("jenkins_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        cleaned = value.strip().rstrip("/")
        if not cleaned:
            raise ValueError("JENKINS_URL must not be empty")
        return cleaned

    @field_validator("connect_timeout", "poll_interval")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("poll_timeout")
    @classmethod
    def _positive_or_none(cls, value: float | None) -> float | None:
        if value is not None and value <= 0:
            raise ValueError("must be positive")
        return value

    @field_validator("poll_max_attempts")
    @classmethod
    def _at_least_one(cls, value: int | None) -> int | None:
        if value is not None and value < 1:
            raise ValueError("must be at least 1")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.strip().upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level

    model_config = {
        # Relative to the working directory
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
