"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - Core functions never read settings; services pass values in as arguments
    - get_settings() is cached (lru_cache): single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults mirror the domain defaults so a bare environment behaves sensibly
"""

from datetime import timedelta
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from QTRACK_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="QTRACK_", env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Trash
    trash_retention_days: int = 30

    # Verification
    verification_code_ttl_minutes: int = 10

    # Reminder defaults for new members
    default_imminent_hours: int = 3
    default_overdue_interval_hours: int = 24

    # Queues
    default_queue_max_tasks: int = 50

    # Optimistic concurrency
    conflict_retry_attempts: int = 3

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @field_validator(
        "trash_retention_days", "verification_code_ttl_minutes",
        "default_queue_max_tasks", "conflict_retry_attempts",
    )
    @classmethod
    def must_be_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("must be > 0")
        return v

    @field_validator("default_imminent_hours")
    @classmethod
    def imminent_within_week(cls, v: int) -> int:
        if not 0 <= v <= 168:
            raise ValueError("must be between 0 and 168")
        return v

    @field_validator("default_overdue_interval_hours")
    @classmethod
    def overdue_not_negative(cls, v: int) -> int:
        if v < 0:
            raise ValueError("must be >= 0")
        return v

    @property
    def trash_retention(self) -> timedelta:
        return timedelta(days=self.trash_retention_days)

    @property
    def verification_code_ttl(self) -> timedelta:
        return timedelta(minutes=self.verification_code_ttl_minutes)


@lru_cache
def get_settings() -> Settings:
    return Settings()
