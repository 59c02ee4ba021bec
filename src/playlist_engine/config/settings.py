"""Application Settings and Configuration

Pydantic-based settings management using environment variables.
Settings are loaded from environment variables with support for .env files,
type validation, and sensible defaults. All settings are frozen and immutable
after initialization.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, BaseModel, Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from ..domain.shared.constants import DatabaseURLSchemes, LogLevels
from ..domain.shared.messages import ErrorMessages
from ..domain.shared.types import BusyTimeoutMs, ConnectionTimeoutS, TickIntervalMs


class DatabaseSettings(BaseModel):
    """Database configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    url: str = Field(
        default="sqlite:///data/playlists.db",
        validation_alias=AliasChoices("url", "database_url", "db_url"),
    )
    busy_timeout_ms: BusyTimeoutMs = Field(
        default=5000,
        validation_alias=AliasChoices("busy_timeout_ms", "busy_timeout"),
    )
    connection_timeout_s: ConnectionTimeoutS = Field(
        default=10,
        validation_alias=AliasChoices("connection_timeout_s", "connection_timeout"),
    )

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Only SQLite is supported by the aiosqlite store."""
        if v != DatabaseURLSchemes.MEMORY and not v.startswith(DatabaseURLSchemes.SQLITE):
            raise ValueError(ErrorMessages.INVALID_DATABASE_URL)
        return v


class SchedulerSettings(BaseModel):
    """Advancement scheduler configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    enabled: bool = True
    tick_interval_ms: TickIntervalMs = Field(
        default=500,
        validation_alias=AliasChoices("tick_interval_ms", "interval_ms"),
    )


class VotingSettings(BaseModel):
    """Voting configuration.

    ``allow_repeat_votes`` keeps the historical behaviour of counting every
    vote call. Set it to false to count one vote per user and track.
    """

    model_config = SettingsConfigDict(frozen=True)

    allow_repeat_votes: bool = True


class LimitsSettings(BaseModel):
    """Input limits enforced before a transaction opens."""

    model_config = SettingsConfigDict(frozen=True)

    max_title_length: int = Field(default=300, ge=1, le=2000)
    max_artist_length: int = Field(default=200, ge=1, le=2000)
    max_playlist_name_length: int = Field(default=200, ge=1, le=2000)
    max_description_length: int = Field(default=1000, ge=0, le=10_000)
    allowed_providers: tuple[str, ...] = ("youtube",)

    @field_validator("allowed_providers", mode="before")
    @classmethod
    def normalize_providers(cls, v: tuple[str, ...] | list[str] | str) -> tuple[str, ...]:
        """Accept a JSON list or a comma-separated string; store lowercase."""
        if isinstance(v, str):
            v = [part for part in v.split(",")]
        return tuple(p.strip().lower() for p in v if p and p.strip())


class RealtimeSettings(BaseModel):
    """Realtime fan-out service configuration."""

    model_config = SettingsConfigDict(frozen=True, populate_by_name=True)

    events_url: str | None = Field(
        default=None, validation_alias=AliasChoices("events_url", "url")
    )
    timeout_s: float = Field(default=2.0, gt=0.0, le=30.0)
    max_pending_events: int = Field(default=1000, ge=1, le=100_000)

    @field_validator("events_url")
    @classmethod
    def validate_events_url(cls, v: str | None) -> str | None:
        if v is None or not v.strip():
            return None
        if not v.startswith(("http://", "https://")):
            raise ValueError(ErrorMessages.INVALID_EVENTS_URL)
        return v


class Settings(BaseSettings):
    """Application settings container.

    Automatically loads configuration from environment variables.

    Environment variable naming:
    - ENVIRONMENT, DEBUG, LOG_LEVEL (top-level)
    - DATABASE__URL, DATABASE__BUSY_TIMEOUT_MS
    - SCHEDULER__ENABLED, SCHEDULER__TICK_INTERVAL_MS
    - VOTING__ALLOW_REPEAT_VOTES
    - LIMITS__MAX_TITLE_LENGTH, LIMITS__ALLOWED_PROVIDERS, ...
    - REALTIME__EVENTS_URL, REALTIME__TIMEOUT_S
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    environment: Literal["development", "production", "test"] = "development"
    debug: bool = False
    log_level: str = LogLevels.INFO

    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    scheduler: SchedulerSettings = Field(default_factory=SchedulerSettings)
    voting: VotingSettings = Field(default_factory=VotingSettings)
    limits: LimitsSettings = Field(default_factory=LimitsSettings)
    realtime: RealtimeSettings = Field(default_factory=RealtimeSettings)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        v_upper = v.upper()
        if v_upper not in LogLevels.ALL:
            raise ValueError(
                ErrorMessages.INVALID_LOG_LEVEL.format(
                    level=v, valid_levels=sorted(LogLevels.ALL)
                )
            )
        return v_upper


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Get cached application settings.

    Settings are automatically loaded from:
    1. .env file (if present)
    2. Environment variables
    3. Default values
    """
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for testing)."""
    get_settings.cache_clear()
