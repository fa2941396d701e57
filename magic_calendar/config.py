"""Centralized configuration loaded from environment variables."""

from __future__ import annotations

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from magic_calendar.modules.calendar.models import MAX_MEETINGS_PER_DAY


class Settings(BaseSettings):
    """Application-wide settings sourced from .env / environment."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ── General ──────────────────────────────────────────────────────
    magic_calendar_env: str = "development"
    magic_calendar_log_level: str = "INFO"

    # ── Scheduling rules ─────────────────────────────────────────────
    # Can only be tightened; the daily cap never exceeds five.
    magic_calendar_max_meetings: int = Field(default=MAX_MEETINGS_PER_DAY, ge=1, le=MAX_MEETINGS_PER_DAY)

    @field_validator("magic_calendar_log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        return value.strip().upper()

    @property
    def is_production(self) -> bool:
        """True when running with production logging."""
        return self.magic_calendar_env.lower() == "production"


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Return the singleton Settings instance."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings
