# backend/kalasetu/core/config.py
import logging
import os
from pathlib import Path
from typing import Literal

from dotenv import load_dotenv
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    DEFAULT_ADVANCE_BOOKING_DAYS,
    DEFAULT_REGIONAL_UTC_OFFSET_MINUTES,
    SLOT_DURATION_MINUTES,
)

logger = logging.getLogger(__name__)


# Load .env file only if not in CI
if not os.getenv("CI"):
    env_path = Path(__file__).parent.parent.parent / ".env"  # Goes up to backend/.env
    logger.debug(f"[CONFIG] Looking for .env at: {env_path}")
    load_dotenv(env_path)


class Settings(BaseSettings):
    environment: Literal["development", "test", "staging", "production"] = Field(
        default="development",
        description="Deployment environment name",
    )

    database_url: str = Field(
        default="sqlite:///./kalasetu.db",
        description="SQLAlchemy database URL for the read models",
    )
    sql_echo: bool = Field(default=False, description="Echo SQL statements to the log")

    # The whole marketplace runs on a single regional clock. This is a
    # deploy-time constant, never a request parameter.
    regional_utc_offset_minutes: int = Field(
        default=DEFAULT_REGIONAL_UTC_OFFSET_MINUTES,
        description="Fixed UTC offset (minutes) used for all date/time interpretation",
    )

    slot_duration_minutes: int = Field(
        default=SLOT_DURATION_MINUTES,
        gt=0,
        le=24 * 60,
        description="Base duration of one bookable slot",
    )
    default_advance_booking_days: int = Field(
        default=DEFAULT_ADVANCE_BOOKING_DAYS,
        ge=1,
        le=365,
        description="Booking horizon applied when a provider has not configured one",
    )

    log_level: str = Field(default="INFO", description="Root log level")

    model_config = SettingsConfigDict(
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("regional_utc_offset_minutes")
    @classmethod
    def _validate_offset(cls, value: int) -> int:
        # Real-world offsets range from UTC-12:00 to UTC+14:00.
        if not -12 * 60 <= value <= 14 * 60:
            raise ValueError(f"regional_utc_offset_minutes out of range: {value}")
        return value

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, value: str) -> str:
        normalized = (value or "INFO").strip().upper()
        if normalized not in logging.getLevelNamesMapping():
            raise ValueError(f"Unknown log level: {value}")
        return normalized

    def get_database_url(self) -> str:
        """Return the database URL used by the shared engine."""
        return self.database_url


settings = Settings()
