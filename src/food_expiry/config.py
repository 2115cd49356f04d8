"""Application configuration."""

import os
from datetime import date, datetime
from typing import Literal
from zoneinfo import ZoneInfo

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    storage_backend: Literal["file", "supabase"] = "file"
    state_file: str = "food_expiry_state.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    supabase_table: str = "app_state"
    emailjs_base_url: str = "https://api.emailjs.com"
    emailjs_service_id: str = "service_llp2u38"
    emailjs_template_id: str = "template_6l7hw3i"
    emailjs_public_key: str | None = None
    emailjs_private_key: str | None = None
    reminder_interval_seconds: int = 86400
    reminder_threshold_days: int = 2
    warning_threshold_days: int = 3
    timezone: str | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def today_in_timezone(timezone_name: str | None) -> date:
    """Return the current calendar date, in the given timezone if set."""
    if not timezone_name:
        return date.today()
    return datetime.now(tz=ZoneInfo(timezone_name)).date()
