"""
Configuration management for the trainer.

Uses Pydantic Settings so credentials and paths come from the environment
(``HISSAN_`` prefix) or a ``.env`` file. The CLI reads them once and hands
the values to the collaborators it constructs.
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="HISSAN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Gemini (hints fall back to static text when empty)
    gemini_api_key: str = ""
    hint_model: str = "gemini-2.5-flash"

    # Score ledger save file
    ledger_path: str = "hissan_save.json"

    # Logging
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.strip().upper()
        if level not in LOG_LEVELS:
            allowed = ", ".join(LOG_LEVELS)
            raise ValueError(f"log_level must be one of {allowed}, got {value!r}")
        return level


@lru_cache
def get_settings() -> Settings:
    return Settings()
