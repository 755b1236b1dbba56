from __future__ import annotations
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables and .env."""

    PROJECT_NAME: str = "Shiftboard"

    # Database
    DATABASE_URL: str = "sqlite:///./shiftboard.db"
    DB_ECHO: bool = False

    # HTTP
    BACKEND_CORS_ORIGINS: List[str] = []
    REQUEST_TIMEOUT_SECONDS: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = True

    # Scheduling defaults
    DEFAULT_TIMEZONE: str = "UTC"
    DEFAULT_RESPONSE_DEADLINE_HOURS: int = 24

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
