# backend/networth/config.py
"""
Application configuration using Pydantic Settings.

Loads configuration from environment variables with validation:
- ENVIRONMENT: Runtime mode (development, test, production)
- DATABASE_URL: Connection string for the update store
- TIMEZONE: Calendar used for "start of today" and month arithmetic

Environment-specific behavior:
- test: Defaults to an in-memory SQLite database
- development / production: Default to a SQLite file next to the working dir

Usage:
    from networth.config import settings

    calendar = PeriodCalendar(settings.timezone)
"""
from pathlib import Path
from typing import Literal
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


# Single .env at the project root (parent of backend/)
_BACKEND_DIR = Path(__file__).resolve().parent.parent
_PROJECT_ROOT = _BACKEND_DIR.parent
_ENV_FILE = _PROJECT_ROOT / ".env"

DEFAULT_DATABASE_URL = "sqlite:///./networth.db"
TEST_DATABASE_URL = "sqlite:///:memory:"


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Environment variables:
        - ENVIRONMENT: Runtime environment (development, test, production)
        - LOG_LEVEL: Logging level (default: "INFO")
        - LOG_FORMAT: "text" or "json" (default: "text")
        - DATABASE_URL: Store connection string
        - DEBUG: Echo SQL statements (default: False)
        - TIMEZONE: IANA timezone for calendar boundaries (default: "UTC")
    """

    environment: Literal["development", "test", "production"] = Field(
        default="development",
        description="Runtime environment (development, test, production)"
    )

    log_level: str = Field(
        default="INFO",
        description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)"
    )
    log_format: Literal["text", "json"] = Field(
        default="text",
        description="Log output format"
    )

    database_url: str | None = Field(
        default=None,
        description="SQLAlchemy connection string for the update store"
    )

    timezone: str = Field(
        default="UTC",
        description="IANA timezone name defining calendar days and months"
    )

    debug: bool = False

    model_config = SettingsConfigDict(
        env_file=str(_ENV_FILE) if _ENV_FILE.exists() else None,
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("timezone")
    @classmethod
    def validate_timezone(cls, value: str) -> str:
        """Reject timezone names the zoneinfo database does not know."""
        try:
            ZoneInfo(value)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise ValueError(f"Unknown timezone: '{value}'") from exc
        return value

    @model_validator(mode="after")
    def apply_database_default(self) -> "Settings":
        """Pick the default store location for the environment."""
        if self.database_url is None:
            default_url = TEST_DATABASE_URL if self.environment == "test" else DEFAULT_DATABASE_URL
            object.__setattr__(self, "database_url", default_url)
        return self

    @property
    def is_sqlite(self) -> bool:
        """Check if using SQLite database."""
        return self.database_url is not None and self.database_url.lower().startswith("sqlite://")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"

    @property
    def is_test(self) -> bool:
        """Check if running in test environment."""
        return self.environment == "test"


# Create single instance
settings = Settings()
