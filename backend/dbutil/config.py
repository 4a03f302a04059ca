"""
Configuration Utility - Environment Variables Management

Centralized configuration loading from .env files using pydantic-settings.
Type-safe access to all environment variables with validation.

Usage:
    from dbutil.config import settings

    encoding = settings.TEXT_ENCODING
    retries = settings.QUERY_MAX_RETRIES
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database Configuration
    SQLITE_PATH: str = Field(default="/app/data/db/app.db")

    # Row Projection
    TEXT_ENCODING: str = Field(default="utf-8")
    TEXT_DECODE_ERRORS: str = Field(default="replace")
    FETCH_BATCH_SIZE: int = Field(default=0, ge=0)  # 0 = cursor.arraysize
    QUERY_MAX_RETRIES: int = Field(default=3, ge=1)

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FORMAT: str = Field(default="json")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance.

    Returns:
        Singleton Settings instance
    """
    return Settings()


# Global settings instance
settings = get_settings()
