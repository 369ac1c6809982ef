"""Application configuration module.

This module contains settings for the URL shortener application,
loaded from environment variables with appropriate defaults.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Any, List, Optional, Union

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger(__name__)

# Base directory of the project
BASE_DIR = Path(__file__).resolve().parent.parent.parent


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment setting
    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Shortener"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Maps long URLs to short codes and back"

    # Server
    HOST: str = "127.0.0.1"
    PORT: int = 4567
    DEBUG: bool = False

    # API Configuration
    BASE_URL: Optional[str] = None  # Falls back to the request base URL
    API_PREFIX: str = "/api"

    # CORS settings
    CORS_ORIGINS: Union[List[str], str] = ["*"]

    # Short code generation
    SHORT_CODE_SECURE_RANDOM: bool = False  # Use secrets.SystemRandom for generated codes

    # Database settings
    DATABASE_URL: str = "sqlite+aiosqlite:///./urls.db"
    DB_ECHO: bool = False
    DB_BUSY_TIMEOUT: float = 15.0  # Seconds a SQLite writer waits for the lock
    DB_POOL_SIZE: int = 20
    DB_POOL_MAX_OVERFLOW: int = 10
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 300

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = True
    REQUEST_LOGGING_ENABLED: bool = True

    # Validators
    @field_validator("BASE_URL", mode="before")
    def validate_base_url(cls, v: Any) -> Optional[str]:
        """Treat an empty BASE_URL as unset and drop any trailing slash."""
        if v is None or v == "":
            return None
        return str(v).rstrip("/")

    @field_validator("CORS_ORIGINS", mode="before")
    def validate_cors_origins(cls, v: Any) -> List[str]:
        """Accept a comma-separated string as well as a list."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(",") if item.strip()]
        return v


# Create a singleton instance of the settings
settings = Settings()
