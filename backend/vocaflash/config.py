"""Application configuration loaded from environment variables.

Provides type-safe access to configuration with sensible defaults.
Production defaults are restrictive for security.
"""

import logging
import os
from pathlib import Path


def get_cors_origins() -> list[str]:
    """Get allowed CORS origins from environment.

    Environment variable: CORS_ORIGINS (comma-separated)
    Default: localhost ports 3000-3001 for the development front-end
    """
    default_origins = "http://localhost:3000,http://localhost:3001"
    origins_str = os.getenv("CORS_ORIGINS", default_origins)
    return [origin.strip() for origin in origins_str.split(",") if origin.strip()]


def get_cors_allow_credentials() -> bool:
    """Get CORS allow_credentials setting.

    Environment variable: CORS_ALLOW_CREDENTIALS
    Default: false (the API has no cookies or auth)
    """
    return os.getenv("CORS_ALLOW_CREDENTIALS", "false").lower() == "true"


# Restricted HTTP methods - only what the API actually uses
CORS_ALLOWED_METHODS = ["GET", "POST", "PUT", "DELETE", "OPTIONS"]

# Restricted headers - only what's needed for the API
CORS_ALLOWED_HEADERS = [
    "Accept",
    "Accept-Language",
    "Content-Type",
    "X-Requested-With",
]


def is_production() -> bool:
    """Check if running in production environment."""
    return os.getenv("ENVIRONMENT", "development").lower() == "production"


def get_database_path() -> str:
    """Get SQLite database path.

    Environment variable: DATABASE_PATH
    Default: ~/.vocaflash/flashcards.db
    """
    default_path = str(Path.home() / ".vocaflash" / "flashcards.db")
    return os.getenv("DATABASE_PATH", default_path)


def get_api_host() -> str:
    """Get bind host for the REST service.

    Environment variable: API_HOST
    """
    return os.getenv("API_HOST", "127.0.0.1")


def get_api_port() -> int:
    """Get bind port for the REST service.

    Environment variable: PORT
    """
    return int(os.getenv("PORT", "5000"))


def get_api_base_url() -> str:
    """Get base URL the voice client uses to reach the REST service.

    Environment variable: API_BASE_URL
    """
    return os.getenv("API_BASE_URL", "http://localhost:5000/api").rstrip("/")


def get_api_timeout() -> float:
    """Get HTTP timeout in seconds for the voice client."""
    return float(os.getenv("API_TIMEOUT_SECONDS", "5.0"))


def get_log_level() -> int:
    """Get root log level.

    Environment variable: LOG_LEVEL (name, e.g. DEBUG)
    Default: INFO
    """
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    return logging.getLevelNamesMapping().get(level_name, logging.INFO)
