# =============================================================================
# app/config.py - Application Settings
# =============================================================================
# This module loads configuration from environment variables using pydantic-settings.
# It provides a single Settings class with all configuration values.
#
# Usage:
#   from app.config import settings
#   print(settings.MONGODB_DATABASE)
#
# Environment variables are loaded from:
# 1. System environment variables
# 2. .env file in project root (if exists)
#
# Nothing here is required at startup: a missing MONGODB_URI only fails the
# requests that need the database, so /health can still report it.
# =============================================================================

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings are accessed via the global `settings` instance.
    """

    # -------------------------------------------------------------------------
    # MongoDB Configuration
    # -------------------------------------------------------------------------

    MONGODB_URI: str | None = Field(
        default=None,
        description="MongoDB connection string (mongodb:// or mongodb+srv://)"
    )

    MONGODB_DATABASE: str = Field(
        default="portfolio",
        description="Database holding the portfolio collections"
    )

    MONGODB_CONNECT_TIMEOUT_MS: int = Field(
        default=5000,
        ge=100,
        description="Handshake and server selection timeout in milliseconds"
    )

    MONGODB_PING_TIMEOUT_SECONDS: float = Field(
        default=2.0,
        gt=0,
        description="Upper bound for the liveness ping"
    )

    MONGODB_MAX_POOL_SIZE: int = Field(
        default=10,
        ge=1,
        le=200,
        description="Maximum connections kept by the driver pool"
    )

    MONGODB_DIRECT_CONNECTION: bool = Field(
        default=False,
        description="In development, rewrite mongodb+srv:// URIs to a direct single-host URI"
    )

    DB_QUERY_TIMEOUT_SECONDS: float = Field(
        default=5.0,
        gt=0,
        description="Upper bound for every database query"
    )

    # -------------------------------------------------------------------------
    # SMTP Configuration (contact form)
    # -------------------------------------------------------------------------

    SMTP_HOST: str = Field(default="smtp.gmail.com")
    SMTP_PORT: int = Field(default=587, ge=1, le=65535)
    SMTP_USER: str | None = Field(default=None)
    SMTP_PASS: str | None = Field(default=None)

    SMTP_FROM: str | None = Field(
        default=None,
        description="Sender address (falls back to SMTP_USER)"
    )

    SMTP_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)

    CONTACT_RECIPIENT: str = Field(
        default="hi@sumit.codes",
        description="Where contact form submissions are delivered"
    )

    # -------------------------------------------------------------------------
    # Upstream App Store lookup
    # -------------------------------------------------------------------------

    APP_STORE_LOOKUP_URL: str = Field(default="https://itunes.apple.com/lookup")
    APP_STORE_COUNTRY: str = Field(default="us")

    UPSTREAM_TIMEOUT_SECONDS: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for outbound calls to third-party APIs"
    )

    # -------------------------------------------------------------------------
    # Application Settings
    # -------------------------------------------------------------------------

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Current environment"
    )

    DEBUG: bool = Field(
        default=False,
        description="Enable debug mode (verbose logging)"
    )

    API_HOST: str = Field(
        default="0.0.0.0",
        description="Host to bind the API server to"
    )

    API_PORT: int = Field(
        default=8000,
        ge=1,
        le=65535,
        description="Port for the API server"
    )

    API_PREFIX: str = Field(
        default="/api",
        description="URL prefix for the feature routers"
    )

    # -------------------------------------------------------------------------
    # Security
    # -------------------------------------------------------------------------

    # CORS origins (comma-separated string that gets parsed)
    CORS_ORIGINS: str = Field(
        default="https://sumit.codes,http://localhost:3000,http://127.0.0.1:3000",
        description="Allowed CORS origins (comma-separated)"
    )

    RATE_LIMIT_IP_HEADER: str = Field(
        default="CF-Connecting-IP",
        description="Header set by the trusted proxy with the real client address"
    )

    RATE_LIMIT_MAX_KEYS: int = Field(
        default=10000,
        ge=1,
        description="Maximum tracked (client, category) pairs before sweeping"
    )

    # -------------------------------------------------------------------------
    # Pydantic Settings Configuration
    # -------------------------------------------------------------------------

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_ignore_empty=True,
        case_sensitive=True,
        extra="ignore",
    )

    # -------------------------------------------------------------------------
    # Computed Properties
    # -------------------------------------------------------------------------

    @property
    def cors_origins_list(self) -> list[str]:
        """
        Parse CORS_ORIGINS string into a list.

        Example: "https://sumit.codes, http://localhost:3000" -> ["https://sumit.codes", "http://localhost:3000"]
        """
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def is_development(self) -> bool:
        """Check if running in development mode."""
        return self.ENVIRONMENT == "development"


@lru_cache
def get_settings() -> Settings:
    """
    Get cached Settings instance.

    Using lru_cache ensures we only parse .env and validate once,
    not on every access.

    Returns:
        Settings: The application settings instance
    """
    return Settings()


# Global settings instance for easy importing
# Usage: from app.config import settings
settings = get_settings()
