"""
Product API: Application Configuration
========================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or a .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by every module that needs configuration values.
When:  Loaded once at module import time; validated before the app starts.

Recognized environment variables:
    PORT       TCP port to listen on (default 3000)
    HOST       Bind address (default 0.0.0.0)
    API_KEY    Shared secret expected in "Authorization: Bearer <API_KEY>"
    LOG_LEVEL  DEBUG, INFO, WARNING, ERROR or CRITICAL (default INFO)
"""

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have development defaults except API_KEY: with no key
    configured, every request is rejected by the authenticator.
    """

    # ── Security ──────────────────────────────────────────────────────────
    # Compared against the bearer token of every request
    api_key: str = Field(
        default="",
        description="Shared secret for bearer-token authentication",
    )

    # ── Server ────────────────────────────────────────────────────────────
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)

    # Valid: DEBUG, INFO, WARNING, ERROR, CRITICAL
    log_level: str = Field(default="INFO")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Ensures log level is a valid Python logging level name."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        upper = v.upper()
        if upper not in valid_levels:
            raise ValueError(f"Invalid log_level '{v}'. Must be one of: {valid_levels}")
        return upper

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # API_KEY and api_key both work
        "extra": "ignore",
    }

    def validate_required(self) -> None:
        """
        What:  Validates that critical settings are configured.
        When:  Called during app startup (lifespan).
        How:   Checks each required field and raises ValueError with guidance.
        """
        errors = []
        if not self.api_key:
            errors.append(
                "API_KEY is not set. Every request will be rejected with 403 "
                "until a shared secret is configured."
            )
        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton instance: imported throughout the application
settings = Settings()
