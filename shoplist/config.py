"""
Shoplist Backend: Application Configuration
============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py (app factory) and server.py (process runner).
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

PACKAGE_ROOT = Path(__file__).resolve().parent


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All settings have defaults; an empty environment yields a server on
    0.0.0.0:8080 serving the bundled landing page.
    """

    # ── Server ────────────────────────────────────────────────────────────
    # PORT=0 binds an ephemeral port (used by the lifecycle tests)
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080, ge=0, le=65535)

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

    # ── Landing Page ──────────────────────────────────────────────────────
    views_root: str = Field(default=str(PACKAGE_ROOT / "views"))
    static_root: str = Field(default=str(PACKAGE_ROOT / "public"))

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,  # PORT and port both work
        "extra": "ignore",
    }


# Singleton instance, imported throughout the application
settings = Settings()
