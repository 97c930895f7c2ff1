"""
NoteKeeper Backend - Application Configuration
===============================================

What:  Centralized configuration management using Pydantic Settings.
How:   Pydantic Settings reads from environment variables (or .env file),
       validates types/ranges, and provides a singleton `settings` object.
Who:   Imported by main.py (server, logging, CORS, store wiring).
When:  Loaded once at module import time; validated before app starts.
"""

from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Attributes are grouped by concern for readability.
    """

    # ── Server ────────────────────────────────────────────────────────────
    backend_host: str = Field(default="0.0.0.0")
    backend_port: int = Field(default=5000, ge=1024, le=65535)

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

    # ── CORS ──────────────────────────────────────────────────────────────
    # Comma-separated origins; "*" allows any origin
    cors_origins: str = Field(default="*")

    @property
    def cors_origins_list(self) -> List[str]:
        """Splits comma-separated CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]

    # ── Notes ─────────────────────────────────────────────────────────────
    # True:  GET /notes/{id} answers 404 for an unknown id
    # False: it answers 200 with a null body
    strict_not_found: bool = Field(default=True)

    # "exact": case-insensitive equality; "pattern": case-insensitive regex
    search_mode: str = Field(default="exact")

    @field_validator("search_mode")
    @classmethod
    def validate_search_mode(cls, v: str) -> str:
        valid_modes = {"exact", "pattern"}
        lower = v.lower()
        if lower not in valid_modes:
            raise ValueError(f"Invalid search_mode '{v}'. Must be one of: {valid_modes}")
        return lower

    # Load the three sample notes into an empty store at startup
    seed_sample_notes: bool = Field(default=False)

    # ── Pydantic Settings Config ──────────────────────────────────────────
    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
    }


# Singleton instance imported throughout the application
settings = Settings()
