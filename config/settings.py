"""Pydantic Settings — typed configuration with .env auto-loading."""

from __future__ import annotations

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment / .env file."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # ── Service ──────────────────────────────────────────────
    service_port: int = 5001
    cors_origins: list[str] = ["*"]
    debug: bool = False
    log_level: str = "INFO"

    # ── Admin REST backend ───────────────────────────────────
    admin_api_base_url: str = "http://localhost:8080"
    admin_api_prefix: str = "/api"
    admin_api_timeout: int = 15  # seconds

    # ── Dashboard behaviour ──────────────────────────────────
    default_page_size: int = 10
    roster_fetch_limit: int = 1000  # "all students" for pickers
    bulk_message_max_length: int = 500
    csv_strict: bool = False  # reject rows with unparseable numbers on import
    clamp_page_after_delete: bool = True
    export_filename: str = "students.csv"


@lru_cache
def get_settings() -> Settings:
    """Singleton accessor for application settings."""
    return Settings()
