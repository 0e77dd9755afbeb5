"""Runtime configuration for ContactDesk.

Values come from environment variables. A local `.env` file is loaded
first so development setups don't need to export anything.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from dotenv import find_dotenv, load_dotenv

DEFAULT_DATABASE_URL = "sqlite:///data/contactdesk.db"


@dataclass
class Settings:
    """Application settings."""

    database_url: str = DEFAULT_DATABASE_URL
    app_env: str = "development"
    host: str = "127.0.0.1"
    port: int = 3000
    cors_origins: list[str] = field(default_factory=lambda: ["*"])
    rate_limit_max: int = 100
    rate_limit_window_seconds: int = 15 * 60
    static_dir: str = "dist"
    frontend_url: str = "http://localhost:3001"
    log_level: str = "INFO"

    @property
    def is_production(self) -> bool:
        return self.app_env == "production"

    @property
    def is_development(self) -> bool:
        return self.app_env == "development"


def _split_csv(value: str) -> list[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


def load_settings() -> Settings:
    """Build settings from the environment.

    Returns:
        Settings populated from environment variables, falling back to defaults.
    """
    load_dotenv(find_dotenv(usecwd=True))

    return Settings(
        database_url=os.getenv("DATABASE_URL", DEFAULT_DATABASE_URL),
        app_env=os.getenv("APP_ENV", "development"),
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "3000")),
        cors_origins=_split_csv(os.getenv("CORS_ORIGINS", "*")),
        rate_limit_max=int(os.getenv("RATE_LIMIT_MAX", "100")),
        rate_limit_window_seconds=int(os.getenv("RATE_LIMIT_WINDOW_SECONDS", "900")),
        static_dir=os.getenv("STATIC_DIR", "dist"),
        frontend_url=os.getenv("FRONTEND_URL", "http://localhost:3001"),
        log_level=os.getenv("LOG_LEVEL", "INFO"),
    )
