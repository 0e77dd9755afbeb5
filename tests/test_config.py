"""Tests for environment-driven settings."""

import os

import pytest

from contactdesk.config import DEFAULT_DATABASE_URL, Settings, load_settings

ENV_VARS = [
    "DATABASE_URL",
    "APP_ENV",
    "HOST",
    "PORT",
    "CORS_ORIGINS",
    "RATE_LIMIT_MAX",
    "RATE_LIMIT_WINDOW_SECONDS",
    "STATIC_DIR",
    "FRONTEND_URL",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a developer's .env out of the picture
    monkeypatch.chdir(tmp_path)
    return monkeypatch


class TestLoadSettings:
    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings.database_url == DEFAULT_DATABASE_URL
        assert settings.port == 3000
        assert settings.cors_origins == ["*"]
        assert settings.rate_limit_max == 100
        assert settings.rate_limit_window_seconds == 900
        assert settings.is_development

    def test_reads_environment(self, clean_env):
        clean_env.setenv("DATABASE_URL", "postgresql://localhost/contactdesk")
        clean_env.setenv("APP_ENV", "production")
        clean_env.setenv("PORT", "8000")
        clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")
        clean_env.setenv("RATE_LIMIT_MAX", "5")

        settings = load_settings()

        assert settings.database_url == "postgresql://localhost/contactdesk"
        assert settings.is_production
        assert not settings.is_development
        assert settings.port == 8000
        assert settings.cors_origins == ["http://a.test", "http://b.test"]
        assert settings.rate_limit_max == 5

    def test_dotenv_file(self, clean_env, tmp_path):
        (tmp_path / ".env").write_text("FRONTEND_URL=http://localhost:5173\n")

        try:
            settings = load_settings()
        finally:
            # load_dotenv writes to os.environ directly
            os.environ.pop("FRONTEND_URL", None)

        assert settings.frontend_url == "http://localhost:5173"


def test_settings_defaults():
    settings = Settings()
    assert settings.static_dir == "dist"
    assert settings.frontend_url == "http://localhost:3001"
