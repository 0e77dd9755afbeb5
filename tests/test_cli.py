"""Tests for the command line entry point."""

import pytest
from sqlalchemy import func, select

from contactdesk.cli import build_parser, main
from contactdesk.db.schema import Contact, Task
from contactdesk.db.session import get_session


@pytest.fixture
def database_url(tmp_path, monkeypatch):
    url = f"sqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("DATABASE_URL", url)
    return url


class TestParser:
    def test_serve_options(self):
        args = build_parser().parse_args(["serve", "--port", "8080", "--reload"])

        assert args.command == "serve"
        assert args.port == 8080
        assert args.reload is True
        assert args.host is None

    def test_command_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])


class TestCommands:
    def test_migrate_creates_tables(self, database_url, tmp_path):
        assert main(["migrate"]) == 0
        assert (tmp_path / "cli.db").exists()

        session = get_session(database_url)
        try:
            assert session.scalar(select(func.count()).select_from(Contact)) == 0
        finally:
            session.close()

    def test_seed_prints_summary(self, database_url, capsys):
        assert main(["seed"]) == 0

        out = capsys.readouterr().out
        assert "4 contacts created" in out
        assert "7 tasks created" in out

        session = get_session(database_url)
        try:
            assert session.scalar(select(func.count()).select_from(Task)) == 7
        finally:
            session.close()

    def test_serve_runs_uvicorn(self, database_url, monkeypatch):
        calls = {}

        def fake_run(app, **kwargs):
            calls["app"] = app
            calls.update(kwargs)

        monkeypatch.setattr("uvicorn.run", fake_run)

        assert main(["serve", "--port", "4000"]) == 0
        assert calls["app"] == "contactdesk.api.app:create_app"
        assert calls["factory"] is True
        assert calls["port"] == 4000
