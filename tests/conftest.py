"""Shared pytest fixtures for contactdesk tests."""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session, sessionmaker

from contactdesk.config import Settings
from contactdesk.db.schema import Base
from contactdesk.db.session import create_db_engine


def make_settings(**overrides) -> Settings:
    """Settings for an isolated in-memory app."""
    values = {
        "database_url": "sqlite:///:memory:",
        "app_env": "test",
        "static_dir": "/nonexistent/contactdesk-dist",
        "rate_limit_max": 10_000,
    }
    values.update(overrides)
    return Settings(**values)


def create_test_app_and_client(settings: Settings | None = None, **client_kwargs):
    """Create app with test database and return (client, engine)."""
    from contactdesk.api.app import create_app, get_db_session

    # In-memory database with StaticPool so every session shares it
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)

    app = create_app(settings or make_settings())

    def override_get_db():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_db_session] = override_get_db
    client = TestClient(app, **client_kwargs)

    return client, engine


@pytest.fixture
def engine():
    """Create an in-memory SQLite engine for testing."""
    engine = create_db_engine("sqlite:///:memory:")
    Base.metadata.create_all(engine)
    return engine


@pytest.fixture
def session(engine):
    """Create a database session for testing."""
    Session = sessionmaker(bind=engine)
    session = Session()
    yield session
    session.close()


@pytest.fixture
def api():
    """(client, engine) pair backed by a fresh in-memory database."""
    return create_test_app_and_client()


@pytest.fixture
def client(api):
    return api[0]
