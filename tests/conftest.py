from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure project root is importable as a module path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from core.models import Base
from core.settings import PortalSettings, reset_settings_cache

_ENV_VARS = (
    "APP_ENV",
    "DATABASE_URL",
    "DEFAULT_CONNECTION",
    "DB_MIGRATE_ON_STARTUP",
    "DB_SEED_ON_STARTUP",
    "SEED_ADMIN_EMAIL",
    "SEED_ADMIN_PASSWORD",
    "FORCE_HTTPS",
    "SECRET_KEY",
    "JSON_LOGS",
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


def make_settings(**overrides) -> PortalSettings:
    values = {"APP_ENV": "testing", "SECRET_KEY": "test-secret"}
    values.update(overrides)
    return PortalSettings(_env_file=None, **values)


def memory_engine():
    return create_engine(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
        future=True,
    )


@pytest.fixture()
def settings() -> PortalSettings:
    return make_settings()


@pytest.fixture()
def engine():
    engine = memory_engine()
    yield engine
    engine.dispose()


@pytest.fixture()
def session(engine):
    """Provide an in-memory SQLite session with the ORM schema created."""
    Base.metadata.create_all(engine)
    SessionLocal = sessionmaker(bind=engine, future=True)
    with SessionLocal() as session:
        yield session


@pytest.fixture()
def services(settings, engine):
    from core.bootstrap import build_services

    built = build_services(settings, engine=engine)
    yield built
    built.close()


@pytest.fixture()
def make_client():
    """Factory returning a started TestClient for the given settings overrides."""
    from app.main import create_app
    from core.bootstrap import build_services

    opened = []

    def _make(**overrides) -> TestClient:
        built = build_services(make_settings(**overrides), engine=memory_engine())
        client = TestClient(create_app(services=built), raise_server_exceptions=False)
        client.__enter__()
        opened.append((client, built))
        return client

    yield _make
    for client, built in opened:
        client.__exit__(None, None, None)
        built.close()


@pytest.fixture()
def client(make_client) -> TestClient:
    return make_client()


@pytest.fixture()
def make_settings_env():
    """Build settings from explicit overrides (env file disabled)."""
    return make_settings
