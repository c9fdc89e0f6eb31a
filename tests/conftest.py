"""
Test configuration and fixtures for the shortlink service.
This centralizes all test setup, making individual tests clean.
"""

import pytest
from fastapi.testclient import TestClient

from shortlink_app.app_factory import create_app
from shortlink_app.config import Settings
from shortlink_app.database.connection import build_engine, build_session_factory, init_db
from shortlink_app.ratelimit.strategies import NullRateLimiter
from shortlink_app.services.analytics_service import AnalyticsService
from shortlink_app.services.short_id_strategies import RandomShortIdStrategy
from shortlink_app.services.shortening_service import ShorteningService
from shortlink_app.storage.strategies import InMemoryUrlStore, SQLAlchemyUrlStore

BASE_URL = "http://testserver"


@pytest.fixture(scope="function")
def engine(tmp_path):
    """
    Create a fresh SQLite database file for each test.
    This ensures tests are isolated and don't affect each other.
    """
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(engine)

    yield engine

    engine.dispose()


@pytest.fixture(scope="function")
def session_factory(engine):
    return build_session_factory(engine)


@pytest.fixture(scope="function")
def sql_store(session_factory):
    return SQLAlchemyUrlStore(session_factory)


@pytest.fixture(scope="function")
def memory_store():
    return InMemoryUrlStore()


@pytest.fixture(params=["sql", "memory"])
def store(request):
    """Run a test once against every store backend"""
    return request.getfixturevalue(f"{request.param}_store")


@pytest.fixture
def shortening_service(store):
    return ShorteningService(
        store=store,
        generator=RandomShortIdStrategy(),
        base_url=BASE_URL,
    )


@pytest.fixture
def analytics_service(store):
    return AnalyticsService(store=store)


@pytest.fixture
def test_settings():
    return Settings(
        environment="test",
        base_url=BASE_URL,
        rate_limit_backend="null",
        log_level="WARNING",
    )


@pytest.fixture(scope="function")
def client(test_settings, session_factory):
    """
    Create a test client backed by the per-test database.
    This is the main fixture that API tests will use.
    """
    app = create_app(
        settings=test_settings,
        session_factory=session_factory,
        rate_limiter=NullRateLimiter(),
    )

    with TestClient(app) as test_client:
        yield test_client
