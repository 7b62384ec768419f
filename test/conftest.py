"""
Test Configuration and Fixtures

This module provides:
- A file-based SQLite database (aiosqlite) shared by the app and the tests
- Table cleanup between integration tests
- The FastAPI TestClient and auth cookie helpers

Architecture:
- Unit tests (test/**/unit/): mocked collaborators, no database
- Integration tests: real SQLAlchemy engine against the SQLite test database
"""

# =============================================================================
# CRITICAL: Environment setup MUST happen before any other imports
# settings and the loguru sinks read these at import time
# =============================================================================
import os
from pathlib import Path


TEST_DIR = Path(__file__).parent
TEST_DB_PATH = TEST_DIR / 'cinema_test.db'


def _early_setup_test_environment() -> None:
    """Set test environment variables before any module imports."""
    test_log_dir = TEST_DIR / 'test_log'
    test_log_dir.mkdir(exist_ok=True)
    os.environ['TEST_LOG_DIR'] = str(test_log_dir)

    os.environ['DATABASE_URL'] = f'sqlite+aiosqlite:///{TEST_DB_PATH}'
    os.environ['SECRET_KEY'] = 'test_secret_key'
    os.environ['SERVICE_NAME'] = 'cinema-reservation-test'


# Call immediately to set env vars before any imports
_early_setup_test_environment()

from collections.abc import Callable, Generator  # noqa: E402
from typing import Any  # noqa: E402

from fastapi.testclient import TestClient  # noqa: E402
import jwt  # noqa: E402
import pytest  # noqa: E402
from sqlalchemy import Engine, create_engine  # noqa: E402

from src.platform.config.core_setting import settings  # noqa: E402
from src.platform.database.orm_db_setting import Base  # noqa: E402
import src.service.cinema.driven_adapter.model  # noqa: E402, F401
from src.service.cinema.driving_adapter.http_controller.auth.jwt_auth import (  # noqa: E402
    AUTH_COOKIE_NAME,
)


TEST_USER_ID = 1
TEST_USER_NAME = 'Alice'
TEST_USER_EMAIL = 'alice@example.com'

ANOTHER_USER_ID = 2
ANOTHER_USER_NAME = 'Bob'
ANOTHER_USER_EMAIL = 'bob@example.com'


# =============================================================================
# Database Setup and Cleanup
# =============================================================================
_sync_engine: Engine | None = None


def get_sync_engine() -> Engine:
    """
    Plain sqlite3 engine for schema setup, cleanup and seeding outside any event loop.
    The schema is recreated from the ORM models once per test session.
    """
    global _sync_engine
    if _sync_engine is None:
        TEST_DB_PATH.unlink(missing_ok=True)
        _sync_engine = create_engine(f'sqlite:///{TEST_DB_PATH}')
        Base.metadata.create_all(_sync_engine)
    return _sync_engine


def pytest_sessionfinish(session: pytest.Session, exitstatus: int) -> None:
    if _sync_engine is not None:
        _sync_engine.dispose()


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        markers = [m.name for m in item.iter_markers()]
        if 'unit' not in markers:
            item.fixturenames.insert(0, 'clean_database')


def _clean_all_tables() -> None:
    with get_sync_engine().begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            conn.execute(table.delete())


@pytest.fixture
def sync_engine() -> Engine:
    return get_sync_engine()


@pytest.fixture(scope='function')
def clean_database() -> Generator[None, None, None]:
    _clean_all_tables()
    yield
    _clean_all_tables()


# =============================================================================
# HTTP Client and Auth
# =============================================================================
def create_auth_token(*, user_id: int, name: str, email: str) -> str:
    """Token in the shape the identity provider issues"""
    payload = {'user_id': user_id, 'name': name, 'email': email}
    return jwt.encode(payload, settings.SECRET_KEY.get_secret_value(), algorithm=settings.ALGORITHM)


@pytest.fixture(scope='session')
def client() -> Generator[TestClient, None, None]:
    from src.main import app

    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clear_client_cookies(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    # Only HTTP tests request the client
    if 'client' not in request.fixturenames:
        yield
        return
    client = request.getfixturevalue('client')
    client.cookies.clear()
    yield
    client.cookies.clear()


@pytest.fixture
def login_as(client: TestClient) -> Callable[..., dict[str, Any]]:
    def _login(*, user_id: int, name: str, email: str) -> dict[str, Any]:
        client.cookies.set(
            AUTH_COOKIE_NAME, create_auth_token(user_id=user_id, name=name, email=email)
        )
        return {'id': user_id, 'name': name, 'email': email}

    return _login


@pytest.fixture
def test_user() -> dict[str, Any]:
    return {'id': TEST_USER_ID, 'name': TEST_USER_NAME, 'email': TEST_USER_EMAIL}


@pytest.fixture
def another_user() -> dict[str, Any]:
    return {'id': ANOTHER_USER_ID, 'name': ANOTHER_USER_NAME, 'email': ANOTHER_USER_EMAIL}
