"""Pytest configuration and shared fixtures."""

import os
import tempfile
from pathlib import Path
from typing import Generator

# The application reads its configuration on first import, so the test
# environment has to be in place before any bookstore module is loaded.
_TEST_DIR = Path(tempfile.mkdtemp(prefix="bookstore-tests-"))
_TEST_DB_URL = f"sqlite:///{_TEST_DIR / 'bookstore_test.db'}"
_STATIC_DIR = _TEST_DIR / "static"
(_STATIC_DIR / "css").mkdir(parents=True)
(_STATIC_DIR / "css" / "app.css").write_text("body { margin: 0; }\n", encoding="utf-8")

os.environ.update(
    {
        "TESTING": "1",
        "BOOKSTORE_DATABASE_URL": _TEST_DB_URL,
        "BOOKSTORE_JWT_SECRET_KEY": "Tq8v2LmZ4rXw9NcJ7bHs3KdPf6GyE1aUo5iV0tRnQzW",
        "BOOKSTORE_WEB_DIR": str(_STATIC_DIR),
        "BOOKSTORE_LOG_TO_FILE": "0",
        "BOOKSTORE_DEBUG": "0",
    }
)

import pytest  # noqa: E402
from alembic import command  # noqa: E402
from alembic.config import Config  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine, text  # noqa: E402
from sqlalchemy.orm import sessionmaker  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests without the HTTP application")
    config.addinivalue_line("markers", "integration: tests against the migrated database")


def _project_root() -> Path:
    """Return the repository root path."""
    return Path(__file__).resolve().parents[1]


def _run_alembic_migrations(db_url: str):
    """Run Alembic migrations programmatically for test database."""
    alembic_cfg = Config()
    alembic_cfg.set_main_option("script_location", str(_project_root() / "alembic"))
    alembic_cfg.set_main_option("sqlalchemy.url", db_url)
    command.upgrade(alembic_cfg, "head")


@pytest.fixture(scope="session")
def setup_test_env():
    """Migrate the test database once per session."""
    _run_alembic_migrations(_TEST_DB_URL)
    yield _TEST_DB_URL


@pytest.fixture
def test_db(setup_test_env):
    """Create a test database session factory on an emptied account table."""
    engine = create_engine(
        setup_test_env,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    with engine.begin() as conn:
        conn.execute(text("DELETE FROM account"))

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    yield TestingSessionLocal

    engine.dispose()


@pytest.fixture
def db_session(test_db):
    """Create a database session for direct repository access."""
    session = test_db()

    yield session

    session.close()


@pytest.fixture
def client(test_db) -> Generator[TestClient, None, None]:
    """Create a test client with database dependency override."""
    from bookstore.main import app
    from bookstore.db.database import get_db

    def override_get_db():
        # Use a fresh session per request in tests
        db = test_db()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    # Clear overrides to avoid affecting other tests
    app.dependency_overrides.clear()


@pytest.fixture
def account_data():
    """Registration payload for a fresh account."""
    return {
        "username": "icyfenix",
        "password": "MFfTW3uNI4eqhwDkG7HP9p2mzEUu/r2",
        "name": "Zhou Zhiming",
        "avatar": "https://www.gravatar.com/avatar/1563e833e42fb64b41eed34c9b66d723",
        "telephone": "18888888888",
        "email": "icyfenix@gmail.com",
        "location": "Tang Dynasty, Guangzhou",
    }


@pytest.fixture
def registered_account(client, account_data):
    """Register ``account_data`` and return its stored representation."""
    response = client.post("/restful/accounts", json=account_data)
    assert response.status_code == 201, response.text
    return client.get(f"/restful/accounts/{account_data['username']}").json()


@pytest.fixture
def auth_headers(client, account_data, registered_account):
    """Bearer headers for the registered account."""
    response = client.post(
        "/api/auth/login",
        json={"username": account_data["username"], "password": account_data["password"]},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['access_token']}"}
