"""Shared fixtures: fresh SQLite database per test + ASGI test client.

Invariants:
    - Every test gets its own database file under tmp_path, already migrated
    - The connection pool is reset before and after each test
    - Settings changed through monkeypatch are restored automatically
"""

import pytest
from httpx import ASGITransport, AsyncClient

from social_media_api.app.core import db as db_module
from social_media_api.app.core.config import settings
from social_media_api.app.main import app
from social_media_api.app.schemas.account import AccountCreate
from social_media_api.app.services.account_service import AccountService


@pytest.fixture(autouse=True)
def database(tmp_path, monkeypatch):
    """Point the app at a fresh, migrated database file."""
    monkeypatch.setattr(settings, "database_url", str(tmp_path / "test.db"))
    monkeypatch.setattr(settings, "fail_open_reads", True)
    db_module.reset_pool()
    db_module.init_db()
    yield db_module.get_pool()
    db_module.reset_pool()


@pytest.fixture
async def client():
    """HTTP client bound to the FastAPI app (startup hooks are not run)."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c


@pytest.fixture
async def account():
    """A registered account to post messages from."""
    return await AccountService.create_account(AccountCreate(username="alice", password="secret"))


@pytest.fixture
def drop_table():
    """Return a callable that drops a table so later statements on it fail."""
    def _drop(name: str) -> None:
        with db_module.get_connection() as conn:
            conn.execute(f"DROP TABLE {name}")
    return _drop


@pytest.fixture
def unreachable_database(tmp_path, monkeypatch):
    """Point the pool at a directory, which SQLite cannot use as a database."""
    directory = tmp_path / "not-a-database"
    directory.mkdir()
    monkeypatch.setattr(settings, "database_url", str(directory))
    db_module.reset_pool()
    yield
    db_module.reset_pool()
