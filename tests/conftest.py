"""Pytest configuration and shared fixtures."""

from collections.abc import AsyncIterator

import logfire
import pytest

from tasklist.core.config import Settings
from tasklist.core.db_client import SQLiteDocumentStore
from tests.tokens import TEST_AUTH_SECRET


@pytest.fixture(scope="session", autouse=True)
def _logfire_local_only() -> None:
    """Keep spans local and quiet during tests."""
    logfire.configure(send_to_logfire=False, console=False)


@pytest.fixture
def test_settings(tmp_path) -> Settings:
    """Settings isolated from the developer's environment and .env file."""
    return Settings(
        _env_file=None,
        database_path=str(tmp_path / "tasklist.db"),
        auth_secret=TEST_AUTH_SECRET,
        frontend_url="http://localhost:3000",
        api_base_url="http://testserver/api/v1",
    )


@pytest.fixture
async def sqlite_store(test_settings: Settings) -> AsyncIterator[SQLiteDocumentStore]:
    """Open a fresh database file per test."""
    async with SQLiteDocumentStore(test_settings.database_path) as store:
        yield store
