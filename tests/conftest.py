"""Shared pytest fixtures for advocates directory tests."""
import pytest
from unittest.mock import AsyncMock
import asyncpg
from fastapi.testclient import TestClient

from advocates.services.directory.core import Directory


# pytest-asyncio is configured in pyproject.toml to auto-detect async tests


@pytest.fixture
def mock_asyncpg_pool() -> AsyncMock:
    """Mock asyncpg pool."""
    pool = AsyncMock(spec=asyncpg.Pool)
    pool._closed = False
    # Mock pool methods that are called directly (not through connection)
    pool.fetchval = AsyncMock()
    pool.fetch = AsyncMock(return_value=[])
    pool.fetchrow = AsyncMock()
    return pool


@pytest.fixture
def mock_asyncpg_conn(mock_asyncpg_pool: AsyncMock) -> AsyncMock:
    """Mock asyncpg connection returned by ``pool.acquire()``."""
    conn = AsyncMock(spec=asyncpg.Connection)
    mock_asyncpg_pool.acquire.return_value.__aenter__ = AsyncMock(return_value=conn)
    mock_asyncpg_pool.acquire.return_value.__aexit__ = AsyncMock(return_value=None)
    return conn


@pytest.fixture
def directory_with_mocks(mock_asyncpg_pool: AsyncMock) -> Directory:
    """Directory instance wired to a mocked pool."""
    return Directory(pool=mock_asyncpg_pool, api_host="127.0.0.1", api_port=0)


@pytest.fixture
def directory_client(directory_with_mocks: Directory) -> TestClient:
    """HTTP client for the Directory API."""
    return TestClient(directory_with_mocks._api_app)
