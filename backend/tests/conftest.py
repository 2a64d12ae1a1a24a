"""
Shop API Backend: Test Configuration (conftest.py)
===================================================

What:  Shared pytest fixtures for the entire test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_database: Stand-in for the shared Database (no real DB needed)
    ├── temp_storage: Temporary directory for upload tests
    ├── sample_image_bytes: Fake image content for upload tests
    └── test_client: HTTPX AsyncClient with the database dependency overridden
"""

import os
import tempfile

# Override settings BEFORE any shop_api import: the settings singleton and
# the upload service read them at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["UPLOAD_DIR"] = tempfile.mkdtemp(prefix="shop_api_test_")
os.environ["LOG_LEVEL"] = "WARNING"

from unittest.mock import AsyncMock, MagicMock  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from shop_api.database import Database, get_database  # noqa: E402


@pytest.fixture
def mock_database():
    """
    A Database double whose query methods are AsyncMocks.

    Usage:
        mock_database.execute.return_value = [{"id": 1, "name": "Lamp"}]
        rows = await product_service.list_products(mock_database)
    """
    db = MagicMock(spec=Database)
    db.dialect = "mssql"
    db.is_connected = True
    db.execute = AsyncMock(return_value=[])
    db.call_procedure = AsyncMock(return_value=[])
    db.ping = AsyncMock(return_value=True)
    return db


@pytest.fixture
def temp_storage(tmp_path):
    """A fresh upload directory for each test."""
    storage_dir = tmp_path / "uploads"
    storage_dir.mkdir()
    return str(storage_dir)


@pytest.fixture
def sample_image_bytes():
    """Minimal PNG bytes: signature + IHDR chunk header."""
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"


@pytest_asyncio.fixture
async def test_client(mock_database):
    """
    HTTPX AsyncClient talking to the FastAPI app in-process.

    The lifespan does not run under ASGITransport, so no pool is opened;
    routes get `mock_database` through the dependency override.
    """
    from shop_api.main import app

    app.dependency_overrides[get_database] = lambda: mock_database
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()
