"""
Contact API — Test Configuration (conftest.py)
================================================

What:  Shared pytest fixtures for the entire test suite.
Why:   Provides reusable test infrastructure (mocked DB, temp photo directory,
       API client against an in-memory database).
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixture Hierarchy:
    Function-scoped (created fresh for each test):
    ├── mock_db_session: Mock database session (no real DB needed)
    ├── photo_dir: Temporary photo directory
    ├── photo_store: PhotoStore rooted in photo_dir
    ├── sample_png_bytes / sample_jpeg_bytes: Fake image content
    └── test_client: HTTPX AsyncClient wired to in-memory SQLite + photo_dir
"""

import os
import shutil
import tempfile
from unittest.mock import AsyncMock, MagicMock

# Removed again in pytest_sessionfinish
TEST_PHOTO_ROOT = tempfile.mkdtemp(prefix="contact_api_test_")

# Override settings BEFORE any contact_api import creates the settings singleton
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["PHOTO_DIRECTORY"] = TEST_PHOTO_ROOT
os.environ["PUBLIC_BASE_URL"] = ""
os.environ["LOG_LEVEL"] = "WARNING"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from contact_api.database import Base, get_db_session  # noqa: E402
from contact_api.models.contact import Contact  # noqa: E402,F401
from contact_api.services.photo_store import PhotoStore, get_photo_store  # noqa: E402


def pytest_sessionfinish(session, exitstatus):
    shutil.rmtree(TEST_PHOTO_ROOT, ignore_errors=True)


# ══════════════════════════════════════════════════════════════════════════
# Function-Scoped Fixtures
# ══════════════════════════════════════════════════════════════════════════

@pytest.fixture
def mock_db_session():
    """
    Provides a mock async database session.

    Usage:
        mock_db_session.execute.return_value.scalar_one_or_none.return_value = contact
        result = await service.get_contact(mock_db_session, contact_id)
    """
    session = AsyncMock()
    session.execute = AsyncMock()
    session.flush = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.delete = AsyncMock()
    session.add = MagicMock()
    return session


@pytest.fixture
def photo_dir(tmp_path):
    """A photo directory path that does not exist yet (store() must create it)."""
    return tmp_path / "photos" / "contacts"


@pytest.fixture
def photo_store(photo_dir):
    return PhotoStore(str(photo_dir))


@pytest.fixture
def sample_png_bytes():
    """PNG signature + IHDR chunk header. Not a decodable image; bytes only."""
    return b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01"


@pytest.fixture
def sample_jpeg_bytes():
    """Minimal JPEG: SOI marker + JFIF header + EOI marker."""
    return (
        b'\xff\xd8\xff\xe0\x00\x10JFIF\x00\x01\x01\x00\x00\x01\x00\x01\x00\x00'
        b'\xff\xd9'
    )


@pytest.fixture
def sample_contact_data():
    return {
        "name": "Ann Example",
        "email": "ann@example.com",
        "title": "Engineer",
        "phone": "+1 555 0100",
        "address": "1 Main St",
        "status": "Active",
    }


@pytest_asyncio.fixture
async def test_client(photo_dir):
    """
    Async HTTP client talking to the FastAPI app in-process.

    The database is a fresh in-memory SQLite per test (StaticPool keeps the
    single connection alive across sessions), and photos go to photo_dir.
    Both are swapped in through FastAPI dependency overrides.
    """
    from contact_api.main import app

    engine = create_async_engine("sqlite+aiosqlite://", poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)

    async def override_db_session():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    store = PhotoStore(str(photo_dir))
    app.dependency_overrides[get_db_session] = override_db_session
    app.dependency_overrides[get_photo_store] = lambda: store

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()
    await engine.dispose()
