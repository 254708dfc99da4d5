"""
Shared fixtures for FAQ generator tests.

Each test function gets its own SQLite database file and upload directory,
so tests never see each other's documents.
"""
from __future__ import annotations

import os
import tempfile
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

# Point settings at throwaway locations *before* any faqgen module is imported.
_TMP_ROOT = tempfile.mkdtemp(prefix="faqgen-tests-")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_TMP_ROOT}/global.db")
os.environ.setdefault("UPLOAD_DIR", os.path.join(_TMP_ROOT, "uploads"))

from faqgen.config import settings  # noqa: E402
from faqgen.database import Base, get_db  # noqa: E402
from faqgen.main import app  # noqa: E402
from faqgen.models import database_models  # noqa: E402,F401


SAMPLE_TEXT = (
    "Acme Cloud is a hosted platform for storing and sharing project files. "
    "Acme Cloud helps teams save time and improve collaboration across offices. "
    "The platform includes version history and provides granular sharing options. "
    "First, create an account on the Acme Cloud website. "
    "Then install the desktop client and sign in with your account. "
    "Finally, invite your teammates to a shared workspace. "
    "You can customize notification settings for every workspace. "
    "An active internet connection is required to synchronize files. "
    "Documentation is available in the help center for every plan."
)


# ---------------------------------------------------------------------------
# Per-test fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def upload_dir(tmp_path, monkeypatch) -> str:
    """Redirect uploads to a per-test directory."""
    path = tmp_path / "uploads"
    path.mkdir()
    monkeypatch.setattr(settings, "UPLOAD_DIR", str(path))
    return str(path)


@pytest_asyncio.fixture
async def db_session(tmp_path) -> AsyncGenerator[AsyncSession, None]:
    """Provide a session bound to a fresh SQLite database for each test."""
    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        poolclass=NullPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with session_factory() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()

    await engine.dispose()


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession, upload_dir: str
) -> AsyncGenerator[AsyncClient, None]:
    """
    httpx AsyncClient wired to the FastAPI app with the DB dependency
    overridden to use the per-test session.
    """

    async def _override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = _override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
