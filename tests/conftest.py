"""Test fixtures for the URL shortener application."""

import os

# Settings are read once at import time, so the test environment must be set
# before anything from the shortener package is imported.
os.environ["ENVIRONMENT"] = "testing"
os.environ["LOG_TO_FILE"] = "false"
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ.pop("BASE_URL", None)

from typing import AsyncGenerator, Generator

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession

from shortener.db.base import create_session_factory, get_engine, init_db
from shortener.main import create_app
from shortener.repositories.url_repository import URLRepository
from shortener.services.registry import CodeRegistry
from shortener.services.shortener import ShortenedURLService


def sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest_asyncio.fixture
async def test_engine(tmp_path) -> AsyncGenerator[AsyncEngine, None]:
    """File-backed SQLite engine with the schema created.

    A file rather than ``:memory:`` so that concurrent sessions each get their
    own connection and contend for the database lock the way real writers do.
    """
    engine = get_engine(sqlite_url(tmp_path / "test.db"))
    await init_db(engine)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_factory(test_engine):
    return create_session_factory(test_engine)


@pytest_asyncio.fixture
async def test_db(session_factory) -> AsyncGenerator[AsyncSession, None]:
    """Create isolated test database session."""
    async with session_factory() as session:
        await session.begin()
        try:
            yield session
        finally:
            await session.rollback()
            await session.close()


@pytest.fixture
def url_repository():
    """Return URL repository instance."""
    return URLRepository()


@pytest.fixture
def registry(session_factory) -> CodeRegistry:
    return CodeRegistry(session_factory)


@pytest.fixture
def shortener_service(registry) -> ShortenedURLService:
    return ShortenedURLService(registry=registry)


@pytest.fixture
def client(tmp_path) -> Generator[TestClient, None, None]:
    """Return a TestClient for an app backed by its own database file."""
    app = create_app(database_url=sqlite_url(tmp_path / "api.db"))
    with TestClient(app) as test_client:
        yield test_client

