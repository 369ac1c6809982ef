"""Database base configuration for SQLAlchemy with SQLModel.

This module provides base database configuration for async SQLAlchemy with SQLModel.
It includes:
- Engine configuration
- Session factory construction
- Schema creation
- Health check functionality

Nothing here is a module-level singleton: the application lifespan builds
the engine and hands the session factory to the code registry.
"""

from typing import Dict, Optional
import asyncio
import logging

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.sql import text
from sqlmodel import SQLModel

from shortener.core.config import settings
# Registers the table with SQLModel metadata
from shortener.models.url import UrlRecord  # noqa: F401

logger = logging.getLogger(__name__)


def get_engine_config(database_url: str) -> Dict:
    """Get engine keyword arguments for the given database URL.

    SQLite writers are serialised by the database lock, so connections get a
    busy timeout instead of failing immediately; server databases get a pool.

    Returns:
        Dict: Engine configuration parameters.
    """
    config: Dict = {"echo": settings.DB_ECHO}
    if database_url.startswith("sqlite"):
        config["connect_args"] = {"timeout": settings.DB_BUSY_TIMEOUT}
        return config

    config.update(
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_POOL_MAX_OVERFLOW,
        pool_timeout=settings.DB_POOL_TIMEOUT,
        pool_recycle=settings.DB_POOL_RECYCLE,
        pool_pre_ping=True,
    )
    return config


def get_engine(database_url: Optional[str] = None) -> AsyncEngine:
    """Create and configure an async SQLAlchemy engine.

    Args:
        database_url: Optional override of ``settings.DATABASE_URL``

    Returns:
        AsyncEngine: Configured SQLAlchemy async engine instance.
    """
    engine_url = database_url or settings.DATABASE_URL
    logger.info(f"Creating database engine for {engine_url.split('://', 1)[0]}")

    return create_async_engine(
        engine_url,
        future=True,
        **get_engine_config(engine_url),
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker:
    """Build the session factory the registry opens its sessions from."""
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
    )


async def init_db(engine: AsyncEngine) -> None:
    """Create the ``urls`` table and its unique index if they do not exist."""
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    logger.info("Database schema is ready")


class DatabaseHealthCheck:
    """Health check functionality for the database connection."""

    @staticmethod
    async def check_connection(session_factory: async_sessionmaker) -> Dict:
        """Check database connectivity and return status.

        Returns:
            Dict: Health check result containing status and latency information
        """
        loop = asyncio.get_running_loop()
        start_time = loop.time()
        status = "healthy"
        error_message = None
        latency_ms = 0

        try:
            async with session_factory() as session:
                await session.execute(text("SELECT 1"))
            latency_ms = int((loop.time() - start_time) * 1000)
        except Exception as e:
            status = "unhealthy"
            error_message = str(e)
            logger.error(f"Database health check failed: {e}")

        return {
            "status": status,
            "latency_ms": latency_ms,
            "error": error_message,
        }
