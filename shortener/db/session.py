"""Session management for database operations.

This module provides utilities for handling SQLAlchemy async sessions
with proper lifecycle management, error handling, and transaction support.
"""

from typing import AsyncGenerator
import logging
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class SessionManager:
    """Opens sessions from an explicitly passed session factory.

    Each store operation of the registry runs in its own session, so every
    write is a single atomic statement committed on scope exit.
    """

    def __init__(self, session_factory: async_sessionmaker):
        self.session_factory = session_factory

    @asynccontextmanager
    async def read_context(self) -> AsyncGenerator[AsyncSession, None]:
        """Session for read-only work; always closed, never committed."""
        async with self.session_factory() as session:
            yield session

    @asynccontextmanager
    async def transaction_context(self) -> AsyncGenerator[AsyncSession, None]:
        """Context manager for a database session with transaction support.

        Automatically commits on successful completion or rolls back on error.

        Yields:
            AsyncSession: SQLAlchemy async session

        Example:
            ```python
            async with manager.transaction_context() as session:
                session.add(UrlRecord(original_url=url, short_code="abc123"))
                # Commits automatically on context exit if no errors
            ```
        """
        async with self.session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception as e:
                await session.rollback()
                logger.debug(f"Transaction rolled back: {e}")
                raise
