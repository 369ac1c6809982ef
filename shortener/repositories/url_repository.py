"""URL Repository for the URL shortener application.

This module provides the URLRepository class for database operations related to
UrlRecord models. Following the Repository pattern, it abstracts database
interactions for URL shortening operations.
"""

import logging
from typing import Any, Dict, Optional, Union

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from shortener.models.url import UrlRecord, UrlRecordCreate
from shortener.repositories.base import BaseRepository, DuplicateEntityError, RepositoryError

logger = logging.getLogger(__name__)


def is_unique_violation(error: IntegrityError) -> bool:
    """True for unique-index rejections (SQLite and PostgreSQL wording)."""
    message = str(error).lower()
    return "unique constraint" in message or "duplicate key" in message


class URLRepository(BaseRepository[UrlRecord, UrlRecordCreate]):
    """
    Repository for UrlRecord database operations.

    The unique index on ``short_code`` is the authority on whether a code is
    taken; ``check_short_code_exists`` is only a cheap pre-check.
    """

    def __init__(self):
        """Initialize the repository with the UrlRecord model type."""
        super().__init__(UrlRecord)

    async def create_short_url(
        self,
        db: AsyncSession,
        data: Union[UrlRecordCreate, Dict[str, Any]]
    ) -> UrlRecord:
        """
        Insert a new shortened URL entry.

        Args:
            db: Database session
            data: Short URL data (either as a UrlRecordCreate model or dictionary)

        Returns:
            The created UrlRecord entity

        Raises:
            DuplicateEntityError: If the store rejects the short code as a duplicate
            RepositoryError: On other database errors, including other constraint violations
        """
        try:
            return await self.create(db, data)
        except IntegrityError as e:
            # Check for duplicate key violation
            if is_unique_violation(e):
                if isinstance(data, UrlRecordCreate):
                    short_code = data.short_code
                else:
                    short_code = data.get("short_code", "unknown")
                raise DuplicateEntityError(self.model_type, "short_code", short_code) from e
            logger.error(f"Constraint violation creating short URL: {e}")
            raise RepositoryError(f"Database error creating short URL: {e}") from e

    async def insert_if_absent(
        self,
        db: AsyncSession,
        data: Union[UrlRecordCreate, Dict[str, Any]]
    ) -> Optional[UrlRecord]:
        """
        Insert a record unless its short code is already held.

        Returns:
            The created UrlRecord, or None when the unique index rejected the code

        Raises:
            RepositoryError: On database errors other than the duplicate
        """
        try:
            return await self.create_short_url(db, data)
        except DuplicateEntityError as e:
            logger.info(f"Insert rejected by unique index: {e}")
            return None

    async def get_by_short_code(self, db: AsyncSession, short_code: str) -> Optional[UrlRecord]:
        """
        Find a URL by its short code (exact, case-sensitive match).

        Args:
            db: Database session
            short_code: The unique short code to look up

        Returns:
            The UrlRecord if found, None otherwise

        Raises:
            RepositoryError: On database errors
        """
        try:
            query = select(self.model_type).where(self.model_type.short_code == short_code)
            result = await db.execute(query)
            return result.scalar_one_or_none()
        except SQLAlchemyError as e:
            raise RepositoryError(f"Error retrieving URL by short code: {e}") from e

    async def check_short_code_exists(self, db: AsyncSession, short_code: str) -> bool:
        """Check whether any record currently holds ``short_code``."""
        return await self.exists(db, short_code=short_code)

    async def delete_by_short_code(self, db: AsyncSession, short_code: str) -> int:
        """
        Delete the record holding ``short_code``.

        Returns:
            Number of rows deleted (0 when the code was unknown)
        """
        return await self.bulk_delete(db, short_code=short_code)
