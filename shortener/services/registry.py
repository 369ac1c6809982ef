"""Code registry: allocation, reservation, lookup and deletion of short codes.

The registry owns store access for UrlRecords through an explicitly passed
session factory. Whether a code is taken is decided by the store's unique
index on ``short_code``. ``is_available`` is only a fast path that saves a
doomed insert; it cannot close the race between two concurrent writers, and
removing the index would make concurrent allocations able to share a code.
"""

import logging
import random
import secrets
import string
from typing import Optional, Protocol

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from shortener.db.session import SessionManager
from shortener.models.url import UrlRecord
from shortener.repositories.base import RepositoryError
from shortener.repositories.url_repository import URLRepository
from shortener.services.exceptions import (
    CodeTakenError,
    StoreUnavailableError,
    URLNotFoundError,
)

logger = logging.getLogger(__name__)

BASE36_ALPHABET = string.digits + string.ascii_lowercase
RANDOM_CODE_SPACE = 36 ** 6


class RandomSource(Protocol):
    def randrange(self, stop: int) -> int: ...


def to_base36(number: int) -> str:
    """Render a non-negative integer in lower-case base 36 without padding."""
    if number < 0:
        raise ValueError("number must be non-negative")
    if number == 0:
        return BASE36_ALPHABET[0]

    digits = []
    while number:
        number, remainder = divmod(number, 36)
        digits.append(BASE36_ALPHABET[remainder])
    return "".join(reversed(digits))


def default_random_source(secure: bool = False) -> RandomSource:
    """Per-process pseudorandom source, or the OS source when ``secure``."""
    if secure:
        return secrets.SystemRandom()
    return random.Random()


class CodeRegistry:
    """
    Persistent mapping of short code to UrlRecord.

    Generated-code collisions are an internal detail: ``allocate`` redraws
    until an insert succeeds. Custom-code collisions are the caller's problem:
    ``reserve`` fails with ``CodeTakenError`` and never picks another code.
    """

    def __init__(
        self,
        session_factory: async_sessionmaker,
        url_repository: Optional[URLRepository] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Args:
            session_factory: Factory for sessions against the store
            url_repository: Repository for UrlRecord access
            rng: Random source exposing ``randrange``; defaults to ``random.Random()``
        """
        self.sessions = SessionManager(session_factory)
        self.url_repository = url_repository or URLRepository()
        self.rng = rng or default_random_source()

    def generate_code(self) -> str:
        """Draw one candidate code: a uniform integer below 36**6 in base 36."""
        return to_base36(self.rng.randrange(RANDOM_CODE_SPACE))

    async def allocate(self, original_url: str) -> str:
        """
        Store ``original_url`` under a freshly generated code.

        The loop has no attempt limit. Each pass redraws after either a failed
        pre-check or an insert the unique index rejected, and the loop ends
        only on a successful insert.

        Returns:
            str: The new short code
        """
        while True:
            candidate = self.generate_code()
            if not await self.is_available(candidate):
                logger.debug(f"Generated code '{candidate}' is taken, redrawing")
                continue

            record = await self._insert(original_url, candidate, is_custom=False)
            if record is not None:
                logger.info(f"Allocated short code '{record.short_code}'")
                return record.short_code
            logger.info(f"Lost insert race for generated code '{candidate}', redrawing")

    async def reserve(self, original_url: str, custom_code: str) -> str:
        """
        Store ``original_url`` under the caller-chosen ``custom_code``.

        Returns:
            str: ``custom_code``

        Raises:
            CodeTakenError: If the code is held already, including when a
                concurrent writer took it between the pre-check and the insert
        """
        if not await self.is_available(custom_code):
            raise CodeTakenError(f"Custom code '{custom_code}' is already in use")

        record = await self._insert(original_url, custom_code, is_custom=True)
        if record is None:
            raise CodeTakenError(f"Custom code '{custom_code}' was taken concurrently")

        logger.info(f"Reserved custom code '{custom_code}'")
        return record.short_code

    async def is_available(self, code: str) -> bool:
        """True iff no record currently holds ``code``."""
        try:
            async with self.sessions.read_context() as db:
                return not await self.url_repository.check_short_code_exists(db, code)
        except (RepositoryError, SQLAlchemyError) as e:
            logger.error(f"Error checking availability of '{code}': {e}")
            raise StoreUnavailableError(str(e)) from e

    async def resolve(self, code: str) -> UrlRecord:
        """
        Look up the record for ``code``.

        Raises:
            URLNotFoundError: If no record holds the code
        """
        try:
            async with self.sessions.read_context() as db:
                record = await self.url_repository.get_by_short_code(db, code)
        except (RepositoryError, SQLAlchemyError) as e:
            logger.error(f"Error resolving '{code}': {e}")
            raise StoreUnavailableError(str(e)) from e

        if record is None:
            raise URLNotFoundError(f"URL with code '{code}' not found")
        return record

    async def delete(self, code: str) -> None:
        """Remove the record for ``code`` if there is one. Unknown codes are not an error."""
        try:
            async with self.sessions.transaction_context() as db:
                deleted = await self.url_repository.delete_by_short_code(db, code)
        except (RepositoryError, SQLAlchemyError) as e:
            logger.error(f"Error deleting '{code}': {e}")
            raise StoreUnavailableError(str(e)) from e

        if deleted:
            logger.info(f"Deleted short code '{code}'")

    async def _insert(self, original_url: str, code: str, is_custom: bool) -> Optional[UrlRecord]:
        """Single-statement insert; None when the unique index rejected ``code``."""
        try:
            async with self.sessions.transaction_context() as db:
                return await self.url_repository.insert_if_absent(
                    db,
                    {
                        "original_url": original_url,
                        "short_code": code,
                        "is_custom": is_custom,
                    },
                )
        except (RepositoryError, SQLAlchemyError) as e:
            logger.error(f"Error inserting short code '{code}': {e}")
            raise StoreUnavailableError(str(e)) from e
