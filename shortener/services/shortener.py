"""URL shortening service for the URL shortener application.

This module contains the ShortenedURLService class which validates inbound
requests and hands them to the code registry.
"""

import logging
from typing import Any, Dict, Optional

from shortener.models.url import UrlRecord
from shortener.services.exceptions import (
    InvalidCustomCodeFormatError,
    InvalidURLFormatError,
    MissingURLError,
)
from shortener.services.registry import CodeRegistry
from shortener.services.validator import validate_short_code, validate_url

logger = logging.getLogger(__name__)


class ShortenedURLService:
    """
    Service for URL shortening business logic.

    Validation happens here, before the registry touches the store, so a
    rejected request never costs a store round trip.
    """

    def __init__(self, registry: CodeRegistry):
        """
        Initialize the URL shortening service.

        Args:
            registry: Code registry owning the store
        """
        self.registry = registry

    async def shorten(self, original_url: Optional[str], custom_code: Optional[str] = None) -> str:
        """
        Create a shortened URL with an optional custom code.

        Args:
            original_url: The original URL to shorten
            custom_code: Optional caller-chosen code; an empty string counts as supplied

        Returns:
            str: The short code the URL is stored under

        Raises:
            MissingURLError: If no URL was given
            InvalidURLFormatError: If URL format is invalid
            InvalidCustomCodeFormatError: If custom code format is invalid
            CodeTakenError: If custom code is already in use
            StoreUnavailableError: If the store fails
        """
        if original_url is None:
            raise MissingURLError()

        if not validate_url(original_url):
            raise InvalidURLFormatError(f"Invalid URL format: {original_url!r}")

        if custom_code is not None:
            if not validate_short_code(custom_code):
                raise InvalidCustomCodeFormatError(
                    f"Custom code {custom_code!r} must be 4-10 characters of "
                    f"letters, numbers, underscores and hyphens"
                )
            return await self.registry.reserve(original_url, custom_code)

        return await self.registry.allocate(original_url)

    async def resolve(self, short_code: str) -> UrlRecord:
        """Look up the record behind ``short_code``; raises URLNotFoundError."""
        return await self.registry.resolve(short_code)

    async def get_url_info(self, short_code: str) -> Dict[str, Any]:
        """
        Get the public information about a shortened URL.

        Raises:
            URLNotFoundError: If no URL with this code exists
        """
        record = await self.registry.resolve(short_code)
        return {
            "short_code": record.short_code,
            "original_url": record.original_url,
            "created_at": record.created_at,
        }

    async def delete(self, short_code: str) -> None:
        await self.registry.delete(short_code)
