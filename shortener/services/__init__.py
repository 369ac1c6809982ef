"""Service layer for the URL shortener application.

This package contains the validator, the code registry and the shortening
service that orchestrates them.
"""

from shortener.services.registry import CodeRegistry
from shortener.services.shortener import ShortenedURLService

__all__ = ["CodeRegistry", "ShortenedURLService"]
