"""API dependencies for FastAPI.

This module provides dependency injection functions for FastAPI endpoints
to access the code registry and service instances. The registry lives on
``app.state`` and is created by the application lifespan.
"""

from fastapi import Depends, Request

from shortener.core.config import settings
from shortener.services.registry import CodeRegistry
from shortener.services.shortener import ShortenedURLService


def get_code_registry(request: Request) -> CodeRegistry:
    """Get the process-wide code registry."""
    return request.app.state.registry


def get_shortener_service(
    registry: CodeRegistry = Depends(get_code_registry),
) -> ShortenedURLService:
    """Get an instance of the URL shortening service."""
    return ShortenedURLService(registry=registry)


def get_base_url(request: Request) -> str:
    """Get the base URL for shortened links, without a trailing slash."""
    if settings.BASE_URL:
        return settings.BASE_URL
    return str(request.base_url).rstrip("/")
