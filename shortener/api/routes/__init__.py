"""Routes package initialization.

This module exports the route collection for the application.
"""

from fastapi import APIRouter

from shortener.api.routes import health, pages, redirect, shortener
from shortener.core.config import settings

# Create root router
api_router = APIRouter()

api_router.include_router(pages.router)

# Include health check routes with API prefix
api_router.include_router(
    health.router,
    prefix=settings.API_PREFIX
)

api_router.include_router(shortener.router)

# Redirect routes go last: /{short_code} would otherwise shadow other paths
api_router.include_router(
    redirect.router
)

__all__ = ["api_router"]
