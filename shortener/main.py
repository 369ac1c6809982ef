"""Main application module.

This module initializes the FastAPI application, includes routes,
and configures middleware and exception handlers.
"""

import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from loguru import logger

from shortener.api import api_router
from shortener.core.config import settings
from shortener.core.logging import setup_logging
from shortener.db.base import create_session_factory, get_engine, init_db
from shortener.middleware.logging import REQUEST_ID_HEADER, RequestLoggingMiddleware
from shortener.services.exceptions import ServiceError
from shortener.services.registry import CodeRegistry, default_random_source


def create_app(database_url: Optional[str] = None) -> FastAPI:
    """
    Build the FastAPI application.

    The engine, session factory and code registry are created in the
    lifespan and kept on ``app.state``.

    Args:
        database_url: Optional override of ``settings.DATABASE_URL``
    """
    setup_logging()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Environment: {settings.ENVIRONMENT.value}")

        engine = get_engine(database_url)
        await init_db(engine)

        app.state.session_factory = create_session_factory(engine)
        app.state.registry = CodeRegistry(
            app.state.session_factory,
            rng=default_random_source(settings.SHORT_CODE_SECURE_RANDOM),
        )
        try:
            yield
        finally:
            logger.info(f"Shutting down {settings.APP_NAME}")
            await engine.dispose()

    app = FastAPI(
        title=settings.APP_NAME,
        description=settings.APP_DESCRIPTION,
        version=settings.APP_VERSION,
        docs_url="/docs" if settings.DEBUG else None,
        redoc_url="/redoc" if settings.DEBUG else None,
        lifespan=lifespan,
    )

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    if settings.REQUEST_LOGGING_ENABLED:
        app.add_middleware(RequestLoggingMiddleware)

    app.include_router(api_router)
    register_exception_handlers(app)
    return app


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Handle malformed request bodies."""
        logger.warning(f"Request validation error on {request.method} {request.url.path}: {exc}")
        return JSONResponse(
            status_code=422,
            content={"error": "Invalid request body", "detail": _jsonable_errors(exc)},
        )

    @app.exception_handler(ServiceError)
    async def service_exception_handler(request: Request, exc: ServiceError):
        """Store failures that reached the edge: answered as a generic failure."""
        error_id = f"error-{time.time()}"
        logger.bind(error_id=error_id).error(
            f"Service failure in {request.method} {request.url.path}: {exc}"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error", "error_id": error_id},
        )

    @app.exception_handler(Exception)
    async def global_exception_handler(request: Request, exc: Exception):
        """Global exception handler to catch and log all unhandled exceptions."""
        error_id = f"error-{time.time()}"
        logger.bind(
            error_id=error_id,
            url=str(request.url),
            client_host=request.client.host if request.client else None,
        ).opt(exception=exc).error(f"Unhandled exception in {request.method} {request.url.path}")
        # Answered outside the request logging middleware, so the id is set here
        request_id = getattr(request.state, "request_id", None)
        headers = {REQUEST_ID_HEADER: request_id} if request_id else None
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={
                "error": "Internal server error",
                "error_id": error_id,
                "message": str(exc) if settings.DEBUG else None,
            },
            headers=headers,
        )


def _jsonable_errors(exc: RequestValidationError) -> list:
    # ctx may hold exception instances that are not JSON serialisable
    return [
        {key: value for key, value in error.items() if key in ("type", "loc", "msg")}
        for error in exc.errors()
    ]


app = create_app()
