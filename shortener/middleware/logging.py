"""
Request logging middleware for FastAPI using Loguru.

Tags every request with an id, times it, and logs one line per request at
the custom REQUEST level.
"""

import time
import uuid

from fastapi import Request, Response
from loguru import logger
from starlette.middleware.base import BaseHTTPMiddleware

from shortener.core.logging import REQUEST_LEVEL

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log method, path, status and latency of every request."""

    async def dispatch(self, request: Request, call_next) -> Response:
        # Reuse an id set by a proxy, otherwise mint one
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        # Error handlers outside this middleware read it from the shared scope
        request.state.request_id = request_id

        start_time = time.perf_counter()
        # Every record logged while handling the request carries its id
        with logger.contextualize(request_id=request_id):
            response = await call_next(request)

        process_time_ms = round((time.perf_counter() - start_time) * 1000, 2)
        response.headers[REQUEST_ID_HEADER] = request_id

        # Get client IP with forwarded headers consideration
        client_ip = request.client.host if request.client else "unknown"
        if "X-Forwarded-For" in request.headers:
            forwarded_ips = request.headers["X-Forwarded-For"].split(",")
            if forwarded_ips:
                client_ip = forwarded_ips[0].strip()

        logger.bind(
            request_id=request_id,
            client_ip=client_ip,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            process_time_ms=process_time_ms,
        ).log(
            REQUEST_LEVEL,
            f"{request.method} {request.url.path} {response.status_code} {process_time_ms}ms",
        )
        return response
