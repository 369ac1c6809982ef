"""Health check endpoints for monitoring application status."""

from fastapi import APIRouter, Request, status

from shortener.core.config import settings
from shortener.db.base import DatabaseHealthCheck

router = APIRouter(tags=["health"])


@router.get(
    "/health/ready",
    status_code=status.HTTP_200_OK,
    summary="Readiness probe",
    response_description="Application readiness status"
)
async def readiness_probe(request: Request):
    """Check if application is ready to handle requests."""
    database = await DatabaseHealthCheck.check_connection(request.app.state.session_factory)
    components_status = {"api": True, "database": database["status"] == "healthy"}

    return {
        "ready": all(components_status.values()),
        "version": settings.APP_VERSION,
        "components": components_status,
    }


@router.get(
    "/health/live",
    status_code=status.HTTP_200_OK,
    summary="Liveness probe",
    response_description="Application liveness status"
)
async def liveness_probe():
    """Simple check that application is running."""
    return {"alive": True}
