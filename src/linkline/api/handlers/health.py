"""Health check endpoint handler."""

from datetime import datetime, timezone

from fastapi import APIRouter

from linkline import __version__
from linkline.models.health import HealthResponse

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint.

    The service has no stateful dependencies, so it is healthy whenever it
    can answer.
    """
    return HealthResponse(
        version=__version__,
        timestamp=datetime.now(timezone.utc),
    )


@router.get("/health/live")
async def liveness_check() -> dict:
    """Liveness probe - checks if process is running."""
    return {"status": "alive"}
