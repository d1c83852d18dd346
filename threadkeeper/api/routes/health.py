from datetime import datetime, timezone

from fastapi import APIRouter

from threadkeeper.core.config import settings

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Full health check endpoint.

    The engine has no backing services, so this reports the running
    version alongside a timestamp.

    Returns:
        dict: Health status with timestamp and version
    """
    return {
        "status": "healthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": settings.VERSION,
    }


@router.get("/healthz")
async def healthz():
    """
    Simple liveness probe.

    Returns:
        dict: Simple status indicator
    """
    return {"status": "healthy"}
