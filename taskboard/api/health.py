"""Health check endpoints for liveness and readiness probes."""

import logging
from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from ..errors import StoreUnavailable

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Liveness probe.
    Returns 200 OK if the process is serving requests.
    """
    return {"status": "healthy", "service": "taskboard"}


@router.get("/ready")
async def readiness_check(request: Request):
    """
    Readiness probe.
    Returns 200 OK once the store answers a round-trip, 503 otherwise.
    """
    try:
        await request.app.state.store.ping()
    except StoreUnavailable as e:
        logger.warning(f"Readiness check failed: {e}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "service": "taskboard"},
        )
    return {"status": "ready", "service": "taskboard"}
