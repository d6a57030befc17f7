"""Health & Readiness — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if the process is up (liveness)
    - GET /api/v1/health/ready returns 503 if the extractor executable cannot be resolved
"""

import logging
import shutil

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from ytgateway import __version__
from ytgateway.config import get_settings

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness check. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "ytgateway",
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check():
    """Readiness check: the configured extractor must be on PATH."""
    binary = get_settings().extractor_binary
    resolved = shutil.which(binary)
    if resolved is None:
        logger.warning(f"Extractor '{binary}' not found on PATH")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "extractor_unavailable",
            },
        )
    return {"status": "ready", "checks": {"extractor": resolved}}
