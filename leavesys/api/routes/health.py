"""Health & Readiness Probes — liveness and snapshot readiness.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 until a Snapshot has been committed (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from leavesys.api.dependencies import get_runtime
from leavesys.services.runtime import Runtime

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {"status": "healthy", "service": "leavesys", "version": "1.0.0"}


@router.get("/ready")
async def readiness_check(runtime: Runtime = Depends(get_runtime)):
    """Readiness probe — a Snapshot must have been committed."""
    state = runtime.loader.state
    if not state.has_committed:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": state.error.code if state.error else "loading",
            },
        )
    return {
        "status": "ready",
        "checks": {
            "snapshot_epoch": state.committed_epoch,
            "refresh_error": state.error.message if state.error else None,
        },
    }
