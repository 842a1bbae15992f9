"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable or the
      snapshot store was never initialized (readiness)

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from
      load balancer
    - An empty dataset is still "ready": queries return zero-valued results
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import salescope.infrastructure.database as db_module
import salescope.infrastructure.snapshot_registry as snapshot_module

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "salescope-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database connectivity and snapshot store."""
    manager = db_module.db_manager
    db_ok = await manager.health_check() if manager else False
    store = snapshot_module.snapshot_store
    if not db_ok or store is None:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": (
                    "database_unavailable" if not db_ok
                    else "snapshot_store_uninitialized"
                ),
            },
        )
    snapshot = store.current()
    return {
        "status": "ready",
        "checks": {"database": "healthy"},
        "snapshot": {
            "version": snapshot.version,
            "transactions": len(snapshot),
            "loaded_at": snapshot.loaded_at.isoformat(),
        },
    }
