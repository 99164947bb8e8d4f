"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 unless both database and key-value store answer

Design Decisions:
    - Separate liveness/readiness: liveness restarts, readiness removes from load balancer
    - Stores read from the infrastructure modules at call time; they are set in the lifespan
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from admin_console.infrastructure import cache, database

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "staging-admin-console",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — database and key-value store connectivity."""
    db_ok = await database.db_manager.health_check() if database.db_manager else False
    cache_ok = await cache.cache_store.ping() if cache.cache_store else False
    checks = {
        "database": "healthy" if db_ok else "unavailable",
        "cache": "healthy" if cache_ok else "unavailable",
    }
    if not (db_ok and cache_ok):
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "checks": checks},
        )
    return {"status": "ready", "checks": checks}
