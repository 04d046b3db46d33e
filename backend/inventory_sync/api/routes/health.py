"""Health & Readiness Probes — liveness and readiness endpoints for container orchestration.

Invariants:
    - GET /api/v1/health/ always returns 200 if process is up (liveness)
    - GET /api/v1/health/ready returns 503 if the SQL store backend is unreachable

Design Decisions:
    - Memory backend is always ready: there is nothing external to probe
"""

import logging
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import inventory_sync.infrastructure.database as database
from inventory_sync.config import get_settings
from inventory_sync.core.domain_types import StoreBackend

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "inventory-sync-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check():
    """Readiness probe — includes store backend connectivity."""
    settings = get_settings()
    if settings.store_backend is StoreBackend.MEMORY:
        return {"status": "ready", "checks": {"store": "memory"}}

    manager = database.db_manager
    db_ok = await manager.health_check() if manager else False
    if not db_ok:
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
