"""Root Banner & Health Probes.

Invariants:
    - GET / always returns the plain-text banner
    - GET /health always returns 200 if the process is up (liveness)
    - GET /health/ready returns 503 if the database is unreachable (readiness)
"""

import logging

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse, PlainTextResponse

from todo_api.infrastructure.task_store import TaskStore, get_task_store

logger = logging.getLogger(__name__)
router = APIRouter(tags=["health"])

BANNER = "Todo API"
SERVICE_NAME = "todo-api"
SERVICE_VERSION = "1.0.0"


@router.get("/", response_class=PlainTextResponse)
async def banner():
    return BANNER


@router.get("/health", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
    }


@router.get("/health/ready")
async def readiness_check(store: TaskStore = Depends(get_task_store)):
    """Readiness probe: includes database connectivity."""
    if not await store.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "database_unavailable",
            },
        )
    return {"status": "ready", "checks": {"database": "healthy"}}
