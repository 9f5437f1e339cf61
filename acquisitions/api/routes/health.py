"""
Health check routes for monitoring and service discovery.
Provides endpoints to verify service health and database connectivity.
"""

import time
from datetime import datetime, timezone

from fastapi import APIRouter
from sqlalchemy import text

from acquisitions.api.deps import SessionDep
from acquisitions.core.logging import get_logger

logger = get_logger(__name__)

router = APIRouter(tags=["health"])

_started_at = time.monotonic()


@router.get("/health")
def health_check() -> dict:
    """
    Basic health check endpoint.

    Returns:
        Status, current UTC timestamp and process uptime in seconds
    """
    return {
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - _started_at, 3),
    }


@router.get("/health/db")
def database_health_check(session: SessionDep) -> dict:
    """
    Database health check endpoint.
    Verifies database connectivity by executing a simple query.
    """
    try:
        result = session.connection().execute(text("SELECT 1")).scalar()
    except Exception as e:
        logger.error(f"Database health check failed: {e}")
        return {"status": "unhealthy", "database": "error", "error": str(e)}

    return {
        "status": "healthy",
        "database": "ok",
        "result": int(result) if result is not None else 1,
    }
