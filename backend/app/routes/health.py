"""
MindfulSpace Backend — Health Check Route
===========================================

What:  Liveness/readiness probe for orchestrators and load balancers.
How:   Runs `SELECT 1` through the app's Database. A failed probe is reported
       as `degraded` with HTTP 200 so the response body can be inspected;
       the process itself refuses to start without a reachable store.
Who:   Docker health checks, monitoring. No token required.

Served at both /health and /api/health.
"""

import logging
from datetime import datetime, timezone

from fastapi import APIRouter, Request

from app import __version__
from app.database import STORE_FAILURES, Database
from app.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
@router.get("/api/health", response_model=HealthResponse, include_in_schema=False)
async def health_check(request: Request) -> HealthResponse:
    database: Database = request.app.state.database
    db_status = "connected"
    overall = "ok"

    try:
        await database.ping()
    except STORE_FAILURES as e:
        db_status = "disconnected"
        overall = "degraded"
        logger.warning("Health check: database unreachable: %s", e)

    return HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=__version__,
        database=db_status,
    )
