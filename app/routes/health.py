"""
Catalog API — Health Check Route
==================================

What:  GET /health for container health checks and load balancer probes.
How:   Runs SELECT 1 against the engine; reports uptime and version.

Status levels:
    - healthy:   database reachable (HTTP 200)
    - unhealthy: database unreachable (HTTP 503, error envelope with the
                 health report as `errors`)
"""

import logging
import time

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from app import __version__
from app.database import engine
from app.responses import api_response, error_response
from app.schemas.envelope import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_class=JSONResponse, summary="Service health check")
async def health_check() -> JSONResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    health = HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )

    if overall == "healthy":
        return api_response(health, "Service healthy", 200)
    return error_response("Service unhealthy", 503, health.model_dump())
