"""
Daily Diet Backend — Health Check Route
=========================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Runs SELECT 1 on a connection taken straight from the engine, outside
       any request transaction.

Status levels:
    - healthy:   database reachable
    - unhealthy: database unreachable (still HTTP 200 so the body is readable;
                 probes should key on the `status` field)
"""

import logging
import time

from fastapi import APIRouter
from sqlalchemy import text

from dailydiet import __version__
from dailydiet.database import get_engine
from dailydiet.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    db_status = "connected"
    overall = "healthy"

    try:
        async with get_engine().connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
