"""
RetroBoard Backend — Health Check Route
=========================================

What:  GET /health for container health checks and load balancer probes.
How:   Runs SELECT 1 against the store. Always answers 200; the body says
       whether the database is reachable.
"""

import logging
import time

from fastapi import APIRouter, Depends

from retroboard import __version__
from retroboard.database import Database
from retroboard.dependencies import get_database
from retroboard.schemas.common import HealthResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(database: Database = Depends(get_database)) -> HealthResponse:
    if await database.ping():
        db_status, overall = "connected", "healthy"
    else:
        db_status, overall = "disconnected", "unhealthy"

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
