"""
StudyMate Backend — Status & Health Check Routes
==================================================

What:  GET / (liveness text) and GET /health (database ping check).
Why:   The root route is what the frontend and uptime monitors have always hit;
       /health additionally proves MongoDB is reachable.
How:   /health pings the database with a lightweight command and reports status.

Status levels:
    - healthy:   Database answered the ping (HTTP 200)
    - unhealthy: Database unreachable (HTTP 200, flagged for monitoring)
"""

import logging
import time

from fastapi import APIRouter
from pymongo.errors import PyMongoError

from studymate import __version__
from studymate.database import ping_database
from studymate.schemas.common import HealthResponse, MessageResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Track when the service started for uptime reporting
_start_time = time.time()


@router.get("/", response_model=MessageResponse, summary="Server status")
async def root() -> MessageResponse:
    return MessageResponse(message="Server Running Successfully!")


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
    description=(
        "Returns the health status of the backend service and its database. "
        "Used by container health checks and uptime monitors."
    ),
)
async def health_check() -> HealthResponse:
    """
    Check the health of the service and its database.

    Check details:
        Database: Runs the `ping` admin command (no collection access)
    """
    db_status = "connected"
    overall = "healthy"

    try:
        await ping_database()
    except PyMongoError as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
