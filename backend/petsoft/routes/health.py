"""
PetSoft Backend — Health Check Route
======================================

What:  Health check endpoint for monitoring and load balancer probes.
How:   Checks the database (SELECT 1) and whether the payment gateway is
       configured, and returns an aggregate status.
Who:   Called by Docker health checks, load balancers, and monitoring systems.

Status levels:
    - healthy:   All dependencies operational (HTTP 200)
    - degraded:  Payments not configured; pets and accounts still work (HTTP 200)
    - unhealthy: Database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from petsoft import __version__
from petsoft.database import engine
from petsoft.schemas.common import HealthResponse
from petsoft.services.stripe_gateway import stripe_gateway

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

# Initialized once when the module loads
_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    responses={503: {"description": "Database unreachable", "model": HealthResponse}},
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    """
    Probe the database and payment configuration.

    Check details:
        Database: Executes SELECT 1 to verify connection and query execution
        Payments: Verifies a Stripe secret key is configured (no API call)
    """
    db_status = "connected"
    payments_status = "configured"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except (SQLAlchemyError, OSError) as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Payments ────────────────────────────────────────────────────
    if not await stripe_gateway.health_check():
        payments_status = "not_configured"
        if overall != "unhealthy":
            overall = "degraded"

    if overall == "unhealthy":
        response.status_code = 503

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        payments=payments_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
