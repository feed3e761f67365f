"""
LivDaily Backend — Health Check Route
=======================================

What:  GET /health for container and load balancer health checks.
How:   Runs SELECT 1 against the database and a model listing against Gemini.

Status levels:
    healthy:   database and Gemini reachable
    degraded:  database reachable, Gemini unavailable or not configured
               (only the AI routes are affected)
    unhealthy: database unreachable (HTTP 503)
"""

import logging
import time

from fastapi import APIRouter, Response, status
from sqlalchemy import text

from livdaily import __version__
from livdaily.database import engine
from livdaily.schemas.common import HealthResponse
from livdaily.services.gemini_service import gemini_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(response: Response) -> HealthResponse:
    db_status = "connected"
    gemini_status = "available"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Gemini API ──────────────────────────────────────────────────
    if not gemini_service.is_configured:
        gemini_status = "not_configured"
    elif not await gemini_service.health_check():
        gemini_status = "unavailable"
    if gemini_status != "available" and overall == "healthy":
        overall = "degraded"

    if overall == "unhealthy":
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        gemini=gemini_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
