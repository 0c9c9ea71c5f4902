"""
Contact API — Health Check Route
==================================

What:  Health check endpoint for monitoring and load balancer probes.
Why:   Load balancers and Docker health checks need to know whether this
       instance can serve contacts and photos end-to-end.
How:   Probes the database (SELECT 1) and the photo directory.

Status levels:
    - healthy:   Database reachable and photo directory writable
    - degraded:  Database reachable, photo directory unavailable (uploads fail)
    - unhealthy: Database unreachable
"""

import logging
import time

from fastapi import APIRouter, Depends
from sqlalchemy import text

from contact_api import __version__
from contact_api.database import engine
from contact_api.schemas.contact import HealthResponse
from contact_api.services.photo_store import PhotoStore, get_photo_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Health"])

_start_time = time.time()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Service health check",
)
async def health_check(
    photo_store: PhotoStore = Depends(get_photo_store),
) -> HealthResponse:
    db_status = "connected"
    storage_status = "writable"
    overall = "healthy"

    # ── Check Database ────────────────────────────────────────────────────
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        db_status = "disconnected"
        overall = "unhealthy"
        logger.warning("Health check: database unreachable: %s", str(e))

    # ── Check Photo Directory ─────────────────────────────────────────────
    if not photo_store.is_writable():
        storage_status = "unavailable"
        overall = "degraded" if overall != "unhealthy" else overall
        logger.warning("Health check: photo directory unavailable: %s", photo_store.photo_directory)

    return HealthResponse(
        status=overall,
        version=__version__,
        database=db_status,
        photo_storage=storage_status,
        uptime_seconds=round(time.time() - _start_time, 2),
    )
