# =============================================================================
# app/routers/health.py - Health Check Endpoint
# =============================================================================
# Reports process liveness and MongoDB connectivity for uptime monitors.
# Not rate limited.
# =============================================================================

import logging

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from app.dependencies import MongoDep
from app.exceptions import DatabaseConnectionError
from lib.utils import utc_now_iso

logger = logging.getLogger(__name__)

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ServicesStatus(BaseModel):
    """Individual backing service checks."""
    mongodb: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    timestamp: str
    services: ServicesStatus
    error: str | None = None


# =============================================================================
# Endpoints
# =============================================================================

@router.get(
    "/health",
    response_model=HealthResponse,
    response_model_exclude_none=True,
    responses={503: {"model": HealthResponse}},
)
async def health_check(mongo: MongoDep):
    """
    Health check endpoint.

    Connects first if no connection exists yet, then pings MongoDB.
    Returns 200 when connected, 503 otherwise.
    """
    try:
        if not mongo.is_connected:
            logger.info("MongoDB not connected, attempting to connect...")
            try:
                await mongo.connect()
            except DatabaseConnectionError as e:
                logger.warning(f"Health check could not connect: {e.message}")

        connected = await mongo.ping()
        body = HealthResponse(
            status="ok",
            timestamp=utc_now_iso(),
            services=ServicesStatus(mongodb="connected" if connected else "disconnected"),
        )
        return JSONResponse(
            status_code=200 if connected else 503,
            content=body.model_dump(exclude_none=True),
        )

    except Exception as e:
        logger.exception(f"Health check error: {e}")
        body = HealthResponse(
            status="error",
            timestamp=utc_now_iso(),
            error="Health check failed",
            services=ServicesStatus(mongodb="error"),
        )
        return JSONResponse(status_code=503, content=body.model_dump(exclude_none=True))
