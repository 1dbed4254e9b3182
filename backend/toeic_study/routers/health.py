"""
Health Check Endpoints

Provides health check endpoints for monitoring and orchestration.

Endpoints:
- GET /api/health - Basic health check
- GET /api/health/ready - Readiness probe (tier table loaded)
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from toeic_study import __version__
from toeic_study.config import settings
from toeic_study.services.learning.leveling import (
    InvalidTierTableError,
    default_engine,
    validate_tier_table,
)

router = APIRouter(prefix="/api/health", tags=["health"])


@router.get("")
async def health_check():
    """
    Basic health check.

    Returns a simple status response indicating the API is running.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": __version__,
    }


@router.get("/ready")
async def readiness_check():
    """
    Readiness probe.

    The API has no external dependencies; it is ready once the leveling
    engine's tier table is valid.
    """
    try:
        validate_tier_table(default_engine.tiers)
    except InvalidTierTableError as e:
        return JSONResponse(
            status_code=503,
            content={"status": "not_ready", "error": str(e)},
        )
    return {"status": "ready", "tiers": len(default_engine.tiers)}
