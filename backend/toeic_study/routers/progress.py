"""
Progress API Router

Endpoints for levels and experience points.

Endpoints:
- GET  /api/progress/tiers - List level tiers and their XP ranges
- POST /api/progress/level - Compute level from study statistics
- POST /api/progress/experience - Break XP down by source
"""

import logging

from fastapi import APIRouter, Depends

from toeic_study.middleware.error_handling import handle_endpoint_errors
from toeic_study.models.progress import (
    ExperienceBreakdown,
    LevelResult,
    LevelTierResponse,
    StudyStatistics,
)
from toeic_study.services.learning.leveling import (
    LevelingEngine,
    default_engine,
    experience_breakdown,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/progress", tags=["progress"])


# ===========================================
# Dependency Injection
# ===========================================


def get_leveling_engine() -> LevelingEngine:
    """Get the shared leveling engine."""
    return default_engine


# ===========================================
# Level Endpoints
# ===========================================


@router.get("/tiers", response_model=list[LevelTierResponse])
@handle_endpoint_errors("List level tiers")
async def list_tiers(
    engine: LevelingEngine = Depends(get_leveling_engine),
) -> list[LevelTierResponse]:
    """
    List level tiers in ascending order.

    The top tier has max_xp = null (no upper bound).
    """
    return [
        LevelTierResponse(name=tier.name, min_xp=tier.min_xp, max_xp=tier.max_xp)
        for tier in engine.tiers
    ]


@router.post("/level", response_model=LevelResult)
@handle_endpoint_errors("Compute level")
async def compute_level(
    stats: StudyStatistics,
    engine: LevelingEngine = Depends(get_leveling_engine),
) -> LevelResult:
    """
    Compute level, XP and tier progress.

    Negative or out-of-range numbers are normalized rather than rejected;
    only non-numeric values or unknown fields produce 422.
    """
    return engine.compute(stats)


@router.post("/experience", response_model=ExperienceBreakdown)
@handle_endpoint_errors("Compute experience breakdown")
async def get_experience_breakdown(stats: StudyStatistics) -> ExperienceBreakdown:
    """
    Show how much XP each study activity contributes.

    The breakdown's total matches the experience returned by /level.
    """
    return experience_breakdown(stats)
