"""
Dashboard API Router

Endpoints for the learner dashboard.

Endpoints:
- POST /api/dashboard/stats - Build dashboard data from study records
- POST /api/dashboard/streak - Streak and milestone information only
"""

import logging

from fastapi import APIRouter, Depends

from toeic_study.middleware.error_handling import handle_endpoint_errors
from toeic_study.models.progress import DashboardRequest, DashboardStats, StreakSummary
from toeic_study.services.learning.dashboard import DashboardService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/dashboard", tags=["dashboard"])


# ===========================================
# Dependency Injection
# ===========================================


def get_dashboard_service() -> DashboardService:
    """Get dashboard service."""
    return DashboardService()


# ===========================================
# Dashboard Endpoints
# ===========================================


@router.post("/stats", response_model=DashboardStats)
@handle_endpoint_errors("Get dashboard stats")
async def get_dashboard_stats(
    request: DashboardRequest,
    service: DashboardService = Depends(get_dashboard_service),
) -> DashboardStats:
    """
    Build dashboard data for one learner.

    Returns:
    - Progress: level, XP, today's cards and accuracy
    - Daily goal progress
    - Recent activity across sessions and quizzes
    - Quick stats and streak
    """
    return service.build_dashboard(request)


@router.post("/streak", response_model=StreakSummary)
@handle_endpoint_errors("Get streak data")
async def get_streak(
    request: DashboardRequest,
    service: DashboardService = Depends(get_dashboard_service),
) -> StreakSummary:
    """
    Get study streak information.

    A streak is maintained by studying at least once per day.
    Streaks reset if a day is missed.
    """
    return service.build_streak_summary(request)
