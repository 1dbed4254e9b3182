"""API Routers package."""

from toeic_study.routers import dashboard as dashboard_router
from toeic_study.routers import health as health_router
from toeic_study.routers import progress as progress_router

__all__ = ["dashboard_router", "health_router", "progress_router"]
