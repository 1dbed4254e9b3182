"""Pydantic models for the application."""

from toeic_study.models.progress import (
    DashboardRequest,
    DashboardStats,
    ExperienceBreakdown,
    LevelResult,
    QuizAttemptRecord,
    StudySessionRecord,
    StudyStatistics,
)

__all__ = [
    "DashboardRequest",
    "DashboardStats",
    "ExperienceBreakdown",
    "LevelResult",
    "QuizAttemptRecord",
    "StudySessionRecord",
    "StudyStatistics",
]
