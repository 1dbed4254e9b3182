"""
Study Progress API Models (Pydantic)

Request/response schemas for levels, experience and the dashboard:
- Study statistics consumed by the leveling engine
- Level results and per-source experience breakdowns
- Raw study records (flashcard sessions, quiz attempts) for dashboard aggregation
- Dashboard payload (progress, daily goal, recent activity, quick stats)

Data flows: API Request → Pydantic → Service (pure functions) → Pydantic → API Response

API Contract:
    Request models use StrictRequest (extra="forbid") to reject unknown fields.
    StudyStatistics is the exception to fail-fast validation: out-of-range
    numbers are normalized instead of rejected, so leveling never fails for
    numeric input.
"""

from __future__ import annotations

import math
from datetime import date, datetime
from typing import Any, Optional

from pydantic import ConfigDict, Field, computed_field, field_validator

from toeic_study.enums.learning import ActivityResult, ActivityType, LevelName
from toeic_study.models.base import StrictRequest, StrictResponse


def _as_number(value: Any) -> Any:
    """Parse numeric strings; leave everything else for pydantic to judge."""
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return value
    return value


def _to_float(value: int | float) -> float:
    """Float conversion where ints beyond float range become +/-inf."""
    try:
        return float(value)
    except OverflowError:
        return math.inf if value > 0 else -math.inf


# ===========================================
# Leveling Models
# ===========================================


class StudyStatistics(StrictRequest):
    """
    Lifetime study counters for one learner.

    A transient snapshot assembled by the caller (see dashboard aggregation)
    and fed to the leveling engine. Never stored.

    Normalization:
    - counts: negative or non-finite -> 0, fractional -> floored
    - average_quiz_score: clamped to [0, 100], NaN -> 0
    - total_study_time_minutes: negative or non-finite -> 0
    """

    model_config = ConfigDict(frozen=True)

    total_cards_studied: int = Field(0, description="Lifetime flashcards studied")
    total_correct_answers: int = Field(0, description="Lifetime correct answers")
    total_incorrect_answers: int = Field(
        0, description="Lifetime incorrect answers (not part of XP)"
    )
    current_streak: int = Field(0, description="Consecutive study days")
    total_quiz_attempts: int = Field(0, description="Completed quiz attempts")
    average_quiz_score: float = Field(0.0, description="Mean quiz score (0-100)")
    total_study_time_minutes: float = Field(
        0.0, description="Cumulative study time in minutes"
    )

    @field_validator(
        "total_cards_studied",
        "total_correct_answers",
        "total_incorrect_answers",
        "current_streak",
        "total_quiz_attempts",
        mode="before",
    )
    @classmethod
    def normalize_count(cls, value: Any) -> Any:
        value = _as_number(value)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value
        if isinstance(value, float) and not math.isfinite(value):
            return 0
        return max(0, math.floor(value))

    @field_validator("average_quiz_score", mode="before")
    @classmethod
    def clamp_average_score(cls, value: Any) -> Any:
        value = _as_number(value)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value
        value = _to_float(value)
        if math.isnan(value):
            return 0.0
        return min(max(value, 0.0), 100.0)

    @field_validator("total_study_time_minutes", mode="before")
    @classmethod
    def normalize_minutes(cls, value: Any) -> Any:
        value = _as_number(value)
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            return value
        value = _to_float(value)
        if not math.isfinite(value) or value < 0:
            return 0.0
        return value


class LevelResult(StrictResponse):
    """
    Level summary derived from a StudyStatistics snapshot.

    next_level equals level once the top tier is reached; level_progress is
    then pinned at 100.
    """

    model_config = ConfigDict(frozen=True)

    level: LevelName
    experience: int = Field(..., ge=0, description="Total XP")
    next_level: LevelName
    next_level_xp: int = Field(..., ge=0, description="XP where next_level starts")
    current_level_xp: int = Field(
        ..., ge=0, description="XP earned inside the current tier"
    )
    level_progress: int = Field(
        ..., ge=0, le=100, description="Percent through the current tier"
    )


class ExperienceBreakdown(StrictResponse):
    """
    XP earned from each source.

    Useful for showing learners where their experience comes from; total
    always equals LevelResult.experience for the same statistics.
    """

    model_config = ConfigDict(frozen=True)

    cards: int = 0  # 10 per card studied
    correct_answers: int = 0  # 5 per correct answer
    quiz_base: int = 0  # 50 per quiz attempt
    quiz_score: int = 0  # average score x attempts
    streak: int = 0  # 25 per streak day
    study_time: int = 0  # 1 per 10 minutes

    @computed_field
    @property
    def total(self) -> int:
        return (
            self.cards
            + self.correct_answers
            + self.quiz_base
            + self.quiz_score
            + self.streak
            + self.study_time
        )


class LevelTierResponse(StrictResponse):
    """One row of the tier table. max_xp is null for the top tier."""

    name: LevelName
    min_xp: int
    max_xp: Optional[int] = None


# ===========================================
# Study Record Models
# ===========================================


class StudySessionRecord(StrictRequest):
    """
    A flashcard study session.

    Sessions without an end_time are still in progress: they count towards
    streaks and card totals but not towards study time.
    """

    id: str
    start_time: datetime
    end_time: Optional[datetime] = None
    cards_studied: int = Field(0, ge=0)
    correct_answers: int = Field(0, ge=0)
    incorrect_answers: int = Field(0, ge=0)


class QuizAttemptRecord(StrictRequest):
    """A completed quiz attempt. score is a percentage (0-100)."""

    id: str
    quiz_title: str = ""
    score: float = Field(0.0, ge=0.0, le=100.0)
    correct_answers: int = Field(0, ge=0)
    total_questions: int = Field(0, ge=0)
    completed_at: datetime


class DashboardRequest(StrictRequest):
    """
    Everything needed to build one learner's dashboard.

    daily_goal falls back to settings.DEFAULT_DAILY_GOAL and as_of to
    today's date when omitted.
    """

    total_cards: int = Field(0, ge=0, description="Flashcards owned by the learner")
    sessions: list[StudySessionRecord] = Field(default_factory=list)
    quiz_attempts: list[QuizAttemptRecord] = Field(default_factory=list)
    daily_goal: Optional[int] = Field(None, ge=1, description="Cards per day")
    as_of: Optional[date] = Field(None, description="Reference date for 'today'")


# ===========================================
# Dashboard Response Models
# ===========================================


class ProgressSummary(LevelResult):
    """Level fields plus today's study counters."""

    total_cards: int
    studied_today: int
    current_streak: int
    accuracy: int = Field(..., ge=0, le=100, description="Today's accuracy (%)")


class DailyGoalProgress(StrictResponse):
    """Progress towards the daily card goal, capped at 100%."""

    studied: int
    goal: int
    progress: float = Field(..., ge=0.0, le=100.0)


class RecentActivity(StrictResponse):
    """One entry in the recent activity feed."""

    id: str
    type: ActivityType
    title: str
    result: ActivityResult
    score: str  # "correct/total"
    time: datetime


class QuickStats(StrictResponse):
    """Lifetime headline numbers."""

    total_study_time: int  # Minutes, rounded
    cards_mastered: int  # Lifetime correct answers
    quizzes_taken: int
    average_score: int


class StreakSummary(StrictResponse):
    """
    Study streak information.

    Tracks consecutive days of study to motivate consistent habits. Includes
    current and longest streaks and milestone tracking.
    """

    current_streak: int  # Days
    longest_streak: int
    streak_start: Optional[date] = None
    last_study: Optional[date] = None
    is_active_today: bool = False
    # Milestones
    milestones_reached: list[int] = Field(default_factory=list)  # e.g., [3, 7, 14]
    next_milestone: Optional[int] = None


class DashboardStats(StrictResponse):
    """Complete dashboard payload."""

    progress: ProgressSummary
    daily_goal: DailyGoalProgress
    recent_activity: list[RecentActivity] = Field(default_factory=list)
    quick_stats: QuickStats
    streak: StreakSummary
