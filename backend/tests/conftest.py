"""
Shared Test Fixtures and Configuration

This module provides pytest fixtures used across unit and integration tests.
"""

import os
import sys
from datetime import date, datetime
from pathlib import Path
from typing import Any, Callable, Generator, Optional

import pytest
from dotenv import load_dotenv

# Add the backend directory to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

# Load .env file from project root BEFORE any fixtures run
_project_root = Path(__file__).parent.parent.parent
_env_file = _project_root / ".env"
if _env_file.exists():
    load_dotenv(_env_file)

from toeic_study.config import Settings  # noqa: E402
from toeic_study.models.progress import (  # noqa: E402
    DashboardRequest,
    QuizAttemptRecord,
    StudySessionRecord,
    StudyStatistics,
)


# ============================================================================
# Environment Configuration
# ============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """
    Set up test environment variables before any tests run.

    Overrides values from .env files to keep tests isolated.
    """
    original_env = os.environ.copy()

    test_env = {
        "APP_NAME": "TOEIC Study Test",
        "LOG_LEVEL": "DEBUG",
        "DEBUG": "true",
    }
    os.environ.update(test_env)

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture
def test_settings() -> Settings:
    """Settings with explicit dashboard defaults, independent of YAML and env."""
    return Settings(
        DEBUG=True,
        DEFAULT_DAILY_GOAL=20,
        RECENT_ACTIVITY_LIMIT=10,
        QUIZ_GOOD_RATIO=0.7,
        STREAK_MILESTONES=[3, 7, 14, 30, 60, 100, 365],
    )


# ============================================================================
# Study Statistics
# ============================================================================


@pytest.fixture
def zero_stats() -> StudyStatistics:
    """Statistics for a learner who has not studied yet."""
    return StudyStatistics()


@pytest.fixture
def scenario_a() -> StudyStatistics:
    """Early learner: 3,025 XP, beginner."""
    return StudyStatistics(
        total_cards_studied=100,
        total_correct_answers=100,
        total_incorrect_answers=20,
        current_streak=5,
        total_quiz_attempts=10,
        average_quiz_score=80,
        total_study_time_minutes=1000,
    )


@pytest.fixture
def scenario_b() -> StudyStatistics:
    """Regular learner: 17,750 XP, advanced."""
    return StudyStatistics(
        total_cards_studied=500,
        total_correct_answers=1000,
        total_incorrect_answers=100,
        current_streak=20,
        total_quiz_attempts=50,
        average_quiz_score=85,
        total_study_time_minutes=5000,
    )


@pytest.fixture
def scenario_d() -> StudyStatistics:
    """Veteran learner: 36,250 XP, expert."""
    return StudyStatistics(
        total_cards_studied=1000,
        total_correct_answers=2000,
        total_incorrect_answers=200,
        current_streak=50,
        total_quiz_attempts=100,
        average_quiz_score=90,
        total_study_time_minutes=10000,
    )


# ============================================================================
# Study Records
# ============================================================================

TODAY = date(2024, 3, 15)


@pytest.fixture
def today() -> date:
    """Fixed reference date for dashboard tests."""
    return TODAY


@pytest.fixture
def make_session() -> Callable[..., StudySessionRecord]:
    """Factory for flashcard study sessions."""

    def _make(
        session_id: str,
        start: datetime,
        end: Optional[datetime] = None,
        cards: int = 0,
        correct: int = 0,
        incorrect: int = 0,
    ) -> StudySessionRecord:
        return StudySessionRecord(
            id=session_id,
            start_time=start,
            end_time=end,
            cards_studied=cards,
            correct_answers=correct,
            incorrect_answers=incorrect,
        )

    return _make


@pytest.fixture
def make_quiz_attempt() -> Callable[..., QuizAttemptRecord]:
    """Factory for completed quiz attempts."""

    def _make(
        attempt_id: str,
        completed_at: datetime,
        score: float = 0.0,
        correct: int = 0,
        total: int = 0,
        title: str = "TOEIC Practice",
    ) -> QuizAttemptRecord:
        return QuizAttemptRecord(
            id=attempt_id,
            quiz_title=title,
            score=score,
            correct_answers=correct,
            total_questions=total,
            completed_at=completed_at,
        )

    return _make


@pytest.fixture
def dashboard_records() -> dict[str, Any]:
    """
    A week of study as JSON-ready data.

    Sessions on Mar 15 (x2), 14, 13 (unfinished) and 10; quizzes on 15 and 12.
    Totals: 50 cards, 35 correct, 15 incorrect, 110 minutes, streak 3,
    average quiz score 82.5 -> 83, 1,027 XP.
    """
    return {
        "total_cards": 120,
        "sessions": [
            {
                "id": "s1",
                "start_time": "2024-03-15T09:00:00",
                "end_time": "2024-03-15T09:30:00",
                "cards_studied": 10,
                "correct_answers": 8,
                "incorrect_answers": 2,
            },
            {
                "id": "s2",
                "start_time": "2024-03-15T18:00:00",
                "end_time": "2024-03-15T18:15:00",
                "cards_studied": 6,
                "correct_answers": 3,
                "incorrect_answers": 3,
            },
            {
                "id": "s3",
                "start_time": "2024-03-14T20:00:00",
                "end_time": "2024-03-14T20:45:00",
                "cards_studied": 20,
                "correct_answers": 15,
                "incorrect_answers": 5,
            },
            {
                "id": "s4",
                "start_time": "2024-03-13T07:00:00",
                "cards_studied": 4,
                "correct_answers": 4,
                "incorrect_answers": 0,
            },
            {
                "id": "s5",
                "start_time": "2024-03-10T12:00:00",
                "end_time": "2024-03-10T12:20:00",
                "cards_studied": 10,
                "correct_answers": 5,
                "incorrect_answers": 5,
            },
        ],
        "quiz_attempts": [
            {
                "id": "q1",
                "quiz_title": "Part 5 Grammar",
                "score": 80,
                "correct_answers": 8,
                "total_questions": 10,
                "completed_at": "2024-03-15T12:00:00",
            },
            {
                "id": "q2",
                "quiz_title": "Vocabulary Set 3",
                "score": 85,
                "correct_answers": 17,
                "total_questions": 20,
                "completed_at": "2024-03-12T10:00:00",
            },
        ],
        "as_of": "2024-03-15",
    }


@pytest.fixture
def dashboard_request(dashboard_records: dict[str, Any]) -> DashboardRequest:
    """dashboard_records validated into a DashboardRequest."""
    return DashboardRequest.model_validate(dashboard_records)
