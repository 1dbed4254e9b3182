"""
Dashboard Aggregation Service

Builds the learner dashboard from raw study records supplied by the caller.

Responsibilities:
- Calculate current and longest study streaks
- Aggregate lifetime statistics for the leveling engine
- Summarize today's progress against the daily goal
- Merge flashcard sessions and quiz attempts into a recent activity feed

No storage access: callers pass every record in a DashboardRequest.

Usage:
    from toeic_study.services.learning.dashboard import DashboardService

    service = DashboardService()
    stats = service.build_dashboard(request)
    level = service.engine.compute(service.build_study_statistics(request))
"""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from toeic_study.config import Settings, settings as default_settings
from toeic_study.enums.learning import ActivityResult, ActivityType
from toeic_study.middleware.error_handling import ValidationError
from toeic_study.models.progress import (
    DailyGoalProgress,
    DashboardRequest,
    DashboardStats,
    ProgressSummary,
    QuickStats,
    QuizAttemptRecord,
    RecentActivity,
    StreakSummary,
    StudySessionRecord,
    StudyStatistics,
)
from toeic_study.services.learning.leveling import (
    LevelingEngine,
    default_engine,
    round_half_up,
)

logger = logging.getLogger(__name__)


def calculate_current_streak(
    study_dates: Iterable[date], today: date
) -> tuple[int, Optional[date]]:
    """
    Calculate the current consecutive study streak.

    Counts consecutive study days starting from today (or yesterday if there
    was no study today). The streak remains valid if the learner studied
    yesterday but hasn't studied today yet.

    Args:
        study_dates: Days with at least one session, any order, duplicates allowed.
        today: Reference date.

    Returns:
        tuple[int, Optional[date]]: Tuple containing:
            - streak_count: Number of consecutive study days.
            - streak_start_date: First day of the current streak, or None.
    """
    days = set(study_dates)
    if not days:
        return 0, None

    yesterday = today - timedelta(days=1)
    if today in days:
        expected_date = today
    elif yesterday in days:
        expected_date = yesterday
    else:
        return 0, None

    streak = 0
    streak_start = None
    while expected_date in days:
        streak += 1
        streak_start = expected_date
        expected_date = expected_date - timedelta(days=1)

    return streak, streak_start


def calculate_longest_streak(study_dates: Iterable[date]) -> int:
    """
    Calculate the longest study streak ever achieved.

    Args:
        study_dates: Days with at least one session, any order.

    Returns:
        int: Length of the longest run of consecutive days.
    """
    sorted_dates = sorted(set(study_dates))
    if not sorted_dates:
        return 0

    longest = 1
    current = 1

    for i in range(1, len(sorted_dates)):
        if sorted_dates[i] == sorted_dates[i - 1] + timedelta(days=1):
            current += 1
            longest = max(longest, current)
        else:
            current = 1

    return longest


def calculate_accuracy(correct: int, incorrect: int) -> int:
    """Percentage of correct answers, 0 when nothing was answered."""
    answered = correct + incorrect
    if answered <= 0:
        return 0
    return round_half_up(correct / answered * 100)


def calculate_study_minutes(sessions: Iterable[StudySessionRecord]) -> float:
    """
    Total minutes across finished sessions.

    Sessions still in progress (no end_time) contribute nothing.

    Raises:
        ValidationError: If a session ends before it starts, or mixes naive
            and timezone-aware times.
    """
    total = 0.0
    for session in sessions:
        if session.end_time is None:
            continue
        if (session.start_time.tzinfo is None) != (session.end_time.tzinfo is None):
            raise ValidationError(
                f"Session {session.id} mixes naive and timezone-aware times",
                details={
                    "session_id": session.id,
                    "start_time": session.start_time.isoformat(),
                    "end_time": session.end_time.isoformat(),
                },
            )
        duration = (session.end_time - session.start_time).total_seconds() / 60
        if duration < 0:
            raise ValidationError(
                f"Session {session.id} ends before it starts",
                details={
                    "session_id": session.id,
                    "start_time": session.start_time.isoformat(),
                    "end_time": session.end_time.isoformat(),
                },
            )
        total += duration
    return total


def summarize_session(session: StudySessionRecord) -> RecentActivity:
    """Recent activity entry for a flashcard session."""
    result = (
        ActivityResult.GOOD
        if session.correct_answers > session.incorrect_answers
        else ActivityResult.NEEDS_WORK
    )
    return RecentActivity(
        id=session.id,
        type=ActivityType.FLASHCARD,
        title=f"Flashcard Study ({session.cards_studied} cards)",
        result=result,
        score=f"{session.correct_answers}/{session.cards_studied}",
        time=session.start_time,
    )


def summarize_quiz_attempt(
    attempt: QuizAttemptRecord, good_ratio: float
) -> RecentActivity:
    """
    Recent activity entry for a quiz attempt.

    The attempt is GOOD when the share of correct answers reaches good_ratio.
    An attempt with no questions is never GOOD.
    """
    is_good = (
        attempt.total_questions > 0
        and attempt.correct_answers >= attempt.total_questions * good_ratio
    )
    return RecentActivity(
        id=attempt.id,
        type=ActivityType.QUIZ,
        title=attempt.quiz_title or "Quiz",
        result=ActivityResult.GOOD if is_good else ActivityResult.NEEDS_WORK,
        score=f"{attempt.correct_answers}/{attempt.total_questions}",
        time=attempt.completed_at,
    )


def merge_recent_activity(
    sessions: Iterable[StudySessionRecord],
    quiz_attempts: Iterable[QuizAttemptRecord],
    limit: int,
    good_ratio: float,
) -> list[RecentActivity]:
    """
    Combine sessions and quiz attempts into one feed, newest first.

    Naive timestamps are compared as local time, aware ones by their offset.
    """
    activities = [summarize_session(s) for s in sessions]
    activities.extend(summarize_quiz_attempt(a, good_ratio) for a in quiz_attempts)
    activities.sort(key=lambda activity: activity.time.timestamp(), reverse=True)
    return activities[:limit]


def average_quiz_score(quiz_attempts: list[QuizAttemptRecord]) -> int:
    """Mean quiz score rounded half up, 0 without attempts."""
    if not quiz_attempts:
        return 0
    return round_half_up(sum(a.score for a in quiz_attempts) / len(quiz_attempts))


def study_dates(sessions: Iterable[StudySessionRecord]) -> set[date]:
    """Calendar days (in each timestamp's own offset) with a session."""
    return {session.start_time.date() for session in sessions}


class DashboardService:
    """
    Service for assembling dashboard data.

    Stateless apart from its collaborators: a leveling engine and settings
    for goal, feed size and streak milestones.
    """

    def __init__(
        self,
        engine: LevelingEngine = default_engine,
        settings: Settings = default_settings,
    ):
        """
        Initialize the dashboard service.

        Args:
            engine: Leveling engine used for the progress section.
            settings: Application settings (dashboard defaults).
        """
        self.engine = engine
        self.settings = settings

    @staticmethod
    def _today(request: DashboardRequest) -> date:
        return request.as_of or date.today()

    def build_study_statistics(self, request: DashboardRequest) -> StudyStatistics:
        """
        Aggregate lifetime statistics for the leveling engine.

        Args:
            request: Study records for one learner.

        Returns:
            StudyStatistics across every session and quiz attempt.
        """
        sessions = request.sessions
        current_streak, _ = calculate_current_streak(
            study_dates(sessions), self._today(request)
        )

        return StudyStatistics(
            total_cards_studied=sum(s.cards_studied for s in sessions),
            total_correct_answers=sum(s.correct_answers for s in sessions),
            total_incorrect_answers=sum(s.incorrect_answers for s in sessions),
            current_streak=current_streak,
            total_quiz_attempts=len(request.quiz_attempts),
            average_quiz_score=average_quiz_score(request.quiz_attempts),
            total_study_time_minutes=calculate_study_minutes(sessions),
        )

    def build_streak_summary(self, request: DashboardRequest) -> StreakSummary:
        """Current/longest streak and milestones for the request's sessions."""
        dates = study_dates(request.sessions)
        today = self._today(request)

        if not dates:
            return StreakSummary(
                current_streak=0,
                longest_streak=0,
                next_milestone=min(self.settings.STREAK_MILESTONES, default=None),
            )

        current_streak, streak_start = calculate_current_streak(dates, today)
        longest_streak = calculate_longest_streak(dates)

        milestones = sorted(self.settings.STREAK_MILESTONES)
        reached = [m for m in milestones if longest_streak >= m]
        next_milestone = next((m for m in milestones if m > current_streak), None)

        return StreakSummary(
            current_streak=current_streak,
            longest_streak=longest_streak,
            streak_start=streak_start,
            last_study=max(dates),
            is_active_today=today in dates,
            milestones_reached=reached,
            next_milestone=next_milestone,
        )

    def build_dashboard(self, request: DashboardRequest) -> DashboardStats:
        """
        Build the full dashboard payload.

        Args:
            request: Study records, goal and reference date.

        Returns:
            DashboardStats with progress, daily goal, recent activity,
            quick stats and streak sections.

        Raises:
            ValidationError: If a session ends before it starts.
        """
        today = self._today(request)
        daily_goal = request.daily_goal or self.settings.DEFAULT_DAILY_GOAL

        stats = self.build_study_statistics(request)
        level = self.engine.compute(stats)

        todays_sessions = [s for s in request.sessions if s.start_time.date() == today]
        studied_today = sum(s.cards_studied for s in todays_sessions)
        accuracy = calculate_accuracy(
            sum(s.correct_answers for s in todays_sessions),
            sum(s.incorrect_answers for s in todays_sessions),
        )

        logger.info(
            f"Dashboard built: {len(request.sessions)} sessions, "
            f"{len(request.quiz_attempts)} quiz attempts, level={level.level.value}"
        )

        return DashboardStats(
            progress=ProgressSummary(
                **level.model_dump(),
                total_cards=request.total_cards,
                studied_today=studied_today,
                current_streak=stats.current_streak,
                accuracy=accuracy,
            ),
            daily_goal=DailyGoalProgress(
                studied=studied_today,
                goal=daily_goal,
                progress=min(studied_today / daily_goal * 100, 100.0),
            ),
            recent_activity=merge_recent_activity(
                request.sessions,
                request.quiz_attempts,
                limit=self.settings.RECENT_ACTIVITY_LIMIT,
                good_ratio=self.settings.QUIZ_GOOD_RATIO,
            ),
            quick_stats=QuickStats(
                total_study_time=round_half_up(stats.total_study_time_minutes),
                cards_mastered=stats.total_correct_answers,
                quizzes_taken=stats.total_quiz_attempts,
                average_score=round_half_up(stats.average_quiz_score),
            ),
            streak=self.build_streak_summary(request),
        )
