"""
Learning System Enums

Defines enums for level tiers and the dashboard activity feed.
"""

from enum import Enum


class LevelName(str, Enum):
    """
    Level tiers, in ascending XP order.

    XP ranges live in the tier table (services/learning/leveling.py):
    - BEGINNER: 0 - 4,999
    - INTERMEDIATE: 5,000 - 14,999
    - ADVANCED: 15,000 - 29,999
    - EXPERT: 30,000 and up
    """

    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class ActivityType(str, Enum):
    """
    Source of an item in the recent activity feed.
    """

    FLASHCARD = "flashcard"  # Flashcard study session
    QUIZ = "quiz"  # Completed quiz attempt


class ActivityResult(str, Enum):
    """
    Coarse outcome shown next to a recent activity.

    - Flashcard session: GOOD when correct answers outnumber incorrect ones
    - Quiz attempt: GOOD when the score reaches QUIZ_GOOD_RATIO of questions
    """

    GOOD = "good"
    NEEDS_WORK = "needs_work"
