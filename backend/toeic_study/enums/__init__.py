"""
Centralized enum definitions for the application.

Usage:
    from toeic_study.enums import LevelName, ActivityType

    # Or import from the specific module
    from toeic_study.enums.learning import ActivityResult
"""

from toeic_study.enums.learning import (
    ActivityResult,
    ActivityType,
    LevelName,
)

__all__ = [
    "ActivityResult",
    "ActivityType",
    "LevelName",
]
