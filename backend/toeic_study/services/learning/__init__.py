"""
Learning System Services

Services for levels, experience and the learner dashboard.

Modules:
- leveling: XP calculation and tier resolution (pure)
- dashboard: Aggregation of study records into dashboard data

Usage:
    from toeic_study.services.learning import (
        DashboardService,
        LevelingEngine,
        compute_level,
    )
"""

from toeic_study.services.learning.leveling import (
    LEVEL_TIERS,
    InvalidTierTableError,
    LevelingEngine,
    LevelTier,
    calculate_experience,
    compute_level,
    experience_breakdown,
)
from toeic_study.services.learning.dashboard import DashboardService

__all__ = [
    # Leveling
    "LEVEL_TIERS",
    "InvalidTierTableError",
    "LevelingEngine",
    "LevelTier",
    "calculate_experience",
    "compute_level",
    "experience_breakdown",
    # Services
    "DashboardService",
]
