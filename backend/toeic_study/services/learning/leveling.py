"""
Leveling Engine

Turns accumulated study statistics into experience points (XP), a level tier
and progress through that tier.

Responsibilities:
- Weight each study counter into XP
- Resolve the current and next tier from the tier table
- Compute percent progress through the current tier

The engine is pure: no I/O, no mutable state. The tier table is an immutable
tuple validated once when an engine is constructed.

Usage:
    from toeic_study.services.learning.leveling import compute_level

    result = compute_level(stats)
    result.level, result.level_progress

    # Custom tier table
    engine = LevelingEngine(tiers=my_tiers)
    result = engine.compute(stats)
"""

import logging
import math
from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Sequence

from toeic_study.enums.learning import LevelName
from toeic_study.models.progress import (
    ExperienceBreakdown,
    LevelResult,
    StudyStatistics,
)

logger = logging.getLogger(__name__)

# XP weights
XP_PER_CARD = 10
XP_PER_CORRECT_ANSWER = 5
XP_PER_QUIZ_ATTEMPT = 50
XP_PER_STREAK_DAY = 25
MINUTES_PER_XP = 10


@dataclass(frozen=True)
class LevelTier:
    """A named, inclusive XP range. max_xp of None means no upper bound."""

    name: LevelName
    min_xp: int
    max_xp: Optional[int] = None

    @property
    def is_unbounded(self) -> bool:
        return self.max_xp is None

    def contains(self, xp: int) -> bool:
        return self.min_xp <= xp and (self.max_xp is None or xp <= self.max_xp)


LEVEL_TIERS: tuple[LevelTier, ...] = (
    LevelTier(LevelName.BEGINNER, 0, 4_999),
    LevelTier(LevelName.INTERMEDIATE, 5_000, 14_999),
    LevelTier(LevelName.ADVANCED, 15_000, 29_999),
    LevelTier(LevelName.EXPERT, 30_000, None),
)


class InvalidTierTableError(ValueError):
    """Raised when a tier table is empty, has gaps or overlaps, or is capped."""


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer with .5 going up.

    Python's round() uses banker's rounding (round(2.5) == 2); XP and
    percentages round 2.5 to 3.
    """
    return math.floor(value + 0.5)


def validate_tier_table(tiers: Sequence[LevelTier]) -> None:
    """
    Check that a tier table is usable for level resolution.

    Rules:
    - at least one tier, the first starting at 0 XP
    - each tier starts one XP after the previous one ends
    - every tier except the last has an upper bound; the last has none

    Raises:
        InvalidTierTableError: Describing the first rule broken.
    """
    if not tiers:
        raise InvalidTierTableError("Tier table is empty")

    if tiers[0].min_xp != 0:
        raise InvalidTierTableError(
            f"First tier '{tiers[0].name.value}' must start at 0 XP, not {tiers[0].min_xp}"
        )

    for previous, tier in zip(tiers, tiers[1:]):
        if previous.max_xp is None:
            raise InvalidTierTableError(
                f"Only the last tier may be unbounded, found '{previous.name.value}'"
            )
        if previous.max_xp < previous.min_xp:
            raise InvalidTierTableError(
                f"Tier '{previous.name.value}' ends before it starts"
            )
        if tier.min_xp != previous.max_xp + 1:
            raise InvalidTierTableError(
                f"Tier '{tier.name.value}' starts at {tier.min_xp}, "
                f"expected {previous.max_xp + 1}"
            )

    if tiers[-1].max_xp is not None:
        raise InvalidTierTableError(
            f"Last tier '{tiers[-1].name.value}' must be unbounded"
        )


def experience_breakdown(stats: StudyStatistics) -> ExperienceBreakdown:
    """
    Split XP into its weighted sources.

    quiz_score multiplies the average percentage by the attempt count, which
    approximates the sum of all quiz scores. It is rounded half up with exact
    fractions so arbitrarily large attempt counts cannot overflow a float.

    Args:
        stats: Normalized study statistics.

    Returns:
        ExperienceBreakdown whose total is the learner's XP.
    """
    return ExperienceBreakdown(
        cards=stats.total_cards_studied * XP_PER_CARD,
        correct_answers=stats.total_correct_answers * XP_PER_CORRECT_ANSWER,
        quiz_base=stats.total_quiz_attempts * XP_PER_QUIZ_ATTEMPT,
        quiz_score=(
            2 * Fraction(stats.average_quiz_score) * stats.total_quiz_attempts + 1
        )
        // 2,
        streak=stats.current_streak * XP_PER_STREAK_DAY,
        study_time=math.floor(stats.total_study_time_minutes / MINUTES_PER_XP),
    )


def calculate_experience(stats: StudyStatistics) -> int:
    """Total XP for the given statistics."""
    return experience_breakdown(stats).total


class LevelingEngine:
    """
    Resolves XP into levels against a fixed tier table.

    Instances hold no mutable state and can be shared freely between
    threads and requests.
    """

    def __init__(self, tiers: Sequence[LevelTier] = LEVEL_TIERS):
        """
        Initialize the engine.

        Args:
            tiers: Tier table in ascending XP order.

        Raises:
            InvalidTierTableError: If the table is not contiguous from 0 with
                an unbounded top tier.
        """
        validate_tier_table(tiers)
        self.tiers: tuple[LevelTier, ...] = tuple(tiers)

    @property
    def top_tier(self) -> LevelTier:
        return self.tiers[-1]

    def resolve_tier(self, xp: int) -> LevelTier:
        """First tier containing xp, falling back to the lowest tier."""
        for tier in self.tiers:
            if tier.contains(xp):
                return tier
        return self.tiers[0]

    def resolve_next_tier(self, xp: int) -> LevelTier:
        """First tier starting above xp, or the top tier once it is reached."""
        for tier in self.tiers:
            if tier.min_xp > xp:
                return tier
        return self.top_tier

    @staticmethod
    def level_progress(xp: int, tier: LevelTier) -> int:
        """
        Percent progress through a tier, 0-100.

        The top tier always reports 100. Uses integer arithmetic so the
        half-up rounding is exact.
        """
        if tier.is_unbounded:
            return 100

        span = tier.max_xp - tier.min_xp + 1
        earned = xp - tier.min_xp
        progress = (2 * earned * 100 + span) // (2 * span)
        return min(max(progress, 0), 100)

    def compute(self, stats: StudyStatistics) -> LevelResult:
        """
        Compute the level summary for a statistics snapshot.

        Args:
            stats: Study statistics (already normalized by the model).

        Returns:
            LevelResult with tier names, XP figures and progress.
        """
        xp = calculate_experience(stats)
        tier = self.resolve_tier(xp)
        next_tier = self.resolve_next_tier(xp)

        result = LevelResult(
            level=tier.name,
            experience=xp,
            next_level=next_tier.name,
            next_level_xp=next_tier.min_xp,
            current_level_xp=max(xp - tier.min_xp, 0),
            level_progress=self.level_progress(xp, tier),
        )
        logger.debug(
            f"Computed level {result.level.value} ({xp} XP, "
            f"{result.level_progress}% to {result.next_level.value})"
        )
        return result


default_engine = LevelingEngine()


def compute_level(stats: StudyStatistics) -> LevelResult:
    """Compute a LevelResult with the default tier table."""
    return default_engine.compute(stats)
