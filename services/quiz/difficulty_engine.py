"""
Streak-based Difficulty Engine

Moves a learner between the four difficulty tiers from their recent answers:

1. Three correct answers in a row promote one tier (Extreme stays Extreme)
2. Two wrong answers in a row demote one tier (Easy stays Easy)
3. Anything else keeps the current tier

Promotion is checked before demotion. Only the trailing window of the history
is inspected; the caller owns the full history.
"""

import logging
from typing import Any, Sequence

from models.quiz import DifficultyTier

logger = logging.getLogger(__name__)


class DifficultyEngine:
    """
    Difficulty Engine.

    Pure, stateless tier transitions over an answer history.
    """

    PROMOTE_STREAK = 3  # Trailing correct answers needed to move up
    DEMOTE_STREAK = 2  # Trailing wrong answers needed to move down
    FALLBACK_TIER = DifficultyTier.MEDIUM

    @classmethod
    def promote(cls, tier: DifficultyTier) -> DifficultyTier:
        """Advance one tier, clamped at the hardest."""
        levels = DifficultyTier.ordered()
        return levels[min(tier.rank + 1, len(levels) - 1)]

    @classmethod
    def demote(cls, tier: DifficultyTier) -> DifficultyTier:
        """Drop one tier, clamped at the easiest."""
        levels = DifficultyTier.ordered()
        return levels[max(tier.rank - 1, 0)]

    @classmethod
    def next_tier(
        cls,
        history: Sequence[bool] | None,
        current_tier: Any,
    ) -> DifficultyTier:
        """
        Calculate the tier for the next question.

        Args:
            history: Answer results, oldest to newest (True = correct)
            current_tier: Tier of the previous question. Unrecognized values
                resolve to MEDIUM without looking at the history.

        Returns:
            The tier to use next
        """
        if not DifficultyTier.is_valid(current_tier):
            logger.debug(f"[DifficultyEngine] Unknown tier {current_tier!r}, using {cls.FALLBACK_TIER.value}")
            return cls.FALLBACK_TIER

        tier = DifficultyTier(current_tier)
        history = list(history or [])

        if len(history) >= cls.PROMOTE_STREAK:
            if all(history[-cls.PROMOTE_STREAK:]):
                promoted = cls.promote(tier)
                logger.debug(f"[DifficultyEngine] Promote {tier.value} -> {promoted.value}")
                return promoted

        if len(history) >= cls.DEMOTE_STREAK:
            if not any(history[-cls.DEMOTE_STREAK:]):
                demoted = cls.demote(tier)
                logger.debug(f"[DifficultyEngine] Demote {tier.value} -> {demoted.value}")
                return demoted

        return tier


def next_tier(history: Sequence[bool] | None, current_tier: Any) -> DifficultyTier:
    """Module-level shortcut for DifficultyEngine.next_tier."""
    return DifficultyEngine.next_tier(history, current_tier)


# Convenience alias
difficulty_engine = DifficultyEngine
