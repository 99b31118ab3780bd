"""Tests for the streak-based Difficulty Engine."""

import pytest

from models.quiz import DifficultyTier
from services.quiz.difficulty_engine import DifficultyEngine, next_tier

ALL_TIERS = list(DifficultyTier)


class TestTierOrdering:
    """Test cases for DifficultyTier."""

    def test_tiers_are_ordered_by_difficulty(self):
        """Test that tiers compare from Easy up to Extreme."""
        assert DifficultyTier.EASY < DifficultyTier.MEDIUM < DifficultyTier.HARD < DifficultyTier.EXTREME
        assert max(ALL_TIERS) == DifficultyTier.EXTREME
        assert min(ALL_TIERS) == DifficultyTier.EASY

    def test_parse_normalizes_unknown_values(self):
        """Test that unknown tier values become Medium."""
        assert DifficultyTier.parse("Hard") == DifficultyTier.HARD
        assert DifficultyTier.parse(DifficultyTier.EASY) == DifficultyTier.EASY
        assert DifficultyTier.parse("hard") == DifficultyTier.MEDIUM
        assert DifficultyTier.parse("Impossible") == DifficultyTier.MEDIUM
        assert DifficultyTier.parse(None) == DifficultyTier.MEDIUM
        assert DifficultyTier.parse(["Easy"]) == DifficultyTier.MEDIUM


class TestDifficultyEngine:
    """Test cases for tier transitions."""

    @pytest.mark.parametrize("tier", ALL_TIERS)
    def test_three_correct_promotes(self, tier):
        """Test that a trailing run of three correct answers promotes one tier."""
        expected = DifficultyEngine.promote(tier)
        assert next_tier([True, True, True], tier) == expected
        assert next_tier([False, False, True, True, True], tier) == expected

    def test_promotion_clamps_at_extreme(self):
        """Test that Extreme stays Extreme."""
        assert next_tier([True, True, True], DifficultyTier.EXTREME) == DifficultyTier.EXTREME
        assert next_tier([True, True, True], DifficultyTier.HARD) == DifficultyTier.EXTREME

    @pytest.mark.parametrize("tier", ALL_TIERS)
    def test_two_wrong_demotes(self, tier):
        """Test that a trailing run of two wrong answers demotes one tier."""
        expected = DifficultyEngine.demote(tier)
        assert next_tier([False, False], tier) == expected
        assert next_tier([True, True, True, False, False], tier) == expected

    def test_demotion_clamps_at_easy(self):
        """Test that Easy stays Easy."""
        assert next_tier([False, False], DifficultyTier.EASY) == DifficultyTier.EASY
        assert next_tier([False, False], DifficultyTier.MEDIUM) == DifficultyTier.EASY

    @pytest.mark.parametrize("history", [
        [],
        [True],
        [False],
        [True, True],
        [True, False],
        [False, True],
        [True, False, True],
        [False, True, True],
        [True, True, False],
    ])
    @pytest.mark.parametrize("tier", ALL_TIERS)
    def test_no_streak_keeps_tier(self, history, tier):
        """Test that histories without a streak leave the tier unchanged."""
        assert next_tier(history, tier) == tier

    def test_only_trailing_window_counts(self):
        """Test that older streaks are ignored."""
        history = [True, True, True, True, False]
        assert next_tier(history, DifficultyTier.MEDIUM) == DifficultyTier.MEDIUM

        history = [False, False, False, True]
        assert next_tier(history, DifficultyTier.MEDIUM) == DifficultyTier.MEDIUM

    def test_invalid_tier_returns_medium(self):
        """Test that an unrecognized current tier resolves to Medium."""
        assert next_tier([True, True, True], "Legendary") == DifficultyTier.MEDIUM
        assert next_tier([False, False], "easy") == DifficultyTier.MEDIUM
        assert next_tier([], None) == DifficultyTier.MEDIUM

    def test_tier_strings_accepted(self):
        """Test that valid tier strings work like enum members."""
        assert next_tier([True, True, True], "Easy") == DifficultyTier.MEDIUM
        assert next_tier(None, "Hard") == DifficultyTier.HARD

    def test_history_is_not_mutated(self):
        """Test that the caller's history is left untouched."""
        history = [True, True, True]
        next_tier(history, DifficultyTier.EASY)
        assert history == [True, True, True]
