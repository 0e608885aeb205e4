"""
Unit tests for the static damage multipliers.
"""

import itertools

import pytest

from orbcrunch.core.data.game_enums import HitKind, UnitType
from orbcrunch.core.errors import InvalidHitKindError
from orbcrunch.game.combat.multipliers import (
    INITIAL_CHAIN_MULTIPLIER,
    chain_increment,
    hit_bonus_ratio,
    legacy_bonus_multiplier,
    next_chain_multiplier,
    type_multiplier,
)

TRIANGLE = (UnitType.STR, UnitType.QCK, UnitType.DEX)


class TestTypeMultiplier:
    """Test elemental effectiveness."""

    @pytest.mark.parametrize("attacker,enemy,expected", [
        (UnitType.STR, UnitType.DEX, 2.0),
        (UnitType.STR, UnitType.QCK, 0.5),
        (UnitType.QCK, UnitType.STR, 2.0),
        (UnitType.QCK, UnitType.DEX, 0.5),
        (UnitType.DEX, UnitType.QCK, 2.0),
        (UnitType.DEX, UnitType.STR, 0.5),
        (UnitType.INT, UnitType.PSY, 2.0),
        (UnitType.PSY, UnitType.INT, 2.0),
        (UnitType.STR, UnitType.STR, 1.0),
        (UnitType.INT, UnitType.STR, 1.0),
        (UnitType.DEX, UnitType.PSY, 1.0),
    ])
    def test_matchups(self, attacker, enemy, expected):
        assert type_multiplier(attacker, enemy) == expected

    def test_triangle_pairs_are_reciprocal(self):
        """Test STR/QCK/DEX matchups cancel out in both directions."""
        for a, b in itertools.permutations(TRIANGLE, 2):
            assert type_multiplier(a, b) * type_multiplier(b, a) == 1.0
            assert type_multiplier(a, b) != type_multiplier(b, a)

    def test_int_psy_is_symmetric(self):
        assert type_multiplier(UnitType.INT, UnitType.PSY) == type_multiplier(UnitType.PSY, UnitType.INT) == 2.0


class TestChainMultiplier:
    """Test chain progression."""

    def test_perfect_increments(self):
        assert next_chain_multiplier(1.0, HitKind.PERFECT) == pytest.approx(1.3)

    def test_great_increments_with_modifier(self):
        assert next_chain_multiplier(1.0, HitKind.GREAT, modifier=2.0) == pytest.approx(1.2)

    def test_good_keeps_multiplier(self):
        assert next_chain_multiplier(1.6, HitKind.GOOD, modifier=5.0) == 1.6

    @pytest.mark.parametrize("current", [1.0, 1.3, 2.5, 7.0])
    def test_miss_resets(self, current):
        """Test a Miss resets the chain to exactly 1.0."""
        assert next_chain_multiplier(current, HitKind.MISS, modifier=3.0) == INITIAL_CHAIN_MULTIPLIER == 1.0

    def test_chain_increment(self):
        assert chain_increment(HitKind.PERFECT) == 0.3
        assert chain_increment(HitKind.GOOD) == 0.0
        assert chain_increment(HitKind.MISS) is None

    def test_invalid_hit_kind(self):
        with pytest.raises(InvalidHitKindError):
            next_chain_multiplier(1.0, "Perfect")  # type: ignore[arg-type]


class TestHitBonus:
    """Test accuracy bonus ratios."""

    def test_ratios(self):
        assert hit_bonus_ratio(HitKind.GOOD) == 0.3
        assert hit_bonus_ratio(HitKind.GREAT) == 0.6
        assert hit_bonus_ratio(HitKind.PERFECT) == 1.35
        assert hit_bonus_ratio(HitKind.MISS) == 0.0

    def test_legacy_table_is_available(self):
        assert legacy_bonus_multiplier(HitKind.PERFECT) == 1.9
        assert legacy_bonus_multiplier(HitKind.MISS) == 1.0
