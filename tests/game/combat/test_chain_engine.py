"""
Unit tests for the chain engine.

Expected values are worked out by hand from the per-hit damage formula.
"""

import pytest

from orbcrunch.core.data.game_enums import DEFAULT_HIT_SEQUENCE, HitKind, UnitType
from orbcrunch.core.errors import InvalidHitKindError
from orbcrunch.game.combat.chain_engine import compute_hit_damage, run_chain, validate_sequence
from orbcrunch.game.combat.damage_accumulator import accumulate


@pytest.fixture
def guard(database):
    """DEX unit with a four-hit combo and 400 attack."""
    return database.get_unit(3)


class TestComputeHitDamage:
    """Test the per-hit formula for each accuracy."""

    def test_miss(self, guard):
        assert compute_hit_damage(guard, 400, HitKind.MISS, 0, 1.0) == 400

    def test_great(self, guard):
        # base 100 * 3 hits + floor(100 * 0.6) * 4
        assert compute_hit_damage(guard, 400, HitKind.GREAT, 0, 1.0) == 540

    def test_perfect(self, guard):
        # base 100 * 4 hits + floor(100 * 1.35) * 4
        assert compute_hit_damage(guard, 400, HitKind.PERFECT, 0, 1.0) == 940

    def test_defense_floors_base_damage_at_one(self, guard):
        # base max(1, 100 - 150) = 1; bonus 540 clears the threshold
        assert compute_hit_damage(guard, 400, HitKind.PERFECT, 150, 1.0) == 544

    def test_bonus_below_defense_is_one_point(self, guard):
        assert compute_hit_damage(guard, 400, HitKind.PERFECT, 1000, 1.0) == 5

    def test_bonus_ignores_global_attack_bonus(self, guard):
        # bonus floor(100 / 2 * 1.35) * 4 = 268
        assert compute_hit_damage(guard, 400, HitKind.PERFECT, 0, 2.0) == 668

    def test_invalid_hit_kind(self, guard):
        with pytest.raises(InvalidHitKindError):
            compute_hit_damage(guard, 400, "Perfect", 0, 1.0)  # type: ignore[arg-type]


class TestRunChain:
    """Test damage along a whole accuracy sequence."""

    def test_single_strong_unit(self, team, state):
        """Test one max-level STR unit with a doubled orb against DEX."""
        team.place(2, 1)
        team.set_level(2, 5)
        team.set_orb(2, 2.0)

        entries = accumulate(team, state, UnitType.DEX)
        result = run_chain(entries, DEFAULT_HIT_SEQUENCE, [], state)

        # contribution 500 * 2.0 * 2.0 = 2000; 2000 + floor(2000 * 1.35)
        assert result.total == 4700
        assert result.chain_multipliers == (1.0,)
        assert result.entries[0].original_slot == 2

    def test_second_unit_uses_incremented_chain(self, team, state):
        """Test the second unit is scaled by the chain after the first Perfect."""
        team.place(2, 2)
        team.place(3, 2)

        entries = accumulate(team, state, UnitType.INT)
        result = run_chain(entries, DEFAULT_HIT_SEQUENCE, [], state)

        assert result.chain_multipliers[0] == 1.0
        assert result.chain_multipliers[1] == pytest.approx(1.3)
        assert result.entries[0].damage == 100 + 135
        assert result.entries[1].damage == 130 + 175
        assert result.total == 540

    def test_miss_resets_chain(self, team, state):
        for slot in (2, 3, 4):
            team.place(slot, 2)
        sequence = (HitKind.PERFECT, HitKind.MISS, HitKind.PERFECT,
                    HitKind.PERFECT, HitKind.PERFECT, HitKind.PERFECT)

        result = run_chain(accumulate(team, state, UnitType.INT), sequence, [], state)

        assert result.chain_multipliers == pytest.approx((1.0, 1.3, 1.0))

    def test_chain_modifier_scales_increment(self, team, state):
        """Test a captain chain modifier scales the Perfect increment."""
        from orbcrunch.game.abilities.ability_compiler import compile_captain_ability

        captain = compile_captain_ability({"chainModifier": "2 if hit == 'Perfect' else 1"})
        team.place(2, 2)
        team.place(3, 2)

        result = run_chain(accumulate(team, state, UnitType.INT), DEFAULT_HIT_SEQUENCE, [captain], state)

        assert result.chain_multipliers[1] == pytest.approx(1.6)

    def test_failing_chain_modifier_is_neutral(self, team, state):
        """Test a chain modifier that fails at runtime leaves the increment unscaled."""
        from orbcrunch.game.abilities.ability_compiler import compile_captain_ability

        captain = compile_captain_ability({"chainModifier": "hit * 2"})
        team.place(2, 2)
        team.place(3, 2)

        result = run_chain(accumulate(team, state, UnitType.INT), DEFAULT_HIT_SEQUENCE, [captain], state)

        assert result.chain_multipliers[1] == pytest.approx(1.3)
        assert result.total == 540
        assert len(captain.drain_failures()) == 1
        assert captain.drain_failures() == []

    def test_empty_roster(self, state):
        result = run_chain([], DEFAULT_HIT_SEQUENCE, [], state)

        assert result.total == 0
        assert result.entries == ()

    def test_sequence_must_have_six_hits(self, state):
        with pytest.raises(ValueError):
            run_chain([], (HitKind.PERFECT,) * 5, [], state)

    def test_sequence_rejects_unknown_hits(self):
        with pytest.raises(InvalidHitKindError):
            validate_sequence(("Perfect",) * 6)  # type: ignore[arg-type]
