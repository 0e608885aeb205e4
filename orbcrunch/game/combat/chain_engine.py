"""
Chain engine: per-hit damage along one accuracy sequence.

The effective damage of a unit depends on the accuracy of its final hit and on
the enemy's defense threshold. With ``attack`` the unit's contribution times
the current chain multiplier, ``combo`` its hit count and
``base = floor(max(1, attack / combo - defense))``:

    Miss:    base * combo
    Good:    base * (combo - 2) + bonus(0.3)
    Great:   base * (combo - 1) + bonus(0.6)
    Perfect: base * combo       + bonus(1.35)

where ``bonus(r) = floor(attack / combo / global_bonus * r) * combo``. The
accuracy bonus ignores the global attack bonus and bypasses the defense
threshold once it exceeds it; otherwise it is worth a single point.
"""
import math
from typing import TYPE_CHECKING, Sequence

from ...core.data.data_structures import DamageEntry, ScenarioResult, UnitTemplate
from ...core.data.game_enums import HIT_SEQUENCE_LENGTH, HitKind
from ...core.errors import InvalidHitKindError
from .multipliers import INITIAL_CHAIN_MULTIPLIER, hit_bonus_ratio, next_chain_multiplier

if TYPE_CHECKING:
    from ...core.engine.session import GlobalState
    from ..abilities.effects import CaptainAbility

# Hits of a unit's combo that deal base damage, by accuracy of the final hit
_BASE_HITS_OFFSET = {
    HitKind.MISS: 0,
    HitKind.GOOD: -2,
    HitKind.GREAT: -1,
    HitKind.PERFECT: 0,
}


def validate_sequence(sequence: Sequence[HitKind]) -> tuple[HitKind, ...]:
    """Check an accuracy sequence has six HitKind entries.

    Raises:
        InvalidHitKindError: If an entry is not a HitKind
        ValueError: If the sequence does not have exactly six entries
    """
    if len(sequence) != HIT_SEQUENCE_LENGTH:
        raise ValueError(f"Accuracy sequence must have {HIT_SEQUENCE_LENGTH} entries, got {len(sequence)}")
    for hit in sequence:
        if not isinstance(hit, HitKind):
            raise InvalidHitKindError(hit)
    return tuple(sequence)


def compute_hit_damage(unit: UnitTemplate, effective_attack: float, hit: HitKind,
                       defense_threshold: float, global_attack_bonus: float) -> int:
    """Damage a unit deals with the given effective attack and final-hit accuracy.

    Raises:
        InvalidHitKindError: If ``hit`` is not a HitKind
    """
    if not isinstance(hit, HitKind):
        raise InvalidHitKindError(hit)

    combo = unit.combo
    base_damage = math.floor(max(1, effective_attack / combo - defense_threshold))
    if hit == HitKind.MISS:
        return base_damage * combo

    bonus = math.floor(effective_attack / combo / global_attack_bonus * hit_bonus_ratio(hit)) * combo
    bonus_damage = bonus if bonus > defense_threshold else 1
    return base_damage * (combo + _BASE_HITS_OFFSET[hit]) + bonus_damage


def chain_modifier_product(captains: Sequence["CaptainAbility"], unit: UnitTemplate,
                           position: int, hit: HitKind, state: "GlobalState") -> float:
    """Product of every captain chain modifier for one hit."""
    product = 1.0
    for captain in captains:
        if captain.chain_modifier is None:
            continue
        product *= captain.chain_modifier(
            unit, position, state.current_hp, state.max_hp, state.perc_hp, hit
        )
    return product


def run_chain(entries: Sequence[DamageEntry], sequence: Sequence[HitKind],
              captains: Sequence["CaptainAbility"], state: "GlobalState") -> ScenarioResult:
    """Score one accuracy sequence over sorted contributions.

    Args:
        entries: Contributions sorted weakest first (at most six)
        sequence: Accuracy of each chain position
        captains: Captain abilities; only their chain modifiers are used here
        state: Global scalars (defense, attack bonus, HP snapshot)

    Returns:
        ScenarioResult with per-unit hit damage and the chain multiplier
        used going into each hit
    """
    sequence = validate_sequence(sequence)
    chain_multiplier = INITIAL_CHAIN_MULTIPLIER
    multipliers_used: list[float] = []
    results: list[DamageEntry] = []

    for position, entry in enumerate(entries):
        hit = sequence[position]
        effective_attack = entry.damage * chain_multiplier
        modifier = chain_modifier_product(captains, entry.unit, position, hit, state)
        damage = compute_hit_damage(
            entry.unit, effective_attack, hit,
            state.defense_threshold, state.global_attack_bonus,
        )

        multipliers_used.append(chain_multiplier)
        chain_multiplier = next_chain_multiplier(chain_multiplier, hit, modifier)
        results.append(entry.with_damage(damage))

    return ScenarioResult(
        sequence=sequence,
        total=sum(int(result.damage) for result in results),
        entries=tuple(results),
        chain_multipliers=tuple(multipliers_used),
    )
