"""
Scenario search over candidate accuracy sequences.

Captains with hit modifiers only unlock their conditional attack bonus when
the team actually lands their hit pattern, so every elemental type is scored
for several sequences:

- no captains with hit modifiers: the all-Perfect default only
- one captain with hit modifiers: the default plus that captain's pattern
- two captains with hit modifiers: the default plus both patterns

A captain's conditional bonus applies to any scenario whose sequence equals
its own pattern, including the other captain's scenario. The best total wins;
on ties the earliest candidate is kept.
"""
from typing import TYPE_CHECKING, Sequence

from ...core.data.data_structures import DamageEntry, ScenarioResult
from ...core.data.game_enums import DEFAULT_HIT_SEQUENCE, HitKind
from .chain_engine import run_chain
from .damage_accumulator import apply_attack_multiplier

if TYPE_CHECKING:
    from ...core.engine.session import GlobalState
    from ..abilities.effects import CaptainAbility


def candidate_sequences(captains: Sequence["CaptainAbility"]) -> list[tuple[HitKind, ...]]:
    """Default sequence followed by each captain's hit pattern, in captain order."""
    candidates = [DEFAULT_HIT_SEQUENCE]
    for captain in captains:
        if captain.hit_modifiers is not None:
            candidates.append(captain.hit_modifiers)
    return candidates


def apply_conditional_bonuses(entries: list[DamageEntry], sequence: tuple[HitKind, ...],
                              captains: Sequence["CaptainAbility"],
                              state: "GlobalState") -> list[DamageEntry]:
    """Apply the hit-pattern attack bonus of every captain whose pattern is ``sequence``."""
    for captain in captains:
        if captain.hit_atk is None or captain.hit_modifiers is None:
            continue
        if tuple(captain.hit_modifiers) != tuple(sequence):
            continue
        entries = apply_attack_multiplier(entries, captain.hit_atk, state)
    return entries


def score_scenarios(entries: list[DamageEntry], captains: Sequence["CaptainAbility"],
                    state: "GlobalState") -> list[ScenarioResult]:
    """Score every candidate sequence, in enumeration order."""
    return [
        run_chain(
            apply_conditional_bonuses(entries, sequence, captains, state),
            sequence, captains, state,
        )
        for sequence in candidate_sequences(captains)
    ]


def select_best(scenarios: Sequence[ScenarioResult]) -> ScenarioResult:
    """Scenario with the strictly greatest total; earliest wins ties."""
    if not scenarios:
        raise ValueError("No scenarios to select from")
    best = scenarios[0]
    for scenario in scenarios[1:]:
        if scenario.total > best.total:
            best = scenario
    return best


def search(entries: list[DamageEntry], captains: Sequence["CaptainAbility"],
           state: "GlobalState") -> ScenarioResult:
    """Best scenario for sorted contributions.

    Args:
        entries: Output of the damage accumulator (sorted weakest first)
        captains: Captain abilities in captain-slot order
        state: Global scalars

    Returns:
        The winning ScenarioResult
    """
    return select_best(score_scenarios(entries, captains, state))
