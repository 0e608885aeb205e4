"""
Per-unit damage contributions for one elemental type.

The accumulator builds each occupied slot's starting contribution
(attack x orb x type x global bonus), applies the captains' unconditional
attack multipliers and orders the result from weakest to strongest, which
is the order units are chained in.
"""
from typing import TYPE_CHECKING, Optional, Sequence

import numpy as np

from ...core.data.data_structures import DamageEntry, RosterSlot
from ...core.data.game_enums import UnitType
from .multipliers import type_multiplier

if TYPE_CHECKING:
    from ...core.engine.session import GlobalState, TeamState
    from ..abilities.effects import AttackMultiplier, CaptainAbility


def orb_multiplier(slot: RosterSlot, captains: Sequence["CaptainAbility"]) -> float:
    """Orb multiplier of a slot, honouring the first captain orb override."""
    for captain in captains:
        if captain.orb is not None:
            return captain.orb(slot.unit, slot.orb)
    return slot.orb


def apply_attack_multiplier(entries: list[DamageEntry], effect: "AttackMultiplier",
                            state: "GlobalState") -> list[DamageEntry]:
    """Multiply every entry by a captain attack effect.

    The effect sees each entry's position in ``entries``.
    """
    if not entries:
        return []
    factors = np.array([
        effect(entry.unit, position, state.current_hp, state.max_hp, state.perc_hp)
        for position, entry in enumerate(entries)
    ], dtype=np.float64)
    damages = np.array([entry.damage for entry in entries], dtype=np.float64) * factors
    return [entry.with_damage(float(damage)) for entry, damage in zip(entries, damages)]


def base_contributions(team: "TeamState", state: "GlobalState", target: UnitType,
                       captains: Optional[Sequence["CaptainAbility"]] = None) -> list[DamageEntry]:
    """Starting contribution of every occupied slot, in slot order."""
    if captains is None:
        captains = team.captains()
    return [
        DamageEntry(
            slot=occupant,
            damage=occupant.attack
            * orb_multiplier(occupant, captains)
            * type_multiplier(occupant.unit.type, target)
            * state.global_attack_bonus,
            original_slot=index,
        )
        for index, occupant in team.occupied()
    ]


def sort_by_damage(entries: list[DamageEntry]) -> list[DamageEntry]:
    """Order entries weakest first, keeping slot order among equal values."""
    if not entries:
        return []
    order = np.argsort(np.array([entry.damage for entry in entries], dtype=np.float64), kind="stable")
    return [entries[int(i)] for i in order]


def accumulate(team: "TeamState", state: "GlobalState", target: UnitType,
               captains: Optional[Sequence["CaptainAbility"]] = None) -> list[DamageEntry]:
    """Sorted per-unit contributions against ``target`` before the chain is applied.

    Args:
        team: Roster and captain abilities
        state: Global scalars (attack bonus and HP snapshot)
        target: Elemental type of the hypothetical enemy
        captains: Captain abilities to apply; defaults to the team's captains

    Returns:
        DamageEntry list sorted from weakest to strongest
    """
    if captains is None:
        captains = team.captains()
    entries = base_contributions(team, state, target, captains)
    for captain in captains:
        if captain.atk is None:
            continue
        entries = apply_attack_multiplier(entries, captain.atk, state)
    return sort_by_damage(entries)
