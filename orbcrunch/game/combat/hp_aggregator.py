"""Roster HP total with captain HP multipliers."""
from typing import TYPE_CHECKING, Optional, Sequence

from ...core.data.data_structures import RosterSlot

if TYPE_CHECKING:
    from ...core.engine.session import TeamState
    from ..abilities.effects import CaptainAbility


def unit_hp(slot: RosterSlot, captains: Sequence["CaptainAbility"]) -> float:
    """HP a slot contributes after every captain HP multiplier."""
    hp: float = slot.hp
    for captain in captains:
        if captain.hp is not None:
            hp *= captain.hp(slot.unit)
    return hp


def total_hp(team: "TeamState", captains: Optional[Sequence["CaptainAbility"]] = None) -> float:
    """Sum of roster HP, never below 1 (an empty roster reports 1)."""
    if captains is None:
        captains = team.captains()
    total: float = 0
    for _, occupant in team.occupied():
        total += unit_hp(occupant, captains)
    return max(1, total)
