"""Crunching session state.

This module defines the top-level :class:`CrunchSession` along with the two
focused pieces of state it bundles: :class:`TeamState` (the six roster slots
and the captain abilities derived from slots 0 and 1) and :class:`GlobalState`
(the roster-wide scalars). The session is owned by the caller and passed
explicitly to every engine call.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterator, Optional

from ..data.data_structures import RosterSlot
from ..data.game_enums import CAPTAIN_SLOTS, ROSTER_SIZE
from ..data.unit_database import UnitDatabase
from ..errors import InvalidSlotError

if TYPE_CHECKING:
    from ...game.abilities.effects import CaptainAbility
    from ..config.crunch_config import CrunchConfig


@dataclass
class GlobalState:
    """Roster-wide scalars used by the damage formulas."""

    global_attack_bonus: float = 1.0
    defense_threshold: int = 0
    current_hp: float = 1
    max_hp: float = 1
    perc_hp: float = 100.0
    crunching_enabled: bool = True

    def set_hp(self, current: float, maximum: float, percent: float) -> None:
        self.current_hp = current
        self.max_hp = maximum
        self.perc_hp = percent

    @classmethod
    def from_config(cls, config: "CrunchConfig") -> "GlobalState":
        return cls(
            global_attack_bonus=config.global_attack_bonus,
            defense_threshold=config.defense_threshold,
            current_hp=config.current_hp,
            max_hp=config.max_hp,
            perc_hp=config.perc_hp,
        )


@dataclass
class TeamState:
    """Six roster slots plus the captain abilities of slots 0 and 1.

    Captain abilities are derived state: every mutation touching a captain
    slot re-derives that slot's ability from the database.
    """

    database: UnitDatabase = field(default_factory=UnitDatabase)
    slots: list[Optional[RosterSlot]] = field(default_factory=lambda: [None] * ROSTER_SIZE)
    captain_abilities: list[Optional["CaptainAbility"]] = field(
        default_factory=lambda: [None] * len(CAPTAIN_SLOTS)
    )
    default_orb: float = 1.0

    def __post_init__(self):
        if len(self.slots) != ROSTER_SIZE:
            raise ValueError(f"A team has exactly {ROSTER_SIZE} slots, got {len(self.slots)}")

    @staticmethod
    def _check_slot(slot: int) -> None:
        if not isinstance(slot, int) or isinstance(slot, bool) or not 0 <= slot < ROSTER_SIZE:
            raise InvalidSlotError(slot)

    def _occupied(self, slot: int) -> RosterSlot:
        self._check_slot(slot)
        occupant = self.slots[slot]
        if occupant is None:
            raise InvalidSlotError(slot, "is empty")
        return occupant

    def _refresh_captain(self, slot: int) -> None:
        """Re-derive the captain ability of a captain slot from scratch."""
        from ...game.abilities.ability_compiler import derive_captain_ability

        self.captain_abilities[slot] = derive_captain_ability(self.database, self.slots[slot])

    # Mutations

    def place(self, slot: int, unit_id: int) -> RosterSlot:
        """Put a unit in ``slot`` at level 1 with the default orb."""
        self._check_slot(slot)
        occupant = RosterSlot(unit=self.database.get_unit(unit_id), level=1, orb=self.default_orb)
        self.slots[slot] = occupant
        if slot in CAPTAIN_SLOTS:
            self._refresh_captain(slot)
        return occupant

    def remove(self, slot: int) -> None:
        self._check_slot(slot)
        self.slots[slot] = None
        if slot in CAPTAIN_SLOTS:
            self.captain_abilities[slot] = None

    def swap(self, slot_a: int, slot_b: int) -> None:
        self._check_slot(slot_a)
        self._check_slot(slot_b)
        self.slots[slot_a], self.slots[slot_b] = self.slots[slot_b], self.slots[slot_a]
        for captain_slot in CAPTAIN_SLOTS:
            if captain_slot in (slot_a, slot_b):
                self._refresh_captain(captain_slot)

    def set_level(self, slot: int, level: int) -> None:
        self._occupied(slot).level = level

    def set_orb(self, slot: int, orb: float) -> None:
        self._occupied(slot).orb = orb

    # Queries

    def occupied(self) -> Iterator[tuple[int, RosterSlot]]:
        """Occupied slots in slot order as ``(slot_index, slot)`` pairs."""
        for index, occupant in enumerate(self.slots):
            if occupant is not None:
                yield index, occupant

    def captains(self) -> list["CaptainAbility"]:
        """Captain abilities present, in captain-slot order."""
        return [ability for ability in self.captain_abilities if ability is not None]

    def is_empty(self) -> bool:
        return all(occupant is None for occupant in self.slots)


@dataclass
class CrunchSession:
    """Team and global state threaded through every engine call."""

    team: TeamState = field(default_factory=TeamState)
    state: GlobalState = field(default_factory=GlobalState)

    @property
    def database(self) -> UnitDatabase:
        return self.team.database

    @classmethod
    def create(cls, database: UnitDatabase,
               config: Optional["CrunchConfig"] = None) -> "CrunchSession":
        """Fresh session over ``database``, seeded from ``config`` when given."""
        if config is None:
            return cls(team=TeamState(database=database), state=GlobalState())
        return cls(
            team=TeamState(database=database, default_orb=config.default_orb),
            state=GlobalState.from_config(config),
        )
