"""Unified data structures for the crunching engine.

This module provides clear definitions for the different data representations
used throughout the engine architecture.

Data Flow:
1. UnitTemplate (reference tables) -> RosterSlot (team state)
2. RosterSlot -> DamageEntry (per-unit contribution) -> ScenarioResult
3. ScenarioResult -> CrunchResult / DetailsResult (output events)

Each structure serves a specific architectural layer and should not be merged.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Optional

from .game_enums import ELEMENTAL_TYPES, HitKind, UnitType


@dataclass(frozen=True)
class UnitTemplate:
    """Static reference data for a single unit.

    Instances are read-only and shared by every roster slot holding the unit.
    Attack and HP grow linearly from level 1 to ``max_level``.
    """
    unit_id: int
    name: str
    type: UnitType
    min_atk: int
    max_atk: int
    min_hp: int
    max_hp: int
    max_level: int = 1
    combo: int = 1

    def __post_init__(self):
        if self.max_level < 1:
            raise ValueError(f"Unit {self.unit_id} has max_level {self.max_level}, must be >= 1")
        if self.combo < 1:
            raise ValueError(f"Unit {self.unit_id} has combo {self.combo}, must be positive")

    def _growth_steps(self) -> int:
        # Single-level units would divide by zero
        return 1 if self.max_level == 1 else self.max_level - 1

    def attack_at(self, level: int) -> int:
        """Attack of the unit at ``level``."""
        return math.floor(
            self.min_atk + (self.max_atk - self.min_atk) / self._growth_steps() * (level - 1)
        )

    def hp_at(self, level: int) -> int:
        """HP of the unit at ``level``."""
        return math.floor(
            self.min_hp + (self.max_hp - self.min_hp) / self._growth_steps() * (level - 1)
        )

    @classmethod
    def from_dict(cls, unit_id: int, data: dict[str, Any]) -> "UnitTemplate":
        """Create a template from a reference-table mapping.

        Args:
            unit_id: Identifier the unit is stored under
            data: Mapping with ``type``, ``minATK``, ``maxATK``, ``minHP``, ``maxHP``,
                ``maxLevel`` and ``combo`` keys (``name`` is optional)

        Raises:
            ValueError: If a required key is missing or has the wrong shape
        """
        try:
            return cls(
                unit_id=int(unit_id),
                name=str(data.get("name", f"Unit #{unit_id}")),
                type=UnitType.from_name(data["type"]),
                min_atk=int(data["minATK"]),
                max_atk=int(data["maxATK"]),
                min_hp=int(data["minHP"]),
                max_hp=int(data["maxHP"]),
                max_level=int(data.get("maxLevel", 1)),
                combo=int(data.get("combo", 1)),
            )
        except KeyError as e:
            raise ValueError(f"Unit {unit_id} is missing field {e}") from e
        except (TypeError, AttributeError) as e:
            raise ValueError(f"Unit {unit_id} has a malformed entry: {e}") from e


@dataclass
class RosterSlot:
    """An occupied roster slot: a unit plus the player's level and orb choices."""
    unit: UnitTemplate
    level: int = 1
    orb: float = 1.0

    @property
    def attack(self) -> int:
        return self.unit.attack_at(self.level)

    @property
    def hp(self) -> int:
        return self.unit.hp_at(self.level)


@dataclass(frozen=True)
class DamageEntry:
    """Damage contribution of one roster slot.

    ``damage`` holds the effective attack while the contribution is being built
    and the final hit damage once the chain has been applied.
    """
    slot: RosterSlot
    damage: float
    original_slot: int

    @property
    def unit(self) -> UnitTemplate:
        return self.slot.unit

    def with_damage(self, damage: float) -> "DamageEntry":
        return DamageEntry(slot=self.slot, damage=damage, original_slot=self.original_slot)


@dataclass(frozen=True)
class ScenarioResult:
    """Outcome of scoring one accuracy sequence."""
    sequence: tuple[HitKind, ...]
    total: int
    entries: tuple[DamageEntry, ...] = ()
    chain_multipliers: tuple[float, ...] = ()


@dataclass(frozen=True)
class DetailsResult:
    """Breakdown of the winning scenario for one elemental type."""
    modifiers: tuple[HitKind, ...]
    multipliers: tuple[float, ...]
    order: tuple[DamageEntry, ...]

    @classmethod
    def from_scenario(cls, scenario: ScenarioResult) -> "DetailsResult":
        return cls(
            modifiers=scenario.sequence,
            multipliers=scenario.chain_multipliers,
            order=scenario.entries,
        )

    def to_dict(self) -> dict[str, Any]:
        """Plain representation matching the ``detailsReady`` payload."""
        return {
            "modifiers": [kind.display_name for kind in self.modifiers],
            "multipliers": list(self.multipliers),
            "order": [
                (entry.unit.unit_id, entry.damage, entry.original_slot)
                for entry in self.order
            ],
        }


@dataclass(frozen=True)
class CrunchResult:
    """Consolidated damage estimate for every elemental type plus roster HP."""
    damage: dict[UnitType, int] = field(default_factory=dict)
    hp: float = 1

    def __getitem__(self, key: "str | UnitType") -> float:
        if isinstance(key, str) and key.upper() == "HP":
            return self.hp
        return self.damage[UnitType.from_name(key)]

    def best_type(self) -> Optional[UnitType]:
        """Elemental type with the highest estimate (first wins on ties)."""
        best: Optional[UnitType] = None
        for unit_type in ELEMENTAL_TYPES:
            if unit_type not in self.damage:
                continue
            if best is None or self.damage[unit_type] > self.damage[best]:
                best = unit_type
        return best

    def to_dict(self) -> dict[str, float]:
        """Plain representation matching the ``numbersCrunched`` payload."""
        result: dict[str, float] = {
            unit_type.value: self.damage.get(unit_type, 0) for unit_type in ELEMENTAL_TYPES
        }
        result["HP"] = self.hp
        return result
