"""Core data structures and definitions.

This package contains fundamental data types and reference tables:
- data_structures.py: UnitTemplate, RosterSlot and the engine's result types
- game_enums.py: Centralized enums for elemental types, hit kinds and capabilities
- unit_database.py: YAML-backed unit and captain ability tables
"""

from .data_structures import (
    CrunchResult,
    DamageEntry,
    DetailsResult,
    RosterSlot,
    ScenarioResult,
    UnitTemplate,
)
from .game_enums import (
    CAPTAIN_SLOTS,
    DEFAULT_HIT_SEQUENCE,
    ELEMENTAL_TYPES,
    HIT_SEQUENCE_LENGTH,
    ROSTER_SIZE,
    Capability,
    HitKind,
    UnitType,
)
from .unit_database import UnitDatabase, resolve_data_path

__all__ = [
    "CrunchResult",
    "DamageEntry",
    "DetailsResult",
    "RosterSlot",
    "ScenarioResult",
    "UnitTemplate",
    "CAPTAIN_SLOTS",
    "DEFAULT_HIT_SEQUENCE",
    "ELEMENTAL_TYPES",
    "HIT_SEQUENCE_LENGTH",
    "ROSTER_SIZE",
    "Capability",
    "HitKind",
    "UnitType",
    "UnitDatabase",
    "resolve_data_path",
]
