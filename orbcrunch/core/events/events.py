"""Crunching session events.

This module defines every event exchanged between the input layer and the
crunching managers.

Event Design Principles:
- Events are immutable dataclasses
- Input events describe a single mutation of the team or global state
- Output events carry the engine's result objects, not display strings
- Events use proper enums instead of magic strings where the engine owns the vocabulary
"""

from abc import ABC
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Optional

from ..data.data_structures import CrunchResult, DetailsResult


class EventType(Enum):
    """Types of events that managers can subscribe to."""
    # Roster Events
    UNIT_PICKED = auto()
    UNIT_LEVEL_CHANGED = auto()
    UNIT_REMOVED = auto()
    UNITS_SWAPPED = auto()
    ORB_MULTIPLIER_CHANGED = auto()

    # Global State Events
    ATTACK_BONUS_CHANGED = auto()
    DEFENSE_CHANGED = auto()
    HP_CHANGED = auto()
    CRUNCHING_TOGGLED = auto()

    # Query Events
    DETAILS_REQUESTED = auto()

    # Result Events
    NUMBERS_CRUNCHED = auto()
    DETAILS_READY = auto()

    # Logging Events
    LOG_MESSAGE = auto()
    DEBUG_MESSAGE = auto()
    LOG_SAVE_REQUESTED = auto()


@dataclass(frozen=True)
class CrunchEvent(ABC):
    """Base class for all crunching events."""
    event_type: EventType = field(init=False)


@dataclass(frozen=True)
class UnitPicked(CrunchEvent):
    """Event emitted when a unit is placed in a roster slot."""
    slot: int
    unit_id: int

    def __post_init__(self):
        # Set event_type since dataclass frozen=True prevents normal assignment
        object.__setattr__(self, 'event_type', EventType.UNIT_PICKED)


@dataclass(frozen=True)
class UnitLevelChanged(CrunchEvent):
    """Event emitted when the level of a slotted unit changes."""
    slot: int
    level: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_LEVEL_CHANGED)


@dataclass(frozen=True)
class UnitRemoved(CrunchEvent):
    """Event emitted when a unit is taken out of its slot."""
    slot: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNIT_REMOVED)


@dataclass(frozen=True)
class UnitsSwapped(CrunchEvent):
    """Event emitted when two slots exchange their occupants (drag and drop)."""
    slot_a: int
    slot_b: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.UNITS_SWAPPED)


@dataclass(frozen=True)
class OrbMultiplierChanged(CrunchEvent):
    """Event emitted when the orb assigned to a slot changes."""
    slot: int
    multiplier: float

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ORB_MULTIPLIER_CHANGED)


@dataclass(frozen=True)
class AttackBonusChanged(CrunchEvent):
    """Event emitted when the roster-wide attack bonus changes."""
    value: float

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.ATTACK_BONUS_CHANGED)


@dataclass(frozen=True)
class DefenseChanged(CrunchEvent):
    """Event emitted when the enemy defense threshold changes."""
    value: int

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEFENSE_CHANGED)


@dataclass(frozen=True)
class HpChanged(CrunchEvent):
    """Event emitted when the HP snapshot used by conditional captains changes."""
    current: float
    maximum: float
    percent: float

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.HP_CHANGED)


@dataclass(frozen=True)
class CrunchingToggled(CrunchEvent):
    """Event emitted when crunching is suspended or resumed."""
    enabled: bool

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.CRUNCHING_TOGGLED)


@dataclass(frozen=True)
class DetailsRequested(CrunchEvent):
    """Event emitted when the breakdown for one elemental type is requested."""
    element: str

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DETAILS_REQUESTED)


@dataclass(frozen=True)
class NumbersCrunched(CrunchEvent):
    """Event emitted after every recompute with the consolidated result."""
    result: CrunchResult

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.NUMBERS_CRUNCHED)


@dataclass(frozen=True)
class DetailsReady(CrunchEvent):
    """Event emitted in response to a details request."""
    element: str
    details: DetailsResult

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DETAILS_READY)


@dataclass(frozen=True)
class LogMessage(CrunchEvent):
    """Event emitted when a log message is created."""
    message: str
    category: str = "SYSTEM"
    level: str = "INFO"
    source: str = "unknown"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_MESSAGE)


@dataclass(frozen=True)
class DebugMessage(CrunchEvent):
    """Event emitted for debug-specific messages."""
    message: str
    source: str
    context: Optional[dict] = None

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.DEBUG_MESSAGE)


@dataclass(frozen=True)
class LogSaveRequested(CrunchEvent):
    """Event emitted when the log buffer should be written to disk."""
    directory: str = "logs"

    def __post_init__(self):
        object.__setattr__(self, 'event_type', EventType.LOG_SAVE_REQUESTED)
