"""Event system for publisher-subscriber communication.

This package contains the complete event-driven architecture:
- event_manager.py: Publisher-subscriber event routing and coordination
- events.py: Event definitions for input mutations, results and logging
"""

from .event_manager import EventManager, EventPriority, QueuedEvent
from .events import (
    CrunchEvent,
    EventType,
    UnitPicked,
    UnitLevelChanged,
    UnitRemoved,
    UnitsSwapped,
    OrbMultiplierChanged,
    AttackBonusChanged,
    DefenseChanged,
    HpChanged,
    CrunchingToggled,
    DetailsRequested,
    NumbersCrunched,
    DetailsReady,
    LogMessage,
    DebugMessage,
    LogSaveRequested,
)

__all__ = [
    "EventManager",
    "EventPriority",
    "QueuedEvent",
    "CrunchEvent",
    "EventType",
    "UnitPicked",
    "UnitLevelChanged",
    "UnitRemoved",
    "UnitsSwapped",
    "OrbMultiplierChanged",
    "AttackBonusChanged",
    "DefenseChanged",
    "HpChanged",
    "CrunchingToggled",
    "DetailsRequested",
    "NumbersCrunched",
    "DetailsReady",
    "LogMessage",
    "DebugMessage",
    "LogSaveRequested",
]
