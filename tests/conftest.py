"""
Basic test fixtures for the orbcrunch test suite.

Provides a small in-memory unit table, a captain table covering every
capability, and fresh sessions built on top of them.
"""

import sys
import os
import pytest

# Add the project root to the Python path
project_root = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, project_root)

from orbcrunch.core.data.unit_database import UnitDatabase
from orbcrunch.core.engine.session import CrunchSession
from orbcrunch.core.events.event_manager import EventManager


UNIT_TABLE = {
    1: {"name": "Striker", "type": "STR", "combo": 1, "maxLevel": 5,
        "minATK": 100, "maxATK": 500, "minHP": 200, "maxHP": 600},
    2: {"name": "Twin", "type": "QCK", "combo": 1, "maxLevel": 1,
        "minATK": 100, "maxATK": 100, "minHP": 50, "maxHP": 50},
    3: {"name": "Guard", "type": "DEX", "combo": 4, "maxLevel": 10,
        "minATK": 400, "maxATK": 400, "minHP": 1000, "maxHP": 1000},
    4: {"name": "Patient Captain", "type": "INT", "combo": 4, "maxLevel": 1,
        "minATK": 400, "maxATK": 400, "minHP": 300, "maxHP": 300},
    5: {"name": "Orb Captain", "type": "PSY", "combo": 1, "maxLevel": 1,
        "minATK": 100, "maxATK": 100, "minHP": 100, "maxHP": 100},
    6: {"name": "Second Orb Captain", "type": "PSY", "combo": 1, "maxLevel": 1,
        "minATK": 100, "maxATK": 100, "minHP": 100, "maxHP": 100},
    7: {"name": "Broken Captain", "type": "STR", "combo": 1, "maxLevel": 1,
        "minATK": 100, "maxATK": 100, "minHP": 100, "maxHP": 100},
}

# Keyed by unit identifier + 1
CAPTAIN_TABLE = {
    2: {"atk": "2 if unit.type == 'STR' else 1", "hp": 1.5},
    5: {"hitModifiers": ["Good"] * 6, "hitAtk": 1.5},
    6: {"orb": 3},
    7: {"orb": 0.25},
    8: {"atk": "unit.__class__", "hp": 2},
}


@pytest.fixture
def event_manager():
    """Create an event manager for testing."""
    return EventManager(enable_debug_logging=False)


@pytest.fixture
def database():
    """Create a unit database from the in-memory tables."""
    return UnitDatabase.from_dicts(UNIT_TABLE, CAPTAIN_TABLE)


@pytest.fixture
def session(database):
    """Create a fresh crunching session with default global state."""
    return CrunchSession.create(database)


@pytest.fixture
def team(session):
    """The session's (empty) team."""
    return session.team


@pytest.fixture
def state(session):
    """The session's global state."""
    return session.state


@pytest.fixture
def striker(database):
    """STR unit with linear growth from 100 to 500 attack over five levels."""
    return database.get_unit(1)


@pytest.fixture
def make_session():
    """Factory for sessions over the unit table with a custom captain table."""
    def _make(captains):
        return CrunchSession.create(UnitDatabase.from_dicts(UNIT_TABLE, captains))
    return _make
