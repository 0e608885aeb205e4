"""Centralized crunching enums and constants.

This module contains all core enums that are used across multiple modules,
eliminating duplication and providing a single source of truth.
"""

from enum import Enum

from ..errors import InvalidHitKindError


class UnitType(Enum):
    """Elemental types a unit (or an enemy) can have."""
    STR = "STR"
    QCK = "QCK"
    DEX = "DEX"
    PSY = "PSY"
    INT = "INT"

    @classmethod
    def from_name(cls, name: "str | UnitType") -> "UnitType":
        """Parse an elemental type name, ignoring case."""
        if isinstance(name, UnitType):
            return name
        try:
            return cls(str(name).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown elemental type: {name!r}") from None


class HitKind(Enum):
    """Accuracy outcome of a single hit in the combo chain."""
    MISS = "Miss"
    GOOD = "Good"
    GREAT = "Great"
    PERFECT = "Perfect"

    @property
    def display_name(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, name: "str | HitKind") -> "HitKind":
        """Parse an accuracy name such as ``"Perfect"`` (case-insensitive)."""
        if isinstance(name, HitKind):
            return name
        if isinstance(name, str):
            for kind in cls:
                if kind.value.lower() == name.strip().lower():
                    return kind
        raise InvalidHitKindError(name)


class Capability(Enum):
    """Keys of a raw captain ability record."""
    ATK = "atk"
    HIT_ATK = "hitAtk"
    HIT_MODIFIERS = "hitModifiers"
    CHAIN_MODIFIER = "chainModifier"
    HP = "hp"
    ORB = "orb"


# Roster layout
ROSTER_SIZE = 6
CAPTAIN_SLOTS = (0, 1)
HIT_SEQUENCE_LENGTH = 6

# Output order of the consolidated result
ELEMENTAL_TYPES = (
    UnitType.STR,
    UnitType.QCK,
    UnitType.DEX,
    UnitType.PSY,
    UnitType.INT,
)

DEFAULT_HIT_SEQUENCE = (HitKind.PERFECT,) * HIT_SEQUENCE_LENGTH
