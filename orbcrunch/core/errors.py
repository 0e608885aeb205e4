"""Exceptions raised by the crunching engine."""

from typing import Any


class CrunchError(Exception):
    """Base exception for damage crunching errors."""
    pass


class InvalidHitKindError(CrunchError, ValueError):
    """Raised when something other than a known accuracy kind reaches the engine."""

    def __init__(self, value: Any):
        super().__init__(f"Invalid hit kind: {value!r}")
        self.value = value


class UnknownUnitError(CrunchError, KeyError):
    """Raised when a unit identifier is missing from the unit table."""

    def __init__(self, unit_id: Any):
        super().__init__(f"Unknown unit: {unit_id!r}")
        self.unit_id = unit_id

    def __str__(self) -> str:
        return str(self.args[0])


class InvalidSlotError(CrunchError, IndexError):
    """Raised when a roster slot index is out of range or unexpectedly vacant."""

    def __init__(self, slot: Any, reason: str = "out of range"):
        super().__init__(f"Roster slot {slot!r} {reason}")
        self.slot = slot


class FormulaError(CrunchError):
    """Raised when a captain formula cannot be compiled or evaluated."""
    pass
