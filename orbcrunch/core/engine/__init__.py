"""Session state for the crunching engine."""

from .session import CrunchSession, GlobalState, TeamState

__all__ = [
    "CrunchSession",
    "GlobalState",
    "TeamState",
]
