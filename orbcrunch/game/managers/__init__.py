"""Event-driven managers.

- crunch_manager.py: Applies input events to the session and publishes results
- log_manager.py: Collects log events into a filtered, bounded buffer
"""

from .crunch_manager import CrunchManager
from .log_manager import LogCategory, LogEntry, LogLevel, LogManager

__all__ = [
    "CrunchManager",
    "LogCategory",
    "LogEntry",
    "LogLevel",
    "LogManager",
]
