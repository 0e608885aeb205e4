"""
Crunching application orchestration.

This module wires the reference data, the session state, the event bus and
the managers together, delegating specific concerns to the managers.
"""

from typing import Optional, TypeVar

from ..core.config.crunch_config import CrunchConfig, load_config
from ..core.data.data_structures import CrunchResult, DetailsResult
from ..core.data.unit_database import UnitDatabase
from ..core.engine.session import CrunchSession
from ..core.events.event_manager import EventManager
from ..core.events.events import CrunchEvent, LogMessage, OrbMultiplierChanged
from .managers.crunch_manager import CrunchManager
from .managers.log_manager import LogManager
from .team_loader import TeamLoader

TManager = TypeVar("TManager")


class CrunchApp:
    """Owns one crunching session and the managers around it."""

    def __init__(self, database: UnitDatabase, config: Optional[CrunchConfig] = None):
        self.config = config or CrunchConfig()
        self.database = database
        self.session = CrunchSession.create(database, self.config)

        # Event system
        self.event_manager = EventManager(enable_debug_logging=self.config.debug_logging)

        # Managers - will be initialized in initialize()
        self._log_manager: Optional[LogManager] = None
        self._crunch_manager: Optional[CrunchManager] = None

    @classmethod
    def from_config_file(cls, config_path: Optional[str] = None) -> "CrunchApp":
        """Build an app from a config file, loading the reference tables it names."""
        config, warnings = load_config(config_path)
        database = UnitDatabase.load(config.units_path, config.captains_path)
        app = cls(database, config)
        app.initialize()
        for warning in warnings:
            app._emit_log(warning, category="DATA", level="WARNING")
        app._emit_log(
            f"Loaded {len(database.units)} units and {len(database.captains)} captain records",
            category="DATA",
        )
        app.event_manager.process_events()
        return app

    def _require_manager(self, manager: Optional[TManager], name: str) -> TManager:
        """Return the manager if initialized, otherwise raise a helpful error."""
        if manager is None:
            raise RuntimeError(f"{name} not initialized. Call initialize() first.")
        return manager

    @property
    def log_manager(self) -> LogManager:
        return self._require_manager(self._log_manager, "LogManager")

    @property
    def crunch_manager(self) -> CrunchManager:
        return self._require_manager(self._crunch_manager, "CrunchManager")

    def initialize(self) -> None:
        """Create the managers and hook them to the event bus."""
        self._log_manager = LogManager(
            event_manager=self.event_manager,
            max_messages=self.config.max_log_messages,
        )
        self.event_manager.set_debug_callback(self.log_manager.debug)
        self._crunch_manager = CrunchManager(self.session, self.event_manager)

    def _emit_log(self, message: str, category: str = "SYSTEM", level: str = "INFO") -> None:
        self.event_manager.publish(
            LogMessage(message=message, category=category, level=level, source="CrunchApp"),
            source="CrunchApp",
        )

    def _check_orb_choice(self, event: OrbMultiplierChanged) -> None:
        """Warn about orb multipliers outside the configured choices; they still apply."""
        if event.multiplier in self.config.orb_choices:
            return
        choices = ", ".join(f"{choice:g}" for choice in self.config.orb_choices)
        self._emit_log(
            f"Slot {event.slot} orb {event.multiplier:g} is not one of the configured choices ({choices})",
            category="INPUT",
            level="WARNING",
        )

    def dispatch(self, *events: CrunchEvent) -> Optional[CrunchResult]:
        """Publish input events, process them and return the latest estimate."""
        for event in events:
            if isinstance(event, OrbMultiplierChanged):
                self._check_orb_choice(event)
            self.event_manager.publish(event, source="CrunchApp")
        self.event_manager.process_events()
        return self.crunch_manager.latest_result

    def load_team(self, file_path: str) -> Optional[CrunchResult]:
        """Replay a team file as input events."""
        self._emit_log(f"Loading team file {file_path}", category="DATA")
        return self.dispatch(*TeamLoader.load_from_file(file_path))

    def details(self, element: str) -> DetailsResult:
        result = self.crunch_manager.request_details(element)
        self.event_manager.process_events()
        return result
