"""Crunch manager for the event-driven damage estimate.

This module provides the CrunchManager that turns input events into session
mutations and keeps the consolidated estimate up to date.

Design Principles:
- Every mutation triggers a full, synchronous recompute (the roster is tiny)
- Captain abilities are re-derived by the session whenever a captain slot changes
- Suspending crunching batches mutations; resuming forces exactly one recompute
- Results are published as events and also returned by synchronous queries
"""

from typing import TYPE_CHECKING, Callable, Optional

from ...core.data.data_structures import CrunchResult, DetailsResult
from ...core.data.game_enums import CAPTAIN_SLOTS
from ...core.errors import CrunchError
from ...core.events.events import (
    AttackBonusChanged,
    CrunchEvent,
    CrunchingToggled,
    DefenseChanged,
    DetailsReady,
    DetailsRequested,
    EventType,
    HpChanged,
    LogMessage,
    NumbersCrunched,
    OrbMultiplierChanged,
    UnitLevelChanged,
    UnitPicked,
    UnitRemoved,
    UnitsSwapped,
)
from ..combat.battle_calculator import BattleCalculator

if TYPE_CHECKING:
    from ...core.engine.session import CrunchSession
    from ...core.events.event_manager import EventManager


class CrunchManager:
    """Keeps the damage estimate of a session in sync with input events.

    This manager:
    1. Subscribes to every roster and global-state input event
    2. Applies the mutation to the session it owns
    3. Recomputes and publishes ``NumbersCrunched`` while crunching is enabled
    4. Answers details requests with ``DetailsReady``
    """

    def __init__(self, session: "CrunchSession", event_manager: "EventManager"):
        """Initialize the crunch manager.

        Args:
            session: Team and global state to mutate and crunch
            event_manager: Event manager for subscriptions, results and logging
        """
        self.session = session
        self.event_manager = event_manager
        self.latest_result: Optional[CrunchResult] = None
        self.crunch_count = 0
        self._reported_failures: set[str] = set()

        self._setup_event_subscriptions()

    def _setup_event_subscriptions(self) -> None:
        handlers: dict[EventType, Callable[[CrunchEvent], None]] = {
            EventType.UNIT_PICKED: self._handle_unit_picked,
            EventType.UNIT_LEVEL_CHANGED: self._handle_level_changed,
            EventType.UNIT_REMOVED: self._handle_unit_removed,
            EventType.UNITS_SWAPPED: self._handle_units_swapped,
            EventType.ORB_MULTIPLIER_CHANGED: self._handle_orb_changed,
            EventType.ATTACK_BONUS_CHANGED: self._handle_attack_bonus_changed,
            EventType.DEFENSE_CHANGED: self._handle_defense_changed,
            EventType.HP_CHANGED: self._handle_hp_changed,
            EventType.CRUNCHING_TOGGLED: self._handle_crunching_toggled,
            EventType.DETAILS_REQUESTED: self._handle_details_requested,
        }
        for event_type, handler in handlers.items():
            self.event_manager.subscribe(
                event_type=event_type,
                subscriber=handler,
                subscriber_name=f"CrunchManager.{event_type.name.lower()}",
            )

    def _emit_log(self, message: str, category: str = "CRUNCH", level: str = "DEBUG") -> None:
        """Emit a log message event."""
        self.event_manager.publish(
            LogMessage(
                message=message,
                category=category,
                level=level,
                source="CrunchManager"
            ),
            source="CrunchManager"
        )

    def _report_captain_warnings(self, slots: tuple[int, ...]) -> None:
        for slot in slots:
            if slot not in CAPTAIN_SLOTS:
                continue
            ability = self.session.team.captain_abilities[slot]
            if ability is None:
                continue
            for warning in ability.warnings:
                self._emit_log(warning, category="CAPTAIN", level="WARNING")

    def _report_runtime_failures(self) -> None:
        """Log captain formulas that failed during the last computation, once per message."""
        for ability in self.session.team.captains():
            for failure in ability.drain_failures():
                if failure in self._reported_failures:
                    continue
                self._reported_failures.add(failure)
                self._emit_log(failure, category="CAPTAIN", level="WARNING")

    def _mutate(self, description: str, mutation: Callable[[], None]) -> None:
        """Apply a mutation, log failures, then recompute."""
        try:
            mutation()
        except CrunchError as e:
            self._emit_log(f"{description} rejected: {e}", category="INPUT", level="ERROR")
            raise
        self._emit_log(description, category="INPUT")
        self.crunch()

    # Input handlers

    def _handle_unit_picked(self, event: CrunchEvent) -> None:
        if not isinstance(event, UnitPicked):
            return

        def pick() -> None:
            self.session.team.place(event.slot, event.unit_id)
            self._report_captain_warnings((event.slot,))

        self._mutate(f"Unit {event.unit_id} picked into slot {event.slot}", pick)

    def _handle_level_changed(self, event: CrunchEvent) -> None:
        if not isinstance(event, UnitLevelChanged):
            return
        self._mutate(
            f"Slot {event.slot} level set to {event.level}",
            lambda: self.session.team.set_level(event.slot, event.level),
        )

    def _handle_unit_removed(self, event: CrunchEvent) -> None:
        if not isinstance(event, UnitRemoved):
            return
        self._mutate(
            f"Slot {event.slot} cleared",
            lambda: self.session.team.remove(event.slot),
        )

    def _handle_units_swapped(self, event: CrunchEvent) -> None:
        if not isinstance(event, UnitsSwapped):
            return

        def swap() -> None:
            self.session.team.swap(event.slot_a, event.slot_b)
            self._report_captain_warnings((event.slot_a, event.slot_b))

        self._mutate(f"Slots {event.slot_a} and {event.slot_b} swapped", swap)

    def _handle_orb_changed(self, event: CrunchEvent) -> None:
        if not isinstance(event, OrbMultiplierChanged):
            return
        self._mutate(
            f"Slot {event.slot} orb set to {event.multiplier}",
            lambda: self.session.team.set_orb(event.slot, event.multiplier),
        )

    def _handle_attack_bonus_changed(self, event: CrunchEvent) -> None:
        if not isinstance(event, AttackBonusChanged):
            return

        def update() -> None:
            self.session.state.global_attack_bonus = event.value

        self._mutate(f"Global attack bonus set to {event.value}", update)

    def _handle_defense_changed(self, event: CrunchEvent) -> None:
        if not isinstance(event, DefenseChanged):
            return

        def update() -> None:
            self.session.state.defense_threshold = event.value

        self._mutate(f"Defense threshold set to {event.value}", update)

    def _handle_hp_changed(self, event: CrunchEvent) -> None:
        if not isinstance(event, HpChanged):
            return
        self._mutate(
            f"HP snapshot set to {event.current}/{event.maximum} ({event.percent}%)",
            lambda: self.session.state.set_hp(event.current, event.maximum, event.percent),
        )

    def _handle_crunching_toggled(self, event: CrunchEvent) -> None:
        if not isinstance(event, CrunchingToggled):
            return
        self.session.state.crunching_enabled = event.enabled
        self._emit_log(f"Crunching {'enabled' if event.enabled else 'suspended'}", category="SYSTEM", level="INFO")
        if event.enabled:
            self.crunch()

    def _handle_details_requested(self, event: CrunchEvent) -> None:
        if not isinstance(event, DetailsRequested):
            return
        self.request_details(event.element)

    # Synchronous queries

    def crunch(self) -> Optional[CrunchResult]:
        """Recompute the consolidated estimate and publish it.

        Returns:
            The new result, or None while crunching is suspended
        """
        if not self.session.state.crunching_enabled:
            return None

        result = BattleCalculator.crunch(self.session.team, self.session.state)
        self._report_runtime_failures()
        self.latest_result = result
        self.crunch_count += 1
        self._emit_log(f"Numbers crunched: {result.to_dict()}")
        self.event_manager.publish_immediate(NumbersCrunched(result=result), source="CrunchManager")
        return result

    def request_details(self, element: str) -> DetailsResult:
        """Breakdown of the winning scenario for ``element``; also published as ``DetailsReady``.

        Raises:
            ValueError: If ``element`` is not an elemental type name
        """
        details = BattleCalculator.details(self.session.team, self.session.state, element.upper())
        self._report_runtime_failures()
        self.event_manager.publish_immediate(
            DetailsReady(element=element.upper(), details=details),
            source="CrunchManager",
        )
        return details
