"""
Unit tests for the Event Manager system.

Tests the event-driven communication system that decouples the input layer
from the crunching managers through the publisher-subscriber pattern.
"""

from unittest.mock import Mock

from orbcrunch.core.events.event_manager import EventPriority, QueuedEvent
from orbcrunch.core.events.events import (
    DefenseChanged,
    EventType,
    LogMessage,
    UnitPicked,
)


class TestQueuedEvent:
    """Test QueuedEvent functionality."""

    def test_queued_event_creation(self):
        """Test basic queued event creation."""
        event = UnitPicked(slot=0, unit_id=1)
        queued = QueuedEvent(event=event, priority=EventPriority.HIGH, source="test")

        assert queued.event == event
        assert queued.priority == EventPriority.HIGH
        assert queued.source == "test"

    def test_queued_event_ordering_by_priority(self):
        """Test that more urgent events sort first."""
        critical_event = QueuedEvent(UnitPicked(0, 1), EventPriority.CRITICAL)
        high_event = QueuedEvent(UnitPicked(0, 1), EventPriority.HIGH)
        normal_event = QueuedEvent(UnitPicked(0, 1), EventPriority.NORMAL)
        low_event = QueuedEvent(UnitPicked(0, 1), EventPriority.LOW)

        assert critical_event < high_event
        assert high_event < normal_event
        assert normal_event < low_event

    def test_queued_event_ordering_by_sequence(self):
        """Test that events with same priority keep publication order."""
        event1 = QueuedEvent(UnitPicked(0, 1), EventPriority.NORMAL, sequence=1)
        event2 = QueuedEvent(UnitPicked(0, 1), EventPriority.NORMAL, sequence=2)
        urgent = QueuedEvent(UnitPicked(0, 1), EventPriority.HIGH, sequence=3)

        assert event1 < event2
        assert urgent < event1


class TestEventManager:
    """Test EventManager functionality."""

    def test_event_manager_creation(self, event_manager):
        """Test event manager initialization."""
        assert not event_manager.enable_debug_logging
        assert event_manager.get_statistics()['events_published'] == 0
        assert event_manager.get_statistics()['events_processed'] == 0

    def test_subscribe_to_event_type(self, event_manager):
        """Test subscribing to specific event types."""
        event_manager.subscribe(EventType.UNIT_PICKED, Mock())

        assert event_manager.get_statistics()['subscribers_count'] == 1

    def test_subscribe_to_all_events(self, event_manager):
        """Test subscribing to all events (universal subscriber)."""
        event_manager.subscribe_all(Mock())

        assert event_manager.get_statistics()['universal_subscribers_count'] == 1

    def test_publish_event(self, event_manager):
        """Test publishing events to the queue."""
        event_manager.publish(UnitPicked(0, 1), priority=EventPriority.HIGH, source="test")

        stats = event_manager.get_statistics()
        assert stats['events_published'] == 1
        assert stats['events_queued'] == 1
        assert event_manager.has_queued_events()

    def test_publish_immediate(self, event_manager):
        """Test immediate event publishing and processing."""
        subscriber = Mock()
        event_manager.subscribe(EventType.UNIT_PICKED, subscriber)

        event = UnitPicked(slot=2, unit_id=1)
        event_manager.publish_immediate(event, source="test")

        subscriber.assert_called_once_with(event)
        assert event_manager.get_statistics()['events_published'] == 1
        assert not event_manager.has_queued_events()

    def test_process_events_in_priority_order(self, event_manager):
        """Test queued events are delivered most urgent first."""
        received = []
        event_manager.subscribe_all(received.append)

        low = DefenseChanged(value=1)
        critical = DefenseChanged(value=2)
        event_manager.publish(low, priority=EventPriority.LOW)
        event_manager.publish(critical, priority=EventPriority.CRITICAL)

        processed = event_manager.process_events()

        assert processed == 2
        assert received == [critical, low]

    def test_process_events_includes_events_published_by_subscribers(self, event_manager):
        """Test follow-up events published during processing are drained too."""
        logs = Mock()
        event_manager.subscribe(EventType.LOG_MESSAGE, logs)
        event_manager.subscribe(
            EventType.UNIT_PICKED,
            lambda event: event_manager.publish(LogMessage(message="picked")),
        )

        event_manager.publish(UnitPicked(0, 1))
        processed = event_manager.process_events()

        assert processed == 2
        logs.assert_called_once()
        assert not event_manager.has_queued_events()

    def test_process_events_with_limit(self, event_manager):
        """Test max_events leaves the rest queued."""
        subscriber = Mock()
        event_manager.subscribe(EventType.DEFENSE_CHANGED, subscriber)

        for value in range(3):
            event_manager.publish(DefenseChanged(value=value))

        assert event_manager.process_events(max_events=2) == 2
        assert subscriber.call_count == 2
        assert event_manager.get_statistics()['events_queued'] == 1

    def test_subscriber_error_does_not_stop_others(self, event_manager):
        """Test a failing subscriber is recorded and others still run."""
        failing = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        event_manager.subscribe(EventType.UNIT_PICKED, failing)
        event_manager.subscribe(EventType.UNIT_PICKED, healthy)

        event_manager.publish_immediate(UnitPicked(0, 1))

        healthy.assert_called_once()
        errors = event_manager.get_subscriber_errors()
        assert len(errors) == 1
        assert "boom" in errors[0]
        assert event_manager.get_statistics()['subscriber_errors'] == 1

    def test_subscriber_error_names_the_subscriber(self, event_manager):
        event_manager.subscribe(
            EventType.UNIT_PICKED,
            Mock(side_effect=KeyError(7)),
            subscriber_name="Roster.picked",
        )

        event_manager.publish(UnitPicked(0, 7))
        event_manager.process_events()

        errors = event_manager.get_subscriber_errors()
        assert errors[0].startswith("Error in subscriber Roster.picked handling UnitPicked")

    def test_same_priority_is_first_in_first_out(self, event_manager):
        received = []
        event_manager.subscribe(EventType.DEFENSE_CHANGED, received.append)

        for value in range(5):
            event_manager.publish(DefenseChanged(value=value))
        event_manager.process_events()

        assert [event.value for event in received] == [0, 1, 2, 3, 4]

    def test_debug_callback(self):
        """Test debug messages reach the callback when enabled."""
        from orbcrunch.core.events.event_manager import EventManager

        callback = Mock()
        manager = EventManager(enable_debug_logging=True)
        manager.set_debug_callback(callback)

        manager.publish(UnitPicked(0, 1), source="test")

        callback.assert_called()
        assert callback.call_args[0][0].startswith("[EVENT]")
