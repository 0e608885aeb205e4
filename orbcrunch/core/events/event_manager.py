"""
Event management system for decoupled input handling.

This module provides a central event bus that lets the input layer talk to
the crunching managers through events instead of direct calls, following
the publisher-subscriber pattern. Delivery is synchronous: queued events are
delivered when ``process_events`` drains the queue, most urgent first and in
publication order within a priority.
"""

import heapq
import itertools
from collections import defaultdict, deque
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .events import CrunchEvent, EventType


class EventPriority(Enum):
    """Event processing priorities (lower value is processed first)."""
    CRITICAL = 0
    HIGH = 1
    NORMAL = 2
    LOW = 3


@dataclass
class QueuedEvent:
    """An event in the processing queue with metadata."""
    event: "CrunchEvent"
    priority: EventPriority = EventPriority.NORMAL
    sequence: int = 0
    source: Optional[str] = None  # For debugging

    def __lt__(self, other: "QueuedEvent") -> bool:
        """More urgent first, then in publication order."""
        return (self.priority.value, self.sequence) < (other.priority.value, other.sequence)


EventSubscriber = Callable[["CrunchEvent"], None]


class EventManager:
    """Central event bus for the crunching session."""

    def __init__(self, enable_debug_logging: bool = False):
        """Initialize the event manager.

        Args:
            enable_debug_logging: Whether to enable detailed event logging
        """
        self.enable_debug_logging = enable_debug_logging

        # (name, callback) pairs by event type
        self._subscribers: dict["EventType", list[tuple[str, EventSubscriber]]] = defaultdict(list)
        self._universal_subscribers: list[tuple[str, EventSubscriber]] = []

        self._event_queue: list[QueuedEvent] = []
        self._sequence = itertools.count()

        self._events_published = 0
        self._events_processed = 0
        self._subscriber_errors: deque[str] = deque(maxlen=100)

        self._debug_callback: Optional[Callable[[str], None]] = None

    def set_debug_callback(self, callback: Optional[Callable[[str], None]]) -> None:
        """Set a callback function for debug logging."""
        self._debug_callback = callback

    def _debug_log(self, message: str) -> None:
        if self.enable_debug_logging and self._debug_callback:
            self._debug_callback(f"[EVENT] {message}")

    def subscribe(
        self,
        event_type: "EventType",
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to events of a specific type.

        Args:
            event_type: The type of events to subscribe to
            subscriber: Callback function to handle events
            subscriber_name: Optional name used in debug output and error reports
        """
        name = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._subscribers[event_type].append((name, subscriber))
        self._debug_log(f"Subscribed {name} to {event_type.name} events")

    def subscribe_all(
        self,
        subscriber: EventSubscriber,
        subscriber_name: Optional[str] = None
    ) -> None:
        """Subscribe to all events (universal subscriber)."""
        name = subscriber_name or getattr(subscriber, '__name__', 'anonymous')
        self._universal_subscribers.append((name, subscriber))
        self._debug_log(f"Subscribed {name} to ALL events")

    def publish(
        self,
        event: "CrunchEvent",
        priority: EventPriority = EventPriority.NORMAL,
        source: Optional[str] = None
    ) -> None:
        """Queue an event until the next ``process_events``.

        Args:
            event: The event to publish
            priority: Processing priority for the event
            source: Optional source identifier for debugging
        """
        queued_event = QueuedEvent(
            event=event,
            priority=priority,
            sequence=next(self._sequence),
            source=source or "unknown",
        )
        heapq.heappush(self._event_queue, queued_event)
        self._events_published += 1

        self._debug_log(
            f"Published {event.__class__.__name__} (priority: {priority.name}, source: {queued_event.source})"
        )

    def publish_immediate(
        self,
        event: "CrunchEvent",
        source: Optional[str] = None
    ) -> None:
        """Deliver an event to its subscribers right away, bypassing the queue."""
        self._events_published += 1
        self._deliver(QueuedEvent(
            event=event,
            priority=EventPriority.CRITICAL,
            sequence=next(self._sequence),
            source=source or "immediate",
        ))

    def process_events(self, max_events: Optional[int] = None) -> int:
        """Process queued events, including events published while processing.

        Args:
            max_events: Maximum number of events to process (None for all)

        Returns:
            Number of events processed
        """
        processed_count = 0
        while self._event_queue:
            if max_events is not None and processed_count >= max_events:
                break
            self._deliver(heapq.heappop(self._event_queue))
            processed_count += 1
        return processed_count

    def _deliver(self, queued_event: QueuedEvent) -> None:
        """Notify type subscribers, then universal subscribers.

        Subscriber failures are recorded and reported through the debug
        callback; they never stop other subscribers from being notified.
        """
        event = queued_event.event
        self._events_processed += 1
        self._debug_log(f"Processing {event.__class__.__name__} from {queued_event.source}")

        subscribers = list(self._subscribers.get(event.event_type, []))
        subscribers.extend(self._universal_subscribers)
        for name, subscriber in subscribers:
            try:
                subscriber(event)
            except Exception as e:
                message = f"Error in subscriber {name} handling {event.__class__.__name__}: {e!r}"
                self._subscriber_errors.append(message)
                self._debug_log(message)

    def get_statistics(self) -> dict[str, Any]:
        """Get event processing statistics."""
        return {
            'events_published': self._events_published,
            'events_processed': self._events_processed,
            'events_queued': len(self._event_queue),
            'subscribers_count': sum(len(subs) for subs in self._subscribers.values()),
            'universal_subscribers_count': len(self._universal_subscribers),
            'subscriber_errors': len(self._subscriber_errors),
        }

    def get_subscriber_errors(self) -> list[str]:
        """Recent subscriber failures, oldest first."""
        return list(self._subscriber_errors)

    def has_queued_events(self) -> bool:
        return bool(self._event_queue)
