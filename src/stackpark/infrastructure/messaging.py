"""
In-process messaging for the Stack Parking Garage

The garage aggregate collects domain events; the application service
publishes them here after each successful command. Handlers run
synchronously in publish order. A failing handler is logged and skipped so
that one broken subscriber cannot undo a completed park or exit.
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional
import logging

from ..domain.models import DomainEvent, VehicleParkedEvent, VehicleExitedEvent


VEHICLE_PARKED = VehicleParkedEvent.event_type
VEHICLE_EXITED = VehicleExitedEvent.event_type


# ============================================================================
# EVENT HANDLERS
# ============================================================================

class EventHandler(ABC):
    """Abstract base class for event handlers"""

    @abstractmethod
    def handle(self, event: DomainEvent) -> None:
        """Handle a domain event"""
        pass

    def can_handle(self, event: DomainEvent) -> bool:
        """Check if this handler can handle the event"""
        return True


class LoggingEventHandler(EventHandler):
    """Writes every event to the log"""

    def __init__(self, level: int = logging.INFO):
        self.level = level
        self._logger = logging.getLogger(self.__class__.__name__)

    def handle(self, event: DomainEvent) -> None:
        self._logger.log(self.level, f"{event.event_type}: {event.to_dict()['data']}")


class RecordingEventHandler(EventHandler):
    """Keeps every event it receives, optionally filtered by type"""

    def __init__(self, event_type: Optional[str] = None):
        self.event_type = event_type
        self.events: List[DomainEvent] = []

    def can_handle(self, event: DomainEvent) -> bool:
        return self.event_type is None or event.event_type == self.event_type

    def handle(self, event: DomainEvent) -> None:
        self.events.append(event)


# ============================================================================
# EVENT BUS (In-memory)
# ============================================================================

class EventBus:
    """
    In-memory event bus for intra-process event publishing
    Implements publish/subscribe keyed by event type.
    """

    def __init__(self):
        self._subscribers: Dict[str, List[EventHandler]] = {}
        self._logger = logging.getLogger(self.__class__.__name__)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """Subscribe to events of a specific type"""
        handlers = self._subscribers.setdefault(event_type, [])
        if handler not in handlers:
            handlers.append(handler)
            self._logger.debug(f"Subscribed {handler.__class__.__name__} to {event_type}")

    def subscribe_all(self, handler: EventHandler) -> None:
        """Subscribe a handler to every garage event type"""
        for event_type in (VEHICLE_PARKED, VEHICLE_EXITED):
            self.subscribe(event_type, handler)

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """Unsubscribe handler from events"""
        handlers = self._subscribers.get(event_type, [])
        if handler in handlers:
            handlers.remove(handler)
            self._logger.debug(f"Unsubscribed {handler.__class__.__name__} from {event_type}")

    def publish(self, event: DomainEvent) -> int:
        """Publish an event to all subscribers; returns how many handled it"""
        self._logger.debug(f"Publishing event: {event.event_type} (ID: {event.event_id})")

        delivered = 0
        for handler in list(self._subscribers.get(event.event_type, [])):
            if not handler.can_handle(event):
                continue
            try:
                handler.handle(event)
                delivered += 1
            except Exception as e:
                self._logger.error(
                    f"Error handling event {event.event_type} with {handler.__class__.__name__}: {e}"
                )
        return delivered

    def publish_all(self, events: List[DomainEvent]) -> None:
        for event in events:
            self.publish(event)

    def clear_subscribers(self) -> None:
        """Clear all subscribers (for testing)"""
        self._subscribers.clear()
