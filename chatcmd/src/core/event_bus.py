"""
Core event bus for internal dispatcher communication.

Provides a pub/sub system that decouples where chat text comes from
(a console, a game client, a test) from the command machinery, and
lets renderers follow what the display collaborator shows.
"""

from typing import Callable, Dict, List, Any, Optional
from enum import Enum, auto
from dataclasses import dataclass, field

from ..logging_config import get_logger

logger = get_logger("core.event_bus")


class EventType(Enum):
    """Internal event types."""
    # Input events
    CHAT_MESSAGE_TYPED = auto()

    # Presentation events
    TEXT_DISPLAYED = auto()
    TEXT_CLEARED = auto()


@dataclass
class Event:
    """Event data structure."""
    type: EventType
    data: Dict[str, Any] = field(default_factory=dict)
    source: Optional[str] = None


class EventBus:
    """Central event bus.

    Delivery is synchronous: ``emit`` returns once every subscriber has run.
    A subscriber that raises is logged and skipped so the remaining
    subscribers still receive the event.
    """

    def __init__(self):
        self._handlers: Dict[EventType, List[Callable[[Event], None]]] = {}

    def subscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._handlers:
            self._handlers[event_type] = []
        self._handlers[event_type].append(handler)

    def unsubscribe(self, event_type: EventType, handler: Callable[[Event], None]) -> None:
        """Unsubscribe a handler from an event type."""
        if event_type in self._handlers and handler in self._handlers[event_type]:
            self._handlers[event_type].remove(handler)

    def emit(self, event_type: EventType, data: Optional[Dict[str, Any]] = None, source: Optional[str] = None) -> None:
        """Emit an event to all subscribers."""
        event = Event(type=event_type, data=data or {}, source=source)

        # Subscribers may (un)subscribe while being notified
        handlers = list(self._handlers.get(event_type, []))
        for handler in handlers:
            try:
                handler(event)
            except Exception:
                logger.exception(f"Error in event handler for {event_type.name}")

    def clear(self, event_type: Optional[EventType] = None) -> None:
        """Clear all handlers for an event type, or all handlers if None."""
        if event_type:
            self._handlers.pop(event_type, None)
        else:
            self._handlers.clear()


# Singleton event bus instance
_event_bus: Optional[EventBus] = None


def get_event_bus() -> EventBus:
    """Get the singleton event bus instance."""
    global _event_bus
    if _event_bus is None:
        _event_bus = EventBus()
    return _event_bus


def reset_event_bus() -> None:
    """Reset the event bus (useful for testing)."""
    global _event_bus
    _event_bus = None
