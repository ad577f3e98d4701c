"""Core systems for the command dispatcher."""

from .event_bus import EventBus, EventType, Event, get_event_bus, reset_event_bus
from .timers import Scheduler, SchedulerUnavailableError

__all__ = [
    "EventBus",
    "EventType",
    "Event",
    "get_event_bus",
    "reset_event_bus",
    "Scheduler",
    "SchedulerUnavailableError",
]
