"""
Text display for chat command replies.

Keeps the lines shown to each actor. A line sent with a duration
disappears once that many seconds have passed. Every change is also
emitted on the event bus so a renderer can follow along.
"""

import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional

from ..core.event_bus import EventBus, EventType, get_event_bus
from ..logging_config import get_logger

logger = get_logger("chat.display")

# Oldest lines are dropped past this many per actor
MAX_LINES_PER_ACTOR = 100


@dataclass
class DisplayedLine:
    """A line of text shown to an actor."""
    text: str
    expires_at: Optional[float] = None

    def is_visible(self, now: float) -> bool:
        return self.expires_at is None or now < self.expires_at


class ChatDisplay:
    """Per-actor text output.

    Expired lines are dropped whenever an actor's lines are touched, and
    at most ``max_lines`` are kept per actor.
    """

    def __init__(
        self,
        bus: Optional[EventBus] = None,
        clock: Callable[[], float] = time.monotonic,
        max_lines: int = MAX_LINES_PER_ACTOR
    ):
        self._bus = bus if bus is not None else get_event_bus()
        self._clock = clock
        self._max_lines = max_lines
        self._lines: Dict[Any, List[DisplayedLine]] = {}

    def send(self, actor: Any, text: str, duration: Optional[float] = None) -> None:
        """Show ``text`` to ``actor``, optionally for ``duration`` seconds only."""
        now = self._clock()
        expires_at = now + duration if duration is not None else None
        kept = self._prune(actor, now)
        kept.append(DisplayedLine(text=text, expires_at=expires_at))
        self._lines[actor] = kept[-self._max_lines:]
        logger.debug(f"Display -> {actor}: {text}")
        self._bus.emit(
            EventType.TEXT_DISPLAYED,
            {"actor": actor, "text": text, "duration": duration},
            source="display",
        )

    def clear(self, actor: Any) -> None:
        """Remove everything shown to ``actor``."""
        self._lines.pop(actor, None)
        self._bus.emit(EventType.TEXT_CLEARED, {"actor": actor}, source="display")

    def lines(self, actor: Any) -> List[str]:
        """Text currently visible to ``actor``, oldest first."""
        visible = self._prune(actor, self._clock())
        if visible:
            self._lines[actor] = visible
        else:
            self._lines.pop(actor, None)
        return [line.text for line in visible]

    def _prune(self, actor: Any, now: float) -> List[DisplayedLine]:
        return [line for line in self._lines.get(actor, []) if line.is_visible(now)]
