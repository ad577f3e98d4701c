"""
Chat input bridge.

Listens for typed chat lines on the event bus and hands the ones that
start with the command prefix to the dispatcher. Anything else is plain
chat and is left alone.
"""

from typing import Optional

from ..core.event_bus import Event, EventBus, EventType, get_event_bus
from ..logging_config import get_logger
from .dispatcher import CommandDispatcher

logger = get_logger("chat.chat_input")


class ChatCommandInput:
    """Feeds prefixed chat lines from the event bus into a dispatcher."""

    def __init__(
        self,
        dispatcher: CommandDispatcher,
        prefix: str = "-",
        bus: Optional[EventBus] = None
    ):
        self.dispatcher = dispatcher
        self.prefix = prefix
        self._bus = bus if bus is not None else get_event_bus()
        self._attached = False

    def attach(self) -> None:
        """Start listening for chat input."""
        if self._attached:
            return
        self._bus.subscribe(EventType.CHAT_MESSAGE_TYPED, self._on_chat_message)
        self._attached = True

    def detach(self) -> None:
        """Stop listening for chat input."""
        if not self._attached:
            return
        self._bus.unsubscribe(EventType.CHAT_MESSAGE_TYPED, self._on_chat_message)
        self._attached = False

    @property
    def attached(self) -> bool:
        return self._attached

    def is_command(self, text: str) -> bool:
        """True if ``text`` should be treated as a command line."""
        return text.startswith(self.prefix)

    def _on_chat_message(self, event: Event) -> None:
        text = event.data.get("text", "")
        if not self.is_command(text):
            return
        actor = event.data.get("actor")
        logger.debug(f"Command line from {actor}: {text}")
        self.dispatcher.parse(actor, text)
