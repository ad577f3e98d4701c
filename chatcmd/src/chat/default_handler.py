"""
Unknown-command responder.

Installed as the very first registry entry with a catch-all matcher, so
it is tried last and only fires when nothing more specific accepted.
"""

from typing import Any, Sequence

from ..logging_config import get_logger
from .command_registry import ArgHandler, CommandEntry, CommandRegistry, always_match
from .display import ChatDisplay

logger = get_logger("chat.default_handler")


def format_command_listing(registry: CommandRegistry, separator: str = ", ") -> str:
    """Visible command labels joined in registration order."""
    labels = registry.visible_labels()
    return separator.join(labels) if labels else "none"


def make_default_handler(
    registry: CommandRegistry,
    display: ChatDisplay,
    prefix: str = "-",
    separator: str = ", ",
    duration: float = 10.0,
) -> ArgHandler:
    """Build the handler that reports an unmatched command to its actor.

    The listing is read from the live registry each time it fires.
    """
    def handle_unknown_command(actor: Any, command: str, args: Sequence[str]) -> None:
        logger.info(f"Unknown command '{command}' from {actor}")
        display.send(
            actor,
            f"Unknown command '{prefix}{command}'. "
            f"Available commands: {format_command_listing(registry, separator)}",
            duration,
        )

    return handle_unknown_command


def install_default_handler(
    registry: CommandRegistry,
    display: ChatDisplay,
    prefix: str = "-",
    separator: str = ", ",
    duration: float = 10.0,
) -> CommandEntry:
    """Register the catch-all unknown-command entry.

    Must run before any other registration for the entry to be tried last.
    """
    if len(registry):
        logger.warning(
            f"Default handler installed after {len(registry)} other entries; "
            "it will shadow them"
        )
    handler = make_default_handler(registry, display, prefix, separator, duration)
    return registry.register_matcher(always_match, handler, None)
