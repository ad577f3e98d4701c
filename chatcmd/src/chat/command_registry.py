"""
Command registry for chat commands.

Holds every registered (matcher, handler, label) entry in registration
order. Dispatch walks the entries newest-first, so a later registration
overrides or intercepts an earlier one for the same input.
"""

from typing import Any, Callable, List, Optional, Sequence, Tuple
from dataclasses import dataclass

from ..logging_config import get_logger

logger = get_logger("chat.command_registry")

# (actor, command, args) -> accept?
Matcher = Callable[[Any, str, Sequence[str]], bool]
# (actor, command, args) -> None
ArgHandler = Callable[[Any, str, Sequence[str]], None]


@dataclass(frozen=True)
class CommandEntry:
    """A registered command.

    ``label`` is the name shown in command listings. ``None`` hides the
    entry, which is what catch-all and pattern entries use.
    """
    matcher: Matcher
    handler: ArgHandler
    label: Optional[str] = None


def exact_match(name: str) -> Matcher:
    """Matcher accepting only the command token ``name`` (case-sensitive)."""
    def matcher(actor: Any, command: str, args: Sequence[str]) -> bool:
        return command == name
    matcher.__name__ = f"exact_match({name!r})"
    return matcher


def prefix_match(prefix: str) -> Matcher:
    """Matcher accepting command tokens that start with ``prefix`` and continue past it."""
    def matcher(actor: Any, command: str, args: Sequence[str]) -> bool:
        return len(command) > len(prefix) and command.startswith(prefix)
    matcher.__name__ = f"prefix_match({prefix!r})"
    return matcher


def always_match(actor: Any, command: str, args: Sequence[str]) -> bool:
    """Catch-all matcher."""
    return True


class CommandRegistry:
    """Registry for chat commands.

    Entries are never removed or changed once registered. Registering a
    command whose matcher overlaps an existing one is allowed; the newer
    entry shadows the older one during dispatch.

    Matchers receive the raw argument list and must bounds-check it
    themselves; a matcher that raises is a bug in that matcher.

    Example:
        registry = get_command_registry()
        registry.register("help", handle_help)

        # Pattern-based, hidden from listings
        registry.register_matcher(prefix_match("!"), handle_fan_out)
    """

    def __init__(self):
        self._entries: List[CommandEntry] = []

    def register_matcher(
        self,
        matcher: Matcher,
        handler: ArgHandler,
        label: Optional[str] = None
    ) -> CommandEntry:
        """Register a handler behind an arbitrary matcher.

        Args:
            matcher: Predicate over (actor, command, args)
            handler: Called with (actor, command, args) when the matcher accepts
            label: Name shown in command listings, or None to hide the entry

        Returns:
            The newly appended entry
        """
        entry = CommandEntry(matcher=matcher, handler=handler, label=label)
        self._entries.append(entry)
        logger.debug(
            f"Registered command entry #{len(self._entries)}: "
            f"label={label!r} matcher={getattr(matcher, '__name__', matcher)!s}"
        )
        return entry

    def register(self, name: str, handler: ArgHandler) -> CommandEntry:
        """Register a handler for the command token ``name``.

        The entry is listed under ``name``.
        """
        return self.register_matcher(exact_match(name), handler, name)

    def command(self, name: str) -> Callable[[ArgHandler], ArgHandler]:
        """
        Decorator form of ``register``.

        Usage:
            @registry.command("ping")
            def cmd_ping(actor, command, args):
                display.send(actor, "pong")
        """
        def decorator(func: ArgHandler) -> ArgHandler:
            self.register(name, func)
            return func
        return decorator

    def snapshot(self) -> Tuple[CommandEntry, ...]:
        """Immutable copy of the entries, oldest first."""
        return tuple(self._entries)

    def visible_labels(self) -> List[str]:
        """Labels of all listed entries, in registration order."""
        return [entry.label for entry in self._entries if entry.label is not None]

    def __len__(self) -> int:
        return len(self._entries)


# Singleton instance
_command_registry: Optional[CommandRegistry] = None


def get_command_registry() -> CommandRegistry:
    """Get the global command registry singleton.

    Returns:
        The global CommandRegistry instance
    """
    global _command_registry
    if _command_registry is None:
        _command_registry = CommandRegistry()
    return _command_registry


def reset_command_registry() -> None:
    """Reset the command registry (useful for testing)."""
    global _command_registry
    _command_registry = None
