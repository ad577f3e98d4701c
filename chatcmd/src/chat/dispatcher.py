"""
Command dispatcher.

Turns a prefixed chat line into (command, args) and runs the handler of
the newest registry entry whose matcher accepts it.
"""

import logging
from typing import Any, List, Optional, Sequence, Tuple

from ..logging_config import get_logger, log_with_context
from .command_registry import CommandRegistry, get_command_registry

logger = get_logger("chat.dispatcher")


def split_command_line(raw_line: str) -> Tuple[str, List[str]]:
    """Split a prefixed command line into its command token and arguments.

    The first character is assumed to be the command prefix and is dropped
    without being checked. The rest is split on single spaces, so runs of
    spaces produce empty-string arguments. There is no quoting.

    Examples:
        "-help"                     -> ("help", [])
        "-remind me in 15 seconds"  -> ("remind", ["me", "in", "15", "seconds"])
        "-a  b"                     -> ("a", ["", "b"])
    """
    tokens = raw_line[1:].split(" ")
    return tokens[0], tokens[1:]


class CommandDispatcher:
    """Routes commands to registered handlers.

    ``dispatch`` is re-entrant: a handler may call it again (for the same or
    another actor) before returning. Each call scans its own registry
    snapshot, so commands registered by a running handler are only seen by
    later calls.
    """

    def __init__(self, registry: Optional[CommandRegistry] = None):
        self.registry = registry if registry is not None else get_command_registry()

    def dispatch(self, actor: Any, command: str, args: Sequence[str]) -> None:
        """Run the handler of the newest entry accepting (actor, command, args).

        At most one handler runs. If nothing accepts, nothing happens.
        Exceptions raised by matchers or the handler propagate to the caller.
        """
        entries = self.registry.snapshot()
        for entry in reversed(entries):
            if entry.matcher(actor, command, args):
                if logger.isEnabledFor(logging.DEBUG):
                    log_with_context(
                        logger, logging.DEBUG, "Dispatching command",
                        actor=actor, command=command, args=list(args), label=entry.label,
                    )
                entry.handler(actor, command, args)
                return

        log_with_context(logger, logging.DEBUG, "No handler matched", actor=actor, command=command)

    def parse(self, actor: Any, raw_line: str) -> None:
        """Tokenize a prefixed chat line typed by ``actor`` and dispatch it.

        The caller is responsible for having checked the prefix.
        """
        command, args = split_command_line(raw_line)
        self.dispatch(actor, command, args)
