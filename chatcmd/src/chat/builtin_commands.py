"""
Built-in chat commands.

help    - list available commands
clear   - clear the actor's text
remind  - "-remind me in 15 seconds [message]"
!xyz    - run -x, -y and -z in turn (hidden)
"""

from typing import Any, Optional, Sequence, Tuple

from ..core.timers import Scheduler, SchedulerUnavailableError
from ..logging_config import get_logger
from .command_registry import CommandRegistry, prefix_match
from .default_handler import format_command_listing
from .dispatcher import CommandDispatcher
from .display import ChatDisplay

logger = get_logger("chat.builtin_commands")

FAN_OUT_PREFIX = "!"

TIME_UNITS = {
    "second": 1,
    "seconds": 1,
    "sec": 1,
    "secs": 1,
    "minute": 60,
    "minutes": 60,
    "min": 60,
    "mins": 60,
}

# A week; longer delays are refused
MAX_REMINDER_DELAY = 7 * 24 * 60 * 60


def parse_reminder(args: Sequence[str]) -> Optional[Tuple[float, str]]:
    """Parse ``me in <n> <unit> [message...]`` into (delay seconds, message).

    Returns None when the arguments do not follow that shape or the delay
    is longer than MAX_REMINDER_DELAY.
    """
    if len(args) < 4 or args[0] != "me" or args[1] != "in":
        return None
    try:
        amount = int(args[2])
    except ValueError:
        return None
    unit = TIME_UNITS.get(args[3].lower())
    if amount < 0 or unit is None:
        return None
    # Compared as ints so huge amounts never reach float()
    delay = amount * unit
    if delay > MAX_REMINDER_DELAY:
        return None
    message = " ".join(args[4:]).strip() or "Reminder!"
    return float(delay), message


def register_builtin_commands(
    registry: CommandRegistry,
    dispatcher: CommandDispatcher,
    display: ChatDisplay,
    scheduler: Scheduler,
    prefix: str = "-",
    separator: str = ", ",
    duration: float = 10.0,
) -> None:
    """Register help, clear, remind and the ! fan-out on ``registry``."""
    remind_usage = f"Usage: {prefix}remind me in <number> <seconds|minutes> [message]"

    def handle_help(actor: Any, command: str, args: Sequence[str]) -> None:
        display.send(actor, f"Available commands: {format_command_listing(registry, separator)}", duration)

    def handle_clear(actor: Any, command: str, args: Sequence[str]) -> None:
        display.clear(actor)

    def handle_remind(actor: Any, command: str, args: Sequence[str]) -> None:
        parsed = parse_reminder(args)
        if parsed is None:
            display.send(actor, remind_usage, duration)
            return

        delay, message = parsed
        try:
            scheduler.call_later(delay, display.send, actor, f"Reminder: {message}", duration)
        except SchedulerUnavailableError:
            logger.warning(f"Reminder for {actor} dropped: no event loop")
            display.send(actor, "Reminders are unavailable right now.", duration)
            return

        display.send(actor, f"I will remind you in {' '.join(args[2:4])}.", duration)

    def handle_fan_out(actor: Any, command: str, args: Sequence[str]) -> None:
        # "!ab" runs "a" then "b", each resolved on its own
        for sub_command in command[len(FAN_OUT_PREFIX):]:
            dispatcher.dispatch(actor, sub_command, [])

    registry.register("help", handle_help)
    registry.register("clear", handle_clear)
    registry.register("remind", handle_remind)
    registry.register_matcher(prefix_match(FAN_OUT_PREFIX), handle_fan_out, None)
