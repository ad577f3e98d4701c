"""
Setup phase for the chat command system.

Builds the registry, dispatcher, display and input bridge from config and
registers the fallback and built-in commands. Applications register their
own commands on the returned registry afterwards, which gives them
priority over everything registered here.
"""

from dataclasses import dataclass
from typing import Optional

from ..config import DispatcherConfig, get_config
from ..core.event_bus import EventBus, get_event_bus
from ..core.timers import Scheduler
from ..logging_config import get_logger
from .builtin_commands import register_builtin_commands
from .chat_input import ChatCommandInput
from .command_registry import CommandRegistry, get_command_registry
from .default_handler import install_default_handler
from .dispatcher import CommandDispatcher
from .display import ChatDisplay

logger = get_logger("chat.bootstrap")


@dataclass
class CommandSystem:
    """Everything wired together by ``create_command_system``."""
    config: DispatcherConfig
    registry: CommandRegistry
    dispatcher: CommandDispatcher
    display: ChatDisplay
    scheduler: Scheduler
    bus: EventBus
    input: ChatCommandInput


def create_command_system(
    config: Optional[DispatcherConfig] = None,
    registry: Optional[CommandRegistry] = None,
    bus: Optional[EventBus] = None,
    display: Optional[ChatDisplay] = None,
    scheduler: Optional[Scheduler] = None,
) -> CommandSystem:
    """Create and wire the command system.

    Defaults to the process-wide config, registry and event bus.
    """
    config = config or get_config()
    registry = registry if registry is not None else get_command_registry()
    bus = bus if bus is not None else get_event_bus()
    display = display if display is not None else ChatDisplay(bus=bus)
    scheduler = scheduler if scheduler is not None else Scheduler()
    chat = config.chat

    dispatcher = CommandDispatcher(registry)

    if chat.add_default_handler:
        install_default_handler(
            registry,
            display,
            prefix=chat.command_prefix,
            separator=chat.label_separator,
            duration=chat.message_duration,
        )

    if chat.register_builtin_commands:
        register_builtin_commands(
            registry,
            dispatcher,
            display,
            scheduler,
            prefix=chat.command_prefix,
            separator=chat.label_separator,
            duration=chat.message_duration,
        )

    chat_input = ChatCommandInput(dispatcher, prefix=chat.command_prefix, bus=bus)
    chat_input.attach()

    logger.info(
        f"Command system ready: {len(registry)} entries, prefix '{chat.command_prefix}', "
        f"default handler {'on' if chat.add_default_handler else 'off'}"
    )

    return CommandSystem(
        config=config,
        registry=registry,
        dispatcher=dispatcher,
        display=display,
        scheduler=scheduler,
        bus=bus,
        input=chat_input,
    )
