"""
Chat command system.

Lets independent parts of an application register handlers for commands
typed in chat (lines starting with the command prefix, '-' by default) and
routes each command line to exactly one handler: the most recently
registered one whose matcher accepts it.
"""

from chatcmd.src.chat.bootstrap import CommandSystem, create_command_system
from chatcmd.src.chat.chat_input import ChatCommandInput
from chatcmd.src.chat.command_registry import (
    CommandEntry,
    CommandRegistry,
    always_match,
    exact_match,
    get_command_registry,
    prefix_match,
    reset_command_registry,
)
from chatcmd.src.chat.dispatcher import CommandDispatcher, split_command_line
from chatcmd.src.chat.display import ChatDisplay

__all__ = [
    "ChatCommandInput",
    "ChatDisplay",
    "CommandDispatcher",
    "CommandEntry",
    "CommandRegistry",
    "CommandSystem",
    "always_match",
    "create_command_system",
    "exact_match",
    "get_command_registry",
    "prefix_match",
    "reset_command_registry",
    "split_command_line",
]
