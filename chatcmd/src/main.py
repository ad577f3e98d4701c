#!/usr/bin/env python3
"""
Console front-end for the chat command dispatcher.

Every line typed is treated as a chat message from one actor. Lines that
start with the command prefix are dispatched; anything else is echoed as
plain chat. Text shown to the actor is printed as it arrives.
"""

import argparse
import asyncio
import threading
from pathlib import Path
from typing import List, Optional

from .chat.bootstrap import CommandSystem, create_command_system
from .config import reload_config
from .core.event_bus import Event, EventType
from .logging_config import get_logger, setup_logging

logger = get_logger("main")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Chat command dispatcher console")
    parser.add_argument("--actor", default="player", help="Name the typed commands are attributed to")
    parser.add_argument("--config", type=Path, default=None, help="Path to a YAML config file")
    parser.add_argument("--log-level", default=None, help="Override the configured log level")
    return parser.parse_args(argv)


def attach_console_output(system: CommandSystem, actor: str) -> None:
    """Print whatever the display shows to ``actor``."""
    def on_text(event: Event) -> None:
        if event.data.get("actor") == actor:
            print(event.data["text"])

    def on_clear(event: Event) -> None:
        if event.data.get("actor") == actor:
            print("(cleared)")

    system.bus.subscribe(EventType.TEXT_DISPLAYED, on_text)
    system.bus.subscribe(EventType.TEXT_CLEARED, on_clear)


def start_stdin_reader(loop: asyncio.AbstractEventLoop, queue: "asyncio.Queue[Optional[str]]") -> threading.Thread:
    """Read stdin on a daemon thread, putting each line on ``queue``.

    ``None`` is queued at EOF. The thread is a daemon so a blocked
    ``input()`` never keeps the process alive after the loop has stopped.
    """
    def read_lines() -> None:
        while True:
            try:
                line: Optional[str] = input("> ")
            except EOFError:
                line = None
            try:
                loop.call_soon_threadsafe(queue.put_nowait, line)
            except RuntimeError:
                # Event loop already closed
                return
            if line is None:
                return

    thread = threading.Thread(target=read_lines, name="chatcmd-stdin", daemon=True)
    thread.start()
    return thread


async def run_console(system: CommandSystem, actor: str) -> None:
    """Read lines until EOF and feed them to the command system."""
    loop = asyncio.get_running_loop()
    queue: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
    prefix = system.config.chat.command_prefix
    print(f"Type {prefix}help for commands. Ctrl+D or Ctrl+C to quit.")

    start_stdin_reader(loop, queue)
    try:
        while True:
            line = await queue.get()
            if line is None:
                break

            if not system.input.is_command(line):
                print(f"[{actor}] {line}")
            system.bus.emit(EventType.CHAT_MESSAGE_TYPED, {"actor": actor, "text": line}, source="console")
    finally:
        system.scheduler.cancel_all()


async def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = parse_args(argv)
    config = reload_config(args.config)
    setup_logging(args.log_level or config.debug.log_level)

    system = create_command_system(config)
    attach_console_output(system, args.actor)
    await run_console(system, args.actor)


def cli() -> None:
    """Console script entry point."""
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        logger.info("Interrupted")


if __name__ == "__main__":
    cli()
