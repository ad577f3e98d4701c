"""
Logger tree for the command dispatcher.

Every module logs under the ``chatcmd`` logger: ``chatcmd.chat.*`` for
registration, dispatch and replies, ``chatcmd.core.*`` for the event bus
and scheduled callbacks, and ``chatcmd.main`` for the console front-end.
Handlers are attached to ``chatcmd`` only, so the level set here governs
the whole tree and records never reach the root logger twice.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

from .config import get_config

ROOT_LOGGER_NAME = "chatcmd"

LOG_FORMAT = "%(asctime)s | %(name)s | %(levelname)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _make_handler(handler: logging.Handler, level: int) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT))
    return handler


def setup_logging(
    log_level: Optional[str] = None,
    log_file: Optional[Path] = None,
    log_to_console: bool = True
) -> logging.Logger:
    """
    Attach handlers to the ``chatcmd`` logger and set its level.

    Console output goes to stderr so it never mixes with the chat text the
    console front-end prints on stdout. Calling this again replaces the
    previous handlers.

    Args:
        log_level: Level name such as DEBUG or WARNING. Falls back to
            ``debug.log_level`` from the loaded config; unknown names mean INFO.
        log_file: Also append records to this file
        log_to_console: Write records to stderr

    Returns:
        The ``chatcmd`` logger
    """
    if log_level is None:
        log_level = get_config().debug.log_level
    level = getattr(logging, log_level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    logger.handlers.clear()

    if log_to_console:
        logger.addHandler(_make_handler(logging.StreamHandler(sys.stderr), level))
    if log_file:
        logger.addHandler(_make_handler(logging.FileHandler(log_file), level))

    return logger


def get_logger(name: str) -> logging.Logger:
    """Logger for one module, e.g. ``get_logger("chat.dispatcher")``."""
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")


def log_with_context(logger: logging.Logger, level: int, msg: str, **context) -> None:
    """Log ``msg`` with the actor, command or other fields appended as key=value pairs."""
    fields = " | ".join(f"{k}={v!r}" for k, v in context.items())
    if fields:
        msg = f"{msg} [{fields}]"

    logger.log(level, msg)
