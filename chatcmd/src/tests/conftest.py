"""
Shared fixtures for the chat command tests.

Every test gets its own registry, event bus and display so nothing leaks
through the process-wide singletons.
"""

import pytest

from chatcmd.src.chat.command_registry import CommandRegistry, reset_command_registry
from chatcmd.src.chat.dispatcher import CommandDispatcher
from chatcmd.src.chat.display import ChatDisplay
from chatcmd.src.config import ChatCommandConfig, DispatcherConfig
from chatcmd.src.core.event_bus import EventBus, reset_event_bus


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class CallRecorder:
    """Handler factory that records (name, actor, command, args) calls in order."""

    def __init__(self):
        self.calls = []

    def handler(self, name: str):
        def record(actor, command, args):
            self.calls.append((name, actor, command, list(args)))
        return record

    @property
    def names(self):
        return [call[0] for call in self.calls]


@pytest.fixture(autouse=True)
def reset_singletons():
    """Keep the global registry and bus fresh between tests."""
    reset_command_registry()
    reset_event_bus()
    yield
    reset_command_registry()
    reset_event_bus()


@pytest.fixture
def registry():
    return CommandRegistry()


@pytest.fixture
def dispatcher(registry):
    return CommandDispatcher(registry)


@pytest.fixture
def bus():
    return EventBus()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def display(bus, clock):
    return ChatDisplay(bus=bus, clock=clock)


@pytest.fixture
def recorder():
    return CallRecorder()


@pytest.fixture
def config():
    """Default configuration, independent of any YAML file or environment."""
    return DispatcherConfig(chat=ChatCommandConfig())
