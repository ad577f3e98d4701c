"""
Unit tests for the built-in chat commands.

Covers:
- help and clear
- remind argument parsing and scheduling
- ! fan-out through nested dispatch
"""

import asyncio
from unittest.mock import MagicMock

import pytest

from chatcmd.src.chat.builtin_commands import parse_reminder, register_builtin_commands
from chatcmd.src.core.timers import Scheduler, SchedulerUnavailableError


@pytest.fixture
def scheduler():
    return MagicMock(spec=Scheduler)


@pytest.fixture
def builtins(registry, dispatcher, display, scheduler):
    register_builtin_commands(registry, dispatcher, display, scheduler, duration=10.0)
    return registry


class TestRegistration:
    """Tests for what gets registered."""

    def test_labels(self, builtins):
        assert builtins.visible_labels() == ["help", "clear", "remind"]

    def test_fan_out_entry_is_hidden(self, builtins):
        assert len(builtins) == 4
        assert builtins.snapshot()[-1].label is None


class TestHelpAndClear:
    """Tests for help and clear."""

    def test_help_lists_commands(self, builtins, dispatcher, display):
        builtins.register("dance", lambda a, c, args: None)

        dispatcher.parse("p1", "-help")

        assert display.lines("p1") == ["Available commands: help, clear, remind, dance"]

    def test_clear_removes_text(self, builtins, dispatcher, display):
        display.send("p1", "old line")

        dispatcher.parse("p1", "-clear")

        assert display.lines("p1") == []

    def test_help_can_be_overridden(self, builtins, dispatcher, display, recorder):
        builtins.register("help", recorder.handler("custom_help"))

        dispatcher.parse("p1", "-help")

        assert recorder.names == ["custom_help"]
        assert display.lines("p1") == []


class TestParseReminder:
    """Tests for remind argument parsing."""

    def test_seconds(self):
        assert parse_reminder(["me", "in", "15", "seconds"]) == (15.0, "Reminder!")

    def test_minutes_with_message(self):
        assert parse_reminder(["me", "in", "2", "minutes", "check", "oven"]) == (120.0, "check oven")

    def test_unit_is_case_insensitive(self):
        assert parse_reminder(["me", "in", "1", "Minute"]) == (60.0, "Reminder!")

    @pytest.mark.parametrize(
        "args",
        [
            [],
            ["me", "in", "15"],
            ["you", "in", "15", "seconds"],
            ["me", "at", "15", "seconds"],
            ["me", "in", "soon", "seconds"],
            ["me", "in", "-5", "seconds"],
            ["me", "in", "15", "hours"],
            ["me", "in", "", "seconds"],
            ["me", "in", "9" * 400, "minutes"],
            ["me", "in", "10081", "minutes"],
        ],
    )
    def test_malformed(self, args):
        assert parse_reminder(args) is None


class TestRemind:
    """Tests for the remind command."""

    def test_schedules_reminder(self, builtins, dispatcher, display, scheduler):
        dispatcher.parse("p1", "-remind me in 15 seconds stretch")

        scheduler.call_later.assert_called_once_with(
            15.0, display.send, "p1", "Reminder: stretch", 10.0
        )
        assert display.lines("p1") == ["I will remind you in 15 seconds."]

    def test_usage_on_bad_args(self, builtins, dispatcher, display, scheduler):
        dispatcher.parse("p1", "-remind me later")

        scheduler.call_later.assert_not_called()
        assert display.lines("p1") == [
            "Usage: -remind me in <number> <seconds|minutes> [message]"
        ]

    def test_huge_amount_gets_usage(self, registry, dispatcher, display):
        """An absurd delay is answered with usage instead of escaping dispatch."""
        register_builtin_commands(registry, dispatcher, display, Scheduler())

        dispatcher.parse("p1", "-remind me in " + "9" * 400 + " minutes")

        assert display.lines("p1") == [
            "Usage: -remind me in <number> <seconds|minutes> [message]"
        ]

    def test_double_space_breaks_shape(self, builtins, dispatcher, display, scheduler):
        """Empty arguments from repeated spaces are not skipped."""
        dispatcher.parse("p1", "-remind me  in 15 seconds")

        scheduler.call_later.assert_not_called()

    def test_no_event_loop(self, builtins, dispatcher, display, scheduler):
        scheduler.call_later.side_effect = SchedulerUnavailableError("no loop")

        dispatcher.parse("p1", "-remind me in 15 seconds")

        assert display.lines("p1") == ["Reminders are unavailable right now."]

    @pytest.mark.asyncio
    async def test_reminder_delivered_on_loop(self, registry, dispatcher, display):
        register_builtin_commands(registry, dispatcher, display, Scheduler())

        dispatcher.parse("p1", "-remind me in 0 seconds tea")
        await asyncio.sleep(0.01)

        assert display.lines("p1") == ["I will remind you in 0 seconds.", "Reminder: tea"]


class TestFanOut:
    """Tests for the ! fan-out."""

    def test_runs_each_sub_command_in_order(self, builtins, dispatcher, recorder):
        builtins.register("a", recorder.handler("a"))
        builtins.register("b", recorder.handler("b"))

        dispatcher.parse("p1", "-!ab")

        assert recorder.calls == [("a", "p1", "a", []), ("b", "p1", "b", [])]

    def test_sub_commands_do_not_get_args(self, builtins, dispatcher, recorder):
        builtins.register("a", recorder.handler("a"))

        dispatcher.parse("p1", "-!aa extra")

        assert recorder.calls == [("a", "p1", "a", []), ("a", "p1", "a", [])]

    def test_unknown_sub_command_is_skipped(self, builtins, dispatcher, recorder):
        builtins.register("a", recorder.handler("a"))

        dispatcher.parse("p1", "-!za")

        assert recorder.names == ["a"]

    def test_lone_bang_is_not_fanned_out(self, builtins):
        fan_out = builtins.snapshot()[-1]

        assert fan_out.matcher("p1", "!", []) is False
        assert fan_out.matcher("p1", "!a", []) is True
