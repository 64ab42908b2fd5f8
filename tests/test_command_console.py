from datetime import datetime, timedelta, timezone

import pytest

from command_console import COMPLETED, FAILED, QUEUED, RUNNING, CommandConsole, CommandError


def test_console_starts_with_welcome_logs():
    console = CommandConsole()
    assert len(console.logs) == 2
    assert console.commands == []


def test_command_moves_through_queue_one_stage_per_tick():
    console = CommandConsole()
    cmd = console.submit("SYSTEM_STATUS", {"component": "all"})
    assert cmd.status == QUEUED

    console.tick()
    assert cmd.status == RUNNING
    console.tick()
    assert cmd.status == COMPLETED
    console.tick()
    assert cmd.status == COMPLETED

    messages = [log.message for log in console.logs]
    assert messages[-3:] == [
        "Command queued: SYSTEM_STATUS",
        "Command started: SYSTEM_STATUS",
        "Command completed: SYSTEM_STATUS",
    ]


def test_terminate_fails_only_running_commands():
    console = CommandConsole()
    first = console.submit("SYSTEM_DIAGNOSTICS", {"level": "basic", "timeout": "30"})
    console.tick()
    second = console.submit("DATA_CAPTURE")

    assert console.terminate() == 1
    assert first.status == FAILED
    assert second.status == QUEUED
    assert console.log_stats()["error"] == 1


def test_reboot_requires_confirmation_code():
    console = CommandConsole()
    with pytest.raises(CommandError, match="Invalid confirmation code"):
        console.submit("SYSTEM_REBOOT", {"confirmCode": "123456", "mode": "soft"})

    cmd = console.submit("SYSTEM_REBOOT", {"confirmCode": "000000", "mode": "soft"})
    assert cmd.status == QUEUED


def test_unknown_command_is_rejected():
    with pytest.raises(CommandError):
        CommandConsole().submit("SELF_DESTRUCT")


def test_advance_applies_whole_intervals():
    start = datetime(2026, 1, 1, tzinfo=timezone.utc)
    console = CommandConsole(tick_seconds=5)
    cmd = console.submit("SYSTEM_STATUS")

    assert console.advance(start) == 0
    assert console.advance(start + timedelta(seconds=4)) == 0
    assert cmd.status == QUEUED
    assert console.advance(start + timedelta(seconds=11)) == 2
    assert cmd.status == COMPLETED
    # The 1s remainder carries over to the next interval.
    assert console.advance(start + timedelta(seconds=15)) == 1


def test_logs_are_capped():
    console = CommandConsole(max_logs=10)
    for _ in range(20):
        console.submit("SYSTEM_STATUS")

    stats = console.log_stats()
    assert stats["total"] == 10
    assert stats["command"] == 10
