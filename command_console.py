"""Mock satellite command console: a timed queue of commands and an operator log."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from itertools import count
from typing import Optional

import config

logger = logging.getLogger(__name__)

QUEUED, RUNNING, COMPLETED, FAILED = "queued", "running", "completed", "failed"


class CommandError(ValueError):
    """Raised when a command cannot be submitted."""


@dataclass(frozen=True)
class CommandType:
    name: str
    display_name: str
    params: dict[str, type]


AVAILABLE_COMMANDS = {
    cmd.name: cmd
    for cmd in (
        CommandType("SYSTEM_STATUS", "System Status", {"component": str}),
        CommandType("SYSTEM_DIAGNOSTICS", "Diagnostics", {"level": str, "timeout": float}),
        CommandType(
            "DATA_CAPTURE",
            "Data Capture",
            {"latitude": float, "longitude": float, "duration": float, "resolution": str, "zoom": float},
        ),
        CommandType("SYSTEM_REBOOT", "Reboot", {"confirmCode": str, "mode": str}),
    )
}

PARAM_OPTIONS = {
    "component": ["all", "power", "thermal", "comms", "payload"],
    "level": ["basic", "advanced", "full"],
    "resolution": ["low", "medium", "high"],
    "mode": ["soft", "hard"],
}


def validate_confirmation_code(code: Optional[str]) -> bool:
    return code == config.REBOOT_CONFIRM_CODE


@dataclass
class Command:
    id: str
    type: str
    status: str = QUEUED
    parameters: dict[str, str] = field(default_factory=dict)

    @property
    def description(self) -> str:
        return f"Executing {self.type}"


@dataclass(frozen=True)
class ConsoleLog:
    timestamp: str
    message: str
    type: str


class CommandConsole:
    """Commands move queued -> running -> completed, one stage per tick."""

    def __init__(self, tick_seconds: float = config.COMMAND_TICK_SECONDS, max_logs: int = config.CONSOLE_MAX_LOGS):
        self.tick_seconds = tick_seconds
        self.commands: list[Command] = []
        self._logs: deque[ConsoleLog] = deque(maxlen=max_logs)
        self._ids = count(1)
        self._last_tick: Optional[datetime] = None
        self.add_log("System initialized. Welcome to SatelliteOS v1.0.")
        self.add_log('Type "help" for available commands.')

    @property
    def logs(self) -> list[ConsoleLog]:
        return list(self._logs)

    def add_log(self, message: str, kind: str = "info", now: Optional[datetime] = None) -> None:
        stamp = (now or datetime.now()).strftime("%H:%M:%S")
        self._logs.append(ConsoleLog(timestamp=stamp, message=message, type=kind))

    def log_stats(self) -> dict[str, int]:
        logs = self.logs
        return {
            "total": len(logs),
            "warning": sum(1 for log in logs if log.type == "warning"),
            "error": sum(1 for log in logs if log.type == "error"),
            "command": sum(1 for log in logs if log.type == "command"),
        }

    def submit(self, name: str, params: Optional[dict[str, str]] = None) -> Command:
        if name not in AVAILABLE_COMMANDS:
            raise CommandError(f"Unknown command: {name}")
        params = dict(params or {})
        if name == "SYSTEM_REBOOT" and not validate_confirmation_code(params.get("confirmCode")):
            raise CommandError("Invalid confirmation code")

        command = Command(id=str(next(self._ids)), type=name, parameters=params)
        self.commands.append(command)
        self.add_log(f"Command queued: {name}", "command")
        logger.info("Queued command %s #%s", name, command.id)
        return command

    def tick(self) -> None:
        for cmd in self.commands:
            if cmd.status == QUEUED:
                cmd.status = RUNNING
                self.add_log(f"Command started: {cmd.type}", "info")
            elif cmd.status == RUNNING:
                cmd.status = COMPLETED
                self.add_log(f"Command completed: {cmd.type}", "success")

    def advance(self, now: Optional[datetime] = None) -> int:
        """Apply one tick per whole interval elapsed since the previous call."""
        now = now or datetime.now(timezone.utc)
        if self._last_tick is None:
            self._last_tick = now
            return 0

        ticks = int((now - self._last_tick).total_seconds() // self.tick_seconds)
        for _ in range(ticks):
            self.tick()
        self._last_tick += timedelta(seconds=ticks * self.tick_seconds)
        return ticks

    def terminate(self) -> int:
        stopped = 0
        for cmd in self.commands:
            if cmd.status == RUNNING:
                cmd.status = FAILED
                self.add_log(f"Command terminated: {cmd.type}", "error")
                stopped += 1
        return stopped

    @property
    def running(self) -> list[Command]:
        return [cmd for cmd in self.commands if cmd.status == RUNNING]
