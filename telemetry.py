"""Synthetic telemetry for the mock live dashboard."""

from __future__ import annotations

from collections import deque
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Optional, Sequence

import numpy as np
import pandas as pd

import config


def due_steps(last: Optional[float], now: float, interval: float) -> tuple[int, float]:
    """Whole intervals elapsed since ``last`` and the new anchor.

    The first call yields one step so a fresh page has data to draw; later
    calls carry the partial interval over to the next one.
    """
    if last is None:
        return 1, now
    steps = max(0, int((now - last) // interval))
    return steps, last + steps * interval


class SystemTelemetry:
    """Rolling window of sine-driven health channels, one sample per step."""

    CHANNELS = ("status", "signal", "power", "temp")

    def __init__(self, window: int = config.TELEMETRY_WINDOW):
        self._samples: deque[dict] = deque(maxlen=window)
        self._counter = 0

    def step(self) -> dict:
        n = self._counter
        sample = {
            "time": n,
            "status": np.sin(n * 0.2) * 10 + 90,  # 80-100
            "signal": np.sin(n * 0.5) * 30 + 70,  # 40-100
            "power": np.sin(n * 0.3) * 20 + 70,  # 50-90
            "temp": np.sin(n * 0.4) * 20 + 50,  # 30-70
        }
        self._samples.append(sample)
        self._counter += 1
        return sample

    def advance(self, steps: int) -> None:
        for _ in range(max(0, steps)):
            self.step()

    def frame(self) -> pd.DataFrame:
        return pd.DataFrame(list(self._samples), columns=["time", *self.CHANNELS])

    def latest(self) -> Optional[dict]:
        return self._samples[-1] if self._samples else None

    def __len__(self) -> int:
        return len(self._samples)


@dataclass(frozen=True)
class CommsState:
    uplink: float = 436.30
    downlink: float = 80.19
    latency: float = 1002.12
    signal_strength: float = -64.03
    bit_error_rate: float = 9.91e-8


class CommsLink:
    """Bounded random walk over the link budget figures."""

    VARIATION = 0.05

    def __init__(self, seed: Optional[int] = None, state: CommsState = CommsState()):
        self._rng = np.random.default_rng(seed)
        self.state = state

    def _jitter(self) -> float:
        return 1 + (self._rng.random() - 0.5) * self.VARIATION

    def step(self) -> CommsState:
        s = self.state
        self.state = replace(
            s,
            uplink=float(np.clip(s.uplink * self._jitter(), 10, 1000)),
            downlink=float(np.clip(s.downlink * self._jitter(), 10, 1000)),
            latency=float(np.clip(s.latency * self._jitter(), 20, 2000)),
            signal_strength=float(np.clip(s.signal_strength + (self._rng.random() - 0.5) * 2, -100, -50)),
            bit_error_rate=float(np.clip(s.bit_error_rate * self._jitter(), 1e-9, 1e-6)),
        )
        return self.state


@dataclass(frozen=True)
class LogEvent:
    timestamp: datetime
    message: str
    type: str


LOG_MESSAGES = {
    "info": ["Telemetry data received", "Position updated", "Signal strength nominal"],
    "warning": ["Signal strength fluctuating", "Temperature slightly elevated"],
    "success": ["Data package transmitted successfully", "Orbit correction completed"],
    "error": ["Signal interference detected", "Minor system anomaly"],
}


class EventLog:
    """Random satellite log lines; only the most recent few are kept."""

    def __init__(self, size: int = config.EVENT_LOG_SIZE, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)
        self._events: deque[LogEvent] = deque(maxlen=size)

    def emit(self, now: Optional[datetime] = None) -> LogEvent:
        kind = str(self._rng.choice(list(LOG_MESSAGES)))
        message = str(self._rng.choice(LOG_MESSAGES[kind]))
        event = LogEvent(timestamp=now or datetime.now(timezone.utc), message=message, type=kind)
        self._events.append(event)
        return event

    @property
    def events(self) -> list[LogEvent]:
        return list(self._events)


def ground_track(positions: Sequence) -> tuple[np.ndarray, np.ndarray]:
    """Latitude/longitude arrays from tracking positions, ready for a geo scatter."""
    lat = np.array([p.satlatitude for p in positions], dtype=float)
    lon = np.array([p.satlongitude for p in positions], dtype=float)
    return lat, lon
