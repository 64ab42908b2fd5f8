"""Rental cost computation and the in-memory billing draft."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Optional

import config
from catalog import CatalogEntry


class ConfigurationError(ValueError):
    """Raised when a configuration cannot be priced or confirmed."""


def _as_number(value: Any) -> Optional[float]:
    """Parse a catalog price (``"100"``, ``100``); None for ``"included"`` and friends."""
    if value is None or isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


def rental_days(start: date, end: date) -> int:
    """Inclusive day count: whole days between start and end, plus one."""
    if end < start:
        raise ConfigurationError("End date must not be before start date.")
    # timedelta.days floors partial days.
    return (end - start).days + 1


def calculate_cost(
    entry: Optional[CatalogEntry],
    orbit: str,
    rate: str,
    start: Optional[date],
    end: Optional[date],
) -> float:
    """Total rental cost for an orbit/downlink pair over a date range."""
    if entry is None or start is None or end is None:
        return 0.0

    days = rental_days(start, end)
    cost = 0.0

    orbit_cost = _as_number(entry.orbit_cost(orbit))
    if orbit_cost:
        cost += orbit_cost * days

    downlink_cost = _as_number(entry.downlink_cost_for(rate))
    if downlink_cost:
        cost += downlink_cost * days

    return cost


@dataclass
class BillingDraft:
    """Selections made on the configure page, discarded unless confirmed."""

    entry: CatalogEntry
    orbit: str = ""
    downlink_rate: str = ""
    start: Optional[date] = None
    end: Optional[date] = None
    total_cost: float = 0.0
    error: str = ""

    @property
    def duration(self) -> int:
        if self.start is None or self.end is None:
            return 0
        return rental_days(self.start, self.end)

    def _recompute(self) -> None:
        self.total_cost = calculate_cost(self.entry, self.orbit, self.downlink_rate, self.start, self.end)

    def select_orbit(self, orbit: str) -> None:
        self.orbit = orbit.upper()
        self._recompute()
        self.error = ""

    def select_downlink_rate(self, rate: str) -> None:
        self.downlink_rate = rate
        self._recompute()
        self.error = ""

    def select_dates(self, start: Optional[date], end: Optional[date]) -> bool:
        """Store the date range; refused until both orbit and rate are chosen."""
        if not self.orbit or not self.downlink_rate:
            self.error = config.MSG_SELECT_BEFORE_DATES
            return False

        if start is not None and end is not None and end < start:
            self.error = "End date must not be before start date."
            return False

        self.start, self.end = start, end
        self._recompute()
        self.error = ""
        return True

    def validate(self) -> None:
        if not self.orbit:
            raise ConfigurationError("Please select an orbit.")
        if not self.downlink_rate:
            raise ConfigurationError("Please select a downlink rate.")
        if self.start is None or self.end is None:
            raise ConfigurationError("Please select a rental date range.")
