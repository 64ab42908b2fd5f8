"""Fleet of confirmed satellite rentals and the active satellite pointer.

The fleet is a small JSON document with three keys:

* ``configuredSatellites``: list of confirmed configurations,
* ``activeSatelliteNoradId``: NORAD id (string) of the satellite shown on the dashboard,
* ``activeSatelliteData``: summary of that satellite for the dashboard header.

Items are created once at confirmation and never edited; the only removal is
clearing the whole fleet.
"""

from __future__ import annotations

import json
import logging
import math
import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from pathlib import Path
from typing import Any, Optional, Union

import config
from billing import BillingDraft, ConfigurationError
from catalog import CatalogEntry
from utils.io_utils import read_json, write_json

logger = logging.getLogger(__name__)

DAY = timedelta(days=1)
HOUR = timedelta(hours=1)


class FleetStoreError(RuntimeError):
    """Raised when the fleet document on disk is unreadable."""


class MissionStatus(str, Enum):
    SCHEDULED = "scheduled"
    ACTIVE = "active"
    COMPLETED = "completed"

    @property
    def label(self) -> str:
        return self.value.upper()


def to_utc(value: Union[str, date, datetime]) -> datetime:
    """Normalise ISO strings, dates and naive datetimes to aware UTC datetimes."""
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _now(now: Optional[datetime]) -> datetime:
    return to_utc(now) if now is not None else datetime.now(timezone.utc)


@dataclass(frozen=True)
class FleetItem:
    id: str
    name: str
    type: str
    orbit: str
    downlink_rate: str
    start_date: datetime
    end_date: datetime
    total_cost: float
    norad_id: Optional[int]

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "type": self.type,
            "orbit": self.orbit,
            "downlinkRate": self.downlink_rate,
            "startDate": self.start_date.isoformat(),
            "endDate": self.end_date.isoformat(),
            "totalCost": self.total_cost,
            "noradId": self.norad_id,
        }

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "FleetItem":
        norad = raw.get("noradId")
        return cls(
            id=str(raw["id"]),
            name=raw["name"],
            type=raw.get("type", ""),
            orbit=raw.get("orbit", ""),
            downlink_rate=raw.get("downlinkRate", ""),
            start_date=to_utc(raw["startDate"]),
            end_date=to_utc(raw["endDate"]),
            total_cost=float(raw.get("totalCost", 0)),
            norad_id=int(norad) if norad not in (None, "") else None,
        )


def mission_status(item: FleetItem, now: Optional[datetime] = None) -> MissionStatus:
    now = _now(now)
    if now < item.start_date:
        return MissionStatus.SCHEDULED
    if now <= item.end_date:
        return MissionStatus.ACTIVE
    return MissionStatus.COMPLETED


def confirm_configuration(entry: CatalogEntry, draft: BillingDraft) -> FleetItem:
    """Turn a validated billing draft into a fleet item.

    The rental covers whole days: it starts at 00:00 UTC of the first day and
    ends at the last instant of the final day.
    """
    draft.validate()
    if draft.entry.name != entry.name:
        raise ConfigurationError(f"Draft belongs to {draft.entry.name}, not {entry.name}.")

    start = to_utc(draft.start)
    end = to_utc(draft.end)
    if not isinstance(draft.end, datetime):
        end = end + DAY - timedelta(microseconds=1)

    return FleetItem(
        id=uuid.uuid4().hex[:12],
        name=entry.name,
        type=entry.category,
        orbit=draft.orbit,
        downlink_rate=draft.downlink_rate,
        start_date=start,
        end_date=end,
        total_cost=draft.total_cost,
        norad_id=entry.norad_id if entry.norad_id is not None else config.DEFAULT_NORAD_ID,
    )


def operation_days(item: FleetItem) -> int:
    return math.ceil(abs(item.end_date - item.start_date) / DAY)


def days_until_start(item: FleetItem, now: Optional[datetime] = None) -> int:
    return math.ceil(abs(item.start_date - _now(now)) / DAY)


def hours_left(item: FleetItem, now: Optional[datetime] = None) -> int:
    return max(0, math.floor((item.end_date - _now(now)) / HOUR))


def mission_code(item: FleetItem) -> str:
    """Compact mission identifier, e.g. ``EO.Sentinel-2.LEO.40697.H.5D``."""
    initials = "".join(word[0] for word in item.type.split() if word)
    rate_initial = item.downlink_rate[:1]
    return f"{initials}.{item.name}.{item.orbit}.{item.norad_id}.{rate_initial}.{operation_days(item)}D"


class FleetStore:
    """JSON file backed fleet list; single writer assumed."""

    def __init__(self, path: Path = config.FLEET_STORE_PATH):
        self.path = Path(path)

    def _load(self) -> dict[str, Any]:
        try:
            doc = read_json(self.path, default={})
        except json.JSONDecodeError as exc:
            raise FleetStoreError(f"Fleet store is corrupt: {self.path}") from exc
        if not isinstance(doc, dict):
            raise FleetStoreError(f"Fleet store root must be an object: {self.path}")
        return doc

    def _save(self, doc: dict[str, Any]) -> None:
        write_json(self.path, doc)

    def items(self) -> list[FleetItem]:
        raw_items = self._load().get(config.FLEET_KEY) or []
        try:
            return [FleetItem.from_dict(raw) for raw in raw_items]
        except (KeyError, TypeError, ValueError) as exc:
            raise FleetStoreError(f"Malformed fleet item in {self.path}: {exc}") from exc

    def add(self, item: FleetItem) -> FleetItem:
        doc = self._load()
        doc.setdefault(config.FLEET_KEY, []).append(item.to_dict())
        self._save(doc)
        logger.info("Added %s (%s) to fleet, total cost $%.2f", item.name, item.id, item.total_cost)
        return item

    def filter(self, status: Union[MissionStatus, str, None] = None, now: Optional[datetime] = None) -> list[FleetItem]:
        items = self.items()
        if status is None or status == "all":
            return items
        wanted = MissionStatus(status)
        now = _now(now)
        return [item for item in items if mission_status(item, now) == wanted]

    def set_active(self, item: FleetItem) -> bool:
        if not item.norad_id:
            logger.warning("No NORAD ID available for satellite %s (%s)", item.name, item.id)
            return False

        doc = self._load()
        doc[config.ACTIVE_NORAD_KEY] = str(item.norad_id)
        doc[config.ACTIVE_DATA_KEY] = {
            "name": item.name,
            "type": item.type,
            "orbit": item.orbit,
            "downlinkRate": item.downlink_rate,
            "startDate": item.start_date.isoformat(),
            "endDate": item.end_date.isoformat(),
            "noradId": item.norad_id,
        }
        self._save(doc)
        logger.info("Active satellite set to %s (NORAD %s)", item.name, item.norad_id)
        return True

    def active(self) -> Optional[dict[str, Any]]:
        doc = self._load()
        if not doc.get(config.ACTIVE_NORAD_KEY):
            return None
        return doc.get(config.ACTIVE_DATA_KEY)

    def active_norad_id(self) -> Optional[int]:
        raw = self._load().get(config.ACTIVE_NORAD_KEY)
        return int(raw) if raw else None

    def clear(self) -> None:
        doc = self._load()
        doc[config.FLEET_KEY] = []
        doc.pop(config.ACTIVE_NORAD_KEY, None)
        doc.pop(config.ACTIVE_DATA_KEY, None)
        self._save(doc)
        logger.info("Fleet cleared")
