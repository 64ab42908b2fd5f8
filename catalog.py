"""Static satellite catalog: categories, satellite types and their cost tables."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

import config

logger = logging.getLogger(__name__)

SPEC_FIELDS = {
    "Resolution": "resolution",
    "SwathWidth": "swath_width",
    "SpectralBands": "spectral_bands",
    "DataDelivery": "data_delivery",
    "InstrumentType": "instrument_type",
    "Applications": "applications",
}


class CatalogError(RuntimeError):
    """Raised when the catalog file cannot be read."""


@dataclass(frozen=True)
class Category:
    name: str
    image: str = config.DEFAULT_CATEGORY_IMAGE


@dataclass(frozen=True)
class CatalogEntry:
    name: str
    category: str
    image: str
    orbit_types: list[str] = field(default_factory=list)
    cost_per_day: dict[str, Any] = field(default_factory=dict)
    downlink_cost: dict[str, Any] = field(default_factory=dict)
    downlink_data_rate: dict[str, str] = field(default_factory=dict)
    specs: dict[str, str] = field(default_factory=dict)
    current_fleet: dict[str, str] = field(default_factory=dict)
    manufacturer: dict[str, str] = field(default_factory=dict)
    norad_id: Optional[int] = None

    def orbit_cost(self, orbit: str) -> Any:
        """Raw $/day value for an orbit, or None when the orbit is not offered."""
        return self.cost_per_day.get(orbit.upper()) if orbit else None

    def downlink_cost_for(self, rate: str) -> Any:
        """Raw $/day value for a downlink rate; keys are stored lower-case."""
        return self.downlink_cost.get(rate.lower()) if rate else None


def parse_orbit_types(raw: Any) -> list[str]:
    """Split an ``OrbitType`` string like ``"LEO, SSO"`` into upper-case names."""
    if not raw:
        return []
    return [orbit.strip().upper() for orbit in str(raw).split(",") if orbit.strip()]


def _parse_norad(raw: Any) -> Optional[int]:
    if raw in (None, ""):
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric NORAD id %r", raw)
        return None


def _build_entry(name: str, category: str, details: dict[str, Any]) -> CatalogEntry:
    return CatalogEntry(
        name=name,
        category=category,
        image=details.get("Image", ""),
        orbit_types=parse_orbit_types(details.get("OrbitType")),
        cost_per_day={str(k).upper(): v for k, v in (details.get("CostPerDay") or {}).items()},
        downlink_cost={str(k).lower(): v for k, v in (details.get("DownlinkCost") or {}).items()},
        downlink_data_rate=dict(details.get("downlinkDataRate") or {}),
        specs={attr: str(details[key]) for key, attr in SPEC_FIELDS.items() if key in details},
        current_fleet=dict(details.get("currentFleet") or {}),
        manufacturer=dict(details.get("manufacturer") or {}),
        norad_id=_parse_norad(details.get("NoradId")),
    )


class SatelliteCatalog:
    """Read-only view over the category -> satellite mapping."""

    def __init__(self, raw: dict[str, Any]):
        self._raw = raw

    def categories(self) -> list[Category]:
        out = []
        for name, body in self._raw.items():
            image = body.get("image") if isinstance(body, dict) else None
            out.append(Category(name=name, image=image or config.DEFAULT_CATEGORY_IMAGE))
        return out

    def satellites(self, category: str) -> list[CatalogEntry]:
        """Satellite entries of a category; entries without a name or image are skipped."""
        body = self._raw.get(category)
        if not isinstance(body, dict):
            return []

        entries = []
        for name, details in body.items():
            # Non-dict members are category metadata such as the card image.
            if not isinstance(details, dict):
                continue
            entry = _build_entry(name, category, details)
            if entry.name and entry.image:
                entries.append(entry)
        return entries

    def find(self, name: str) -> Optional[CatalogEntry]:
        for category in self._raw:
            for entry in self.satellites(category):
                if entry.name == name:
                    return entry
        return None

    def __len__(self) -> int:
        return sum(len(self.satellites(c)) for c in self._raw)


def load_catalog(path: Path = config.CATALOG_PATH) -> SatelliteCatalog:
    """Load the catalog JSON document from disk."""
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError as exc:
        raise CatalogError(f"Catalog file not found: {path}") from exc
    except json.JSONDecodeError as exc:
        raise CatalogError(f"Catalog file is not valid JSON: {path}") from exc

    if not isinstance(raw, dict):
        raise CatalogError(f"Catalog root must be an object of categories: {path}")

    catalog = SatelliteCatalog(raw)
    logger.info("Loaded %d satellites in %d categories from %s", len(catalog), len(raw), path)
    return catalog
