"""Live satellite positions and TLEs via the tracking proxy.

Failures never raise into the dashboard: every call logs and returns None so
the page can show a generic message instead.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import requests

import config
from core.settings import RuntimeSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Observer:
    latitude: float = config.DEFAULT_OBSERVER_LAT
    longitude: float = config.DEFAULT_OBSERVER_LNG
    altitude: float = config.DEFAULT_OBSERVER_ALT


DEFAULT_OBSERVER = Observer()


@dataclass
class SatellitePosition:
    satlatitude: float
    satlongitude: float
    sataltitude: float
    azimuth: float
    elevation: float
    ra: float
    dec: float
    timestamp: int


@dataclass
class SatellitePositions:
    satname: str
    satid: int
    positions: list[SatellitePosition] = field(default_factory=list)

    @property
    def latest(self) -> Optional[SatellitePosition]:
        return self.positions[0] if self.positions else None


@dataclass
class TLEData:
    satname: str
    satid: int
    tle: list[str]


def _resolve(proxy_url: Optional[str], timeout_sec: Optional[float]) -> tuple[str, float]:
    """Fill an unset proxy URL or timeout from the runtime settings."""
    if proxy_url is not None and timeout_sec is not None:
        return proxy_url, timeout_sec
    settings = RuntimeSettings.from_env()
    return proxy_url or settings.proxy_url, timeout_sec or settings.http_timeout_seconds


def _get_json(url: str, timeout_sec: float) -> dict:
    resp = requests.get(url, timeout=timeout_sec)
    resp.raise_for_status()
    payload = resp.json()
    if not isinstance(payload, dict):
        raise ValueError(f"Unexpected payload type {type(payload).__name__}")
    return payload


def _parse_position(raw: dict) -> SatellitePosition:
    return SatellitePosition(
        satlatitude=float(raw["satlatitude"]),
        satlongitude=float(raw["satlongitude"]),
        sataltitude=float(raw["sataltitude"]),
        azimuth=float(raw.get("azimuth", 0.0)),
        elevation=float(raw.get("elevation", 0.0)),
        ra=float(raw.get("ra", 0.0)),
        dec=float(raw.get("dec", 0.0)),
        timestamp=int(raw.get("timestamp", 0)),
    )


def fetch_positions(
    norad_id: int,
    observer: Observer = DEFAULT_OBSERVER,
    seconds: int = config.DEFAULT_POSITION_SECONDS,
    satname: str = "",
    proxy_url: Optional[str] = None,
    timeout_sec: Optional[float] = None,
) -> Optional[SatellitePositions]:
    """Fetch upcoming positions for a NORAD id as seen from the observer."""
    proxy_url, timeout_sec = _resolve(proxy_url, timeout_sec)
    url = (
        f"{proxy_url}/satellite/positions/{norad_id}/"
        f"{observer.latitude}/{observer.longitude}/{observer.altitude:g}/{seconds}"
    )
    try:
        payload = _get_json(url, timeout_sec)
        positions = [_parse_position(p) for p in payload.get("positions") or []]
    except (requests.RequestException, KeyError, TypeError, ValueError) as exc:
        logger.warning("Error fetching satellite positions for NORAD %s: %s", norad_id, exc)
        return None

    if not positions:
        logger.warning("No positions returned for NORAD %s", norad_id)
        return None

    info = payload.get("info") or {}
    return SatellitePositions(
        satname=satname or info.get("satname", ""),
        satid=int(info.get("satid", norad_id)),
        positions=positions,
    )


def fetch_tle(
    norad_id: int, proxy_url: Optional[str] = None, timeout_sec: Optional[float] = None
) -> Optional[TLEData]:
    """Fetch the latest two-line element set for a NORAD id."""
    proxy_url, timeout_sec = _resolve(proxy_url, timeout_sec)
    try:
        payload = _get_json(f"{proxy_url}/satellite/tle/{norad_id}", timeout_sec)
        info = payload.get("info") or {}
        lines = [line.strip() for line in str(payload.get("tle", "")).splitlines() if line.strip()]
    except (requests.RequestException, TypeError, ValueError) as exc:
        logger.warning("Error fetching TLE data for NORAD %s: %s", norad_id, exc)
        return None

    if len(lines) < 2:
        logger.warning("No valid TLE returned for NORAD %s", norad_id)
        return None

    return TLEData(satname=info.get("satname", ""), satid=int(info.get("satid", norad_id)), tle=lines[:2])
