"""Current space weather from the NOAA SWPC public products."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import requests

import config

logger = logging.getLogger(__name__)

PRODUCTS = {
    "scales": "noaa-scales.json",
    "wind_speed": "summary/solar-wind-speed.json",
    "mag_field": "summary/solar-wind-mag-field.json",
    "radio_flux": "summary/10cm-flux.json",
}

SCALE_COLORS = {
    "none": "#93D04F",
    "minor": "#F6EB14",
    "moderate": "#FFC800",
    "strong": "#FF9600",
    "severe": "#FF0000",
    "extreme": "#C80000",
}


@dataclass(frozen=True)
class ScaleReading:
    scale: str
    text: str


@dataclass(frozen=True)
class SpaceWeather:
    observed_max: dict[str, ScaleReading]
    latest_observed: dict[str, ScaleReading]
    predicted: dict[str, ScaleReading]
    solar_wind_speed: str
    solar_wind_bt: str
    solar_wind_bz: str
    radio_flux: str


def scale_color(text: str) -> str:
    return SCALE_COLORS.get((text or "").lower(), "#808080")


def _readings(block) -> dict[str, ScaleReading]:
    block = block if isinstance(block, dict) else {}
    out = {}
    for letter in ("R", "S", "G"):
        raw = block.get(letter) or {}
        out[letter] = ScaleReading(scale=str(raw.get("Scale") or "0"), text=str(raw.get("Text") or "None"))
    return out


def _summary_value(payload, key: str) -> str:
    # Summary products have been served both as an object and as a one-item list.
    if isinstance(payload, list):
        payload = payload[0] if payload else {}
    value = payload.get(key) if isinstance(payload, dict) else None
    return str(value) if value not in (None, "") else "N/A"


def fetch_space_weather(base_url: str = config.SWPC_BASE_URL, timeout_sec: float = 8.0) -> Optional[SpaceWeather]:
    """Fetch NOAA scales, solar wind and radio flux; None when any product fails."""
    data = {}
    try:
        for key, product in PRODUCTS.items():
            resp = requests.get(f"{base_url}/{product}", timeout=timeout_sec)
            resp.raise_for_status()
            data[key] = resp.json()
    except (requests.RequestException, ValueError) as exc:
        logger.warning("Error fetching space weather data: %s", exc)
        return None

    scales = data["scales"] if isinstance(data["scales"], dict) else {}
    return SpaceWeather(
        observed_max=_readings(scales.get("-1")),
        latest_observed=_readings(scales.get("0")),
        predicted=_readings(scales.get("1")),
        solar_wind_speed=_summary_value(data["wind_speed"], "WindSpeed"),
        solar_wind_bt=_summary_value(data["mag_field"], "Bt"),
        solar_wind_bz=_summary_value(data["mag_field"], "Bz"),
        radio_flux=_summary_value(data["radio_flux"], "Flux"),
    )
