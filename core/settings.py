"""Environment-driven runtime settings for the Mission Deck."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

import config


def _env_int(name: str, default: int) -> int:
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return int(val)
    except ValueError:
        return default


def _env_float(name: str, default: float) -> float:
    val = os.getenv(name)
    if val is None:
        return default
    try:
        return float(val)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    val = os.getenv(name)
    return Path(val) if val else default


@dataclass(frozen=True)
class RuntimeSettings:
    app_env: str
    log_level: str
    n2yo_api_key: str | None
    proxy_port: int
    proxy_url: str
    http_timeout_seconds: float
    fleet_path: Path
    catalog_path: Path
    refresh_seconds: float

    @classmethod
    def from_env(cls) -> "RuntimeSettings":
        port = _env_int("PORT", 3001)
        return cls(
            app_env=os.getenv("MISSIONDECK_APP_ENV", "dev"),
            log_level=os.getenv("MISSIONDECK_LOG_LEVEL", "INFO").upper(),
            n2yo_api_key=os.getenv("N2YO_API_KEY") or None,
            proxy_port=port,
            proxy_url=os.getenv("MISSIONDECK_PROXY_URL", f"http://localhost:{port}/api").rstrip("/"),
            http_timeout_seconds=_env_float("MISSIONDECK_HTTP_TIMEOUT_SECONDS", 8.0),
            fleet_path=_env_path("MISSIONDECK_FLEET_PATH", config.FLEET_STORE_PATH),
            catalog_path=_env_path("MISSIONDECK_CATALOG_PATH", config.CATALOG_PATH),
            refresh_seconds=_env_float("MISSIONDECK_REFRESH_SECONDS", 1.0),
        )
