"""Tracking proxy: relays two read-only N2YO endpoints so the dashboard never sees the API key."""

from __future__ import annotations

import logging
from typing import Optional

import requests
from flask import Flask, jsonify

import config
from core.logging_config import setup_logging
from core.settings import RuntimeSettings

logger = logging.getLogger(__name__)


class UpstreamError(RuntimeError):
    """The tracking API could not be reached or answered badly."""


def _fetch_upstream(url: str, timeout: float):
    """GET a JSON document from the tracking API."""
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
        return resp.json()
    except (requests.RequestException, ValueError) as exc:
        raise UpstreamError(str(exc)) from exc


def create_app(settings: Optional[RuntimeSettings] = None) -> Flask:
    settings = settings or RuntimeSettings.from_env()
    app = Flask(__name__)
    base_url = config.N2YO_BASE_URL

    if not settings.n2yo_api_key:
        logger.warning("N2YO_API_KEY is not set; tracking requests will fail")

    def relay(url: str, failure_message: str):
        if not settings.n2yo_api_key:
            logger.error("%s: N2YO_API_KEY is not configured", failure_message)
            return jsonify({"error": failure_message}), 500
        try:
            return jsonify(_fetch_upstream(url, settings.http_timeout_seconds))
        except UpstreamError as exc:
            logger.error("%s: %s", failure_message, exc)
            return jsonify({"error": failure_message}), 500

    @app.after_request
    def allow_any_origin(response):
        response.headers["Access-Control-Allow-Origin"] = "*"
        return response

    @app.route("/api/satellite/positions/<sat_id>/<observer_lat>/<observer_lng>/<observer_alt>/<seconds>")
    def satellite_positions(sat_id, observer_lat, observer_lng, observer_alt, seconds):
        url = (
            f"{base_url}/positions/{sat_id}/{observer_lat}/{observer_lng}/{observer_alt}/{seconds}"
            f"/&apiKey={settings.n2yo_api_key}"
        )
        return relay(url, "Failed to fetch satellite positions")

    @app.route("/api/satellite/tle/<sat_id>")
    def satellite_tle(sat_id):
        url = f"{base_url}/tle/{sat_id}&apiKey={settings.n2yo_api_key}"
        return relay(url, "Failed to fetch TLE data")

    return app


def main() -> None:
    settings = RuntimeSettings.from_env()
    setup_logging(settings.log_level)
    app = create_app(settings)
    logger.info("Proxy server running on port %d", settings.proxy_port)
    app.run(host="0.0.0.0", port=settings.proxy_port)


if __name__ == "__main__":
    main()
