import requests

from utils import tracking


class _FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        return None

    def json(self):
        return self._payload


def _patch(monkeypatch, payload=None, exc=None):
    urls = []

    def fake_get(url, timeout):
        urls.append(url)
        if exc is not None:
            raise exc
        return _FakeResponse(payload)

    monkeypatch.setattr(tracking.requests, "get", fake_get)
    return urls


def test_fetch_positions_parses_payload(monkeypatch):
    payload = {
        "info": {"satname": "SPACE STATION", "satid": 25544},
        "positions": [
            {"satlatitude": 10.5, "satlongitude": -40.25, "sataltitude": 418.2, "azimuth": 1, "elevation": -30,
             "ra": 2, "dec": 3, "timestamp": 1700000000},
        ],
    }
    urls = _patch(monkeypatch, payload)

    result = tracking.fetch_positions(25544, proxy_url="http://proxy/api")

    assert urls == ["http://proxy/api/satellite/positions/25544/41.702/-76.014/0/2"]
    assert result.satname == "SPACE STATION"
    assert result.latest.sataltitude == 418.2
    assert result.latest.timestamp == 1700000000


def test_fetch_positions_prefers_given_name(monkeypatch):
    _patch(monkeypatch, {"positions": [{"satlatitude": 0, "satlongitude": 0, "sataltitude": 500}]})

    result = tracking.fetch_positions(40697, proxy_url="http://proxy/api", satname="Sentinel-2")

    assert result.satname == "Sentinel-2"
    assert result.satid == 40697


def test_fetch_positions_returns_none_on_failure(monkeypatch):
    _patch(monkeypatch, exc=requests.ConnectionError("proxy down"))
    assert tracking.fetch_positions(25544, proxy_url="http://proxy/api") is None


def test_fetch_positions_returns_none_without_positions(monkeypatch):
    _patch(monkeypatch, {"error": "Failed to fetch satellite positions"})
    assert tracking.fetch_positions(25544, proxy_url="http://proxy/api") is None


def test_fetch_tle_splits_lines(monkeypatch):
    _patch(monkeypatch, {"info": {"satname": "ISS", "satid": 25544}, "tle": "1 25544U 98067A\r\n2 25544  51.6421"})

    tle = tracking.fetch_tle(25544, proxy_url="http://proxy/api")

    assert tle.tle == ["1 25544U 98067A", "2 25544  51.6421"]
    assert tle.satname == "ISS"


def test_fetch_tle_rejects_short_payload(monkeypatch):
    _patch(monkeypatch, {"tle": ""})
    assert tracking.fetch_tle(25544, proxy_url="http://proxy/api") is None


def test_default_calls_use_settings_proxy_and_degrade(monkeypatch):
    monkeypatch.setenv("MISSIONDECK_PROXY_URL", "http://deck-proxy:3001/api")
    urls = _patch(monkeypatch, exc=requests.ConnectionError("proxy down"))

    assert tracking.fetch_positions(25544) is None
    assert tracking.fetch_tle(25544) is None
    assert urls == [
        "http://deck-proxy:3001/api/satellite/positions/25544/41.702/-76.014/0/2",
        "http://deck-proxy:3001/api/satellite/tle/25544",
    ]
