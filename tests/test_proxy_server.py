from dataclasses import replace

import requests

import proxy_server
from core.settings import RuntimeSettings


class _FakeResponse:
    def __init__(self, payload=None, status=200):
        self._payload = payload
        self.status_code = status

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is None:
            raise ValueError("no json")
        return self._payload


def _settings(**overrides):
    fields = {"n2yo_api_key": "KEY", "http_timeout_seconds": 3.0}
    fields.update(overrides)
    return replace(RuntimeSettings.from_env(), **fields)


def _client(monkeypatch, response=None, exc=None, **settings):
    calls = []

    def fake_get(url, timeout):
        calls.append((url, timeout))
        if exc is not None:
            raise exc
        return response

    monkeypatch.setattr(proxy_server.requests, "get", fake_get)
    app = proxy_server.create_app(_settings(**settings))
    return app.test_client(), calls


def test_positions_are_relayed_verbatim(monkeypatch):
    payload = {"info": {"satid": 25544}, "positions": [{"satlatitude": 1.0}]}
    client, calls = _client(monkeypatch, response=_FakeResponse(payload))

    resp = client.get("/api/satellite/positions/25544/41.702/-76.014/0/2")

    assert resp.status_code == 200
    assert resp.get_json() == payload
    assert resp.headers["Access-Control-Allow-Origin"] == "*"
    assert calls == [
        ("https://api.n2yo.com/rest/v1/satellite/positions/25544/41.702/-76.014/0/2/&apiKey=KEY", 3.0)
    ]


def test_tle_is_relayed(monkeypatch):
    payload = {"info": {"satid": 25544}, "tle": "1 25544U\r\n2 25544"}
    client, calls = _client(monkeypatch, response=_FakeResponse(payload))

    resp = client.get("/api/satellite/tle/25544")

    assert resp.get_json() == payload
    assert calls[0][0] == "https://api.n2yo.com/rest/v1/satellite/tle/25544&apiKey=KEY"


def test_network_failure_maps_to_500(monkeypatch):
    client, _ = _client(monkeypatch, exc=requests.ConnectionError("down"))

    resp = client.get("/api/satellite/positions/25544/41.702/-76.014/0/2")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to fetch satellite positions"}
    assert resp.headers["Access-Control-Allow-Origin"] == "*"


def test_upstream_error_status_maps_to_500(monkeypatch):
    client, _ = _client(monkeypatch, response=_FakeResponse({"error": "nope"}, status=403))

    resp = client.get("/api/satellite/tle/25544")

    assert resp.status_code == 500
    assert resp.get_json() == {"error": "Failed to fetch TLE data"}


def test_non_json_upstream_maps_to_500(monkeypatch):
    client, _ = _client(monkeypatch, response=_FakeResponse(None))
    assert client.get("/api/satellite/tle/25544").status_code == 500


def test_missing_api_key_never_calls_upstream(monkeypatch):
    client, calls = _client(monkeypatch, response=_FakeResponse({}), n2yo_api_key=None)

    resp = client.get("/api/satellite/tle/25544")

    assert resp.status_code == 500
    assert calls == []
