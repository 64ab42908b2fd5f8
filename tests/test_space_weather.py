import requests

from utils import space_weather


class _FakeResponse:
    def __init__(self, payload):
        self._payload = payload

    def raise_for_status(self):
        return None

    def json(self):
        return self._payload


PAYLOADS = {
    "noaa-scales.json": {
        "-1": {"R": {"Scale": "1", "Text": "minor"}, "S": {"Scale": "0", "Text": "none"}, "G": {}},
        "0": {"R": {"Scale": "0", "Text": "none"}},
        "1": {},
    },
    "summary/solar-wind-speed.json": {"WindSpeed": "412"},
    "summary/solar-wind-mag-field.json": [{"Bt": "5", "Bz": "-2"}],
    "summary/10cm-flux.json": {"Flux": ""},
}


def test_fetch_space_weather_collects_products(monkeypatch):
    def fake_get(url, timeout):
        product = url.split("/products/", 1)[1]
        return _FakeResponse(PAYLOADS[product])

    monkeypatch.setattr(space_weather.requests, "get", fake_get)
    weather = space_weather.fetch_space_weather()

    assert weather.observed_max["R"].text == "minor"
    assert weather.observed_max["G"].scale == "0"
    assert weather.predicted["S"].text == "None"
    assert weather.solar_wind_speed == "412"
    assert weather.solar_wind_bz == "-2"
    assert weather.radio_flux == "N/A"


def test_fetch_space_weather_returns_none_on_failure(monkeypatch):
    def fake_get(url, timeout):
        raise requests.Timeout("slow")

    monkeypatch.setattr(space_weather.requests, "get", fake_get)
    assert space_weather.fetch_space_weather() is None


def test_scale_color_palette():
    assert space_weather.scale_color("Severe") == "#FF0000"
    assert space_weather.scale_color("unknown") == "#808080"
