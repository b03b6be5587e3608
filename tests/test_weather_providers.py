"""Test weather providers: Open-Meteo parsing and bundle weather."""

import pandas as pd
import pytest
import requests

from solarhub_engine.core.schemas import OPEN_METEO_URL
from solarhub_engine.forecast.interface import WeatherProviderError
from solarhub_engine.forecast.providers import BundleWeatherProvider, OpenMeteoProvider
from solarhub_engine.io.templates import clear_sky_weather


class FakeResponse:
    def __init__(self, status_code=200, payload=None, invalid_json=False):
        self.status_code = status_code
        self._payload = payload or {}
        self._invalid_json = invalid_json

    def json(self):
        if self._invalid_json:
            raise requests.JSONDecodeError("Expecting value", "<html>", 0)
        return self._payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"HTTP {self.status_code}")


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def get(self, url, params=None, timeout=None):
        self.calls.append({"url": url, "params": params, "timeout": timeout})
        if self.error is not None:
            raise self.error
        return self.response


def _payload(hours=24, **overrides):
    hourly = {
        "time": [f"2024-06-01T{h % 24:02d}:00" for h in range(hours)],
        "temperature_2m": [15.0 + h * 0.5 for h in range(hours)],
        "shortwave_radiation": [max(0.0, 800.0 - abs(h - 12) * 120.0) for h in range(hours)],
        "direct_radiation": [max(0.0, 600.0 - abs(h - 12) * 90.0) for h in range(hours)],
        "diffuse_radiation": [max(0.0, 200.0 - abs(h - 12) * 30.0) for h in range(hours)],
    }
    hourly.update(overrides)
    return {
        "current_weather": {"temperature": 18.5, "windspeed": 11.2},
        "hourly": hourly,
    }


def _provider(session):
    return OpenMeteoProvider(timeout_seconds=5.0, session=session)


def test_fetch_sends_location_and_variables():
    """Test the request carries the location, hourly variables and timeout."""
    session = FakeSession(FakeResponse(200, _payload()))

    _provider(session).fetch(35.68, 139.69)

    assert len(session.calls) == 1
    call = session.calls[0]
    assert call["url"] == OPEN_METEO_URL
    assert call["timeout"] == 5.0
    assert call["params"]["latitude"] == 35.68
    assert call["params"]["longitude"] == 139.69
    assert call["params"]["current_weather"] == "true"
    assert "shortwave_radiation" in call["params"]["hourly"]


def test_fetch_parses_current_and_hourly():
    """Test current conditions and the radiation mapping."""
    session = FakeSession(FakeResponse(200, _payload()))

    weather = _provider(session).fetch(35.0, 139.0)

    assert weather.current.temperature_c == 18.5
    assert weather.current.wind_speed_kmh == 11.2
    assert len(weather.hourly_temperatures_c) == 24
    assert len(weather.irradiance) == 24

    noon = weather.irradiance[12]
    assert noon.hour == 12
    assert noon.ghi_wm2 == 800.0
    assert noon.dni_wm2 == 600.0
    assert noon.dhi_wm2 == 200.0
    assert weather.hourly_temperatures_c[12] == 21.0


def test_only_first_24_hours_kept():
    """Test that a multi-day response is truncated to one day."""
    session = FakeSession(FakeResponse(200, _payload(hours=48)))

    weather = _provider(session).fetch(35.0, 139.0)

    assert len(weather.irradiance) == 24
    assert len(weather.hourly_temperatures_c) == 24
    assert [s.hour for s in weather.irradiance] == list(range(24))


def test_short_response_is_not_padded():
    """Test that fewer than 24 entries are returned as-is."""
    session = FakeSession(FakeResponse(200, _payload(hours=10)))

    weather = _provider(session).fetch(35.0, 139.0)

    assert len(weather.irradiance) == 10
    assert len(weather.hourly_temperatures_c) == 10


def test_null_entries_are_defaulted():
    """Test that null temperatures become 20 °C and null radiation 0 W/m²."""
    payload = _payload()
    payload["hourly"]["temperature_2m"][3] = None
    payload["hourly"]["shortwave_radiation"][12] = None
    payload["hourly"]["diffuse_radiation"][12] = None
    session = FakeSession(FakeResponse(200, payload))

    weather = _provider(session).fetch(35.0, 139.0)

    assert weather.hourly_temperatures_c[3] == 20.0
    assert weather.irradiance[12].ghi_wm2 == 0.0
    assert weather.irradiance[12].dhi_wm2 == 0.0
    assert weather.irradiance[12].dni_wm2 == 600.0


def test_http_error_raises_provider_error():
    """Test that a non-success status is reported as a provider error."""
    session = FakeSession(FakeResponse(503))

    with pytest.raises(WeatherProviderError, match="Failed to fetch weather data"):
        _provider(session).fetch(35.0, 139.0)


def test_connection_error_raises_provider_error():
    """Test that transport failures are reported as a provider error."""
    session = FakeSession(error=requests.ConnectionError("connection refused"))

    with pytest.raises(WeatherProviderError, match="connection refused"):
        _provider(session).fetch(35.0, 139.0)


def test_timeout_raises_provider_error():
    session = FakeSession(error=requests.Timeout("read timed out"))

    with pytest.raises(WeatherProviderError):
        _provider(session).fetch(35.0, 139.0)


def test_invalid_json_raises_provider_error():
    session = FakeSession(FakeResponse(200, invalid_json=True))

    with pytest.raises(WeatherProviderError, match="invalid JSON"):
        _provider(session).fetch(35.0, 139.0)


@pytest.mark.parametrize("missing", ["current_weather", "hourly"])
def test_missing_section_raises_provider_error(missing):
    """Test that a response without a required section is malformed."""
    payload = _payload()
    del payload[missing]
    session = FakeSession(FakeResponse(200, payload))

    with pytest.raises(WeatherProviderError, match="Malformed weather response"):
        _provider(session).fetch(35.0, 139.0)


def test_missing_hourly_variable_raises_provider_error():
    payload = _payload()
    del payload["hourly"]["direct_radiation"]

    with pytest.raises(WeatherProviderError, match="direct_radiation"):
        OpenMeteoProvider.parse(payload)


@pytest.mark.parametrize(
    "variable",
    ["temperature_2m", "shortwave_radiation", "direct_radiation", "diffuse_radiation"],
)
def test_null_hourly_array_raises_provider_error(variable):
    """Test that a null array in place of hourly values is malformed."""
    session = FakeSession(FakeResponse(200, _payload(**{variable: None})))

    with pytest.raises(WeatherProviderError, match="invalid hourly values"):
        _provider(session).fetch(35.0, 139.0)


@pytest.mark.parametrize("variable", ["temperature_2m", "shortwave_radiation"])
def test_non_numeric_hourly_values_raise_provider_error(variable):
    payload = _payload(**{variable: ["n/a"] * 24})

    with pytest.raises(WeatherProviderError, match="invalid hourly values"):
        OpenMeteoProvider.parse(payload)


def test_non_numeric_current_conditions_raise_provider_error():
    payload = _payload()
    payload["current_weather"]["temperature"] = "warm"

    with pytest.raises(WeatherProviderError, match="Malformed weather response"):
        OpenMeteoProvider.parse(payload)


def test_bundle_provider_serves_stored_weather():
    """Test that bundle weather ignores the location and keeps hour order."""
    weather = BundleWeatherProvider(clear_sky_weather()).fetch(0.0, 0.0)

    assert weather.current is None
    assert len(weather.irradiance) == 24
    assert [s.hour for s in weather.irradiance] == list(range(24))
    assert weather.irradiance[12].ghi_wm2 == pytest.approx(850.0)
    assert weather.irradiance[0].ghi_wm2 == 0.0


def test_bundle_provider_fills_gaps():
    """Test that missing hours inside the day become zero irradiance and 25 °C."""
    frame = clear_sky_weather().drop(index=[10, 11])

    weather = BundleWeatherProvider(frame).fetch(0.0, 0.0)

    assert len(weather.irradiance) == 24
    assert weather.irradiance[10].ghi_wm2 == 0.0
    assert weather.irradiance[11].dni_wm2 == 0.0
    assert weather.hourly_temperatures_c[10] == 25.0
    assert weather.irradiance[12].ghi_wm2 == pytest.approx(850.0)


def test_bundle_provider_drops_hours_outside_day():
    frame = clear_sky_weather()
    extra = frame.loc[[12]].copy()
    extra.index = pd.Index([30], name="hour")

    weather = BundleWeatherProvider(pd.concat([frame, extra])).fetch(0.0, 0.0)

    assert len(weather.irradiance) == 24


def test_bundle_provider_missing_columns():
    frame = clear_sky_weather().drop(columns=["dni_wm2"])

    with pytest.raises(WeatherProviderError, match="Invalid bundle weather"):
        BundleWeatherProvider(frame).fetch(0.0, 0.0)
