"""Golden bundle tests - template bundles produce sane forecasts end to end."""

import json

import pandas as pd
import pytest

from solarhub_engine.core.validate import ValidationError
from solarhub_engine.forecast.providers import BundleWeatherProvider
from solarhub_engine.io.bundle import init_bundle, load_bundle, validate_bundle
from solarhub_engine.io.templates import TEMPLATES, clear_sky_weather
from solarhub_engine.runners.daily import run_forecast


@pytest.fixture
def make_bundle(tmp_path):
    """Create a bundle from a template inside a temporary directory."""

    def _make(template_name):
        bundle_path = tmp_path / template_name
        site_config, run_config, load_profile, weather = TEMPLATES[template_name]()
        init_bundle(bundle_path, site_config, run_config, load_profile, weather)
        return bundle_path

    return _make


def test_average_household_bundle(make_bundle):
    """Test PV + lithium-ion battery + flat load bundle."""
    bundle_path = make_bundle("average_household")

    forecast, summary = run_forecast(str(bundle_path))

    assert len(forecast) == 24, "Forecast should cover 24 hours"
    assert summary["total_consumption_kwh"] == pytest.approx(20.0)
    assert summary["total_production_kwh"] > 0, "Panels should produce on a clear day"
    assert summary["battery_cycles"] > 0, "Battery should be used"
    assert summary["peak_production_hour"] == 12

    for col in ["production_kwh", "consumption_kwh", "grid_draw_kwh", "excess_kwh"]:
        assert (forecast[col] >= -1e-6).all(), f"{col} should be non-negative"


def test_appliance_schedule_bundle(make_bundle):
    """Test lead-acid battery with a wrapping appliance schedule."""
    bundle_path = make_bundle("appliance_schedule")

    forecast, summary = run_forecast(str(bundle_path))

    # Heat pump runs 22:00-05:00 on top of fridge and router
    assert forecast.loc[23, "consumption_kwh"] == pytest.approx(0.15 + 0.015 + 1.2)
    assert forecast.loc[3, "consumption_kwh"] == pytest.approx(0.15 + 0.015 + 1.2)
    assert forecast.loc[14, "consumption_kwh"] == pytest.approx(0.15 + 0.015)
    assert summary["site_id"] == "example_site_002"


def test_no_battery_bundle(make_bundle):
    """Test that a panels-only bundle never touches the battery."""
    bundle_path = make_bundle("no_battery")

    forecast, summary = run_forecast(str(bundle_path))

    assert (forecast["battery_delta_kwh"] == 0.0).all()
    assert summary["battery_cycles"] == 0.0
    assert summary["final_soc_pct"] == summary["initial_soc_pct"]


def test_results_written_to_bundle(make_bundle):
    """Test that forecast, summary and metadata are written."""
    bundle_path = make_bundle("average_household")

    forecast, summary = run_forecast(str(bundle_path))

    written = pd.read_parquet(bundle_path / "forecast.parquet")
    assert list(written["hour"]) == list(range(24))
    assert written["production_kwh"].sum() == pytest.approx(forecast["production_kwh"].sum())

    with open(bundle_path / "summary.json") as f:
        stored = json.load(f)
    assert stored["final_soc_pct"] == pytest.approx(summary["final_soc_pct"])

    with open(bundle_path / "bundle_metadata.json") as f:
        metadata = json.load(f)
    assert metadata["weather_source"] == "bundle"


def test_reruns_are_reproducible(make_bundle):
    """Test that running the same bundle twice gives identical results."""
    bundle_path = make_bundle("appliance_schedule")

    first, _ = run_forecast(str(bundle_path))
    second, _ = run_forecast(str(bundle_path))

    pd.testing.assert_frame_equal(first, second)


def test_bundle_round_trips_config(make_bundle):
    """Test that configs written by init_bundle load back unchanged."""
    bundle_path = make_bundle("appliance_schedule")
    site_config, run_config, load_profile, _ = TEMPLATES["appliance_schedule"]()

    loaded_site, loaded_run, loaded_profile = load_bundle(bundle_path)

    assert loaded_site == site_config
    assert loaded_run == run_config
    assert loaded_profile == load_profile


def test_validate_bundle_requires_weather(make_bundle):
    """Test that a bundle-weather run without weather.parquet is invalid."""
    bundle_path = make_bundle("average_household")
    assert validate_bundle(bundle_path)

    (bundle_path / "weather.parquet").unlink()

    with pytest.raises(ValueError, match="weather.parquet"):
        validate_bundle(bundle_path)


def test_missing_bundle():
    """Test that a missing bundle directory is reported."""
    with pytest.raises(FileNotFoundError):
        run_forecast("/nonexistent/bundle")


def test_weather_missing_columns(make_bundle):
    """Test that weather without required columns is rejected before simulating."""
    bundle_path = make_bundle("average_household")
    pd.DataFrame({"hour": range(24), "ghi_wm2": [0.0] * 24}).to_parquet(
        bundle_path / "weather.parquet"
    )

    with pytest.raises(ValidationError, match="Missing required columns"):
        run_forecast(str(bundle_path))

    assert not (bundle_path / "forecast.parquet").exists()


class RecordingProvider:
    """Serves clear-sky weather and records requested locations."""

    def __init__(self):
        self.calls = []

    def fetch(self, latitude, longitude):
        self.calls.append((latitude, longitude))
        return BundleWeatherProvider(clear_sky_weather()).fetch(latitude, longitude)


def _drop_longitude(bundle_path, **run_updates):
    site_config, run_config, load_profile = load_bundle(bundle_path)
    site_config = site_config.model_copy(update={"longitude": None})
    if run_updates:
        weather = run_config.weather.model_copy(update=run_updates)
        run_config = run_config.model_copy(update={"weather": weather})
    init_bundle(bundle_path, site_config, run_config, load_profile)


def test_explicit_provider_gets_site_location(make_bundle):
    """Test that an injected provider is queried at the site coordinates."""
    bundle_path = make_bundle("average_household")
    provider = RecordingProvider()

    run_forecast(str(bundle_path), provider=provider)

    assert provider.calls == [(35.0, 139.0)]


def test_explicit_provider_requires_longitude(make_bundle):
    """Test that a location-based provider is never called with a made-up longitude."""
    bundle_path = make_bundle("average_household")
    _drop_longitude(bundle_path)
    provider = RecordingProvider()

    with pytest.raises(ValidationError, match="no longitude"):
        run_forecast(str(bundle_path), provider=provider)

    assert provider.calls == []
    assert not (bundle_path / "forecast.parquet").exists()


def test_open_meteo_run_requires_longitude(make_bundle):
    bundle_path = make_bundle("average_household")
    _drop_longitude(bundle_path, provider="open_meteo")

    with pytest.raises(ValidationError, match="OpenMeteoProvider"):
        run_forecast(str(bundle_path))


def test_bundle_weather_without_longitude(make_bundle):
    """Test that stored bundle weather does not need a longitude."""
    bundle_path = make_bundle("average_household")
    _drop_longitude(bundle_path)

    forecast, _ = run_forecast(str(bundle_path))

    assert len(forecast) == 24
