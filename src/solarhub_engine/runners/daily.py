"""Daily forecast runner for scenario bundles.

Loads a bundle, acquires weather (stored in the bundle or fetched live),
runs the 24-hour simulation and writes the results back into the bundle.
"""

import logging

import pandas as pd

from solarhub_engine.core.forecast import compute_daily_forecast, forecast_to_frame
from solarhub_engine.core.metrics import compute_metrics
from solarhub_engine.core.schemas import RunConfig, SiteConfig, WeatherData
from solarhub_engine.core.validate import ValidationError, validate_forecast, validate_weather_frame
from solarhub_engine.forecast.interface import WeatherProvider
from solarhub_engine.forecast.providers import BundleWeatherProvider, OpenMeteoProvider
from solarhub_engine.io.bundle import load_bundle, load_weather, write_results

logger = logging.getLogger(__name__)


def build_provider(bundle_path: str, run_config: RunConfig) -> WeatherProvider:
    """Weather provider selected by the run configuration."""
    if run_config.weather.provider == "open_meteo":
        return OpenMeteoProvider(
            base_url=run_config.weather.base_url,
            timeout_seconds=run_config.weather.timeout_seconds,
        )

    weather = load_weather(bundle_path)
    validate_weather_frame(weather)
    return BundleWeatherProvider(weather)


def acquire_weather(site_config: SiteConfig, provider: WeatherProvider) -> WeatherData:
    """Fetch weather for a site; raises instead of returning partial data.

    Only bundle weather may be fetched without a longitude, since it ignores
    the location.

    Raises:
        ValidationError: If the site has no longitude and the provider needs one
    """
    if site_config.longitude is None:
        if not isinstance(provider, BundleWeatherProvider):
            raise ValidationError(
                f"Site {site_config.site_id} has no longitude; "
                f"{type(provider).__name__} needs one to fetch weather"
            )
        return provider.fetch(site_config.latitude, 0.0)

    return provider.fetch(site_config.latitude, site_config.longitude)


def run_forecast(bundle_path: str, provider: WeatherProvider | None = None) -> tuple[pd.DataFrame, dict]:
    """Run a daily forecast on a bundle.

    Args:
        bundle_path: Path to scenario bundle
        provider: Optional weather provider overriding the run configuration

    Returns:
        Tuple of (forecast_df, summary)
    """
    logger.info("Loading bundle from %s", bundle_path)
    site_config, run_config, load_profile = load_bundle(bundle_path)

    logger.info("Site: %s", site_config.site_id)
    logger.info("Run: %s", run_config.run_id)

    if provider is None:
        provider = build_provider(bundle_path, run_config)

    weather = acquire_weather(site_config, provider)
    logger.info(
        "Weather: %d irradiance samples, %d temperatures",
        len(weather.irradiance),
        len(weather.hourly_temperatures_c),
    )

    forecast = compute_daily_forecast(
        site_config.system,
        load_profile,
        weather.irradiance,
        weather.hourly_temperatures_c,
        site_config.latitude,
    )

    validate_forecast(forecast)
    logger.info("Forecast validation passed")

    summary = compute_metrics(forecast, site_config.system)
    summary["site_id"] = site_config.site_id
    summary["run_id"] = run_config.run_id
    if weather.current is not None:
        summary["current_temperature_c"] = weather.current.temperature_c
        summary["current_wind_speed_kmh"] = weather.current.wind_speed_kmh

    logger.info(
        "Production %.2f kWh, consumption %.2f kWh, grid %.2f kWh, final SOC %.1f%%",
        summary["total_production_kwh"],
        summary["total_consumption_kwh"],
        summary["total_grid_draw_kwh"],
        summary["final_soc_pct"],
    )

    forecast_df = forecast_to_frame(forecast)

    logger.info("Writing results to %s", bundle_path)
    write_results(bundle_path, forecast_df, summary, weather_source=run_config.weather.provider)

    return forecast_df, summary
