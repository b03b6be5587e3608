"""Live forecast runner.

Fetches today's weather for a location and simulates the day. Weather
failures propagate, so the simulator only ever runs on complete inputs.
"""

import logging
from typing import Optional

from solarhub_engine.core.forecast import compute_daily_forecast
from solarhub_engine.core.schemas import (
    ApplianceLoad,
    DailyForecast,
    LoadProfile,
    ScheduleLoadProfile,
    SiteConfig,
    SystemConfig,
    WeatherData,
)
from solarhub_engine.forecast.interface import WeatherProvider, WeatherProviderError

logger = logging.getLogger(__name__)


def run_live_forecast(
    site_config: SiteConfig, load_profile: LoadProfile, provider: WeatherProvider
) -> tuple[WeatherData, DailyForecast]:
    """Fetch weather for a site and compute today's forecast.

    Args:
        site_config: Site with latitude and longitude
        load_profile: Household load profile
        provider: Weather provider

    Returns:
        Tuple of (weather, forecast)

    Raises:
        WeatherProviderError: If the site has no longitude or weather cannot be fetched
    """
    if site_config.longitude is None:
        raise WeatherProviderError("Site longitude is required to fetch live weather")

    weather = provider.fetch(site_config.latitude, site_config.longitude)

    forecast = compute_daily_forecast(
        site_config.system,
        load_profile,
        weather.irradiance,
        weather.hourly_temperatures_c,
        site_config.latitude,
    )
    return weather, forecast


class ForecastSession:
    """Keeps the latest forecast in step with configuration edits.

    ``refresh`` fetches weather and recomputes. Every configuration edit
    recomputes synchronously from the cached weather; the most recent edit
    always determines the current forecast. Before the first successful
    refresh there is no weather, so edits only update configuration.
    """

    def __init__(
        self,
        site_config: SiteConfig,
        load_profile: LoadProfile,
        provider: WeatherProvider,
    ):
        self.site_config = site_config
        self.load_profile = load_profile
        self.provider = provider
        self.weather: Optional[WeatherData] = None
        self.forecast: Optional[DailyForecast] = None

    def refresh(self) -> DailyForecast:
        """Fetch fresh weather and recompute.

        On failure the previous weather and forecast are kept and the
        error is re-raised.
        """
        weather, forecast = run_live_forecast(self.site_config, self.load_profile, self.provider)
        self.weather = weather
        self.forecast = forecast
        return forecast

    def update_system_config(self, system: SystemConfig) -> Optional[DailyForecast]:
        self.site_config = self.site_config.model_copy(update={"system": system})
        return self._recompute()

    def update_load_profile(self, load_profile: LoadProfile) -> Optional[DailyForecast]:
        self.load_profile = load_profile
        return self._recompute()

    def add_appliance(self, appliance: ApplianceLoad) -> Optional[DailyForecast]:
        """Append an appliance; ignored unless the profile is a schedule."""
        if not isinstance(self.load_profile, ScheduleLoadProfile):
            logger.debug("Ignoring appliance %r: load profile is not a schedule", appliance.name)
            return self.forecast

        appliances = self.load_profile.appliances + [appliance]
        return self.update_load_profile(ScheduleLoadProfile(appliances=appliances))

    def remove_appliance(self, index: int) -> Optional[DailyForecast]:
        """Remove the appliance at ``index``; out-of-range indices are ignored."""
        if not isinstance(self.load_profile, ScheduleLoadProfile):
            return self.forecast

        appliances = list(self.load_profile.appliances)
        if not 0 <= index < len(appliances):
            return self.forecast

        del appliances[index]
        return self.update_load_profile(ScheduleLoadProfile(appliances=appliances))

    def _recompute(self) -> Optional[DailyForecast]:
        if self.weather is None:
            return None

        self.forecast = compute_daily_forecast(
            self.site_config.system,
            self.load_profile,
            self.weather.irradiance,
            self.weather.hourly_temperatures_c,
            self.site_config.latitude,
        )
        return self.forecast
