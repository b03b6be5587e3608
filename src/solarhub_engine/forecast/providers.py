"""Weather provider implementations."""

import logging
from typing import Any, Optional

import pandas as pd
import requests

from solarhub_engine.core.constants import (
    HOURS_PER_DAY,
    MISSING_IRRADIANCE_WM2,
    MISSING_TEMPERATURE_C,
)
from solarhub_engine.core.schemas import (
    OPEN_METEO_URL,
    CurrentConditions,
    IrradianceSample,
    WeatherData,
)
from solarhub_engine.forecast.interface import WeatherProviderError
from solarhub_engine.io.formats import weather_from_frame

logger = logging.getLogger(__name__)

HOURLY_VARIABLES = "temperature_2m,shortwave_radiation,direct_radiation,diffuse_radiation"


def _value_or(series: list, index: int, default: float) -> float:
    value = series[index] if index < len(series) else None
    return default if value is None else float(value)


class OpenMeteoProvider:
    """Today's forecast from the Open-Meteo API.

    GHI is Open-Meteo's shortwave radiation, DNI its direct radiation and
    DHI its diffuse radiation. Only the first 24 hourly entries are used;
    null entries become 20 °C and 0 W/m².
    """

    def __init__(
        self,
        base_url: str = OPEN_METEO_URL,
        timeout_seconds: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """Initialize the provider.

        Args:
            base_url: Forecast endpoint
            timeout_seconds: Connect/read timeout for the request
            session: Optional requests session (injected in tests)
        """
        self.base_url = base_url
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def fetch(self, latitude: float, longitude: float) -> WeatherData:
        params = {
            "latitude": latitude,
            "longitude": longitude,
            "current_weather": "true",
            "hourly": HOURLY_VARIABLES,
            "forecast_days": 1,
            "timezone": "auto",
        }

        logger.info("Fetching Open-Meteo forecast for %.4f, %.4f", latitude, longitude)
        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout_seconds)
            response.raise_for_status()
        except requests.RequestException as exc:
            raise WeatherProviderError(f"Failed to fetch weather data: {exc}") from exc

        # requests.JSONDecodeError is both a RequestException and a ValueError
        try:
            payload = response.json()
        except ValueError as exc:
            raise WeatherProviderError(f"Weather service returned invalid JSON: {exc}") from exc

        return self.parse(payload)

    @staticmethod
    def parse(payload: dict[str, Any]) -> WeatherData:
        """Convert an Open-Meteo response body into WeatherData.

        Raises:
            WeatherProviderError: If the payload is missing required fields or
                holds null arrays or non-numeric values
        """
        try:
            current = payload["current_weather"]
            conditions = CurrentConditions(
                temperature_c=float(current["temperature"]),
                wind_speed_kmh=float(current["windspeed"]),
            )

            hourly = payload["hourly"]
            temperatures = hourly["temperature_2m"]
            shortwave = hourly["shortwave_radiation"]
            direct = hourly["direct_radiation"]
            diffuse = hourly["diffuse_radiation"]
        except (KeyError, TypeError, ValueError) as exc:
            raise WeatherProviderError(f"Malformed weather response: missing {exc}") from exc

        try:
            hours = min(HOURS_PER_DAY, len(temperatures))

            hourly_temperatures = [
                _value_or(temperatures, i, MISSING_TEMPERATURE_C) for i in range(hours)
            ]
            irradiance = [
                IrradianceSample(
                    hour=i,
                    ghi_wm2=_value_or(shortwave, i, MISSING_IRRADIANCE_WM2),
                    dni_wm2=_value_or(direct, i, MISSING_IRRADIANCE_WM2),
                    dhi_wm2=_value_or(diffuse, i, MISSING_IRRADIANCE_WM2),
                )
                for i in range(hours)
            ]
        except (TypeError, ValueError) as exc:
            raise WeatherProviderError(
                f"Malformed weather response: invalid hourly values: {exc}"
            ) from exc

        if hours < HOURS_PER_DAY:
            logger.warning("Weather response has only %d hourly entries", hours)

        return WeatherData(
            current=conditions,
            hourly_temperatures_c=hourly_temperatures,
            irradiance=irradiance,
        )


class BundleWeatherProvider:
    """Serves weather stored in a scenario bundle.

    The location is ignored; the bundle already describes one site.
    """

    def __init__(self, weather: pd.DataFrame):
        """Initialize with a bundle weather frame.

        Args:
            weather: Hour-indexed weather frame
        """
        self.weather = weather

    def fetch(self, latitude: float, longitude: float) -> WeatherData:
        try:
            return weather_from_frame(self.weather)
        except ValueError as exc:
            raise WeatherProviderError(f"Invalid bundle weather: {exc}") from exc
