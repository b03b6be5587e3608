"""Weather provider interface."""

from typing import Protocol

from solarhub_engine.core.schemas import WeatherData


class WeatherProviderError(Exception):
    """Raised when weather for a location cannot be acquired."""

    pass


class WeatherProvider(Protocol):
    """Protocol for weather providers.

    Weather providers take a location and return the inputs for one
    forecast day. Failures are raised, never returned as partial data.
    """

    def fetch(self, latitude: float, longitude: float) -> WeatherData:
        """Fetch weather for the current day.

        Args:
            latitude: Latitude in degrees
            longitude: Longitude in degrees

        Returns:
            WeatherData with current conditions and up to 24 hourly
            temperatures and irradiance samples

        Raises:
            WeatherProviderError: If the weather cannot be acquired
        """
        ...
