"""Input frame checks and post-run forecast invariant checks."""

import pandas as pd

from solarhub_engine.core.constants import (
    HOURS_PER_DAY,
    NUMERICAL_TOLERANCE,
    REQUIRED_WEATHER_COLUMNS,
)
from solarhub_engine.core.schemas import DailyForecast


class ValidationError(Exception):
    """Raised when validation fails."""

    pass


def validate_weather_frame(df: pd.DataFrame) -> None:
    """Check a bundle weather frame has the columns the simulator reads.

    Values themselves are not checked; the simulator is a best-effort
    estimator and missing hours fall back to defaults.

    Args:
        df: Weather frame from a bundle, indexed by hour

    Raises:
        ValidationError: If required columns are missing or hours repeat
    """
    missing_cols = set(REQUIRED_WEATHER_COLUMNS) - set(df.columns)
    if missing_cols:
        raise ValidationError(f"Missing required columns: {missing_cols}")

    if df.index.has_duplicates:
        raise ValidationError("Duplicate hours found in weather data")


def validate_forecast(forecast: DailyForecast) -> None:
    """Check a forecast satisfies the physical accounting rules.

    SOC range is not checked: it is allowed to drift outside 0-100%.

    Args:
        forecast: Forecast to check

    Raises:
        ValidationError: If an invariant is violated
    """
    if len(forecast.hourly) != HOURS_PER_DAY:
        raise ValidationError(
            f"Expected {HOURS_PER_DAY} hourly records, found {len(forecast.hourly)}"
        )

    for expected_hour, record in enumerate(forecast.hourly):
        if record.hour != expected_hour:
            raise ValidationError(f"Hour {record.hour} found at position {expected_hour}")

        for name in ("production_kwh", "grid_draw_kwh", "excess_kwh"):
            if getattr(record, name) < -NUMERICAL_TOLERANCE:
                raise ValidationError(f"{name} is negative at hour {record.hour}")

        if record.grid_draw_kwh > NUMERICAL_TOLERANCE and record.excess_kwh > NUMERICAL_TOLERANCE:
            raise ValidationError(f"Grid draw and excess both nonzero at hour {record.hour}")

        # production + grid = consumption + battery delta + excess
        supplied = record.production_kwh + record.grid_draw_kwh
        used = record.consumption_kwh + record.battery_delta_kwh + record.excess_kwh
        if abs(supplied - used) > NUMERICAL_TOLERANCE:
            raise ValidationError(
                f"Energy balance violated at hour {record.hour}: "
                f"supplied {supplied:.6f} kWh, used {used:.6f} kWh"
            )
