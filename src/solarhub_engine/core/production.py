"""Hourly PV production model.

Closed-form heuristics only, no solar-position astronomy:
- tilt defaults to |latitude| (year-round rule of thumb)
- tilt factor = cos(tilt - latitude), floored at MIN_TILT_FACTOR
- solar elevation factor = cos(|hour - 12| * pi / 12) for daylight hours, else 0
- power derated linearly with temperature relative to STC
"""

import math
from typing import Optional

from solarhub_engine.core.constants import (
    DAYLIGHT_FIRST_HOUR,
    DAYLIGHT_LAST_HOUR,
    MIN_TILT_FACTOR,
    SOLAR_NOON_HOUR,
    STC_IRRADIANCE_WM2,
    STC_TEMPERATURE_C,
    SYSTEM_EFFICIENCY,
    TEMP_COEFFICIENT_PER_C,
)
from solarhub_engine.core.schemas import IrradianceSample


def effective_tilt(tilt_deg: Optional[float], latitude_deg: float) -> float:
    """Configured tilt, or |latitude| when none is set."""
    if tilt_deg is None:
        return abs(latitude_deg)
    return tilt_deg


def tilt_factor(tilt_deg: float, latitude_deg: float) -> float:
    return max(MIN_TILT_FACTOR, math.cos(math.radians(tilt_deg - latitude_deg)))


def solar_elevation_factor(hour: int) -> float:
    """Approximate sun height for an hour of the day, peaking at solar noon."""
    if DAYLIGHT_FIRST_HOUR <= hour <= DAYLIGHT_LAST_HOUR:
        hours_from_noon = abs(hour - SOLAR_NOON_HOUR)
        return max(0.0, math.cos(hours_from_noon * math.pi / 12))
    return 0.0


def temperature_derating(temperature_c: float) -> float:
    return 1 + TEMP_COEFFICIENT_PER_C * (temperature_c - STC_TEMPERATURE_C)


def tilted_irradiance(
    irradiance: IrradianceSample, tilt_deg: float, latitude_deg: float, hour: int
) -> float:
    """Plane-of-array irradiance estimate (W/m²) from GHI."""
    adjusted = irradiance.ghi_wm2 * tilt_factor(tilt_deg, latitude_deg)
    return adjusted * solar_elevation_factor(hour)


def estimate_hourly_production(
    panel_capacity_kwp: float,
    tilt_deg: Optional[float],
    irradiance: IrradianceSample,
    temperature_c: float,
    latitude_deg: float,
    hour: int,
) -> float:
    """Estimate AC energy produced in one hour.

    Args:
        panel_capacity_kwp: Array rating in kWp
        tilt_deg: Panel tilt, or None to use |latitude|
        irradiance: Irradiance sample for the hour
        temperature_c: Ambient temperature
        latitude_deg: Site latitude
        hour: Hour of day (0-23)

    Returns:
        Production in kWh (>= 0)
    """
    if panel_capacity_kwp <= 0:
        return 0.0

    tilt = effective_tilt(tilt_deg, latitude_deg)
    poa_wm2 = tilted_irradiance(irradiance, tilt, latitude_deg, hour)

    dc_power_kw = (
        panel_capacity_kwp * (poa_wm2 / STC_IRRADIANCE_WM2) * temperature_derating(temperature_c)
    )

    return max(0.0, dc_power_kw * SYSTEM_EFFICIENCY)
