"""Hourly household consumption from a load profile."""

import logging

import numpy as np

from solarhub_engine.core.constants import HOURS_PER_DAY
from solarhub_engine.core.schemas import (
    ApplianceLoad,
    AverageLoadProfile,
    LoadProfile,
    ScheduleLoadProfile,
)

logger = logging.getLogger(__name__)


def resolve_hourly_consumption(profile: LoadProfile) -> np.ndarray:
    """Expand a load profile into 24 hourly consumption values.

    Args:
        profile: Average or appliance-schedule load profile

    Returns:
        Array of 24 kWh values indexed by hour of day
    """
    match profile:
        case AverageLoadProfile():
            return np.full(HOURS_PER_DAY, profile.average_daily_kwh / HOURS_PER_DAY)
        case ScheduleLoadProfile():
            consumption = np.zeros(HOURS_PER_DAY)
            for appliance in profile.appliances:
                power_kw = appliance.power_watts / 1000.0
                for hour in active_hours(appliance):
                    consumption[hour] += power_kw
            logger.debug(
                "Resolved %d appliances into %.3f kWh/day",
                len(profile.appliances),
                consumption.sum(),
            )
            return consumption
        case _:
            raise TypeError(f"Unsupported load profile: {type(profile).__name__}")


def active_hours(appliance: ApplianceLoad) -> list[int]:
    """Hours of the day during which an appliance draws power.

    A window with start > end wraps past midnight. Hours are not range-checked.
    """
    if appliance.runs_continuously:
        return list(range(HOURS_PER_DAY))

    start, end = appliance.start_hour, appliance.end_hour
    if start <= end:
        return list(range(start, end + 1))

    # Crosses midnight
    return list(range(start, HOURS_PER_DAY)) + list(range(0, end + 1))
