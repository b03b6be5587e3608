"""Daily forecast: 24 hourly steps of production, load and battery dispatch.

Simple self-consumption strategy, no arbitrage:
1. Solar serves the household load directly
2. Surplus charges the battery, the rest is excess
3. Deficit is met by the battery, the rest is drawn from the grid
"""

import logging
from typing import Sequence

import pandas as pd

from solarhub_engine.core.battery import battery_step
from solarhub_engine.core.constants import (
    COL_HOUR,
    DEFAULT_TEMPERATURE_C,
    HOURS_PER_DAY,
    OUTPUT_COLUMNS,
)
from solarhub_engine.core.load_profile import resolve_hourly_consumption
from solarhub_engine.core.production import estimate_hourly_production
from solarhub_engine.core.schemas import (
    DailyForecast,
    HourlyRecord,
    IrradianceSample,
    LoadProfile,
    SystemConfig,
)

logger = logging.getLogger(__name__)


def compute_daily_forecast(
    system: SystemConfig,
    load_profile: LoadProfile,
    irradiance: Sequence[IrradianceSample],
    temperatures: Sequence[float],
    latitude: float,
) -> DailyForecast:
    """Simulate one day hour by hour.

    Hours missing from ``irradiance`` or ``temperatures`` fall back to a
    zero-irradiance sample and DEFAULT_TEMPERATURE_C.

    Args:
        system: Solar and battery configuration (SOC seeds the first hour)
        load_profile: Household load profile
        irradiance: Hourly irradiance samples indexed by hour of day
        temperatures: Hourly ambient temperatures (°C) indexed by hour of day
        latitude: Site latitude in degrees

    Returns:
        DailyForecast with 24 hourly records and daily totals
    """
    consumption = resolve_hourly_consumption(load_profile)
    efficiency = system.battery_efficiency

    hourly: list[HourlyRecord] = []
    soc = system.battery_soc_pct

    for hour in range(HOURS_PER_DAY):
        sample = irradiance[hour] if hour < len(irradiance) else IrradianceSample(hour=hour)
        temperature = temperatures[hour] if hour < len(temperatures) else DEFAULT_TEMPERATURE_C

        production = estimate_hourly_production(
            system.panel_capacity_kwp,
            system.panel_tilt_deg,
            sample,
            temperature,
            latitude,
            hour,
        )
        load = float(consumption[hour])

        step = battery_step(system.battery_capacity_kwh, efficiency, soc, production - load)
        soc = step.soc_pct

        hourly.append(
            HourlyRecord(
                hour=hour,
                production_kwh=production,
                consumption_kwh=load,
                soc_pct=soc,
                battery_delta_kwh=step.battery_delta_kwh,
                grid_draw_kwh=step.grid_draw_kwh,
                excess_kwh=step.excess_kwh,
            )
        )

    forecast = DailyForecast(
        hourly=hourly,
        total_production_kwh=sum(r.production_kwh for r in hourly),
        total_consumption_kwh=sum(r.consumption_kwh for r in hourly),
        total_grid_draw_kwh=sum(r.grid_draw_kwh for r in hourly),
        total_excess_kwh=sum(r.excess_kwh for r in hourly),
        final_soc_pct=soc,
    )

    logger.debug(
        "Forecast: production=%.2f kWh consumption=%.2f kWh grid=%.2f kWh final SOC=%.1f%%",
        forecast.total_production_kwh,
        forecast.total_consumption_kwh,
        forecast.total_grid_draw_kwh,
        forecast.final_soc_pct,
    )

    return forecast


def forecast_to_frame(forecast: DailyForecast) -> pd.DataFrame:
    """Hourly records as a DataFrame indexed by hour."""
    df = pd.DataFrame([record.model_dump() for record in forecast.hourly])
    df = df.set_index(COL_HOUR)
    return df[OUTPUT_COLUMNS]
