"""Scenario bundle templates with deterministic synthetic weather."""

import numpy as np
import pandas as pd

from solarhub_engine.core.constants import (
    COL_DHI,
    COL_DNI,
    COL_GHI,
    COL_HOUR,
    COL_TEMPERATURE_C,
    HOURS_PER_DAY,
)
from solarhub_engine.core.schemas import (
    ApplianceLoad,
    AverageLoadProfile,
    BatteryType,
    LoadProfile,
    RunConfig,
    ScheduleLoadProfile,
    SiteConfig,
    SystemConfig,
    WeatherConfig,
)


def clear_sky_weather(
    peak_ghi_wm2: float = 850.0,
    mean_temperature_c: float = 18.0,
    temperature_swing_c: float = 6.0,
) -> pd.DataFrame:
    """Synthetic clear-sky day: half-sine irradiance from 06:00 to 18:00.

    Args:
        peak_ghi_wm2: GHI at solar noon
        mean_temperature_c: Daily mean temperature
        temperature_swing_c: Amplitude of the daily temperature cycle (peak at 15:00)

    Returns:
        Weather frame indexed by hour
    """
    hours = np.arange(HOURS_PER_DAY)

    ghi = peak_ghi_wm2 * np.maximum(np.sin((hours - 6) * np.pi / 12), 0)
    # Rough split: 80% beam, 20% diffuse
    dni = 0.8 * ghi
    dhi = 0.2 * ghi
    temperature = mean_temperature_c + temperature_swing_c * np.sin((hours - 9) * np.pi / 12)

    return pd.DataFrame(
        {
            COL_GHI: ghi,
            COL_DNI: dni,
            COL_DHI: dhi,
            COL_TEMPERATURE_C: temperature,
        },
        index=pd.Index(hours, name=COL_HOUR),
    )


def average_household() -> tuple[SiteConfig, RunConfig, LoadProfile, pd.DataFrame]:
    """5 kWp array, 10 kWh lithium-ion battery, 20 kWh/day flat load."""
    site = SiteConfig(
        site_id="example_site_001",
        latitude=35.0,
        longitude=139.0,
        system=SystemConfig(
            panel_capacity_kwp=5.0,
            panel_tilt_deg=None,
            battery_type=BatteryType.LI_ION,
            battery_capacity_kwh=10.0,
            battery_soc_pct=50.0,
        ),
    )
    run = RunConfig(run_id="forecast_001", weather=WeatherConfig(provider="bundle"))
    profile = AverageLoadProfile(average_daily_kwh=20.0)

    return site, run, profile, clear_sky_weather()


def appliance_schedule() -> tuple[SiteConfig, RunConfig, LoadProfile, pd.DataFrame]:
    """Lead-acid battery with an evening- and night-heavy appliance schedule."""
    site = SiteConfig(
        site_id="example_site_002",
        latitude=-33.9,
        longitude=18.4,
        system=SystemConfig(
            panel_capacity_kwp=3.5,
            panel_tilt_deg=30.0,
            battery_type=BatteryType.LEAD_ACID,
            battery_capacity_kwh=7.2,
            battery_soc_pct=80.0,
        ),
    )
    run = RunConfig(run_id="forecast_002", weather=WeatherConfig(provider="bundle"))
    profile = ScheduleLoadProfile(
        appliances=[
            ApplianceLoad(name="Refrigerator", power_watts=150.0, runs_continuously=True),
            ApplianceLoad(name="Router", power_watts=15.0, runs_continuously=True),
            ApplianceLoad(name="Water heater", power_watts=2000.0, start_hour=5, end_hour=7),
            ApplianceLoad(name="Washing machine", power_watts=500.0, start_hour=10, end_hour=11),
            ApplianceLoad(name="Cooking", power_watts=1800.0, start_hour=18, end_hour=19),
            ApplianceLoad(name="Lighting", power_watts=300.0, start_hour=18, end_hour=22),
            ApplianceLoad(name="Heat pump", power_watts=1200.0, start_hour=22, end_hour=5),
        ]
    )

    return site, run, profile, clear_sky_weather(peak_ghi_wm2=700.0, mean_temperature_c=12.0)


def no_battery() -> tuple[SiteConfig, RunConfig, LoadProfile, pd.DataFrame]:
    """Panels only: every deficit is grid draw and every surplus is excess."""
    site = SiteConfig(
        site_id="example_site_003",
        latitude=51.5,
        longitude=-0.1,
        system=SystemConfig(panel_capacity_kwp=4.0, battery_capacity_kwh=0.0),
    )
    run = RunConfig(run_id="forecast_003", weather=WeatherConfig(provider="bundle"))
    profile = AverageLoadProfile(average_daily_kwh=9.0)

    return site, run, profile, clear_sky_weather(peak_ghi_wm2=600.0, mean_temperature_c=28.0)


TEMPLATES = {
    "average_household": average_household,
    "appliance_schedule": appliance_schedule,
    "no_battery": no_battery,
}
