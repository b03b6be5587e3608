"""Pydantic schemas for configuration, simulator inputs and forecast output."""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field

OPEN_METEO_URL = "https://api.open-meteo.com/v1/forecast"


class BatteryType(str, Enum):
    """Battery chemistry with its round-trip efficiency."""

    LI_ION = "li_ion"
    LEAD_ACID = "lead_acid"

    @property
    def display_name(self) -> str:
        return _BATTERY_DISPLAY_NAMES[self]

    @property
    def efficiency(self) -> float:
        return _BATTERY_EFFICIENCIES[self]


_BATTERY_DISPLAY_NAMES = {
    BatteryType.LI_ION: "Lithium-Ion",
    BatteryType.LEAD_ACID: "Lead-Acid",
}

_BATTERY_EFFICIENCIES = {
    BatteryType.LI_ION: 0.95,
    BatteryType.LEAD_ACID: 0.85,
}


class SystemConfig(BaseModel):
    """Solar array and battery configuration.

    Ranges are intentionally not enforced: zero or negative capacities
    degrade to zero production / a pass-through battery.
    """

    panel_capacity_kwp: float = Field(default=0.0, description="Total panel capacity in kWp")
    panel_tilt_deg: Optional[float] = Field(
        default=None, description="Panel tilt in degrees (None = tilt equal to latitude)"
    )
    battery_type: BatteryType = Field(default=BatteryType.LI_ION)
    battery_capacity_kwh: float = Field(default=0.0, description="Battery capacity in kWh")
    battery_soc_pct: float = Field(default=50.0, description="Current battery state of charge (%)")

    @property
    def battery_efficiency(self) -> float:
        return self.battery_type.efficiency


class ApplianceLoad(BaseModel):
    """A single scheduled or continuous household load."""

    name: str
    power_watts: float
    runs_continuously: bool = Field(default=False)
    start_hour: int = Field(default=0, description="First active hour (0-23)")
    end_hour: int = Field(default=23, description="Last active hour (0-23), may wrap past midnight")


class AverageLoadProfile(BaseModel):
    """Flat profile from an average daily energy figure."""

    kind: Literal["average"] = "average"
    average_daily_kwh: float = 0.0


class ScheduleLoadProfile(BaseModel):
    """Profile built from individual appliance schedules."""

    kind: Literal["schedule"] = "schedule"
    appliances: list[ApplianceLoad] = Field(default_factory=list)


LoadProfile = Annotated[
    Union[AverageLoadProfile, ScheduleLoadProfile], Field(discriminator="kind")
]


class IrradianceSample(BaseModel):
    """Hourly irradiance components (W/m²)."""

    hour: int
    ghi_wm2: float = 0.0
    dni_wm2: float = 0.0
    dhi_wm2: float = 0.0


class HourlyRecord(BaseModel):
    """Energy account for a single hour."""

    hour: int
    production_kwh: float
    consumption_kwh: float
    soc_pct: float
    battery_delta_kwh: float
    grid_draw_kwh: float
    excess_kwh: float


class DailyForecast(BaseModel):
    """24 hourly records plus daily totals."""

    hourly: list[HourlyRecord]
    total_production_kwh: float
    total_consumption_kwh: float
    total_grid_draw_kwh: float
    total_excess_kwh: float
    final_soc_pct: float


class CurrentConditions(BaseModel):
    """Current weather at the site."""

    temperature_c: float
    wind_speed_kmh: float


class WeatherData(BaseModel):
    """Weather inputs for one forecast day."""

    current: Optional[CurrentConditions] = None
    hourly_temperatures_c: list[float] = Field(default_factory=list)
    irradiance: list[IrradianceSample] = Field(default_factory=list)


class WeatherConfig(BaseModel):
    """Where a run gets its weather from."""

    provider: Literal["bundle", "open_meteo"] = Field(default="bundle")
    timeout_seconds: float = Field(default=10.0, gt=0)
    base_url: str = Field(default=OPEN_METEO_URL)


class SiteConfig(BaseModel):
    """Site location and installed system."""

    site_id: str = Field(..., description="Unique site identifier")
    latitude: float = Field(..., ge=-90, le=90, description="Latitude in degrees")
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)
    system: SystemConfig = Field(default_factory=SystemConfig)


class RunConfig(BaseModel):
    """Run-specific configuration."""

    run_id: str = Field(..., description="Unique run identifier")
    weather: WeatherConfig = Field(default_factory=WeatherConfig)


class BundleMetadata(BaseModel):
    """Metadata for reproducibility tracking."""

    created_at: datetime = Field(default_factory=datetime.utcnow)
    solarhub_version: str
    weather_source: str = Field(default="bundle")
    git_commit_hash: Optional[str] = None
