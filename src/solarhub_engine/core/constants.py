"""Canonical column names, units, physical constants and sign conventions.

SIGN CONVENTIONS:
- production_kwh: Positive = solar generation
- consumption_kwh: Positive = household load
- battery_delta_kwh: Positive = charging, negative = discharging
- grid_draw_kwh: Positive = energy pulled from the grid (never negative)
- excess_kwh: Positive = surplus not absorbed by the battery (never negative)
- soc_pct: State of charge after the hour, percent of rated capacity

UNITS:
- Energy: kWh (one-hour steps, so kW and kWh are numerically equal)
- Irradiance: W/m²
- Temperature: °C
- Angles: degrees

ENERGY BALANCE EQUATION (per hour):
production_kwh + grid_draw_kwh = consumption_kwh + battery_delta_kwh + excess_kwh
"""

HOURS_PER_DAY = 24

# Standard Test Conditions
STC_IRRADIANCE_WM2 = 1000.0
STC_TEMPERATURE_C = 25.0

# Silicon panel power temperature coefficient (per °C above STC)
TEMP_COEFFICIENT_PER_C = -0.004

# Inverter + wiring losses
SYSTEM_EFFICIENCY = 0.85

# Tilt factor never drops below this
MIN_TILT_FACTOR = 0.1

# Hours with a nonzero solar elevation factor (inclusive)
DAYLIGHT_FIRST_HOUR = 6
DAYLIGHT_LAST_HOUR = 17
SOLAR_NOON_HOUR = 12

# Battery SOC window
MAX_SOC_PCT = 100.0
MIN_SOC_PCT = 10.0

# Substituted when hourly inputs are shorter than the horizon
DEFAULT_TEMPERATURE_C = 25.0

# Substituted by the weather provider for null entries
MISSING_TEMPERATURE_C = 20.0
MISSING_IRRADIANCE_WM2 = 0.0

# Weather frame columns
COL_HOUR = "hour"
COL_GHI = "ghi_wm2"
COL_DNI = "dni_wm2"
COL_DHI = "dhi_wm2"
COL_TEMPERATURE_C = "temperature_c"

REQUIRED_WEATHER_COLUMNS = [
    COL_GHI,
    COL_DNI,
    COL_DHI,
    COL_TEMPERATURE_C,
]

# Output columns
COL_PRODUCTION_KWH = "production_kwh"
COL_CONSUMPTION_KWH = "consumption_kwh"
COL_SOC_PCT = "soc_pct"
COL_BATTERY_DELTA_KWH = "battery_delta_kwh"
COL_GRID_DRAW_KWH = "grid_draw_kwh"
COL_EXCESS_KWH = "excess_kwh"

OUTPUT_COLUMNS = [
    COL_PRODUCTION_KWH,
    COL_CONSUMPTION_KWH,
    COL_SOC_PCT,
    COL_BATTERY_DELTA_KWH,
    COL_GRID_DRAW_KWH,
    COL_EXCESS_KWH,
]

# Tolerance for numerical comparisons
NUMERICAL_TOLERANCE = 1e-6
