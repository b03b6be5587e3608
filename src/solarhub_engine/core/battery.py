"""Hourly battery transition.

Strategy per hour:
1. Surplus charges the battery up to its remaining headroom
2. Remaining surplus is exported as excess
3. Deficit is met by discharging down to the reserve floor
4. Remaining deficit is drawn from the grid

Charging divides the headroom by the efficiency (more gross surplus is needed
to store a given amount); discharging multiplies the available energy by it.
SOC is not clamped after the update.
"""

from dataclasses import dataclass

from solarhub_engine.core.constants import MAX_SOC_PCT, MIN_SOC_PCT


@dataclass(frozen=True)
class BatteryStep:
    """Outcome of one hourly transition."""

    battery_delta_kwh: float  # + charging, - discharging
    grid_draw_kwh: float
    excess_kwh: float
    soc_pct: float


def max_charge_kwh(capacity_kwh: float, efficiency: float, soc_pct: float) -> float:
    headroom_kwh = (MAX_SOC_PCT - soc_pct) / 100.0 * capacity_kwh
    return headroom_kwh / efficiency


def max_discharge_kwh(capacity_kwh: float, efficiency: float, soc_pct: float) -> float:
    available_kwh = max(0.0, (soc_pct - MIN_SOC_PCT) / 100.0 * capacity_kwh)
    return available_kwh * efficiency


def battery_step(
    capacity_kwh: float, efficiency: float, soc_pct: float, balance_kwh: float
) -> BatteryStep:
    """Apply one hour of energy balance to the battery.

    Args:
        capacity_kwh: Rated battery capacity
        efficiency: Charge/discharge efficiency factor (0-1)
        soc_pct: State of charge before the hour
        balance_kwh: Production minus consumption for the hour

    Returns:
        BatteryStep with the battery delta, grid draw, excess and new SOC
    """
    if capacity_kwh <= 0:
        # No battery: everything passes straight through
        return BatteryStep(
            battery_delta_kwh=0.0,
            grid_draw_kwh=max(0.0, -balance_kwh),
            excess_kwh=max(0.0, balance_kwh),
            soc_pct=soc_pct,
        )

    if balance_kwh > 0:
        charge = min(balance_kwh, max_charge_kwh(capacity_kwh, efficiency, soc_pct))
        return BatteryStep(
            battery_delta_kwh=charge,
            grid_draw_kwh=0.0,
            excess_kwh=balance_kwh - charge,
            soc_pct=soc_pct + charge / capacity_kwh * 100.0,
        )

    deficit = -balance_kwh
    discharge = -min(deficit, max_discharge_kwh(capacity_kwh, efficiency, soc_pct))
    remaining_deficit = deficit + discharge  # discharge is negative

    return BatteryStep(
        battery_delta_kwh=discharge,
        grid_draw_kwh=max(0.0, remaining_deficit),
        excess_kwh=0.0,
        soc_pct=soc_pct + discharge / capacity_kwh * 100.0,
    )
