"""Summary metrics for a daily forecast."""

from solarhub_engine.core.schemas import DailyForecast, SystemConfig


def compute_metrics(forecast: DailyForecast, system: SystemConfig) -> dict:
    """Compute daily totals and self-consumption metrics.

    Args:
        forecast: Daily forecast
        system: System configuration the forecast was computed for

    Returns:
        Dictionary of metrics
    """
    production = forecast.total_production_kwh
    consumption = forecast.total_consumption_kwh

    # Share of production used on site (battery or load) rather than exported
    self_consumption_pct = (
        (production - forecast.total_excess_kwh) / production * 100 if production > 0 else 0.0
    )

    # Share of consumption not drawn from the grid
    self_sufficiency_pct = (
        (consumption - forecast.total_grid_draw_kwh) / consumption * 100 if consumption > 0 else 0.0
    )

    battery_charged_kwh = sum(max(r.battery_delta_kwh, 0.0) for r in forecast.hourly)
    battery_discharged_kwh = sum(max(-r.battery_delta_kwh, 0.0) for r in forecast.hourly)

    # Approximate cycles (throughput / (2 * capacity))
    capacity = system.battery_capacity_kwh
    battery_cycles = (
        (battery_charged_kwh + battery_discharged_kwh) / (2 * capacity) if capacity > 0 else 0.0
    )

    peak = max(forecast.hourly, key=lambda r: r.production_kwh)

    return {
        "total_production_kwh": production,
        "total_consumption_kwh": consumption,
        "total_grid_draw_kwh": forecast.total_grid_draw_kwh,
        "total_excess_kwh": forecast.total_excess_kwh,
        "initial_soc_pct": system.battery_soc_pct,
        "final_soc_pct": forecast.final_soc_pct,
        "self_consumption_pct": self_consumption_pct,
        "self_sufficiency_pct": self_sufficiency_pct,
        "battery_charged_kwh": battery_charged_kwh,
        "battery_discharged_kwh": battery_discharged_kwh,
        "battery_cycles": battery_cycles,
        "peak_grid_draw_kwh": max(r.grid_draw_kwh for r in forecast.hourly),
        "peak_production_kwh": peak.production_kwh,
        "peak_production_hour": peak.hour,
    }
