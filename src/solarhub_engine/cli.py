"""Command-line interface for SolarHub engine."""

import json
from pathlib import Path
from typing import Optional

import typer

from solarhub_engine import __version__
from solarhub_engine.util.logging import setup_logging

app = typer.Typer(
    help="SolarHub Daily Household Energy Forecast Engine",
    no_args_is_help=True,
)


@app.callback()
def main(
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
    quiet: bool = typer.Option(False, "--quiet", help="Only log warnings and errors"),
):
    """Configure logging for all commands."""
    setup_logging(debug=debug, quiet=quiet)


@app.command()
def version():
    """Show SolarHub version."""
    typer.echo(f"SolarHub Engine v{__version__}")


@app.command()
def validate(bundle_path: str):
    """Validate a scenario bundle.

    Args:
        bundle_path: Path to bundle directory
    """
    from solarhub_engine.io.bundle import validate_bundle

    try:
        validate_bundle(bundle_path)
        typer.secho(f"✓ Bundle at {bundle_path} is valid", fg=typer.colors.GREEN)
    except Exception as e:
        typer.secho(f"✗ Bundle validation failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


@app.command()
def forecast(bundle_path: str):
    """Run the daily forecast on a bundle.

    Args:
        bundle_path: Path to bundle directory
    """
    from solarhub_engine.runners.daily import run_forecast

    try:
        run_forecast(bundle_path)
        typer.secho("\n✓ Forecast completed successfully", fg=typer.colors.GREEN)
    except Exception as e:
        typer.secho(f"\n✗ Forecast failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)


@app.command()
def init_bundle(
    bundle_path: str,
    template: str = typer.Option("average_household", help="Template name"),
):
    """Initialize a new scenario bundle from template.

    Args:
        bundle_path: Path to new bundle directory
        template: Template name
    """
    from solarhub_engine.io.bundle import init_bundle as write_bundle
    from solarhub_engine.io.templates import TEMPLATES

    if template not in TEMPLATES:
        typer.secho(
            f"✗ Unknown template '{template}'. Available: {', '.join(sorted(TEMPLATES))}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1)

    site_config, run_config, load_profile, weather = TEMPLATES[template]()
    write_bundle(bundle_path, site_config, run_config, load_profile, weather)

    typer.secho(f"✓ Created {template} bundle at {bundle_path}", fg=typer.colors.GREEN)


def _echo_summary(summary: dict) -> None:
    typer.echo("\n" + "=" * 60)
    typer.echo("DAILY ENERGY FORECAST")
    typer.echo("=" * 60)

    typer.echo("\nEnergy:")
    typer.echo(f"  Solar production: {summary['total_production_kwh']:.2f} kWh")
    typer.echo(f"  Consumption:      {summary['total_consumption_kwh']:.2f} kWh")
    typer.echo(f"  Grid draw:        {summary['total_grid_draw_kwh']:.2f} kWh")
    typer.echo(f"  Excess:           {summary['total_excess_kwh']:.2f} kWh")

    typer.echo("\nBattery:")
    typer.echo(f"  Start SOC:        {summary['initial_soc_pct']:.1f} %")
    typer.echo(f"  Final SOC:        {summary['final_soc_pct']:.1f} %")
    typer.echo(f"  Cycles:           {summary['battery_cycles']:.2f}")

    typer.echo("\nSelf-use:")
    typer.echo(f"  Self-consumption: {summary['self_consumption_pct']:.1f} %")
    typer.echo(f"  Self-sufficiency: {summary['self_sufficiency_pct']:.1f} %")
    typer.echo(
        f"  Peak production:  {summary['peak_production_kwh']:.2f} kWh "
        f"at {summary['peak_production_hour']:02d}:00"
    )

    typer.echo("\n" + "=" * 60 + "\n")


@app.command()
def report(bundle_path: str):
    """Show the summary of a completed forecast.

    Args:
        bundle_path: Path to bundle directory
    """
    summary_file = Path(bundle_path) / "summary.json"
    if not summary_file.exists():
        typer.secho(
            "✗ No results found in bundle. Run forecast first.",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(1)

    with open(summary_file) as f:
        summary = json.load(f)

    _echo_summary(summary)

    typer.secho("✓ Report generated", fg=typer.colors.GREEN)


@app.command()
def live(
    site_config: str = typer.Option(..., help="Path to site_config.yaml"),
    load_profile: str = typer.Option(..., help="Path to load_profile.yaml"),
    lat: Optional[float] = typer.Option(None, help="Override site latitude"),
    lon: Optional[float] = typer.Option(None, help="Override site longitude"),
    timeout: float = typer.Option(10.0, help="Weather request timeout in seconds"),
):
    """Fetch today's weather from Open-Meteo and print the forecast."""
    from solarhub_engine.core.metrics import compute_metrics
    from solarhub_engine.forecast.providers import OpenMeteoProvider
    from solarhub_engine.io.bundle import load_load_profile, load_site_config
    from solarhub_engine.runners.live import run_live_forecast

    try:
        site = load_site_config(site_config)
        updates = {}
        if lat is not None:
            updates["latitude"] = lat
        if lon is not None:
            updates["longitude"] = lon
        site = site.model_copy(update=updates)

        profile = load_load_profile(load_profile)
        weather, result = run_live_forecast(
            site, profile, OpenMeteoProvider(timeout_seconds=timeout)
        )
    except Exception as e:
        typer.secho(f"✗ Live forecast failed: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(1)

    if weather.current is not None:
        typer.echo(
            f"Current: {weather.current.temperature_c:.1f} °C, "
            f"wind {weather.current.wind_speed_kmh:.1f} km/h"
        )

    _echo_summary(compute_metrics(result, site.system))


if __name__ == "__main__":
    app()
