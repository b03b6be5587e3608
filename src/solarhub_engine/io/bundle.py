"""Scenario bundle I/O operations.

A scenario bundle is a folder containing:
- site_config.yaml: Site location and installed system
- run_config.yaml: Run configuration (weather source)
- load_profile.yaml: Household load profile
- weather.parquet: Hourly weather (required for the "bundle" weather provider)
- (outputs):
  - forecast.parquet: Hourly forecast records
  - summary.json: Daily totals and metrics
  - bundle_metadata.json: Reproducibility metadata
"""

import json
from pathlib import Path
from typing import Optional

import pandas as pd
import yaml
from pydantic import TypeAdapter

from solarhub_engine import __version__
from solarhub_engine.core.schemas import BundleMetadata, LoadProfile, RunConfig, SiteConfig
from solarhub_engine.io.formats import read_parquet_hourly, write_parquet_hourly

SITE_CONFIG_FILE = "site_config.yaml"
RUN_CONFIG_FILE = "run_config.yaml"
LOAD_PROFILE_FILE = "load_profile.yaml"
WEATHER_FILE = "weather.parquet"

_load_profile_adapter = TypeAdapter(LoadProfile)


def load_load_profile(path: str | Path) -> LoadProfile:
    """Load a load profile from YAML.

    Args:
        path: Path to YAML file with a ``kind`` of "average" or "schedule"

    Returns:
        AverageLoadProfile or ScheduleLoadProfile
    """
    with open(path) as f:
        return _load_profile_adapter.validate_python(yaml.safe_load(f))


def load_site_config(path: str | Path) -> SiteConfig:
    with open(path) as f:
        return SiteConfig(**yaml.safe_load(f))


def load_bundle(bundle_path: str | Path) -> tuple[SiteConfig, RunConfig, LoadProfile]:
    """Load a scenario bundle's configuration.

    Args:
        bundle_path: Path to bundle directory

    Returns:
        Tuple of (site_config, run_config, load_profile)
    """
    bundle_path = Path(bundle_path)

    if not bundle_path.exists():
        raise FileNotFoundError(f"Bundle not found: {bundle_path}")

    site_config = load_site_config(bundle_path / SITE_CONFIG_FILE)

    with open(bundle_path / RUN_CONFIG_FILE) as f:
        run_config = RunConfig(**yaml.safe_load(f))

    load_profile = load_load_profile(bundle_path / LOAD_PROFILE_FILE)

    return site_config, run_config, load_profile


def load_weather(bundle_path: str | Path) -> pd.DataFrame:
    """Load a bundle's stored hourly weather.

    Args:
        bundle_path: Path to bundle directory

    Returns:
        Weather frame indexed by hour
    """
    weather_file = Path(bundle_path) / WEATHER_FILE
    if not weather_file.exists():
        raise FileNotFoundError(f"Bundle has no weather data: {weather_file}")

    return read_parquet_hourly(str(weather_file))


def write_results(
    bundle_path: str | Path,
    forecast: pd.DataFrame,
    summary: dict,
    weather_source: str = "bundle",
) -> None:
    """Write results to bundle.

    Args:
        bundle_path: Path to bundle directory
        forecast: Hourly forecast dataframe
        summary: Totals and metrics dictionary
        weather_source: Where the weather inputs came from
    """
    bundle_path = Path(bundle_path)
    bundle_path.mkdir(exist_ok=True)

    write_parquet_hourly(forecast, str(bundle_path / "forecast.parquet"))

    with open(bundle_path / "summary.json", "w") as f:
        json.dump(summary, f, indent=2, default=str)

    metadata = BundleMetadata(solarhub_version=__version__, weather_source=weather_source)
    with open(bundle_path / "bundle_metadata.json", "w") as f:
        json.dump(metadata.model_dump(), f, indent=2, default=str)


def init_bundle(
    bundle_path: str | Path,
    site_config: SiteConfig,
    run_config: RunConfig,
    load_profile: LoadProfile,
    weather: Optional[pd.DataFrame] = None,
) -> None:
    """Initialize a new scenario bundle.

    Args:
        bundle_path: Path to bundle directory
        site_config: Site configuration
        run_config: Run configuration
        load_profile: Household load profile
        weather: Optional hour-indexed weather frame
    """
    bundle_path = Path(bundle_path)
    bundle_path.mkdir(parents=True, exist_ok=True)

    with open(bundle_path / SITE_CONFIG_FILE, "w") as f:
        yaml.safe_dump(site_config.model_dump(mode="json"), f, default_flow_style=False)

    with open(bundle_path / RUN_CONFIG_FILE, "w") as f:
        yaml.safe_dump(run_config.model_dump(mode="json"), f, default_flow_style=False)

    with open(bundle_path / LOAD_PROFILE_FILE, "w") as f:
        yaml.safe_dump(load_profile.model_dump(mode="json"), f, default_flow_style=False)

    if weather is not None:
        write_parquet_hourly(weather, str(bundle_path / WEATHER_FILE))


def validate_bundle(bundle_path: str | Path) -> bool:
    """Validate that a bundle has all required files.

    Args:
        bundle_path: Path to bundle directory

    Returns:
        True if valid

    Raises:
        ValueError: If bundle is invalid
    """
    bundle_path = Path(bundle_path)

    required_files = [SITE_CONFIG_FILE, RUN_CONFIG_FILE, LOAD_PROFILE_FILE]

    for filename in required_files:
        if not (bundle_path / filename).exists():
            raise ValueError(f"Missing required file: {filename}")

    _, run_config, _ = load_bundle(bundle_path)
    if run_config.weather.provider == "bundle" and not (bundle_path / WEATHER_FILE).exists():
        raise ValueError(f"Missing required file: {WEATHER_FILE} (weather provider is 'bundle')")

    return True
