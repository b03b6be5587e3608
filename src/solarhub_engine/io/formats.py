"""Data format helpers for Parquet I/O and weather frames."""

import pandas as pd
import pyarrow as pa
import pyarrow.parquet as pq

from solarhub_engine.core.constants import (
    COL_DHI,
    COL_DNI,
    COL_GHI,
    COL_HOUR,
    COL_TEMPERATURE_C,
    DEFAULT_TEMPERATURE_C,
    HOURS_PER_DAY,
    REQUIRED_WEATHER_COLUMNS,
)
from solarhub_engine.core.schemas import IrradianceSample, WeatherData


def ensure_columns(df: pd.DataFrame, required_columns: list[str]) -> None:
    """Ensure dataframe has required columns.

    Args:
        df: DataFrame to check
        required_columns: List of required column names

    Raises:
        ValueError: If any required columns are missing
    """
    missing = set(required_columns) - set(df.columns)
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def read_parquet_hourly(path: str) -> pd.DataFrame:
    """Read an hourly table from Parquet file.

    Args:
        path: Path to Parquet file

    Returns:
        DataFrame indexed by hour of day
    """
    df = pd.read_parquet(path)

    if COL_HOUR not in df.columns:
        raise ValueError(f"Hourly table must have '{COL_HOUR}' column")

    df[COL_HOUR] = df[COL_HOUR].astype(int)
    df = df.set_index(COL_HOUR)
    df.index.name = COL_HOUR

    return df


def write_parquet_hourly(df: pd.DataFrame, path: str) -> None:
    """Write an hour-indexed table to Parquet file.

    Args:
        df: DataFrame indexed by hour of day
        path: Output path
    """
    df_copy = df.copy()
    df_copy.index.name = COL_HOUR

    df_out = df_copy.reset_index()

    table = pa.Table.from_pandas(df_out, preserve_index=False)
    pq.write_table(table, path, compression="snappy")


def weather_from_frame(df: pd.DataFrame) -> WeatherData:
    """Convert an hour-indexed weather frame into simulator inputs.

    Hours past the end of the day are dropped. Gaps inside the day are filled
    with zero irradiance and DEFAULT_TEMPERATURE_C so that list position
    always equals hour of day.

    Args:
        df: Weather frame with REQUIRED_WEATHER_COLUMNS

    Returns:
        WeatherData without current conditions
    """
    ensure_columns(df, REQUIRED_WEATHER_COLUMNS)

    day = df[(df.index >= 0) & (df.index < HOURS_PER_DAY)].sort_index()
    if len(day) == 0:
        return WeatherData()

    day = day.reindex(range(int(day.index.max()) + 1))
    day = day.fillna(
        {COL_GHI: 0.0, COL_DNI: 0.0, COL_DHI: 0.0, COL_TEMPERATURE_C: DEFAULT_TEMPERATURE_C}
    )

    irradiance = [
        IrradianceSample(
            hour=int(hour),
            ghi_wm2=float(row[COL_GHI]),
            dni_wm2=float(row[COL_DNI]),
            dhi_wm2=float(row[COL_DHI]),
        )
        for hour, row in day.iterrows()
    ]

    return WeatherData(
        hourly_temperatures_c=[float(t) for t in day[COL_TEMPERATURE_C]],
        irradiance=irradiance,
    )


def weather_to_frame(weather: WeatherData) -> pd.DataFrame:
    """Convert simulator weather inputs into an hour-indexed frame."""
    rows = []
    for i, sample in enumerate(weather.irradiance):
        temperature = (
            weather.hourly_temperatures_c[i]
            if i < len(weather.hourly_temperatures_c)
            else DEFAULT_TEMPERATURE_C
        )
        rows.append(
            {
                COL_HOUR: sample.hour,
                COL_GHI: sample.ghi_wm2,
                COL_DNI: sample.dni_wm2,
                COL_DHI: sample.dhi_wm2,
                COL_TEMPERATURE_C: temperature,
            }
        )

    df = pd.DataFrame(rows, columns=[COL_HOUR] + REQUIRED_WEATHER_COLUMNS)
    return df.set_index(COL_HOUR)
