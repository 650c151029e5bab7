"""
Export parse results for downstream use.

Flattens the nested result into a long-format DataFrame (one row per
parameter value) or plain nested dictionaries ready for JSON.
"""

from pathlib import Path
from typing import Any

import pandas as pd

from dwmlparse.models import ParseResult, WeatherCondition, result_to_dict
from dwmlparse.schemas import STRING_DTYPE, ParameterValueSchema
from dwmlparse.utils.logging import get_logger

log = get_logger(__name__)

COLUMNS = [
    "location_key",
    "latitude",
    "longitude",
    "parameter",
    "type",
    "units",
    "time_layout",
    "start_time",
    "end_time",
    "value",
    "summary",
    "coverage",
    "intensity",
    "weather_type",
    "qualifier",
]


def to_json_dict(result: ParseResult) -> dict[str, Any]:
    """Render a parse result as plain nested dictionaries."""
    return result_to_dict(result)


def to_dataframe(result: ParseResult, *, validate: bool = True) -> pd.DataFrame:
    """
    Flatten a parse result into one row per parameter value.

    Args:
        result: Parse result.
        validate: Whether to validate against ParameterValueSchema.

    Returns:
        DataFrame with the columns of ParameterValueSchema, all of dtype
        ``string[python]`` with missing entries as ``pd.NA``.
    """
    rows: list[dict[str, Any]] = []
    for location_key, point in result.items():
        for parameter, record in point.values.items():
            for reading in record.values:
                row: dict[str, Any] = {
                    "location_key": location_key,
                    "latitude": point.location.latitude,
                    "longitude": point.location.longitude,
                    "parameter": parameter,
                    "type": record.type,
                    "units": record.units,
                    "time_layout": record.time_layout,
                    "start_time": reading.start,
                    "end_time": reading.end,
                    "value": None,
                    "summary": None,
                    "coverage": None,
                    "intensity": None,
                    "weather_type": None,
                    "qualifier": None,
                }
                if isinstance(reading.value, WeatherCondition):
                    row.update(
                        summary=reading.value.summary,
                        coverage=reading.value.coverage,
                        intensity=reading.value.intensity,
                        weather_type=reading.value.weather_type,
                        qualifier=reading.value.qualifier,
                    )
                else:
                    row["value"] = reading.value
                rows.append(row)

    df = pd.DataFrame(rows, columns=COLUMNS, dtype=object).astype(STRING_DTYPE)
    log.debug("Flattened parse result", rows=len(df), locations=len(result))

    if validate:
        df = ParameterValueSchema.validate(df)
    return df


def write_csv(result: ParseResult, output_path: Path) -> Path:
    """
    Write the flattened result to CSV.

    Args:
        result: Parse result.
        output_path: Destination file; parent directories are created.

    Returns:
        The path written.
    """
    df = to_dataframe(result)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output_path, index=False)
    log.info("Wrote CSV export", path=str(output_path), rows=len(df))
    return output_path
