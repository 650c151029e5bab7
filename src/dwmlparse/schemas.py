"""
Pandera schema for flattened parse results.

One row per parameter value, keyed by location, parameter and start time.
All columns use the nullable ``string[python]`` dtype, which is the same on
pandas 2 and pandas 3 and keeps missing readings as ``pd.NA``.
"""

from typing import Any

import pandas as pd
import pandera.pandas as pa
from pandera.typing import Series

STRING_DTYPE = pd.StringDtype("python")


def _text(*, nullable: bool = False, description: str | None = None) -> Any:
    return pa.Field(
        nullable=nullable,
        description=description,
        dtype_kwargs={"storage": "python"},
    )


class ParameterValueSchema(pa.DataFrameModel):
    """
    Schema for the long-format export of a parse result.

    Scalar readings fill ``value``; weather-conditions readings fill
    ``summary`` and the sub-condition columns and leave ``value`` empty.
    """

    location_key: Series[pd.StringDtype] = _text(
        description="Location key (e.g. 'point1')"
    )
    latitude: Series[pd.StringDtype] = _text(
        description="Latitude as written in the document"
    )
    longitude: Series[pd.StringDtype] = _text(
        description="Longitude as written in the document"
    )
    parameter: Series[pd.StringDtype] = _text(
        description="Parameter key (e.g. 'temperature-hourly')"
    )
    type: Series[pd.StringDtype] = _text(
        nullable=True, description="Parameter type attribute"
    )
    units: Series[pd.StringDtype] = _text(
        nullable=True, description="Parameter units attribute"
    )
    time_layout: Series[pd.StringDtype] = _text(
        nullable=True, description="Key of the referenced time layout"
    )
    start_time: Series[pd.StringDtype] = _text(
        description="ISO 8601 start of the time frame"
    )
    end_time: Series[pd.StringDtype] = _text(
        description="ISO 8601 end of the time frame"
    )
    value: Series[pd.StringDtype] = _text(nullable=True, description="Scalar reading")
    summary: Series[pd.StringDtype] = _text(nullable=True, description="Weather summary")
    coverage: Series[pd.StringDtype] = _text(nullable=True)
    intensity: Series[pd.StringDtype] = _text(nullable=True)
    weather_type: Series[pd.StringDtype] = _text(nullable=True)
    qualifier: Series[pd.StringDtype] = _text(nullable=True)

    class Config:
        """Schema configuration."""

        name = "ParameterValueSchema"
        strict = False
        coerce = False
