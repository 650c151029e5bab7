"""Tests for result export."""

from pathlib import Path

import pandas as pd

from dwmlparse.document import parse_document, parse_file
from dwmlparse.export import COLUMNS, to_dataframe, to_json_dict, write_csv
from dwmlparse.models import result_to_dict
from dwmlparse.schemas import STRING_DTYPE

LOCATIONS_ONLY = """
<dwml version="1.0">
  <data>
    <location>
      <location-key>point1</location-key>
      <point latitude="38.99" longitude="-77.01"/>
    </location>
  </data>
</dwml>
"""


class TestToDataFrame:
    """Tests for the long-format export."""

    def test_shape(self, no_temp_document: Path) -> None:
        """Test one row per value across both points."""
        df = to_dataframe(parse_file(no_temp_document))

        assert list(df.columns) == COLUMNS
        assert len(df) == 54
        assert set(df["location_key"]) == {"point1", "point2"}

    def test_scalar_row(self, no_temp_document: Path) -> None:
        """Test that scalar readings fill the value column."""
        df = to_dataframe(parse_file(no_temp_document))
        row = df[
            (df["location_key"] == "point1") & (df["parameter"] == "precipitation-liquid")
        ].iloc[0]

        assert row["value"] == "0.35"
        assert row["units"] == "inches"
        assert row["start_time"] == "2015-06-27T14:00:00-04:00"
        assert pd.isna(row["summary"])

    def test_weather_row(self, no_temp_document: Path) -> None:
        """Test that weather readings fill the condition columns."""
        df = to_dataframe(parse_file(no_temp_document))
        weather = df[(df["location_key"] == "point2") & (df["parameter"] == "weather")]

        assert len(weather) == 7
        row = weather.iloc[2]
        assert row["summary"] == "Chance Rain Showers"
        assert row["weather_type"] == "rain showers"
        assert pd.isna(row["value"])
        assert pd.isna(row["type"])

    def test_empty_result(self) -> None:
        """Test that an empty result gives an empty frame with all columns."""
        df = to_dataframe({})
        assert list(df.columns) == COLUMNS
        assert df.empty

    def test_string_dtypes(self, no_temp_document: Path) -> None:
        """Test that every column uses the nullable string dtype."""
        df = to_dataframe(parse_file(no_temp_document))
        assert all(dtype == STRING_DTYPE for dtype in df.dtypes)

    def test_locations_without_parameters(self) -> None:
        """Test that a document with no parameter rows validates."""
        df = to_dataframe(parse_document(LOCATIONS_ONLY))

        assert df.empty
        assert list(df.columns) == COLUMNS
        assert all(dtype == STRING_DTYPE for dtype in df.dtypes)


class TestToJsonDict:
    """Tests for the nested export."""

    def test_matches_result_dict(self, no_temp_document: Path) -> None:
        """Test that the JSON shape is the result's own dictionary shape."""
        result = parse_file(no_temp_document)
        as_json = to_json_dict(result)

        assert as_json == result_to_dict(result)
        assert as_json["point2"]["values"]["weather"]["time-layout"] == "k-p12h-n7-3"


class TestWriteCsv:
    """Tests for CSV output."""

    def test_write(self, no_temp_document: Path, tmp_path: Path) -> None:
        """Test that the CSV is written with a header and all rows."""
        output = tmp_path / "nested" / "forecast.csv"
        path = write_csv(parse_file(no_temp_document), output)

        assert path == output
        df = pd.read_csv(output, dtype=str)
        assert list(df.columns) == COLUMNS
        assert len(df) == 54
