"""
Result data structures.

All structures are frozen and built once per parse call. ``to_dict``
renders the plain nested shape that keeps the DWML vocabulary
(``start-time``, ``end-time``, ``time-layout``) for JSON output.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any


@dataclass(frozen=True)
class TimeFrame:
    """One start/end interval of a time layout."""

    start: str
    end: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to the DWML-keyed dictionary."""
        return {"start-time": self.start, "end-time": self.end}


@dataclass(frozen=True)
class WeatherSubCondition:
    """Structured qualifier nested inside a weather-conditions node."""

    coverage: str | None = None
    intensity: str | None = None
    weather_type: str | None = None
    qualifier: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "coverage": self.coverage,
            "intensity": self.intensity,
            "weather_type": self.weather_type,
            "qualifier": self.qualifier,
        }


@dataclass(frozen=True)
class WeatherCondition:
    """
    Decoded weather-conditions value.

    Attributes:
        summary: Text of the ``weather-summary`` attribute.
        coverage: Coverage of the first sub-condition (e.g. "chance").
        intensity: Intensity of the first sub-condition (e.g. "light").
        weather_type: Type of the first sub-condition (e.g. "rain showers").
        qualifier: Qualifier of the first sub-condition (e.g. "none").
        additional: Further sub-conditions, only decoded on request.
    """

    summary: str | None
    coverage: str | None = None
    intensity: str | None = None
    weather_type: str | None = None
    qualifier: str | None = None
    additional: tuple[WeatherSubCondition, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        """
        Convert to dictionary.

        ``additional`` is only included when sub-conditions beyond the
        first were decoded.
        """
        result: dict[str, Any] = {
            "summary": self.summary,
            "coverage": self.coverage,
            "intensity": self.intensity,
            "weather_type": self.weather_type,
            "qualifier": self.qualifier,
        }
        if self.additional:
            result["additional"] = [sub.to_dict() for sub in self.additional]
        return result


@dataclass(frozen=True)
class ParameterValue:
    """A time frame carrying one reading: a scalar or a weather condition."""

    start: str
    end: str
    value: str | WeatherCondition | None

    @property
    def frame(self) -> TimeFrame:
        """The time frame this value is aligned to."""
        return TimeFrame(self.start, self.end)

    def to_dict(self) -> dict[str, Any]:
        """Convert to the DWML-keyed dictionary."""
        value = (
            self.value.to_dict()
            if isinstance(self.value, WeatherCondition)
            else self.value
        )
        return {**self.frame.to_dict(), "value": value}


@dataclass(frozen=True)
class ParameterRecord:
    """
    One named series for one location.

    Attributes:
        attributes: The data set's own attributes (``type``, ``units``,
            ``time-layout`` and any extra ones), minus skipped attributes.
        values: Readings aligned to the referenced time layout.
    """

    attributes: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    values: tuple[ParameterValue, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.attributes, MappingProxyType):
            object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
        if not isinstance(self.values, tuple):
            object.__setattr__(self, "values", tuple(self.values))

    @property
    def type(self) -> str | None:
        """Value of the ``type`` attribute."""
        return self.attributes.get("type")

    @property
    def units(self) -> str | None:
        """Value of the ``units`` attribute."""
        return self.attributes.get("units")

    @property
    def time_layout(self) -> str | None:
        """Key of the time layout the values are aligned to."""
        return self.attributes.get("time-layout")

    def merge(self, other: "ParameterRecord") -> "ParameterRecord":
        """Merge ``other`` on top of this record; later fields win."""
        return ParameterRecord(
            attributes={**self.attributes, **other.attributes},
            values=other.values,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary with attributes and values side by side."""
        return {
            **self.attributes,
            "values": [value.to_dict() for value in self.values],
        }


@dataclass(frozen=True)
class Location:
    """Coordinates of a forecast point, as written in the document."""

    latitude: str
    longitude: str

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {"latitude": self.latitude, "longitude": self.longitude}


@dataclass(frozen=True)
class Point:
    """A location together with all parameter series measured there."""

    location: Location
    values: Mapping[str, ParameterRecord] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        if not isinstance(self.values, MappingProxyType):
            object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary."""
        return {
            "location": self.location.to_dict(),
            "values": {key: record.to_dict() for key, record in self.values.items()},
        }


ParseResult = Mapping[str, Point]
TimeLayouts = Mapping[str, tuple[TimeFrame, ...]]


def result_to_dict(result: ParseResult) -> dict[str, Any]:
    """Render a whole parse result as plain nested dictionaries."""
    return {key: point.to_dict() for key, point in result.items()}
