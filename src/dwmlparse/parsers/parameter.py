"""
Parameter parsing for ``<parameters>`` blocks.

Each data set inside a parameter group (``<temperature>``,
``<precipitation>``, ``<weather>``, ...) becomes a ParameterRecord whose
values are aligned by position with the frames of the time layout the
data set references.
"""

from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType

from dwmlparse.config.settings import ParserOptions
from dwmlparse.errors import (
    MissingLocationKeyError,
    TimeFrameCountMismatchError,
    UnknownTimeLayoutError,
)
from dwmlparse.models import (
    ParameterRecord,
    ParameterValue,
    TimeFrame,
    TimeLayouts,
    WeatherCondition,
    WeatherSubCondition,
)
from dwmlparse.parsers.utils import slugify
from dwmlparse.tree import TreeNode
from dwmlparse.utils.logging import get_logger

log = get_logger(__name__)

APPLICABLE_LOCATION = "applicable-location"
TIME_LAYOUT = "time-layout"
NAME = "name"
VALUE = "value"
WEATHER_CONDITIONS = "weather-conditions"
DATA_POINT_NAMES = frozenset({VALUE, WEATHER_CONDITIONS})


def parse_parameters(
    time_layouts: TimeLayouts,
    node: TreeNode,
    options: ParserOptions,
) -> tuple[str, Mapping[str, ParameterRecord]]:
    """
    Parse a ``<parameters>`` node.

    Args:
        time_layouts: All time layouts of the document, by layout key.
        node: The parameters node.
        options: Parser options.

    Returns:
        Tuple of (location key, parameter records by parameter key).

    Raises:
        MissingLocationKeyError: If ``applicable-location`` is absent or empty.
        UnknownTimeLayoutError: If a data set references an undefined layout.
        TimeFrameCountMismatchError: If value and frame counts disagree and
            mismatching parameters are not being skipped.
    """
    location_key = node.attr(APPLICABLE_LOCATION)
    if not location_key:
        msg = (
            f"DWML parameters is missing attribute {APPLICABLE_LOCATION!r}: "
            f"{dict(node.attributes)}"
        )
        raise MissingLocationKeyError(msg)

    records: dict[str, ParameterRecord] = {}
    for data_set in node.children:
        key = parameter_key(data_set)
        record = _parse_data_set(key, data_set, time_layouts, options)
        if record is None:
            continue
        records[key] = records[key].merge(record) if key in records else record

    log.debug("Aligned parameters", location_key=location_key, parameters=len(records))
    return location_key, MappingProxyType(records)


def parameter_key(data_set: TreeNode) -> str:
    """
    Key of a data set: its tag, suffixed with its slugified type if it has one.

    ``<temperature type="hourly">`` becomes ``temperature-hourly``;
    ``<weather>`` stays ``weather``.
    """
    type_slug = slugify(data_set.attr("type"))
    if type_slug:
        return f"{data_set.name}-{type_slug}"
    return data_set.name


def _parse_data_set(
    key: str,
    data_set: TreeNode,
    time_layouts: TimeLayouts,
    options: ParserOptions,
) -> ParameterRecord | None:
    """Build the record for one data set, or None if it contributes nothing."""
    layout_key = data_set.attr(TIME_LAYOUT)
    if not layout_key or key in options.skipped_attributes:
        return None

    frames = time_layouts.get(layout_key)
    if frames is None:
        raise UnknownTimeLayoutError(layout_key, key)

    # name children only label the series
    entries = [child for child in data_set.children if child.name != NAME]
    if len(entries) != len(frames):
        if options.skip_properties_with_non_matching_entry_count:
            log.warning(
                "Skipping parameter with non-matching entry count",
                parameter=key,
                layout_key=layout_key,
                expected=len(frames),
                actual=len(entries),
            )
            return None
        raise TimeFrameCountMismatchError(layout_key, len(frames), len(entries), key)

    attributes = {
        name: value
        for name, value in data_set.attributes.items()
        if name not in options.skipped_attributes
    }
    values = align_values(
        entries,
        frames,
        decode_all_weather_conditions=options.decode_all_weather_conditions,
    )
    return ParameterRecord(attributes=attributes, values=values)


def align_values(
    entries: Iterable[TreeNode],
    frames: Sequence[TimeFrame],
    *,
    decode_all_weather_conditions: bool = False,
) -> tuple[ParameterValue, ...]:
    """
    Pair data points with time frames by position.

    Only ``value`` and ``weather-conditions`` children are data points; any
    other child is filtered out before pairing and so does not consume a frame.

    Args:
        entries: Children of a data set, in document order.
        frames: Frames of the referenced time layout.
        decode_all_weather_conditions: Decode every nested sub-condition.

    Returns:
        One ParameterValue per data point.
    """
    data_points = (entry for entry in entries if entry.name in DATA_POINT_NAMES)
    return tuple(
        ParameterValue(
            start=frame.start,
            end=frame.end,
            value=_decode_value(point, decode_all_weather_conditions),
        )
        for point, frame in zip(data_points, frames)
    )


def _decode_value(
    point: TreeNode, decode_all_weather_conditions: bool
) -> str | WeatherCondition | None:
    if point.name == WEATHER_CONDITIONS:
        return decode_weather_conditions(point, decode_all=decode_all_weather_conditions)
    return point.content


def decode_weather_conditions(
    node: TreeNode, *, decode_all: bool = False
) -> WeatherCondition:
    """
    Decode a ``<weather-conditions>`` node.

    The summary comes from the node's ``weather-summary`` attribute. The
    coverage, intensity, weather type and qualifier come from the first
    nested child; with no nested child they are all None.

    Args:
        node: The weather-conditions node.
        decode_all: Also decode the nested children after the first into
            ``WeatherCondition.additional``. Off by default, so simultaneous
            conditions beyond the first are dropped.

    Returns:
        Decoded WeatherCondition.
    """
    sub_conditions = [
        WeatherSubCondition(
            coverage=child.attr("coverage"),
            intensity=child.attr("intensity"),
            weather_type=child.attr("weather-type"),
            qualifier=child.attr("qualifier"),
        )
        for child in node.children
    ]
    first = sub_conditions[0] if sub_conditions else WeatherSubCondition()
    return WeatherCondition(
        summary=node.attr("weather-summary"),
        coverage=first.coverage,
        intensity=first.intensity,
        weather_type=first.weather_type,
        qualifier=first.qualifier,
        additional=tuple(sub_conditions[1:]) if decode_all else (),
    )
