"""
DWML data subtree parsing.

Orchestrates the block parsers over the children of a ``<data>`` element:

1. Parse the time layouts, by layout key.
2. Parse the parameter groups by location key, aligning every series
   with the time layout it references.
3. Parse the locations, by location key.
4. Merge locations with parameter groups sharing the same location key.
"""

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, TypeVar

from dwmlparse.config.settings import ParserOptions, coerce_options
from dwmlparse.models import Location, ParameterRecord, ParseResult, Point, TimeLayouts
from dwmlparse.parsers.location import parse_location
from dwmlparse.parsers.parameter import parse_parameters
from dwmlparse.parsers.time_layout import parse_time_layout
from dwmlparse.tree import TreeNode
from dwmlparse.utils.logging import get_logger

log = get_logger(__name__)

V = TypeVar("V")

TIME_LAYOUT = "time-layout"
PARAMETERS = "parameters"
LOCATION = "location"


def parse(
    data_subtree: TreeNode,
    options: ParserOptions | Mapping[str, Any] | None = None,
) -> ParseResult:
    """
    Parse the ``<data>`` subtree of a DWML document.

    Args:
        data_subtree: The data node.
        options: Parser options; defaults apply when omitted.

    Returns:
        Points by location key. Locations drive the key set: parameter
        groups for keys without a location are dropped.
    """
    parser_options = coerce_options(options)
    blocks = data_subtree.children

    time_layouts = get_time_layouts(blocks)
    parameters = get_parameters(blocks, time_layouts, parser_options)
    locations = get_locations(blocks)

    result = merge_locations_and_parameters(locations, parameters)
    log.info(
        "Parsed DWML data",
        locations=len(result),
        time_layouts=len(time_layouts),
        parameter_groups=len(parameters),
    )
    return result


def get_time_layouts(blocks: Iterable[TreeNode]) -> TimeLayouts:
    """Parse every ``time-layout`` block; later duplicate keys win."""
    return _unwrap(parse_time_layout(block) for block in _named(blocks, TIME_LAYOUT))


def get_parameters(
    blocks: Iterable[TreeNode],
    time_layouts: TimeLayouts,
    options: ParserOptions,
) -> Mapping[str, Mapping[str, ParameterRecord]]:
    """Parse every ``parameters`` block; later duplicate location keys win."""
    return _unwrap(
        parse_parameters(time_layouts, block, options)
        for block in _named(blocks, PARAMETERS)
    )


def get_locations(blocks: Iterable[TreeNode]) -> Mapping[str, Location]:
    """Parse every ``location`` block; later duplicate keys win."""
    return _unwrap(parse_location(block) for block in _named(blocks, LOCATION))


def merge_locations_and_parameters(
    locations: Mapping[str, Location],
    parameters: Mapping[str, Mapping[str, ParameterRecord]],
) -> ParseResult:
    """Join locations and parameter groups by location key."""
    return MappingProxyType(
        {
            key: Point(location=location, values=parameters.get(key, {}))
            for key, location in locations.items()
        }
    )


def _named(blocks: Iterable[TreeNode], name: str) -> Iterable[TreeNode]:
    return (block for block in blocks if block.name == name)


def _unwrap(pairs: Iterable[tuple[str, V]]) -> Mapping[str, V]:
    """Collect (key, value) pairs into a read-only mapping."""
    return MappingProxyType(dict(pairs))
