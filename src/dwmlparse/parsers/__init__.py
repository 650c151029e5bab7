"""
Parsers for the blocks of a DWML data subtree.

Each parser turns one block into a ``(key, value)`` pair so the
orchestrator can union blocks of the same kind by key.
"""

from dwmlparse.parsers.location import parse_location
from dwmlparse.parsers.parameter import decode_weather_conditions, parse_parameters
from dwmlparse.parsers.time_layout import parse_time_layout
from dwmlparse.parsers.utils import slugify

__all__ = [
    "decode_weather_conditions",
    "parse_location",
    "parse_parameters",
    "parse_time_layout",
    "slugify",
]
