"""
dwmlparse: DWML forecast documents to location-keyed time series.

Reconstructs the time layouts of a DWML document, aligns every parameter
series with its layout and groups the series by forecast location.
"""

from importlib.metadata import version

from dwmlparse.config import ParserOptions, load_options
from dwmlparse.document import parse_document, parse_file
from dwmlparse.errors import (
    DwmlError,
    InvalidDocumentError,
    InvalidTimestampError,
    MissingLayoutKeyError,
    MissingLocationKeyError,
    MissingPointError,
    TimeFrameCountMismatchError,
    UnknownTimeLayoutError,
)
from dwmlparse.models import (
    Location,
    ParameterRecord,
    ParameterValue,
    ParseResult,
    Point,
    TimeFrame,
    WeatherCondition,
    WeatherSubCondition,
)
from dwmlparse.subtree import parse
from dwmlparse.tree import TreeNode
from dwmlparse.utils.logging import configure_library_logging

__version__ = version("dwmlparse")

configure_library_logging()

__all__ = [
    "DwmlError",
    "InvalidDocumentError",
    "InvalidTimestampError",
    "Location",
    "MissingLayoutKeyError",
    "MissingLocationKeyError",
    "MissingPointError",
    "ParameterRecord",
    "ParameterValue",
    "ParseResult",
    "ParserOptions",
    "Point",
    "TimeFrame",
    "TimeFrameCountMismatchError",
    "TreeNode",
    "UnknownTimeLayoutError",
    "WeatherCondition",
    "WeatherSubCondition",
    "__version__",
    "load_options",
    "parse",
    "parse_document",
    "parse_file",
]
