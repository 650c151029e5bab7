"""
Parser configuration with a typed Pydantic model.
"""

from dwmlparse.config.loader import load_options
from dwmlparse.config.settings import ParserOptions, coerce_options

__all__ = [
    "ParserOptions",
    "coerce_options",
    "load_options",
]
