"""
Typed parser configuration using Pydantic.

One frozen options value is built per parse call and passed down by value.
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class ParserOptions(BaseModel):
    """Options controlling how parameter series are aligned and filtered.

    The camelCase aliases match the option names of DWML parsers in other
    ecosystems, so option files written for them load unchanged.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    skip_properties_with_non_matching_entry_count: bool = Field(
        default=False,
        alias="skipPropertiesWithNonMatchingEntryCount",
        description=(
            "Drop parameters whose value count differs from their time layout's "
            "frame count instead of raising"
        ),
    )
    skipped_attributes: frozenset[str] = Field(
        default_factory=frozenset,
        alias="skippedAttributes",
        description="Parameter keys and attribute names to leave out of the result",
    )
    decode_all_weather_conditions: bool = Field(
        default=False,
        alias="decodeAllWeatherConditions",
        description=(
            "Decode every nested sub-condition of a weather-conditions node, "
            "not only the first"
        ),
    )


def coerce_options(options: "ParserOptions | Mapping[str, Any] | None") -> ParserOptions:
    """
    Turn caller-supplied options into a ParserOptions value.

    Args:
        options: Existing options, a mapping of option names, or None for defaults.

    Returns:
        Validated ParserOptions.
    """
    if options is None:
        return ParserOptions()
    if isinstance(options, ParserOptions):
        return options
    return ParserOptions.model_validate(dict(options))
