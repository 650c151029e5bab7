"""Helpers shared by the block parsers."""

import re

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


def slugify(text: str | None) -> str | None:
    """
    Lowercase ``text`` and replace every run of non-alphanumerics by one hyphen.

    Examples:
        >>> slugify("12 hour")
        '12-hour'
        >>> slugify("Wind Chill")
        'wind-chill'
    """
    if text is None:
        return None
    return _NON_ALPHANUMERIC.sub("-", text.lower())
