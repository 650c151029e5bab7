"""
Error types raised while turning a DWML tree into time series.

All errors are raised at the point of detection; the only locally
recovered condition is a count mismatch when the caller asked for
mismatching parameters to be skipped.
"""


class DwmlError(Exception):
    """Base error for DWML parsing failures."""


class InvalidDocumentError(DwmlError):
    """The document is not well-formed XML or is not a DWML document."""


class MissingLocationKeyError(DwmlError):
    """A location or parameter group lacks its location key."""


class MissingPointError(DwmlError):
    """A location lacks its point (coordinate) child."""


class MissingLayoutKeyError(DwmlError):
    """A time layout lacks its layout key."""


class UnknownTimeLayoutError(DwmlError):
    """A parameter references a time layout that was never defined."""

    def __init__(self, layout_key: str, parameter_key: str) -> None:
        super().__init__(
            f"Parameter {parameter_key} references unknown time layout {layout_key}"
        )
        self.layout_key = layout_key
        self.parameter_key = parameter_key


class InvalidTimestampError(DwmlError):
    """A valid-time marker holds a timestamp that cannot be used."""


class TimeFrameCountMismatchError(DwmlError):
    """A parameter's value count disagrees with its time layout's frame count."""

    def __init__(
        self,
        layout_key: str,
        expected: int,
        actual: int,
        parameter_key: str | None = None,
    ) -> None:
        message = (
            f"The number of time frames in the time layout {layout_key} ({expected}) "
            f"does not match the number of dataSet children value entries ({actual})"
        )
        if parameter_key is not None:
            message = f"{message}: {parameter_key}"
        super().__init__(message)
        self.layout_key = layout_key
        self.expected = expected
        self.actual = actual
        self.parameter_key = parameter_key
