"""
Time layout parsing.

Reconstructs the ordered time frames of a ``<time-layout>`` block from its
``start-valid-time`` / ``end-valid-time`` markers.
"""

from collections.abc import Iterable
from datetime import datetime

import pandas as pd

from dwmlparse.errors import InvalidTimestampError, MissingLayoutKeyError
from dwmlparse.models import TimeFrame
from dwmlparse.tree import TreeNode
from dwmlparse.utils.logging import get_logger

log = get_logger(__name__)

LAYOUT_KEY = "layout-key"
START_VALID_TIME = "start-valid-time"
END_VALID_TIME = "end-valid-time"

DEFAULT_INTERVAL = pd.Timedelta(hours=1)


def parse_time_layout(node: TreeNode) -> tuple[str, tuple[TimeFrame, ...]]:
    """
    Parse a ``<time-layout>`` node.

    Args:
        node: The time-layout node.

    Returns:
        Tuple of (layout key, time frames in document order).

    Raises:
        MissingLayoutKeyError: If the node has no non-empty ``layout-key`` child.
        InvalidTimestampError: If a marker holds an unusable timestamp.
    """
    key = _get_layout_key(node)
    frames = resolve_time_frames(node.children)
    log.debug("Resolved time layout", layout_key=key, frames=len(frames))
    return key, frames


def _get_layout_key(node: TreeNode) -> str:
    key_node = node.find(LAYOUT_KEY)
    if key_node is None or not key_node.content:
        msg = f"Time layout is missing key: {node.name} with {len(node.children)} children"
        raise MissingLayoutKeyError(msg)
    return key_node.content


def resolve_time_frames(markers: Iterable[TreeNode]) -> tuple[TimeFrame, ...]:
    """
    Pair start and end markers into time frames.

    Markers are consumed in document order, which is the only way to know
    which end belongs to which start:

    - A start while a frame is open closes that frame at the new start
      (back-to-back frames written with start markers only).
    - An end closes the open frame. An end with no open frame is ignored.
    - A trailing open frame ends one observed interval after its start,
      or one hour after it if no interval was ever observed.

    Args:
        markers: Children of a time-layout node; other tags are ignored.

    Returns:
        Time frames in document order.
    """
    frames: list[TimeFrame] = []
    open_start: str | None = None
    last_interval: pd.Timedelta | None = None

    for marker in markers:
        if marker.name not in (START_VALID_TIME, END_VALID_TIME):
            continue
        content = marker.content or ""

        if marker.name == START_VALID_TIME:
            if open_start is not None:
                frames.append(TimeFrame(start=open_start, end=content))
                last_interval = _interval(open_start, content, last_interval)
                open_start = None
            # An empty start closes the open frame but opens nothing
            if content:
                open_start = content
        elif open_start is not None:
            frames.append(TimeFrame(start=open_start, end=content))
            last_interval = _interval(open_start, content, last_interval)
            open_start = None

    if open_start is not None:
        interval = DEFAULT_INTERVAL if last_interval is None else last_interval
        end = synthesize_end(open_start, interval)
        log.debug("Synthesized end of trailing time frame", start=open_start, end=end)
        frames.append(TimeFrame(start=open_start, end=end))

    return tuple(frames)


def synthesize_end(start: str, interval: pd.Timedelta) -> str:
    """
    Compute ``start + interval`` as an ISO 8601 string.

    The UTC offset written on ``start`` is kept on the result.
    """
    return (_parse_timestamp(start) + interval).isoformat()


def _interval(
    start: str, end: str, previous: pd.Timedelta | None
) -> pd.Timedelta | None:
    """Duration between two markers; ``previous`` if the end is empty."""
    if not end:
        return previous
    start_ts = _parse_timestamp(start)
    end_ts = _parse_timestamp(end)
    try:
        interval = end_ts - start_ts
    except TypeError as e:
        msg = f"Cannot compare timestamps {start!r} and {end!r}: {e}"
        raise InvalidTimestampError(msg) from e
    if interval < pd.Timedelta(0):
        msg = f"Time frame ends before it starts: {start} -> {end}"
        raise InvalidTimestampError(msg)
    return interval


def _parse_timestamp(text: str) -> pd.Timestamp:
    """Parse an ISO 8601 timestamp; relative words such as "now" are rejected."""
    try:
        return pd.Timestamp(datetime.fromisoformat(text))
    except ValueError as e:
        msg = f"Invalid ISO 8601 timestamp: {text!r}"
        raise InvalidTimestampError(msg) from e
