"""Tests for time layout parsing."""

from collections.abc import Callable

import pandas as pd
import pytest

from dwmlparse.errors import InvalidTimestampError, MissingLayoutKeyError
from dwmlparse.models import TimeFrame
from dwmlparse.parsers.time_layout import parse_time_layout, resolve_time_frames
from dwmlparse.tree import TreeNode


def _layout(text_node: Callable[..., TreeNode], *markers: tuple[str, str]) -> TreeNode:
    return TreeNode(
        name="time-layout",
        children=(
            text_node("layout-key", "k-test"),
            *(text_node(name, content) for name, content in markers),
        ),
    )


class TestParseTimeLayout:
    """Tests for layout key handling and complete start/end pairs."""

    def test_complete_pairs(self, hourly_layout: TreeNode) -> None:
        """Test that start/end pairs become frames in document order."""
        key, frames = parse_time_layout(hourly_layout)

        assert key == "k-p1h-n3-1"
        assert frames == (
            TimeFrame("2015-06-27T14:00:00-04:00", "2015-06-27T15:00:00-04:00"),
            TimeFrame("2015-06-27T15:00:00-04:00", "2015-06-27T16:00:00-04:00"),
            TimeFrame("2015-06-27T16:00:00-04:00", "2015-06-27T17:00:00-04:00"),
        )

    def test_frames_end_at_or_after_start(self, hourly_layout: TreeNode) -> None:
        """Test that every frame ends at or after its start."""
        _, frames = parse_time_layout(hourly_layout)
        for frame in frames:
            assert pd.Timestamp(frame.end) >= pd.Timestamp(frame.start)

    def test_missing_layout_key(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that a layout without key raises."""
        node = TreeNode(
            name="time-layout",
            children=(text_node("start-valid-time", "2015-06-27T14:00:00-04:00"),),
        )
        with pytest.raises(MissingLayoutKeyError, match="missing key"):
            parse_time_layout(node)

    def test_empty_layout_key(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that a layout key without content raises."""
        node = TreeNode(name="time-layout", children=(text_node("layout-key"),))
        with pytest.raises(MissingLayoutKeyError):
            parse_time_layout(node)

    def test_no_markers(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that a layout without markers has no frames."""
        key, frames = parse_time_layout(_layout(text_node))
        assert key == "k-test"
        assert frames == ()


class TestResolveTimeFrames:
    """Tests for pairing rules and inferred ends."""

    def test_back_to_back_starts(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that a start closes the open frame at its own timestamp."""
        node = _layout(
            text_node,
            ("start-valid-time", "2015-06-27T00:00:00-04:00"),
            ("start-valid-time", "2015-06-27T06:00:00-04:00"),
            ("start-valid-time", "2015-06-27T12:00:00-04:00"),
        )
        _, frames = parse_time_layout(node)

        assert [frame.start for frame in frames] == [
            "2015-06-27T00:00:00-04:00",
            "2015-06-27T06:00:00-04:00",
            "2015-06-27T12:00:00-04:00",
        ]
        assert frames[0].end == "2015-06-27T06:00:00-04:00"
        assert frames[1].end == "2015-06-27T12:00:00-04:00"
        # Trailing start reuses the last observed interval
        assert frames[2].end == "2015-06-27T18:00:00-04:00"

    def test_trailing_start_after_pairs(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that a trailing start after pairs uses the pair interval."""
        node = _layout(
            text_node,
            ("start-valid-time", "2015-06-27T08:00:00-04:00"),
            ("end-valid-time", "2015-06-27T20:00:00-04:00"),
            ("start-valid-time", "2015-06-27T20:00:00-04:00"),
        )
        _, frames = parse_time_layout(node)

        assert frames[-1] == TimeFrame(
            "2015-06-27T20:00:00-04:00", "2015-06-28T08:00:00-04:00"
        )

    def test_single_start_defaults_to_one_hour(
        self, text_node: Callable[..., TreeNode]
    ) -> None:
        """Test that a lone start ends one hour later in the same offset."""
        node = _layout(text_node, ("start-valid-time", "2015-06-27T14:00:00-04:00"))
        _, frames = parse_time_layout(node)

        assert frames == (
            TimeFrame("2015-06-27T14:00:00-04:00", "2015-06-27T15:00:00-04:00"),
        )

    def test_synthesized_end_keeps_offset(
        self, text_node: Callable[..., TreeNode]
    ) -> None:
        """Test that the synthesized end carries the start's UTC offset."""
        node = _layout(
            text_node,
            ("start-valid-time", "2015-06-30T23:00:00-07:00"),
        )
        _, frames = parse_time_layout(node)

        start = pd.Timestamp(frames[0].start)
        end = pd.Timestamp(frames[0].end)
        assert end.utcoffset() == start.utcoffset()
        assert frames[0].end == "2015-07-01T00:00:00-07:00"

    def test_utc_designator(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that a Z timestamp gets a UTC end."""
        node = _layout(text_node, ("start-valid-time", "2015-06-27T14:00:00Z"))
        _, frames = parse_time_layout(node)

        end = pd.Timestamp(frames[0].end)
        assert end == pd.Timestamp("2015-06-27T15:00:00Z")
        assert end.utcoffset() == pd.Timedelta(0)

    def test_end_without_open_frame_is_ignored(
        self, text_node: Callable[..., TreeNode]
    ) -> None:
        """Test that a stray end marker adds nothing."""
        node = _layout(
            text_node,
            ("end-valid-time", "2015-06-27T13:00:00-04:00"),
            ("start-valid-time", "2015-06-27T14:00:00-04:00"),
            ("end-valid-time", "2015-06-27T16:00:00-04:00"),
            ("end-valid-time", "2015-06-27T18:00:00-04:00"),
        )
        _, frames = parse_time_layout(node)

        assert frames == (
            TimeFrame("2015-06-27T14:00:00-04:00", "2015-06-27T16:00:00-04:00"),
        )

    def test_empty_start_closes_without_opening(
        self, text_node: Callable[..., TreeNode]
    ) -> None:
        """Test that an empty start marker closes the open frame only."""
        node = _layout(
            text_node,
            ("start-valid-time", "2015-06-27T14:00:00-04:00"),
            ("start-valid-time", ""),
        )
        _, frames = parse_time_layout(node)

        assert frames == (TimeFrame("2015-06-27T14:00:00-04:00", ""),)

    def test_other_children_are_ignored(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that only valid-time markers are considered."""
        frames = resolve_time_frames(
            [
                text_node("layout-key", "k-test"),
                text_node("start-valid-time", "2015-06-27T14:00:00-04:00"),
                text_node("comment", "ignored"),
                text_node("end-valid-time", "2015-06-27T18:00:00-04:00"),
            ]
        )
        assert len(frames) == 1

    def test_invalid_timestamp(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that an unparseable timestamp raises."""
        node = _layout(
            text_node,
            ("start-valid-time", "2015-13-45T99:00:00"),
            ("end-valid-time", "2015-06-27T18:00:00-04:00"),
        )
        with pytest.raises(InvalidTimestampError, match="2015-13-45T99:00:00"):
            parse_time_layout(node)

    @pytest.mark.parametrize("text", ["now", "today", "tomorrow", "June 27 2015"])
    def test_non_iso_timestamp(self, text: str) -> None:
        """Test that text outside ISO 8601 is rejected instead of resolved."""
        with pytest.raises(InvalidTimestampError, match="Invalid ISO 8601"):
            resolve_time_frames([TreeNode(name="start-valid-time", content=text)])

    def test_end_before_start(self, text_node: Callable[..., TreeNode]) -> None:
        """Test that a frame ending before its start raises."""
        node = _layout(
            text_node,
            ("start-valid-time", "2015-06-27T18:00:00-04:00"),
            ("end-valid-time", "2015-06-27T14:00:00-04:00"),
        )
        with pytest.raises(InvalidTimestampError, match="ends before it starts"):
            parse_time_layout(node)
