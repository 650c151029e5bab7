"""Pytest configuration and shared fixtures."""

from collections.abc import Callable
from pathlib import Path

import pytest

from dwmlparse.tree import TreeNode


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def test_data_dir(project_root: Path) -> Path:
    """Return the test data directory."""
    return project_root / "tests" / "data"


@pytest.fixture
def no_temp_document(test_data_dir: Path) -> Path:
    """Two-point forecast with precipitation, PoP and weather series."""
    return test_data_dir / "dwml-no-temp.xml"


@pytest.fixture
def broken_document(test_data_dir: Path) -> Path:
    """Hourly forecast whose sustained wind series is missing values."""
    return test_data_dir / "dwml-broken.xml"


@pytest.fixture
def text_node() -> Callable[..., TreeNode]:
    """Factory for leaf nodes carrying text content."""

    def make(name: str, content: str | None = None, **attributes: str) -> TreeNode:
        return TreeNode(name=name, attributes=attributes, content=content)

    return make


@pytest.fixture
def hourly_layout(text_node: Callable[..., TreeNode]) -> TreeNode:
    """Three one-hour frames written as start/end pairs."""
    return TreeNode(
        name="time-layout",
        attributes={"time-coordinate": "local", "summarization": "none"},
        children=(
            text_node("layout-key", "k-p1h-n3-1"),
            text_node("start-valid-time", "2015-06-27T14:00:00-04:00"),
            text_node("end-valid-time", "2015-06-27T15:00:00-04:00"),
            text_node("start-valid-time", "2015-06-27T15:00:00-04:00"),
            text_node("end-valid-time", "2015-06-27T16:00:00-04:00"),
            text_node("start-valid-time", "2015-06-27T16:00:00-04:00"),
            text_node("end-valid-time", "2015-06-27T17:00:00-04:00"),
        ),
    )


@pytest.fixture
def location_node(text_node: Callable[..., TreeNode]) -> TreeNode:
    """Location block for point1."""
    return TreeNode(
        name="location",
        children=(
            text_node("location-key", "point1"),
            text_node("point", latitude="38.99", longitude="-77.01"),
        ),
    )
