"""Location parsing for ``<location>`` blocks."""

from dwmlparse.errors import MissingLocationKeyError, MissingPointError
from dwmlparse.models import Location
from dwmlparse.tree import TreeNode
from dwmlparse.utils.logging import get_logger

log = get_logger(__name__)

LOCATION_KEY = "location-key"
POINT = "point"


def parse_location(node: TreeNode) -> tuple[str, Location]:
    """
    Parse a ``<location>`` node into its key and coordinates.

    Raises:
        MissingLocationKeyError: If there is no non-empty ``location-key`` child.
        MissingPointError: If there is no ``point`` child with coordinates.
    """
    key_node = node.find(LOCATION_KEY)
    if key_node is None or not key_node.content:
        msg = f"Location is missing key: {[child.name for child in node.children]}"
        raise MissingLocationKeyError(msg)
    key = key_node.content

    point = node.find(POINT)
    if point is None:
        msg = f"Location {key} is missing point"
        raise MissingPointError(msg)
    latitude = point.attr("latitude")
    longitude = point.attr("longitude")
    if latitude is None or longitude is None:
        msg = f"Location {key} point lacks coordinates: {dict(point.attributes)}"
        raise MissingPointError(msg)

    log.debug("Extracted location", location_key=key, latitude=latitude, longitude=longitude)
    return key, Location(latitude=latitude, longitude=longitude)
