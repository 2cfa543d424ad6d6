"""
Point extraction from location-history exports.

An export looks like:

    {"timelineEdits": [
        {"rawSignal": {"signal": {"position": {"point": {"latE7": ..., "lngE7": ...}}}}},
        ...
    ]}

Every level is optional. Edits missing any link, or whose coordinates
don't decode, are skipped without error.
"""

import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import Any, Iterable
from urllib.parse import urlencode

from core.config import settings

from .coordinates import E7_MIN_DIGITS, decode_e7
from .models import Point

logger = logging.getLogger(__name__)

POINT_PATH = ("rawSignal", "signal", "position", "point")

MISSING = object()


def lookup(node: Any, path: Iterable[str]) -> Any:
    """Follow path through nested mappings, returning MISSING if any link is absent"""
    for key in path:
        if not isinstance(node, Mapping) or key not in node:
            return MISSING
        node = node[key]
    return node


def format_degrees(value: float) -> str:
    """Plain decimal text for a coordinate, never exponent notation"""
    text = repr(value)
    if "e" in text or "E" in text:
        text = format(Decimal(text), "f")
    return text


def google_maps_url(lat: float, lng: float, base_url: str = settings.GOOGLE_MAPS_SEARCH_URL) -> str:
    return f"{base_url}?api=1&query={format_degrees(lat)},{format_degrees(lng)}"


def geocode_request_url(lat: float, lng: float, base_url: str = settings.NOMINATIM_REVERSE_URL) -> str:
    return f"{base_url}?{urlencode({'lat': format_degrees(lat), 'lon': format_degrees(lng)})}"


def extract_point(
    edit: Any,
    min_digits: int = E7_MIN_DIGITS,
    geocode_base_url: str = settings.NOMINATIM_REVERSE_URL,
) -> Point | None:
    """Build a Point from a single timeline edit, or None if it has no valid point"""
    raw_point = lookup(edit, POINT_PATH)
    if not isinstance(raw_point, Mapping):
        return None

    # Both keys must be present, falsy values included
    if "latE7" not in raw_point or "lngE7" not in raw_point:
        return None

    lat = decode_e7(raw_point["latE7"], min_digits)
    lng = decode_e7(raw_point["lngE7"], min_digits)
    if lat is None or lng is None:
        return None

    return Point(
        lat=lat,
        lng=lng,
        google_maps_url=google_maps_url(lat, lng),
        geocode_request_url=geocode_request_url(lat, lng, geocode_base_url),
    )


def extract_points(
    document: Any,
    min_digits: int = E7_MIN_DIGITS,
    geocode_base_url: str = settings.NOMINATIM_REVERSE_URL,
) -> list[Point]:
    """
    Extract every valid point from an export document.

    Args:
        document: Parsed JSON body
        min_digits: Shortest accepted E7 digit string
        geocode_base_url: Reverse geocoding endpoint used to build request URLs

    Returns:
        Points in timelineEdits order (duplicates kept)
    """
    edits = lookup(document, ("timelineEdits",))
    if not isinstance(edits, (list, tuple)):
        return []

    points = []
    for edit in edits:
        point = extract_point(edit, min_digits, geocode_base_url)
        if point is not None:
            points.append(point)

    logger.debug(f"Extracted {len(points)} points from {len(edits)} timeline edits")
    return points
