"""Great-circle distance between geographic points.

Coordinates are decimal degrees. Nothing here validates ranges: an
out-of-range latitude or longitude yields a defined but meaningless
distance rather than an error.
"""
from dataclasses import dataclass
from math import atan2, cos, floor, radians, sin, sqrt

from campusvibe.core.constants import EARTH_RADIUS_M


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def haversine_m(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Distance in meters between two points using the haversine formula."""
    dlat = radians(lat2 - lat1)
    dlng = radians(lng2 - lng1)
    a = (
        sin(dlat / 2) ** 2
        + cos(radians(lat1)) * cos(radians(lat2)) * sin(dlng / 2) ** 2
    )
    c = 2 * atan2(sqrt(a), sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Distance in meters between two points."""
    return haversine_m(a.lat, a.lng, b.lat, b.lng)


def round_meters(meters: float) -> int:
    """Round to whole meters for display, halves rounding up."""
    return int(floor(meters + 0.5))
