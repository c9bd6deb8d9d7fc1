"""Great-circle distance helpers for vendor service areas."""

from dataclasses import dataclass
from math import atan2, cos, radians, sin, sqrt

from burpp.core import EARTH_RADIUS_MILES


@dataclass(frozen=True)
class GeoPoint:
    """A latitude/longitude pair in decimal degrees."""

    lat: float
    lng: float


def distance_miles(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """Haversine distance in miles between two coordinates."""
    d_lat = radians(lat2 - lat1)
    d_lng = radians(lng2 - lng1)
    a = sin(d_lat / 2) ** 2 + cos(radians(lat1)) * cos(radians(lat2)) * sin(d_lng / 2) ** 2
    return EARTH_RADIUS_MILES * 2 * atan2(sqrt(a), sqrt(1 - a))


def distance_between(a: GeoPoint, b: GeoPoint) -> float:
    return distance_miles(a.lat, a.lng, b.lat, b.lng)
